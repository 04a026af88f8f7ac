"""Tests for plan generation persistence.

Tests that:
- A generated plan is persisted with its generate action
- Validation failures never reach the catalog or the database
- A catalog shortfall persists nothing
"""

import pytest
from sqlalchemy import func, select

from plan_service.catalog.seed import CatalogEntry, seed_catalog
from plan_service.db.models import PlanAction, WorkoutPlan
from plan_service.db.session import get_session
from plan_service.plans.errors import CatalogShortfallError, PlanValidationError
from plan_service.plans.generate import GeneratePlanRequest, generate_plan
from plan_service.plans.service import get_latest_plan_for_owner, get_plan, list_plan_actions


def _count(model) -> int:
    with get_session() as session:
        return session.execute(select(func.count()).select_from(model)).scalar_one()


def _forbidden_lookup(difficulty: str, muscle_group: str, count: int) -> list[str]:
    raise AssertionError("catalog must not be queried")


def test_generate_persists_plan(seeded_catalog, generate_request, owner_id):
    plan = generate_plan(generate_request)

    assert plan.owner_id == owner_id
    assert plan.goal == "strength"
    assert plan.days_per_week == 3
    assert len(plan.weeks) == 4
    assert all(len(week.days) == 3 for week in plan.weeks)

    day = plan.weeks[0].days[0]
    assert len(day.exercises) == 5
    assert all((e.sets, e.reps) == (3, 12) for e in day.exercises)

    stored = get_plan(plan.id)
    assert stored.weeks == plan.weeks


def test_generate_appends_generate_action(seeded_catalog, generate_request):
    plan = generate_plan(generate_request)

    actions = list_plan_actions(plan.id)

    assert [a.action_type for a in actions] == ["generate"]
    assert actions[0].plan_id == plan.id


def test_exercises_come_from_matching_catalog_groups(seeded_catalog, owner_id):
    plan = generate_plan(
        GeneratePlanRequest(owner_id=owner_id, goal="hypertrophy", days_per_week=4, difficulty="advanced")
    )

    shoulder_day = plan.weeks[3].days[3]
    assert shoulder_day.label == "Day 4 - Shoulders + Core"
    prefixes = [e.name.split()[:2] for e in shoulder_day.exercises]
    assert prefixes == [["Shoulders", "Advanced"]] * 3 + [["Core", "Advanced"]] * 2


def test_latest_plan_for_owner(seeded_catalog, generate_request, owner_id):
    generate_plan(generate_request)
    newest = generate_plan(generate_request.model_copy(update={"goal": "endurance"}))

    assert get_latest_plan_for_owner(owner_id).id == newest.id


@pytest.mark.parametrize(
    ("update", "message"),
    [
        ({"owner_id": None}, "Missing required fields: owner_id"),
        ({"owner_id": "not-a-uuid"}, "Invalid owner_id format"),
        ({"days_per_week": None}, "Missing required fields: days_per_week"),
        ({"days_per_week": 0}, "days_per_week must be between 1 and 7"),
        ({"days_per_week": 8}, "days_per_week must be between 1 and 7"),
        ({"difficulty": "expert"}, "Invalid difficulty level"),
        ({"goal": "   "}, "Missing required fields: goal"),
    ],
)
def test_validation_happens_before_catalog_access(db_engine, generate_request, update, message):
    req = generate_request.model_copy(update=update)

    with pytest.raises(PlanValidationError, match=message):
        generate_plan(req, lookup=_forbidden_lookup)

    assert _count(WorkoutPlan) == 0


def test_shortfall_persists_nothing(db_engine, generate_request):
    def lookup(difficulty: str, muscle_group: str, count: int) -> list[str]:
        if muscle_group == "biceps":
            return ["Dumbbell Curl"]
        return [f"{muscle_group} {index}" for index in range(count)]

    with pytest.raises(CatalogShortfallError):
        generate_plan(generate_request, lookup=lookup)

    assert _count(WorkoutPlan) == 0
    assert _count(PlanAction) == 0


def test_empty_catalog_is_a_shortfall(db_engine, generate_request):
    with pytest.raises(CatalogShortfallError, match="chest"):
        generate_plan(generate_request)


def test_exercise_listed_under_both_groups_still_fills_the_day(db_engine, owner_id):
    with get_session() as session:
        seed_catalog(
            session,
            [
                CatalogEntry(name=name, muscle_group=muscle_group, difficulty="beginner")
                for muscle_group, names in {
                    "chest": ["Dip", "Push-Up", "Fly"],
                    "triceps": ["Dip", "Pushdown", "Kickback"],
                }.items()
                for name in names
            ],
        )
    req = GeneratePlanRequest(owner_id=owner_id, goal="strength", days_per_week=1, difficulty="beginner")

    for _ in range(10):
        plan = generate_plan(req)
        for week in plan.weeks:
            names = [e.name for e in week.days[0].exercises]
            assert sorted(names[:3]) == ["Dip", "Fly", "Push-Up"]
            assert sorted(names[3:]) == ["Kickback", "Pushdown"]

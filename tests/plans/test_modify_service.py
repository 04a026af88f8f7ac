"""Tests for MODIFY → plan services.

Tests enforce that:
- Each successful mutation rewrites the plan and appends exactly one action
- Failed mutations leave the stored plan and the action log untouched
- Concurrent writers resolve last-writer-wins without corrupting the document
"""

import uuid

import pytest

from plan_service.db.session import get_session
from plan_service.plans.action_log import append_action
from plan_service.plans.errors import ExerciseConflictError, PlanNotFoundError, PlanValidationError
from plan_service.plans.modify import (
    AddExerciseRequest,
    DeleteExerciseRequest,
    SwapExerciseRequest,
    add_exercise,
    delete_exercise,
    swap_exercise,
)
from plan_service.plans.modify.mutator import add_exercise_to_plan
from plan_service.plans.repository import fetch_plan, insert_plan, replace_plan_data
from plan_service.plans.service import get_plan, list_plan_actions
from plan_service.plans.types import ExerciseEntry, PlanData, WorkoutDay, WorkoutWeek
from plan_service.plans.validators import validate_plan_data


def _plan_data() -> PlanData:
    weeks = []
    for week_number in range(1, 5):
        weeks.append(
            WorkoutWeek(
                week_number=week_number,
                days=[
                    WorkoutDay(
                        label="Day 1 - Chest + Triceps",
                        exercises=[
                            ExerciseEntry(name=name, sets=3, reps=12)
                            for name in ["Push-Up", "Pec Deck Fly", "Machine Chest Press", "Bench Dip", "Rope Pushdown"]
                        ],
                    ),
                    WorkoutDay(
                        label="Day 2 - Back + Biceps",
                        exercises=[
                            ExerciseEntry(name=name, sets=3, reps=12)
                            for name in ["Lat Pulldown", "Seated Cable Row", "Assisted Pull-Up", "Hammer Curl", "Cable Curl"]
                        ],
                    ),
                ],
            )
        )
    weeks[1].days[1].exercises[4].name = "Dumbbell Curl"
    return PlanData(weeks=weeks)


@pytest.fixture
def plan_id(db_engine, owner_id) -> str:
    with get_session() as session:
        plan = insert_plan(session, owner_id=owner_id, goal="strength", days_per_week=2, plan_data=_plan_data())
        append_action(session, plan_id=plan.id, action_type="generate")
        return plan.id


def _chest_names(plan_id: str, week_number: int) -> list[str]:
    return [e.name for e in get_plan(plan_id).weeks[week_number - 1].days[0].exercises]


class TestSwapService:
    def test_swap_commits_and_logs_once(self, plan_id):
        result = swap_exercise(
            plan_id, SwapExerciseRequest(current_exercise="Cable Curl", new_exercise="Dumbbell Curl")
        )

        assert result.skipped_weeks == [2]
        assert result.message == "Swap completed. Skipped weeks: 2"
        back_days = [week.days[1] for week in get_plan(plan_id).weeks]
        assert [d.exercises[4].name for d in back_days] == ["Dumbbell Curl"] * 4

        actions = list_plan_actions(plan_id)
        assert [a.action_type for a in actions] == ["generate", "swap"]
        assert actions[1].old_exercise_name == "Cable Curl"
        assert actions[1].new_exercise_name == "Dumbbell Curl"
        assert actions[1].week_number is None

    def test_swap_single_week(self, plan_id):
        result = swap_exercise(
            plan_id, SwapExerciseRequest(current_exercise="Push-Up", new_exercise="Diamond Push-Up", week_number=3)
        )

        assert result.message == "Swap completed successfully."
        assert _chest_names(plan_id, 3)[0] == "Diamond Push-Up"
        assert _chest_names(plan_id, 1)[0] == "Push-Up"
        assert list_plan_actions(plan_id)[-1].week_number == 3

    def test_swap_not_found_leaves_plan_untouched(self, plan_id):
        before = get_plan(plan_id)

        with pytest.raises(PlanNotFoundError):
            swap_exercise(plan_id, SwapExerciseRequest(current_exercise="Nonexistent", new_exercise="Other"))

        assert get_plan(plan_id) == before
        assert len(list_plan_actions(plan_id)) == 1

    def test_swap_missing_fields(self, plan_id):
        with pytest.raises(PlanValidationError, match="new_exercise"):
            swap_exercise(plan_id, SwapExerciseRequest(current_exercise="Push-Up"))


class TestAddService:
    def test_add_cable_fly_to_chest_day(self, plan_id):
        result = add_exercise(
            plan_id, AddExerciseRequest(week_number=1, muscle_group="chest", new_exercise="Cable Fly")
        )

        day = result.plan.weeks[0].days[0]
        matches = [e for e in day.exercises if e.name == "Cable Fly"]
        assert len(matches) == 1
        assert (matches[0].sets, matches[0].reps) == (3, 10)
        assert result.message == "Exercise added successfully to Day 1 - Chest + Triceps."

        action = list_plan_actions(plan_id)[-1]
        assert action.action_type == "add"
        assert action.new_exercise_name == "Cable Fly"
        assert action.day_label == "Day 1 - Chest + Triceps"
        assert action.week_number == 1

    def test_add_conflict_is_not_persisted(self, plan_id):
        with pytest.raises(ExerciseConflictError):
            add_exercise(plan_id, AddExerciseRequest(week_number=1, muscle_group="chest", new_exercise="PUSH-UP"))

        assert _chest_names(plan_id, 1).count("Push-Up") == 1
        assert len(list_plan_actions(plan_id)) == 1

    def test_add_updates_timestamp(self, plan_id):
        before = get_plan(plan_id)

        result = add_exercise(
            plan_id, AddExerciseRequest(week_number=2, muscle_group="triceps", new_exercise="Skull Crusher")
        )

        assert result.plan.updated_at >= before.updated_at
        assert result.plan.created_at == before.created_at

    def test_add_missing_week_number(self, plan_id):
        with pytest.raises(PlanValidationError, match="week_number"):
            add_exercise(plan_id, AddExerciseRequest(muscle_group="chest", new_exercise="Cable Fly"))


class TestDeleteService:
    def test_delete_exercise(self, plan_id):
        result = delete_exercise(
            plan_id, DeleteExerciseRequest(week_number=4, muscle_group="back", exercise_to_delete="lat pulldown")
        )

        assert "Lat Pulldown" not in [e.name for e in result.plan.weeks[3].days[1].exercises]
        action = list_plan_actions(plan_id)[-1]
        assert action.action_type == "delete"
        assert action.old_exercise_name == "lat pulldown"
        assert action.day_label == "Day 2 - Back + Biceps"

    def test_delete_nonexistent_leaves_day_unchanged(self, plan_id):
        before = _chest_names(plan_id, 1)

        with pytest.raises(PlanNotFoundError):
            delete_exercise(
                plan_id, DeleteExerciseRequest(week_number=1, muscle_group="chest", exercise_to_delete="Nonexistent")
            )

        assert _chest_names(plan_id, 1) == before
        assert len(list_plan_actions(plan_id)) == 1

    def test_add_then_delete_restores_day(self, plan_id):
        before = get_plan(plan_id).weeks

        add_exercise(plan_id, AddExerciseRequest(week_number=1, muscle_group="chest", new_exercise="Cable Fly"))
        delete_exercise(
            plan_id, DeleteExerciseRequest(week_number=1, muscle_group="chest", exercise_to_delete="Cable Fly")
        )

        assert get_plan(plan_id).weeks == before
        assert [a.action_type for a in list_plan_actions(plan_id)] == ["generate", "add", "delete"]


def test_unknown_plan_is_not_found(db_engine):
    with pytest.raises(PlanNotFoundError, match="Workout plan not found"):
        add_exercise(
            str(uuid.uuid4()), AddExerciseRequest(week_number=1, muscle_group="chest", new_exercise="Cable Fly")
        )


def test_malformed_plan_id_rejected_before_store_access(monkeypatch):
    def _no_session():
        raise AssertionError("store must not be accessed")

    monkeypatch.setattr("plan_service.plans.modify.service.get_session", _no_session)

    with pytest.raises(PlanValidationError, match="Invalid plan_id format"):
        swap_exercise("plan-1", SwapExerciseRequest(current_exercise="Push-Up", new_exercise="Dip"))


def test_interleaved_adds_are_last_writer_wins(plan_id):
    """Two writers read the same version; the second write replaces the first."""
    with get_session() as session:
        first_read = PlanData.model_validate(fetch_plan(session, plan_id).plan_data)
    with get_session() as session:
        second_read = PlanData.model_validate(fetch_plan(session, plan_id).plan_data)

    first = add_exercise_to_plan(first_read, 1, "chest", "Cable Fly")
    second = add_exercise_to_plan(second_read, 1, "chest", "Incline Press")

    with get_session() as session:
        replace_plan_data(session, plan_id, first.plan_data)
    with get_session() as session:
        replace_plan_data(session, plan_id, second.plan_data)

    stored = get_plan(plan_id)
    names = [e.name for e in stored.weeks[0].days[0].exercises]
    assert "Incline Press" in names
    assert "Cable Fly" not in names
    validate_plan_data(PlanData(weeks=stored.weeks), stored.days_per_week)

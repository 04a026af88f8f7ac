"""Plan document model.

A plan is an acyclic tree of owned values: weeks → days → exercises.
Exercises are copied in at generation time and carry their own sets/reps;
nothing here refers back to the catalog.

Matching rules are deliberately simple:
- Exercise names match case-insensitively and exactly
- Days match a muscle group when their label contains it (case-insensitive substring)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from plan_service.plans.constants import DEFAULT_REPS, DEFAULT_SETS

if TYPE_CHECKING:
    from plan_service.db.models import WorkoutPlan


def same_exercise(left: str, right: str) -> bool:
    return left.lower() == right.lower()


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ExerciseEntry(BaseModel):
    """Exercise embedded in a workout day."""

    name: str
    sets: int
    reps: int


class WorkoutDay(BaseModel):
    """One training day.

    Attributes:
        label: Human label naming the target muscles, e.g. "Day 1 - Chest + Triceps"
        exercises: Ordered exercises; names are unique case-insensitively
    """

    label: str
    exercises: list[ExerciseEntry] = Field(default_factory=list)

    def targets(self, muscle_group: str) -> bool:
        return muscle_group.lower() in self.label.lower()

    def has_exercise(self, name: str) -> bool:
        return any(same_exercise(exercise.name, name) for exercise in self.exercises)

    def add_exercise(self, name: str, sets: int = DEFAULT_SETS, reps: int = DEFAULT_REPS) -> ExerciseEntry:
        entry = ExerciseEntry(name=name, sets=sets, reps=reps)
        self.exercises.append(entry)
        return entry

    def remove_exercise(self, name: str) -> bool:
        """Remove the first exercise matching name.

        Returns:
            True if an exercise was removed, False if none matched
        """
        for index, exercise in enumerate(self.exercises):
            if same_exercise(exercise.name, name):
                del self.exercises[index]
                return True
        return False


class WorkoutWeek(BaseModel):
    week_number: int
    days: list[WorkoutDay] = Field(default_factory=list)

    def find_day(self, muscle_group: str) -> WorkoutDay | None:
        """Return the first day whose label contains muscle_group."""
        return next((day for day in self.days if day.targets(muscle_group)), None)

    def has_exercise(self, name: str) -> bool:
        return any(day.has_exercise(name) for day in self.days)


class PlanData(BaseModel):
    """The stored body of a plan: {"weeks": [...]}."""

    weeks: list[WorkoutWeek] = Field(default_factory=list)

    def find_week(self, week_number: int) -> WorkoutWeek | None:
        return next((week for week in self.weeks if week.week_number == week_number), None)


class PlanDocument(BaseModel):
    """A full plan with metadata, as returned to callers."""

    id: str
    owner_id: str
    goal: str
    days_per_week: int
    weeks: list[WorkoutWeek]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, plan: WorkoutPlan) -> PlanDocument:
        """Create document from WorkoutPlan row."""
        data = PlanData.model_validate(plan.plan_data)
        return cls(
            id=plan.id,
            owner_id=plan.owner_id,
            goal=plan.goal,
            days_per_week=plan.days_per_week,
            weeks=data.weeks,
            created_at=as_utc(plan.created_at),
            updated_at=as_utc(plan.updated_at),
        )

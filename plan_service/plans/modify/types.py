"""Modification types for plan mutations.

Each mutation is an explicit, structured request; no free-text edits.
Fields are optional at the schema level so that missing values are reported
by the validators as PlanValidationError.
"""

from pydantic import BaseModel, Field

from plan_service.plans.types import PlanData, PlanDocument


class SwapExerciseRequest(BaseModel):
    """Rename an exercise across the plan or within one week.

    Attributes:
        current_exercise: Name to replace (case-insensitive)
        new_exercise: Replacement name
        week_number: Restrict to one week; None means all weeks
    """

    current_exercise: str | None = None
    new_exercise: str | None = None
    week_number: int | None = None


class AddExerciseRequest(BaseModel):
    """Append an exercise to the day targeting a muscle group."""

    week_number: int | None = None
    muscle_group: str | None = None
    new_exercise: str | None = None


class DeleteExerciseRequest(BaseModel):
    """Remove an exercise from the day targeting a muscle group."""

    week_number: int | None = None
    muscle_group: str | None = None
    exercise_to_delete: str | None = None


class SwapOutcome(BaseModel):
    plan_data: PlanData
    renamed: int
    skipped_weeks: list[int] = Field(default_factory=list)


class DayEditOutcome(BaseModel):
    plan_data: PlanData
    day_label: str


class MutationResult(BaseModel):
    """Result of a committed mutation."""

    plan: PlanDocument
    message: str
    skipped_weeks: list[int] = Field(default_factory=list)

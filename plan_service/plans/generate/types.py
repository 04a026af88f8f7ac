"""Request and schedule types for plan generation."""

from typing import NamedTuple, Protocol

from pydantic import BaseModel


class GeneratePlanRequest(BaseModel):
    """Plan generation request.

    Fields are optional at the schema level so missing values surface as
    PlanValidationError from the validators rather than as parse failures.

    Attributes:
        owner_id: UUID4 of the user the plan is for
        goal: Free-text goal, e.g. "strength"
        days_per_week: Training days per week (1-7)
        difficulty: beginner, intermediate or advanced
    """

    owner_id: str | None = None
    goal: str | None = None
    days_per_week: int | None = None
    difficulty: str | None = None


class Volume(NamedTuple):
    sets: int
    reps: int


class ExerciseLookup(Protocol):
    """Catalog query: up to count random names for (difficulty, muscle_group)."""

    def __call__(self, difficulty: str, muscle_group: str, count: int) -> list[str]: ...

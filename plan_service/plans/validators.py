"""Validators for plan requests and plan documents.

Request validators run before any store access and raise PlanValidationError.
Document validators guard the structural invariants and raise PlanInvariantError:
- Exactly PLAN_WEEKS weeks, numbered 1..PLAN_WEEKS
- Every week has days_per_week days
- No duplicate exercise names within a day
"""

import uuid

from plan_service.plans.constants import (
    DIFFICULTY_LEVELS,
    MAX_DAYS_PER_WEEK,
    MIN_DAYS_PER_WEEK,
    PLAN_WEEKS,
)
from plan_service.plans.errors import PlanInvariantError, PlanValidationError
from plan_service.plans.types import PlanData


def validate_uuid4(value: str | None, field_name: str) -> str:
    """Validate that value is a canonical version-4 UUID string.

    Args:
        value: Identifier to validate
        field_name: Name used in the error message

    Returns:
        The normalized (lower-case) identifier

    Raises:
        PlanValidationError: If value is missing, malformed, or not version 4
    """
    if not value:
        raise PlanValidationError(f"Missing {field_name}")
    try:
        parsed = uuid.UUID(value)
    except (ValueError, AttributeError, TypeError) as e:
        raise PlanValidationError(f"Invalid {field_name} format") from e
    if parsed.version != 4 or str(parsed) != value.lower():
        raise PlanValidationError(f"Invalid {field_name} format")
    return str(parsed)


def require_fields(**fields: object) -> None:
    """Raise if any of the given fields is None or empty."""
    missing = [name for name, value in fields.items() if value is None or value == ""]
    if missing:
        raise PlanValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_difficulty(difficulty: str) -> str:
    if difficulty not in DIFFICULTY_LEVELS:
        raise PlanValidationError(
            f"Invalid difficulty level '{difficulty}'. Allowed: {', '.join(DIFFICULTY_LEVELS)}"
        )
    return difficulty


def validate_days_per_week(days_per_week: int) -> int:
    if isinstance(days_per_week, bool) or not MIN_DAYS_PER_WEEK <= days_per_week <= MAX_DAYS_PER_WEEK:
        raise PlanValidationError(
            f"days_per_week must be between {MIN_DAYS_PER_WEEK} and {MAX_DAYS_PER_WEEK}, got {days_per_week}"
        )
    return days_per_week


def validate_plan_data(plan_data: PlanData, days_per_week: int) -> None:
    """Validate the structural invariants of a plan body.

    Raises:
        PlanInvariantError: On the first class of violation found
    """
    week_numbers = [week.week_number for week in plan_data.weeks]
    if week_numbers != list(range(1, PLAN_WEEKS + 1)):
        raise PlanInvariantError("WEEK_COUNT", [f"expected weeks 1..{PLAN_WEEKS}, got {week_numbers}"])

    short_weeks = [
        f"week {week.week_number} has {len(week.days)} days"
        for week in plan_data.weeks
        if len(week.days) != days_per_week
    ]
    if short_weeks:
        raise PlanInvariantError("DAY_COUNT", short_weeks)

    duplicates: list[str] = []
    for week in plan_data.weeks:
        for day in week.days:
            seen: set[str] = set()
            for exercise in day.exercises:
                key = exercise.name.lower()
                if key in seen:
                    duplicates.append(f"week {week.week_number} / {day.label}: {exercise.name}")
                seen.add(key)
    if duplicates:
        raise PlanInvariantError("DUPLICATE_EXERCISE", duplicates)

"""Pure plan mutations.

Every function takes a PlanData, works on a deep copy and returns the new
body; the input is never touched, so a failed mutation leaves nothing
half-applied.
"""

from plan_service.plans.errors import ExerciseConflictError, PlanNotFoundError
from plan_service.plans.modify.types import DayEditOutcome, SwapOutcome
from plan_service.plans.types import PlanData, WorkoutDay, same_exercise


def _resolve_day(plan_data: PlanData, week_number: int, muscle_group: str) -> WorkoutDay:
    week = plan_data.find_week(week_number)
    if week is None:
        raise PlanNotFoundError(f"Week {week_number} not found")

    day = week.find_day(muscle_group)
    if day is None:
        raise PlanNotFoundError(f"No day found for muscle group: {muscle_group}")
    return day


def swap_exercise_in_plan(
    plan_data: PlanData,
    current_exercise: str,
    new_exercise: str,
    week_number: int | None = None,
) -> SwapOutcome:
    """Rename current_exercise to new_exercise, week by week.

    A week that already contains new_exercise anywhere is skipped whole and
    reported. Sets and reps of renamed entries are kept.

    Raises:
        PlanNotFoundError: If nothing was renamed in any in-scope week
    """
    updated = plan_data.model_copy(deep=True)
    renamed = 0
    skipped_weeks: list[int] = []

    for week in updated.weeks:
        if week_number is not None and week.week_number != week_number:
            continue

        if week.has_exercise(new_exercise):
            skipped_weeks.append(week.week_number)
            continue

        for day in week.days:
            for exercise in day.exercises:
                if same_exercise(exercise.name, current_exercise):
                    exercise.name = new_exercise
                    renamed += 1

    if renamed == 0:
        raise PlanNotFoundError("Exercise to replace not found in the plan")

    return SwapOutcome(plan_data=updated, renamed=renamed, skipped_weeks=skipped_weeks)


def add_exercise_to_plan(
    plan_data: PlanData,
    week_number: int,
    muscle_group: str,
    new_exercise: str,
) -> DayEditOutcome:
    """Append new_exercise with default volume to the matching day.

    Raises:
        PlanNotFoundError: If the week or day does not exist
        ExerciseConflictError: If the day already has new_exercise
    """
    updated = plan_data.model_copy(deep=True)
    day = _resolve_day(updated, week_number, muscle_group)

    if day.has_exercise(new_exercise):
        raise ExerciseConflictError(f"Exercise '{new_exercise}' already exists in {day.label}")

    day.add_exercise(new_exercise)
    return DayEditOutcome(plan_data=updated, day_label=day.label)


def delete_exercise_from_plan(
    plan_data: PlanData,
    week_number: int,
    muscle_group: str,
    exercise_to_delete: str,
) -> DayEditOutcome:
    """Remove the first match of exercise_to_delete from the matching day.

    Raises:
        PlanNotFoundError: If the week, day or exercise does not exist
    """
    updated = plan_data.model_copy(deep=True)
    day = _resolve_day(updated, week_number, muscle_group)

    if not day.remove_exercise(exercise_to_delete):
        raise PlanNotFoundError(f"Exercise '{exercise_to_delete}' not found in {day.label}")

    return DayEditOutcome(plan_data=updated, day_label=day.label)

"""Service entry points for plan mutations.

Each call does one read-modify-write of the whole plan document:
1. Validate request (no store access on failure)
2. Fetch plan
3. Apply pure mutation to a copy
4. Check plan invariants
5. Replace plan body and append one action record in one transaction

There is no version check: concurrent mutations of the same plan are
last-writer-wins.
"""

from loguru import logger
from sqlalchemy.orm import Session

from plan_service.db.models import WorkoutPlan
from plan_service.db.session import get_session
from plan_service.plans.action_log import append_action
from plan_service.plans.constants import ActionType
from plan_service.plans.errors import PlanNotFoundError, PlanValidationError
from plan_service.plans.modify.mutator import (
    add_exercise_to_plan,
    delete_exercise_from_plan,
    swap_exercise_in_plan,
)
from plan_service.plans.modify.types import (
    AddExerciseRequest,
    DeleteExerciseRequest,
    MutationResult,
    SwapExerciseRequest,
)
from plan_service.plans.repository import fetch_plan, replace_plan_data
from plan_service.plans.types import PlanData, PlanDocument
from plan_service.plans.validators import require_fields, validate_plan_data, validate_uuid4


def _require_week_number(week_number: object) -> int:
    if isinstance(week_number, bool) or not isinstance(week_number, int):
        raise PlanValidationError("week_number must be an integer")
    return week_number


def _load_plan(session: Session, plan_id: str) -> tuple[WorkoutPlan, PlanData]:
    plan = fetch_plan(session, plan_id)
    if plan is None:
        raise PlanNotFoundError("Workout plan not found")
    return plan, PlanData.model_validate(plan.plan_data)


def _commit_mutation(
    session: Session,
    plan: WorkoutPlan,
    plan_data: PlanData,
    *,
    action_type: ActionType,
    old_exercise_name: str | None = None,
    new_exercise_name: str | None = None,
    week_number: int | None = None,
    day_label: str | None = None,
) -> PlanDocument:
    validate_plan_data(plan_data, plan.days_per_week)

    updated = replace_plan_data(session, plan.id, plan_data)
    if updated is None:
        raise PlanNotFoundError("Workout plan not found")

    append_action(
        session,
        plan_id=plan.id,
        action_type=action_type,
        old_exercise_name=old_exercise_name,
        new_exercise_name=new_exercise_name,
        week_number=week_number,
        day_label=day_label,
    )
    return PlanDocument.from_model(updated)


def swap_exercise(plan_id: str, req: SwapExerciseRequest) -> MutationResult:
    """Rename an exercise in every in-scope week that does not already have the new name.

    Raises:
        PlanValidationError: Bad plan id or missing fields
        PlanNotFoundError: Plan missing, or nothing was renamed
    """
    plan_id = validate_uuid4(plan_id, "plan_id")
    require_fields(current_exercise=req.current_exercise, new_exercise=req.new_exercise)
    if req.week_number is not None:
        _require_week_number(req.week_number)

    with get_session() as session:
        plan, plan_data = _load_plan(session, plan_id)
        outcome = swap_exercise_in_plan(plan_data, req.current_exercise, req.new_exercise, req.week_number)
        document = _commit_mutation(
            session,
            plan,
            outcome.plan_data,
            action_type="swap",
            old_exercise_name=req.current_exercise,
            new_exercise_name=req.new_exercise,
            week_number=req.week_number,
        )

    if outcome.skipped_weeks:
        message = f"Swap completed. Skipped weeks: {', '.join(str(week) for week in outcome.skipped_weeks)}"
    else:
        message = "Swap completed successfully."

    logger.info(
        "Exercise swapped",
        plan_id=plan_id,
        renamed=outcome.renamed,
        skipped_weeks=outcome.skipped_weeks,
    )
    return MutationResult(plan=document, message=message, skipped_weeks=outcome.skipped_weeks)


def add_exercise(plan_id: str, req: AddExerciseRequest) -> MutationResult:
    """Append an exercise to the day of a week that targets a muscle group.

    Raises:
        PlanValidationError: Bad plan id or missing fields
        PlanNotFoundError: Plan, week or day missing
        ExerciseConflictError: Exercise already in that day
    """
    plan_id = validate_uuid4(plan_id, "plan_id")
    require_fields(week_number=req.week_number, muscle_group=req.muscle_group, new_exercise=req.new_exercise)
    week_number = _require_week_number(req.week_number)

    with get_session() as session:
        plan, plan_data = _load_plan(session, plan_id)
        outcome = add_exercise_to_plan(plan_data, week_number, req.muscle_group, req.new_exercise)
        document = _commit_mutation(
            session,
            plan,
            outcome.plan_data,
            action_type="add",
            new_exercise_name=req.new_exercise,
            week_number=week_number,
            day_label=outcome.day_label,
        )

    logger.info("Exercise added", plan_id=plan_id, week_number=week_number, day_label=outcome.day_label)
    return MutationResult(plan=document, message=f"Exercise added successfully to {outcome.day_label}.")


def delete_exercise(plan_id: str, req: DeleteExerciseRequest) -> MutationResult:
    """Remove an exercise from the day of a week that targets a muscle group.

    Raises:
        PlanValidationError: Bad plan id or missing fields
        PlanNotFoundError: Plan, week, day or exercise missing
    """
    plan_id = validate_uuid4(plan_id, "plan_id")
    require_fields(
        week_number=req.week_number,
        muscle_group=req.muscle_group,
        exercise_to_delete=req.exercise_to_delete,
    )
    week_number = _require_week_number(req.week_number)

    with get_session() as session:
        plan, plan_data = _load_plan(session, plan_id)
        outcome = delete_exercise_from_plan(plan_data, week_number, req.muscle_group, req.exercise_to_delete)
        document = _commit_mutation(
            session,
            plan,
            outcome.plan_data,
            action_type="delete",
            old_exercise_name=req.exercise_to_delete,
            week_number=week_number,
            day_label=outcome.day_label,
        )

    logger.info("Exercise deleted", plan_id=plan_id, week_number=week_number, day_label=outcome.day_label)
    return MutationResult(plan=document, message=f"Exercise deleted successfully from {outcome.day_label}.")

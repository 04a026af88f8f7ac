"""API endpoints for workout plans.

Generation, reads, structural mutations (swap/add/delete exercise), plan
deletion and action history. Domain errors are translated to HTTP here and
nowhere else.
"""

from typing import Literal, NoReturn

from fastapi import APIRouter, HTTPException, status
from loguru import logger
from pydantic import BaseModel, Field

from plan_service.plans.action_log import ActionRecord
from plan_service.plans.errors import (
    CatalogShortfallError,
    ExerciseConflictError,
    PlanInvariantError,
    PlanNotFoundError,
    PlanServiceError,
    PlanValidationError,
)
from plan_service.plans.generate import GeneratePlanRequest, generate_plan
from plan_service.plans.modify import (
    AddExerciseRequest,
    DeleteExerciseRequest,
    MutationResult,
    SwapExerciseRequest,
    add_exercise,
    delete_exercise,
    swap_exercise,
)
from plan_service.plans.service import delete_plan, get_latest_plan_for_owner, get_plan, list_plan_actions
from plan_service.plans.types import PlanDocument

router = APIRouter(prefix="/api/plans", tags=["plans"])

_STATUS_BY_ERROR: dict[type[PlanServiceError], int] = {
    PlanValidationError: status.HTTP_400_BAD_REQUEST,
    PlanNotFoundError: status.HTTP_404_NOT_FOUND,
    ExerciseConflictError: status.HTTP_409_CONFLICT,
    CatalogShortfallError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class PlanResponse(BaseModel):
    status: Literal["success"] = "success"
    plan: PlanDocument


class MutationResponse(BaseModel):
    """Response model for swap/add/delete exercise."""

    status: Literal["success"] = "success"
    message: str
    updated_plan: PlanDocument
    skipped_weeks: list[int] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: MutationResult) -> "MutationResponse":
        return cls(message=result.message, updated_plan=result.plan, skipped_weeks=result.skipped_weeks)


class DeletedPlanResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str
    deleted_plan: PlanDocument


class ActionsResponse(BaseModel):
    status: Literal["success"] = "success"
    actions: list[ActionRecord]


def _raise_http_error(e: PlanServiceError, action: str) -> NoReturn:
    """Translate a domain error into an HTTPException.

    Invariant violations are server bugs: logged with traceback, reported as 500.
    """
    if isinstance(e, PlanInvariantError):
        logger.exception(f"Plan invariant violated during {action}: {e.code}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server error while {action}",
        ) from e

    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR.items() if isinstance(e, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    logger.info(f"Plan request rejected during {action} ({status_code}): {e}")
    raise HTTPException(status_code=status_code, detail=str(e)) from e


@router.post("/generate", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
def generate(req: GeneratePlanRequest) -> PlanResponse:
    """Generate a new 4-week workout plan.

    Raises:
        HTTPException: 400 on invalid input, 422 if the catalog is too small
    """
    try:
        plan = generate_plan(req)
    except PlanServiceError as e:
        _raise_http_error(e, "generating plan")
    return PlanResponse(plan=plan)


@router.get("/user/{owner_id}", response_model=PlanResponse)
def get_latest_for_owner(owner_id: str) -> PlanResponse:
    """Get the latest workout plan created for a user."""
    try:
        plan = get_latest_plan_for_owner(owner_id)
    except PlanServiceError as e:
        _raise_http_error(e, "fetching plan")
    return PlanResponse(plan=plan)


@router.get("/{plan_id}", response_model=PlanResponse)
def get_by_id(plan_id: str) -> PlanResponse:
    try:
        plan = get_plan(plan_id)
    except PlanServiceError as e:
        _raise_http_error(e, "fetching plan")
    return PlanResponse(plan=plan)


@router.patch("/{plan_id}/swap-exercise", response_model=MutationResponse)
def swap(plan_id: str, req: SwapExerciseRequest) -> MutationResponse:
    """Swap one exercise for another across the plan or within one week.

    Weeks that already contain the new exercise are skipped and listed in
    skipped_weeks.
    """
    try:
        result = swap_exercise(plan_id, req)
    except PlanServiceError as e:
        _raise_http_error(e, "swapping exercise")
    return MutationResponse.from_result(result)


@router.patch("/{plan_id}/add-exercise", response_model=MutationResponse)
def add(plan_id: str, req: AddExerciseRequest) -> MutationResponse:
    """Add an exercise to the workout day matching a muscle group.

    Raises:
        HTTPException: 404 if week/day missing, 409 if already present
    """
    try:
        result = add_exercise(plan_id, req)
    except PlanServiceError as e:
        _raise_http_error(e, "adding exercise")
    return MutationResponse.from_result(result)


@router.patch("/{plan_id}/delete-exercise", response_model=MutationResponse)
def remove(plan_id: str, req: DeleteExerciseRequest) -> MutationResponse:
    try:
        result = delete_exercise(plan_id, req)
    except PlanServiceError as e:
        _raise_http_error(e, "deleting exercise")
    return MutationResponse.from_result(result)


@router.delete("/{plan_id}", response_model=DeletedPlanResponse)
@router.delete("/{plan_id}/delete-plan", response_model=DeletedPlanResponse)
def delete(plan_id: str) -> DeletedPlanResponse:
    """Delete a workout plan and its action history.

    Also served at /{plan_id}/delete-plan, the path older clients call.
    """
    try:
        plan = delete_plan(plan_id)
    except PlanServiceError as e:
        _raise_http_error(e, "deleting plan")
    return DeletedPlanResponse(message="Workout plan deleted successfully.", deleted_plan=plan)


@router.get("/{plan_id}/actions", response_model=ActionsResponse)
def actions(plan_id: str) -> ActionsResponse:
    """Get the full action history of a plan, oldest first."""
    try:
        records = list_plan_actions(plan_id)
    except PlanServiceError as e:
        _raise_http_error(e, "fetching plan actions")
    return ActionsResponse(actions=records)

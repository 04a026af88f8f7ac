"""Service entry points for reading and deleting plans."""

from loguru import logger

from plan_service.db.session import get_session
from plan_service.plans.action_log import ActionRecord, list_actions
from plan_service.plans.errors import PlanNotFoundError
from plan_service.plans.repository import delete_plan as delete_plan_row
from plan_service.plans.repository import fetch_latest_plan_for_owner, fetch_plan
from plan_service.plans.types import PlanDocument
from plan_service.plans.validators import validate_uuid4


def get_plan(plan_id: str) -> PlanDocument:
    plan_id = validate_uuid4(plan_id, "plan_id")
    with get_session() as session:
        plan = fetch_plan(session, plan_id)
        if plan is None:
            raise PlanNotFoundError("Workout plan not found")
        return PlanDocument.from_model(plan)


def get_latest_plan_for_owner(owner_id: str) -> PlanDocument:
    """Get the newest plan for an owner.

    Raises:
        PlanValidationError: Malformed owner id
        PlanNotFoundError: Owner has no plans
    """
    owner_id = validate_uuid4(owner_id, "owner_id")
    with get_session() as session:
        plan = fetch_latest_plan_for_owner(session, owner_id)
        if plan is None:
            raise PlanNotFoundError("No plan found for this user")
        return PlanDocument.from_model(plan)


def delete_plan(plan_id: str) -> PlanDocument:
    """Delete a plan and its action history.

    Returns:
        The plan as it was before deletion
    """
    plan_id = validate_uuid4(plan_id, "plan_id")
    with get_session() as session:
        plan = fetch_plan(session, plan_id)
        if plan is None:
            raise PlanNotFoundError("Workout plan not found")
        document = PlanDocument.from_model(plan)
        delete_plan_row(session, plan_id)

    logger.info("Plan deleted", plan_id=plan_id, owner_id=document.owner_id)
    return document


def list_plan_actions(plan_id: str) -> list[ActionRecord]:
    """List a plan's action history in creation order.

    An unknown plan id yields an empty list.
    """
    plan_id = validate_uuid4(plan_id, "plan_id")
    with get_session() as session:
        return [ActionRecord.from_model(action) for action in list_actions(session, plan_id)]

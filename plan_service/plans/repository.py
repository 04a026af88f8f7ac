"""Repository functions for workout plans.

Handles fetching and persisting whole plan documents.
Single responsibility: database operations only. Not-found is reported as None;
services decide what that means.
"""

from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from plan_service.db.models import WorkoutPlan
from plan_service.plans.types import PlanData


def fetch_plan(session: Session, plan_id: str) -> WorkoutPlan | None:
    return session.get(WorkoutPlan, plan_id)


def fetch_latest_plan_for_owner(session: Session, owner_id: str) -> WorkoutPlan | None:
    """Get the most recently created plan for an owner."""
    query = (
        select(WorkoutPlan)
        .where(WorkoutPlan.owner_id == owner_id)
        .order_by(WorkoutPlan.created_at.desc())
        .limit(1)
    )
    return session.execute(query).scalars().first()


def insert_plan(
    session: Session,
    *,
    owner_id: str,
    goal: str,
    days_per_week: int,
    plan_data: PlanData,
) -> WorkoutPlan:
    """Insert a new plan and flush to assign its id.

    Args:
        session: Database session
        owner_id: UUID4 of the owning user
        goal: Training goal
        days_per_week: Training days per week
        plan_data: Fully generated plan body

    Returns:
        Created WorkoutPlan instance
    """
    now = datetime.now(timezone.utc)
    plan = WorkoutPlan(
        owner_id=owner_id,
        goal=goal,
        days_per_week=days_per_week,
        plan_data=plan_data.model_dump(mode="json"),
        created_at=now,
        updated_at=now,
    )
    session.add(plan)
    session.flush()
    logger.debug("Plan inserted", plan_id=plan.id, owner_id=owner_id)
    return plan


def replace_plan_data(session: Session, plan_id: str, plan_data: PlanData) -> WorkoutPlan | None:
    """Overwrite the whole plan body.

    The previous body is replaced, never merged; concurrent writers race
    with last-writer-wins semantics.

    Returns:
        Updated WorkoutPlan, or None if the plan does not exist
    """
    plan = session.get(WorkoutPlan, plan_id)
    if plan is None:
        return None

    plan.plan_data = plan_data.model_dump(mode="json")
    plan.updated_at = datetime.now(timezone.utc)
    session.flush()
    logger.debug("Plan data replaced", plan_id=plan_id)
    return plan


def delete_plan(session: Session, plan_id: str) -> WorkoutPlan | None:
    """Delete a plan and, by cascade, its action records.

    Returns:
        The deleted WorkoutPlan (detached), or None if it did not exist
    """
    plan = session.get(WorkoutPlan, plan_id)
    if plan is None:
        return None

    session.delete(plan)
    session.flush()
    logger.debug("Plan deleted", plan_id=plan_id)
    return plan

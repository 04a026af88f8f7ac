"""Repository functions for the plan action log.

Append-only: records are inserted once per successful generation or mutation
and are never updated. Listing returns creation order.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from plan_service.db.models import PlanAction
from plan_service.plans.constants import ActionType
from plan_service.plans.types import as_utc


class ActionRecord(BaseModel):
    """Read-only view of a PlanAction row."""

    id: int
    plan_id: str
    action_type: ActionType
    old_exercise_name: str | None = None
    new_exercise_name: str | None = None
    week_number: int | None = None
    day_label: str | None = None
    created_at: datetime

    @classmethod
    def from_model(cls, action: PlanAction) -> ActionRecord:
        return cls(
            id=action.id,
            plan_id=action.plan_id,
            action_type=action.action_type,
            old_exercise_name=action.old_exercise_name,
            new_exercise_name=action.new_exercise_name,
            week_number=action.week_number,
            day_label=action.day_label,
            created_at=as_utc(action.created_at),
        )


def append_action(
    session: Session,
    *,
    plan_id: str,
    action_type: ActionType,
    old_exercise_name: str | None = None,
    new_exercise_name: str | None = None,
    week_number: int | None = None,
    day_label: str | None = None,
) -> PlanAction:
    """Append an action record for a plan.

    Args:
        session: Database session (shared with the plan write so both commit together)
        plan_id: Plan the action applies to
        action_type: generate, swap, add or delete
        old_exercise_name: Exercise replaced or removed
        new_exercise_name: Exercise introduced
        week_number: Week targeted, None for all weeks
        day_label: Label of the day targeted

    Returns:
        Created PlanAction instance
    """
    action = PlanAction(
        plan_id=plan_id,
        action_type=action_type,
        old_exercise_name=old_exercise_name,
        new_exercise_name=new_exercise_name,
        week_number=week_number,
        day_label=day_label,
    )
    session.add(action)
    session.flush()
    return action


def list_actions(session: Session, plan_id: str) -> list[PlanAction]:
    """List action records for a plan, oldest first."""
    query = (
        select(PlanAction)
        .where(PlanAction.plan_id == plan_id)
        .order_by(PlanAction.created_at.asc(), PlanAction.id.asc())
    )
    return list(session.execute(query).scalars().all())

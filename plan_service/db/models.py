from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, event
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Exercise(Base):
    """Exercise catalog entry.

    Read-only at request time: generation samples names from here and copies
    them into the plan document, so later catalog edits never touch
    existing plans.

    Constraints:
    - Unique constraint: (name, muscle_group, difficulty)
    - Index on (difficulty, muscle_group) for candidate lookups
    """

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    muscle_group: Mapped[str] = mapped_column(String, nullable=False)
    difficulty: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("name", "muscle_group", "difficulty", name="uq_exercise_name_group_difficulty"),
        Index("idx_exercises_difficulty_muscle_group", "difficulty", "muscle_group"),
    )


class WorkoutPlan(Base):
    """A user's 4-week workout plan.

    Schema:
    - id: UUID4 primary key
    - owner_id: UUID4 of the owning user (indexed, not a foreign key)
    - goal: Free-text training goal
    - days_per_week: Training days per week (1-7)
    - plan_data: {"weeks": [...]} document, always written whole
    - created_at / updated_at: UTC timestamps
    """

    __tablename__ = "workout_plans"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    owner_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    goal: Mapped[str] = mapped_column(Text, nullable=False)
    days_per_week: Mapped[int] = mapped_column(Integer, nullable=False)
    plan_data: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    actions: Mapped[list[PlanAction]] = relationship(
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="PlanAction.id",
    )

    __table_args__ = (
        Index("idx_workout_plans_owner_created", "owner_id", "created_at"),
    )


class PlanAction(Base):
    """Append-only audit record of one generation or mutation of a plan.

    Rows are never updated; they go away only when their plan is deleted.
    """

    __tablename__ = "plan_actions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    plan_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workout_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action_type: Mapped[str] = mapped_column(String, nullable=False)
    old_exercise_name: Mapped[str | None] = mapped_column(String, nullable=True)
    new_exercise_name: Mapped[str | None] = mapped_column(String, nullable=True)
    week_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    day_label: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    plan: Mapped[WorkoutPlan] = relationship(back_populates="actions")

    __table_args__ = (
        Index("idx_plan_actions_plan_created", "plan_id", "created_at"),
    )


@event.listens_for(PlanAction, "before_update")
def _reject_action_update(_mapper, _connection, target: PlanAction) -> None:
    raise RuntimeError(f"Plan action {target.id} is immutable")

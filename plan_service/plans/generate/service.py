"""Service entry point for plan generation.

Flow:
1. Validate request (no store access on failure)
2. Build plan body from catalog lookups
3. Check plan invariants
4. Insert plan and append "generate" action in one transaction
"""

from loguru import logger

from plan_service.catalog.repository import lookup_exercises
from plan_service.config.settings import settings
from plan_service.db.session import get_session
from plan_service.plans.action_log import append_action
from plan_service.plans.generate.generator import build_plan_data
from plan_service.plans.generate.types import ExerciseLookup, GeneratePlanRequest
from plan_service.plans.repository import insert_plan
from plan_service.plans.types import PlanDocument
from plan_service.plans.validators import (
    require_fields,
    validate_days_per_week,
    validate_difficulty,
    validate_plan_data,
    validate_uuid4,
)


def generate_plan(req: GeneratePlanRequest, *, lookup: ExerciseLookup = lookup_exercises) -> PlanDocument:
    """Generate and persist a new 4-week plan.

    Args:
        req: Generation request
        lookup: Catalog query (defaults to the database catalog)

    Returns:
        The persisted PlanDocument

    Raises:
        PlanValidationError: Missing field, bad owner id, days or difficulty out of range
        CatalogShortfallError: Catalog cannot fill a day; nothing is persisted
    """
    require_fields(
        owner_id=req.owner_id,
        goal=req.goal,
        days_per_week=req.days_per_week,
        difficulty=req.difficulty,
    )
    owner_id = validate_uuid4(req.owner_id, "owner_id")
    days_per_week = validate_days_per_week(req.days_per_week)
    difficulty = validate_difficulty(req.difficulty)
    goal = req.goal.strip()
    require_fields(goal=goal)

    logger.info(
        "Generating plan",
        owner_id=owner_id,
        goal=goal,
        days_per_week=days_per_week,
        difficulty=difficulty,
    )

    plan_data = build_plan_data(
        difficulty=difficulty,
        days_per_week=days_per_week,
        lookup=lookup,
        max_workers=settings.catalog_query_workers,
    )
    validate_plan_data(plan_data, days_per_week)

    with get_session() as session:
        plan = insert_plan(
            session,
            owner_id=owner_id,
            goal=goal,
            days_per_week=days_per_week,
            plan_data=plan_data,
        )
        append_action(session, plan_id=plan.id, action_type="generate")
        document = PlanDocument.from_model(plan)

    logger.info("Plan generated", plan_id=document.id, owner_id=owner_id)
    return document

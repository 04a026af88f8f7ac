"""GENERATE → plan module.

Builds new 4-week plans from the exercise catalog with a fixed
progressive-overload schedule.
"""

from plan_service.plans.generate.generator import build_plan_data, volume_for_week
from plan_service.plans.generate.service import generate_plan
from plan_service.plans.generate.types import GeneratePlanRequest, Volume

__all__ = [
    "GeneratePlanRequest",
    "Volume",
    "build_plan_data",
    "generate_plan",
    "volume_for_week",
]

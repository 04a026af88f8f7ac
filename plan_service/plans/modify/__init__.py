"""MODIFY → plan module.

Structured swap/add/delete mutations on a stored plan. All mutations rewrite
the whole plan document and append one action record.
"""

from plan_service.plans.modify.service import add_exercise, delete_exercise, swap_exercise
from plan_service.plans.modify.types import (
    AddExerciseRequest,
    DeleteExerciseRequest,
    MutationResult,
    SwapExerciseRequest,
)

__all__ = [
    "AddExerciseRequest",
    "DeleteExerciseRequest",
    "MutationResult",
    "SwapExerciseRequest",
    "add_exercise",
    "delete_exercise",
    "swap_exercise",
]

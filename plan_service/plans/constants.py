"""Fixed tables for plan generation and mutation."""

from typing import Literal

Difficulty = Literal["beginner", "intermediate", "advanced"]
ActionType = Literal["generate", "swap", "add", "delete"]

DIFFICULTY_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")

PLAN_WEEKS = 4
MIN_DAYS_PER_WEEK = 1
MAX_DAYS_PER_WEEK = 7

# Base (sets, reps) per difficulty tier
DIFFICULTY_BASE_VOLUME: dict[str, tuple[int, int]] = {
    "beginner": (3, 12),
    "intermediate": (3, 10),
    "advanced": (4, 8),
}

# Applied on top of the base in weeks 2 and 4
REP_INCREMENT = 2
# Applied on top of the base in weeks 3 and 4
SET_INCREMENT = 1

# (primary, secondary) per day slot, repeats every 4 slots
MUSCLE_SPLIT: tuple[tuple[str, str], ...] = (
    ("chest", "triceps"),
    ("back", "biceps"),
    ("legs", "core"),
    ("shoulders", "core"),
)

PRIMARY_EXERCISE_COUNT = 3
SECONDARY_EXERCISE_COUNT = 2

DEFAULT_SETS = 3
DEFAULT_REPS = 10

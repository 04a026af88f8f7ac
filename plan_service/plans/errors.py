"""Plan service error types.

Domain code raises these; only the API layer maps them to HTTP status codes.

- PlanValidationError: malformed id, missing field, out-of-range value, unknown enum
- PlanNotFoundError: plan, week, day or exercise absent
- ExerciseConflictError: exercise name already present in the target scope
- CatalogShortfallError: catalog cannot supply enough candidates
- PlanInvariantError: a built or mutated document breaks a structural invariant
"""


class PlanServiceError(Exception):
    """Base class for all plan service errors."""


class PlanValidationError(PlanServiceError, ValueError):
    """Raised when a request is rejected before touching any store."""


class PlanNotFoundError(PlanServiceError):
    """Raised when a plan, week, day or exercise cannot be resolved."""


class ExerciseConflictError(PlanServiceError):
    """Raised when an exercise name already exists where it would be added."""


class CatalogShortfallError(PlanServiceError):
    """Raised when the catalog has too few candidates for a muscle group.

    Attributes:
        muscle_group: Muscle group that came up short
        difficulty: Difficulty tier queried
        required: Minimum number of candidates needed
        found: Number of usable candidates returned
    """

    def __init__(self, *, muscle_group: str, difficulty: str, required: int, found: int):
        self.muscle_group = muscle_group
        self.difficulty = difficulty
        self.required = required
        self.found = found
        super().__init__(
            f"Not enough exercises for {muscle_group} at {difficulty} level "
            f"(required {required}, found {found})"
        )


class PlanInvariantError(PlanServiceError, RuntimeError):
    """Raised when a plan document violates a structural invariant.

    Attributes:
        code: Error code (e.g., "WEEK_COUNT", "DAY_COUNT", "DUPLICATE_EXERCISE")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")

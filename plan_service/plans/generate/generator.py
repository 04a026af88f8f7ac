"""Plan body generation.

Builds the weeks → days → exercises tree for a new plan:
- Base volume comes from the difficulty tier
- Weekly volume follows a fixed progressive-overload schedule relative to the base
- Each day slot targets a (primary, secondary) muscle pair from a repeating split
- Exercises are sampled from the catalog, re-sampled every week

Catalog lookups are independent and run on a bounded thread pool. Results are
collected in slot order, so the output layout never depends on timing.
"""

from concurrent.futures import Future, ThreadPoolExecutor

from loguru import logger

from plan_service.plans.constants import (
    DIFFICULTY_BASE_VOLUME,
    MUSCLE_SPLIT,
    PLAN_WEEKS,
    PRIMARY_EXERCISE_COUNT,
    REP_INCREMENT,
    SECONDARY_EXERCISE_COUNT,
    SET_INCREMENT,
)
from plan_service.plans.errors import CatalogShortfallError
from plan_service.plans.generate.types import ExerciseLookup, Volume
from plan_service.plans.types import ExerciseEntry, PlanData, WorkoutDay, WorkoutWeek

# Up to PRIMARY_EXERCISE_COUNT secondary candidates can collide with the day's primaries
SECONDARY_LOOKUP_COUNT = SECONDARY_EXERCISE_COUNT + PRIMARY_EXERCISE_COUNT


def resolve_base_volume(difficulty: str) -> Volume:
    sets, reps = DIFFICULTY_BASE_VOLUME[difficulty]
    return Volume(sets=sets, reps=reps)


def volume_for_week(base: Volume, week_number: int) -> Volume:
    """Apply the overload schedule for a week.

    Week 1 is the base, week 2 adds reps, week 3 adds a set, week 4 adds both.
    Always relative to base, never to the previous week.
    """
    sets, reps = base
    if week_number in {2, 4}:
        reps += REP_INCREMENT
    if week_number in {3, 4}:
        sets += SET_INCREMENT
    return Volume(sets=sets, reps=reps)


def muscle_pair_for_slot(slot: int) -> tuple[str, str]:
    return MUSCLE_SPLIT[slot % len(MUSCLE_SPLIT)]


def day_label(slot: int, primary: str, secondary: str) -> str:
    return f"Day {slot + 1} - {primary.capitalize()} + {secondary.capitalize()}"


def _unique_names(names: list[str], taken: set[str]) -> list[str]:
    unique: list[str] = []
    for name in names:
        key = name.lower()
        if key in taken:
            continue
        taken.add(key)
        unique.append(name)
    return unique


def compose_day(
    *,
    slot: int,
    difficulty: str,
    volume: Volume,
    primary_names: list[str],
    secondary_names: list[str],
) -> WorkoutDay:
    """Compose one day from catalog candidates.

    Secondary candidates already used as primaries are dropped before the
    list is trimmed, keeping names unique within the day. The secondary
    lookup is over-fetched so that only a catalog without enough distinct
    names comes up short.

    Raises:
        CatalogShortfallError: If fewer than the required primary or secondary
            candidates remain
    """
    primary, secondary = muscle_pair_for_slot(slot)
    taken: set[str] = set()

    primary_names = _unique_names(primary_names, taken)[:PRIMARY_EXERCISE_COUNT]
    if len(primary_names) < PRIMARY_EXERCISE_COUNT:
        raise CatalogShortfallError(
            muscle_group=primary,
            difficulty=difficulty,
            required=PRIMARY_EXERCISE_COUNT,
            found=len(primary_names),
        )

    secondary_names = _unique_names(secondary_names, taken)[:SECONDARY_EXERCISE_COUNT]
    if len(secondary_names) < SECONDARY_EXERCISE_COUNT:
        raise CatalogShortfallError(
            muscle_group=secondary,
            difficulty=difficulty,
            required=SECONDARY_EXERCISE_COUNT,
            found=len(secondary_names),
        )

    return WorkoutDay(
        label=day_label(slot, primary, secondary),
        exercises=[
            ExerciseEntry(name=name, sets=volume.sets, reps=volume.reps)
            for name in [*primary_names, *secondary_names]
        ],
    )


def build_plan_data(
    *,
    difficulty: str,
    days_per_week: int,
    lookup: ExerciseLookup,
    max_workers: int = 4,
) -> PlanData:
    """Build a full plan body.

    Args:
        difficulty: Validated difficulty tier
        days_per_week: Validated number of training days
        lookup: Catalog query used for every (week, slot, muscle group)
        max_workers: Upper bound on concurrent catalog lookups

    Returns:
        PlanData with PLAN_WEEKS weeks of days_per_week days each

    Raises:
        CatalogShortfallError: If any day cannot be filled; no partial plan is returned
    """
    base = resolve_base_volume(difficulty)
    slots = [(week_number, slot) for week_number in range(1, PLAN_WEEKS + 1) for slot in range(days_per_week)]

    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="catalog-lookup")
    try:
        lookups: list[tuple[Future[list[str]], Future[list[str]]]] = []
        for _week_number, slot in slots:
            primary, secondary = muscle_pair_for_slot(slot)
            lookups.append(
                (
                    executor.submit(lookup, difficulty, primary, PRIMARY_EXERCISE_COUNT),
                    executor.submit(lookup, difficulty, secondary, SECONDARY_LOOKUP_COUNT),
                )
            )

        weeks = [WorkoutWeek(week_number=week_number) for week_number in range(1, PLAN_WEEKS + 1)]
        for (week_number, slot), (primary_future, secondary_future) in zip(slots, lookups, strict=True):
            day = compose_day(
                slot=slot,
                difficulty=difficulty,
                volume=volume_for_week(base, week_number),
                primary_names=primary_future.result(),
                secondary_names=secondary_future.result(),
            )
            weeks[week_number - 1].days.append(day)
    except Exception:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    else:
        executor.shutdown(wait=True)

    logger.debug(
        "Plan body built",
        difficulty=difficulty,
        days_per_week=days_per_week,
        lookups=len(slots) * 2,
    )
    return PlanData(weeks=weeks)

"""Exercise catalog queries.

The catalog is shared and read-only during generation. Candidate order is
left to the database's random(); no reproducibility is promised.
"""

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from plan_service.db.models import Exercise
from plan_service.db.session import get_session


def select_exercises(session: Session, *, difficulty: str, muscle_group: str, count: int) -> list[str]:
    """Select up to count random exercise names for a difficulty and muscle group.

    Returns:
        Between 0 and count distinct names, in random order
    """
    query = (
        select(Exercise.name)
        .where(
            Exercise.difficulty == difficulty,
            Exercise.muscle_group == muscle_group,
        )
        .order_by(func.random())
        .limit(count)
    )
    return list(session.execute(query).scalars().all())


def lookup_exercises(difficulty: str, muscle_group: str, count: int) -> list[str]:
    """Select exercises in a session of its own.

    Safe to call from worker threads: each call opens and closes its own session.
    """
    with get_session() as session:
        names = select_exercises(session, difficulty=difficulty, muscle_group=muscle_group, count=count)
    logger.debug(
        "Catalog lookup",
        difficulty=difficulty,
        muscle_group=muscle_group,
        requested=count,
        found=len(names),
    )
    return names

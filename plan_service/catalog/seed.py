"""Exercise catalog loader.

Parses the bundled YAML catalog and inserts missing entries. Seeding is
idempotent: entries already present (same name, muscle group and difficulty)
are skipped.
"""

from dataclasses import dataclass
from pathlib import Path

import yaml
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from plan_service.db.models import Exercise
from plan_service.plans.constants import DIFFICULTY_LEVELS

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "exercises.yaml"


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    muscle_group: str
    difficulty: str


def load_catalog_file(path: Path = DEFAULT_CATALOG_PATH) -> list[CatalogEntry]:
    """Load catalog entries from a YAML file.

    Expected layout::

        chest:
          - name: Push-Up
            difficulty: [beginner, intermediate]

    Args:
        path: Path to YAML catalog

    Returns:
        One CatalogEntry per (exercise, difficulty) pair

    Raises:
        ValueError: If the file is malformed or names an unknown difficulty
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid catalog YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise TypeError(f"Catalog {path} must be a mapping of muscle group to exercises")

    entries: list[CatalogEntry] = []
    for muscle_group, exercises in raw.items():
        for item in exercises or []:
            name = item.get("name")
            difficulties = item.get("difficulty") or []
            if not name:
                raise ValueError(f"Exercise without name under '{muscle_group}' in {path}")
            for difficulty in difficulties:
                if difficulty not in DIFFICULTY_LEVELS:
                    raise ValueError(f"Unknown difficulty '{difficulty}' for '{name}' in {path}")
                entries.append(CatalogEntry(name=name, muscle_group=str(muscle_group).lower(), difficulty=difficulty))

    logger.debug(f"Loaded {len(entries)} catalog entries from {path}")
    return entries


def seed_catalog(session: Session, entries: list[CatalogEntry]) -> int:
    """Insert catalog entries that are not already present.

    Returns:
        Number of entries inserted
    """
    existing = {
        (row.name, row.muscle_group, row.difficulty)
        for row in session.execute(select(Exercise.name, Exercise.muscle_group, Exercise.difficulty))
    }

    inserted = 0
    for entry in entries:
        key = (entry.name, entry.muscle_group, entry.difficulty)
        if key in existing:
            continue
        session.add(Exercise(name=entry.name, muscle_group=entry.muscle_group, difficulty=entry.difficulty))
        existing.add(key)
        inserted += 1

    session.flush()
    logger.info(f"Catalog seeded: inserted={inserted}, skipped={len(entries) - inserted}")
    return inserted

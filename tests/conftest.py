"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import uuid

import pytest
from sqlalchemy import create_engine

import plan_service.db.session as session_module
from plan_service.catalog.seed import CatalogEntry, seed_catalog
from plan_service.db.models import Base
from plan_service.db.session import get_session
from plan_service.plans.constants import DIFFICULTY_LEVELS, MUSCLE_SPLIT
from plan_service.plans.generate.types import GeneratePlanRequest

CATALOG_SIZE_PER_GROUP = 6


def catalog_entries(per_group: int = CATALOG_SIZE_PER_GROUP) -> list[CatalogEntry]:
    """Synthetic catalog, well above the generation minimums for every split group."""
    muscle_groups = sorted({muscle for pair in MUSCLE_SPLIT for muscle in pair})
    return [
        CatalogEntry(
            name=f"{muscle.capitalize()} {difficulty.capitalize()} {index}",
            muscle_group=muscle,
            difficulty=difficulty,
        )
        for muscle in muscle_groups
        for difficulty in DIFFICULTY_LEVELS
        for index in range(1, per_group + 1)
    ]


@pytest.fixture
def db_engine(tmp_path, monkeypatch):
    """Provide an isolated SQLite database file per test.

    A file (not :memory:) so that catalog lookups running on worker threads,
    each with its own connection, all see the same data.

    Patches the lazily created engine and session factory in the session
    module, so every get_session() call in the code under test uses it.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'plans.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)

    monkeypatch.setattr(session_module, "_engine", engine)
    monkeypatch.setattr(session_module, "_SessionLocal", None)

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def seeded_catalog(db_engine):
    """Seed the synthetic catalog into the test database."""
    with get_session() as session:
        seed_catalog(session, catalog_entries())
    return db_engine


@pytest.fixture
def owner_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def generate_request(owner_id: str) -> GeneratePlanRequest:
    return GeneratePlanRequest(
        owner_id=owner_id,
        goal="strength",
        days_per_week=3,
        difficulty="beginner",
    )

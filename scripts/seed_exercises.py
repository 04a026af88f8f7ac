"""Seed the exercise catalog from a YAML file.

Creates missing tables, then inserts every catalog entry not already present.
Safe to run repeatedly.

Usage:
    python scripts/seed_exercises.py
    python scripts/seed_exercises.py --file path/to/exercises.yaml
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from loguru import logger

from plan_service.catalog.seed import DEFAULT_CATALOG_PATH, load_catalog_file, seed_catalog
from plan_service.db.models import Base
from plan_service.db.session import get_engine, get_session


def main() -> int:
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(description="Seed the exercise catalog")
    parser.add_argument(
        "--file",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help=f"Catalog YAML file (default: {DEFAULT_CATALOG_PATH})",
    )
    args = parser.parse_args()

    try:
        Base.metadata.create_all(bind=get_engine())
        entries = load_catalog_file(args.file)
        with get_session() as session:
            inserted = seed_catalog(session, entries)
    except Exception as e:
        logger.exception(f"Catalog seeding failed: {e}")
        return 1
    else:
        logger.info(f"Catalog seeding completed: {inserted} new entries from {args.file}")
        return 0


if __name__ == "__main__":
    sys.exit(main())

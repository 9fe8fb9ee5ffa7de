#!/usr/bin/env python3
"""
Initialize the CoachDesk database
Creates every table; pass --reset to drop existing tables first
"""

import argparse
import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def main(reset: bool = False) -> int:
    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError
    from domain.models.database import drop_database, engine, init_database

    logger.info("=" * 60)
    logger.info("Initializing database...")
    logger.info("=" * 60)

    try:
        if reset:
            drop_database()
            logger.info("✓ Existing tables dropped")
        init_database()
        tables = inspect(engine).get_table_names()
        logger.info(f"✓ Created {len(tables)} tables: {', '.join(sorted(tables))}")
        return 0
    except SQLAlchemyError as e:
        logger.error(f"✗ Failed to initialize database: {e}")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="drop tables first")
    args = parser.parse_args()
    sys.exit(main(reset=args.reset))

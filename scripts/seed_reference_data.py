#!/usr/bin/env python3
"""
Seed plans and users and create indexes.

The API does this itself at startup unless SEED_ON_STARTUP=false; run this
script once per environment when startup seeding is turned off.

Usage:
    python scripts/seed_reference_data.py
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from subify.core.errors import StorageError
from subify.db.mongodb import connect_to_mongodb, close_mongodb_connection
from subify.db.seed import seed_reference_data

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> int:
    logger.info("Connecting to MongoDB...")
    if not connect_to_mongodb():
        logger.error("Failed to connect to MongoDB. Please check your connection settings.")
        return 1

    try:
        inserted = seed_reference_data()
    except StorageError as e:
        logger.error(f"Seeding failed: {e.detail}")
        return 1
    finally:
        close_mongodb_connection()

    for collection_name, count in inserted.items():
        if count:
            logger.info(f"  {collection_name}: inserted {count} documents")
        else:
            logger.info(f"  {collection_name}: already populated, left unchanged")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Reference data and index setup

Run once at startup (see the application lifespan) or from
scripts/seed_reference_data.py. Safe to run repeatedly: collections that
already hold data are left alone.
"""
import logging
from typing import Dict

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from subify.core.errors import StorageError
from subify.db.mongodb import (
    PLANS_COLLECTION,
    SUBMISSIONS_COLLECTION,
    USERS_COLLECTION,
    get_database,
)
from subify.utils.date_utils import utcnow

logger = logging.getLogger(__name__)

INITIAL_PLANS = [
    {"id": "plan-basic", "name": "Adobe Basic Cloud", "durationMonths": 12},
    {"id": "plan-standard", "name": "Adobe Standard Suite", "durationMonths": 12},
    {"id": "plan-premium", "name": "Adobe Premium All Apps", "durationMonths": 24},
    {"id": "plan-enterprise", "name": "Adobe Enterprise Pack", "durationMonths": 36},
]

INITIAL_USERS = [
    {"id": "admin-001", "email": "admin@example.com", "name": "Admin User", "role": "admin", "phone": "01700000000"},
    {"id": "reseller-001", "email": "reseller@example.com", "name": "Reseller One", "role": "reseller", "phone": "01700000001"},
    {"id": "reseller-002", "email": "reseller2@example.com", "name": "Reseller Two", "role": "reseller", "phone": "01700000002"},
]


def ensure_indexes(db: Database) -> None:
    """Create the indexes lookups and expiry scans rely on"""
    submissions = db[SUBMISSIONS_COLLECTION]
    submissions.create_index([("id", ASCENDING)], unique=True, sparse=True)
    submissions.create_index([("status", ASCENDING), ("endDate", ASCENDING)])
    submissions.create_index([("resellerId", ASCENDING), ("createdAt", DESCENDING)])
    db[PLANS_COLLECTION].create_index([("id", ASCENDING)], unique=True)
    db[USERS_COLLECTION].create_index([("id", ASCENDING)], unique=True, sparse=True)


def seed_reference_data(db: Database = None) -> Dict[str, int]:
    """
    Seed plans and users into empty collections and ensure indexes

    Args:
        db: Database to seed (defaults to the connected application database)

    Returns:
        Number of documents inserted per collection
    """
    db = db if db is not None else get_database()
    if db is None:
        raise StorageError("Database connection unavailable", unavailable=True)

    inserted = {PLANS_COLLECTION: 0, USERS_COLLECTION: 0}
    try:
        ensure_indexes(db)

        if db[PLANS_COLLECTION].count_documents({}) == 0:
            result = db[PLANS_COLLECTION].insert_many([dict(plan) for plan in INITIAL_PLANS])
            inserted[PLANS_COLLECTION] = len(result.inserted_ids)
            logger.info(f"Seeded {inserted[PLANS_COLLECTION]} plans")

        if db[USERS_COLLECTION].count_documents({}) == 0:
            now = utcnow()
            users = [{**user, "banned": False, "createdAt": now, "updatedAt": now} for user in INITIAL_USERS]
            result = db[USERS_COLLECTION].insert_many(users)
            inserted[USERS_COLLECTION] = len(result.inserted_ids)
            logger.info(f"Seeded {inserted[USERS_COLLECTION]} users")
    except PyMongoError as e:
        logger.error(f"Error seeding reference data: {e}", exc_info=True)
        raise StorageError(f"Failed to seed reference data: {str(e)}", cause=e)

    return inserted

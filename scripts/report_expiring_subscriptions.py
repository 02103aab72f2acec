#!/usr/bin/env python3
"""
Print approved subscriptions that expire soon or have already expired.

Usage:
    python scripts/report_expiring_subscriptions.py [window_days]
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from subify.core.config import settings
from subify.db.mongodb import connect_to_mongodb, close_mongodb_connection
from subify.services.expiry_service import list_expired, list_expiring_within
from subify.utils.date_utils import utcnow

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> int:
    window_days = int(sys.argv[1]) if len(sys.argv) > 1 else settings.EXPIRY_WARNING_DAYS

    if not connect_to_mongodb():
        logger.error("Failed to connect to MongoDB. Please check your connection settings.")
        return 1

    try:
        now = utcnow()
        expiring = list_expiring_within(window_days=window_days, now=now)
        expired = list_expired(now=now)
    finally:
        close_mongodb_connection()

    print("=" * 80)
    print(f"Expiring within {window_days} days: {len(expiring)}")
    print("=" * 80)
    for submission in expiring:
        print(f"  {submission.endDate:%Y-%m-%d}  {submission.customerEmail:<40} {submission.resellerName}")

    print("=" * 80)
    print(f"Expired: {len(expired)}")
    print("=" * 80)
    for submission in expired:
        print(f"  {submission.endDate:%Y-%m-%d}  {submission.customerEmail:<40} {submission.resellerName}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

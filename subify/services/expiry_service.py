"""
Expiry service - classifies approved submissions by time to expiry

Everything is computed on demand against the caller's clock; nothing runs in
the background and nothing here writes to the database.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from pymongo.errors import PyMongoError

from subify.core.config import settings
from subify.core.errors import StorageError
from subify.db.mongodb import get_required_collection, SUBMISSIONS_COLLECTION
from subify.models.submission import (
    ExpiryClassificationResponse,
    ExpiryState,
    ExpirySummaryResponse,
    SubmissionResponse,
    SubmissionStatus,
)
from subify.services.submission_service import get_submission
from subify.utils.date_utils import utcnow
from subify.utils.submission_helpers import submission_doc_to_response

logger = logging.getLogger(__name__)


def _window(window_days: Optional[int]) -> int:
    return settings.EXPIRY_WARNING_DAYS if window_days is None else window_days


def classify(
    submission: SubmissionResponse,
    now: Optional[datetime] = None,
    window_days: Optional[int] = None,
) -> ExpiryState:
    """
    Classify a submission relative to now

    Expired when endDate < now, ExpiringSoon when endDate is within
    [now, now + window], Active otherwise. A submission without an endDate
    has nothing to expire and is Active.
    """
    if submission.endDate is None:
        return ExpiryState.ACTIVE

    now = now or utcnow()
    remaining = submission.endDate - now
    if remaining < timedelta(0):
        return ExpiryState.EXPIRED
    if remaining <= timedelta(days=_window(window_days)):
        return ExpiryState.EXPIRING_SOON
    return ExpiryState.ACTIVE


def classify_submission(
    submission_id: str,
    now: Optional[datetime] = None,
    window_days: Optional[int] = None,
) -> ExpiryClassificationResponse:
    """Load a submission and classify it"""
    now = now or utcnow()
    submission = get_submission(submission_id)
    days_remaining = None
    if submission.endDate is not None:
        days_remaining = (submission.endDate - now).days
    return ExpiryClassificationResponse(
        submissionId=submission.id,
        state=classify(submission, now, window_days),
        endDate=submission.endDate,
        daysRemaining=days_remaining,
    )


def list_expiring_within(
    window_days: Optional[int] = None,
    now: Optional[datetime] = None,
    include_read: bool = True,
) -> List[SubmissionResponse]:
    """
    Successful submissions whose endDate falls in [now, now + window_days], soonest first

    Args:
        window_days: Lookahead in days (defaults to EXPIRY_WARNING_DAYS)
        now: Reference time (defaults to current UTC time)
        include_read: False hides submissions whose notification was dismissed
    """
    now = now or utcnow()
    query = {
        "status": SubmissionStatus.SUCCESSFUL.value,
        "endDate": {"$gte": now, "$lte": now + timedelta(days=_window(window_days))},
    }
    if not include_read:
        query["notificationRead"] = {"$ne": True}

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        docs = collection.find(query).sort("endDate", 1)
        return [submission_doc_to_response(doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"Error fetching expiring submissions: {e}", exc_info=True)
        raise StorageError(f"Failed to fetch expiring submissions: {str(e)}", cause=e)


def list_expired(now: Optional[datetime] = None) -> List[SubmissionResponse]:
    """Successful submissions whose endDate has passed, most recently expired first"""
    now = now or utcnow()
    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        docs = collection.find(
            {"status": SubmissionStatus.SUCCESSFUL.value, "endDate": {"$lt": now}}
        ).sort("endDate", -1)
        return [submission_doc_to_response(doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"Error fetching expired submissions: {e}", exc_info=True)
        raise StorageError(f"Failed to fetch expired submissions: {str(e)}", cause=e)


def expiry_summary(
    now: Optional[datetime] = None,
    window_days: Optional[int] = None,
) -> ExpirySummaryResponse:
    """Dashboard counters by status and by expiry state"""
    now = now or utcnow()
    window = _window(window_days)
    successful = SubmissionStatus.SUCCESSFUL.value

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        return ExpirySummaryResponse(
            total=collection.count_documents({}),
            pending=collection.count_documents({"status": SubmissionStatus.PENDING.value}),
            successful=collection.count_documents({"status": successful}),
            canceled=collection.count_documents({"status": SubmissionStatus.CANCELED.value}),
            expired=collection.count_documents({"status": successful, "endDate": {"$lt": now}}),
            expiringSoon=collection.count_documents(
                {
                    "status": successful,
                    "endDate": {"$gte": now, "$lte": now + timedelta(days=window)},
                }
            ),
            windowDays=window,
        )
    except PyMongoError as e:
        logger.error(f"Error computing expiry summary: {e}", exc_info=True)
        raise StorageError(f"Failed to compute expiry summary: {str(e)}", cause=e)

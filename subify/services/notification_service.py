"""
Notification service - expiring-soon notices and their dismissal
"""
import logging
from datetime import datetime
from typing import List, Optional

from pymongo.errors import PyMongoError

from subify.core.errors import StorageError
from subify.db.mongodb import get_required_collection, SUBMISSIONS_COLLECTION
from subify.models.submission import SubmissionResponse
from subify.services.expiry_service import list_expiring_within
from subify.utils.date_utils import utcnow
from subify.utils.submission_helpers import find_submission_doc, id_filter

logger = logging.getLogger(__name__)


def list_unread_expiring(
    window_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[SubmissionResponse]:
    """Expiring-soon submissions whose notification has not been dismissed"""
    return list_expiring_within(window_days=window_days, now=now, include_read=False)


def mark_notification_read(submission_id: str, now: Optional[datetime] = None) -> bool:
    """
    Dismiss the expiring-soon notification for a submission

    Only the notificationRead flag and updatedAt change. The id may be the
    submission id or its MongoDB _id.

    Returns:
        True if a submission with this id was found
    """
    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        doc = find_submission_doc(collection, submission_id)
        if doc is None:
            logger.warning(f"Notification dismissal for unknown submission {submission_id}")
            return False
        result = collection.update_one(
            id_filter(doc),
            {"$set": {"notificationRead": True, "updatedAt": now or utcnow()}},
        )
    except PyMongoError as e:
        logger.error(f"Error marking notification as read for {submission_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to mark notification as read: {str(e)}", cause=e)

    if result.matched_count == 0:
        logger.warning(f"Submission {submission_id} disappeared before its notification was dismissed")
        return False

    logger.info(f"Notification for submission {submission_id} marked as read")
    return True

"""
Expiry notification API routes
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from subify.models.submission import NotificationReadResponse, SubmissionResponse
from subify.services.notification_service import list_unread_expiring, mark_notification_read

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/expiring", response_model=List[SubmissionResponse])
def list_unread_expiring_endpoint(window_days: Optional[int] = Query(None, ge=0)):
    """Expiring-soon notices that have not been dismissed"""
    return list_unread_expiring(window_days=window_days)


@router.post("/{submission_id}/read", response_model=NotificationReadResponse)
def mark_read_endpoint(submission_id: str):
    """Dismiss the expiring-soon notice for a submission"""
    if not mark_notification_read(submission_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Submission not found: {submission_id}",
        )
    return NotificationReadResponse(success=True, message="Notification marked as read")

"""
Expiry tracking API routes
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Query

from subify.models.submission import (
    ExpiryClassificationResponse,
    ExpirySummaryResponse,
    SubmissionResponse,
)
from subify.services.expiry_service import (
    classify_submission,
    expiry_summary,
    list_expired,
    list_expiring_within,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/expiry", tags=["expiry"])


@router.get("/expiring", response_model=List[SubmissionResponse])
def list_expiring_endpoint(window_days: Optional[int] = Query(None, ge=0)):
    """Approved subscriptions ending within the window (default EXPIRY_WARNING_DAYS)"""
    return list_expiring_within(window_days=window_days)


@router.get("/expired", response_model=List[SubmissionResponse])
def list_expired_endpoint():
    """Approved subscriptions whose end date has passed"""
    return list_expired()


@router.get("/summary", response_model=ExpirySummaryResponse)
def expiry_summary_endpoint(window_days: Optional[int] = Query(None, ge=0)):
    """Dashboard counters"""
    return expiry_summary(window_days=window_days)


@router.get("/{submission_id}/classification", response_model=ExpiryClassificationResponse)
def classify_endpoint(submission_id: str, window_days: Optional[int] = Query(None, ge=0)):
    """Active / ExpiringSoon / Expired for one submission"""
    return classify_submission(submission_id, window_days=window_days)

"""
Submission lifecycle API routes
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from subify.models.submission import (
    CreateApprovedSubmissionRequest,
    CreateSubmissionRequest,
    ProfileNameRequest,
    RenewRequest,
    SubmissionResponse,
    SubmissionStatus,
    TransitionRequest,
)
from subify.services.submission_service import (
    create_approved_submission,
    create_submission,
    get_submission,
    list_approved_emails,
    list_submissions,
    renew_submission,
    set_profile_name,
    transition_submission,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submissions", tags=["submissions"])


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Error {action}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action}: {str(e)}",
    )


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def create_submission_endpoint(request: CreateSubmissionRequest):
    """Submit a new customer subscription request (starts Pending)"""
    logger.info(f"New submission for {request.customerEmail} (plan={request.requestedPlanId})")
    try:
        return create_submission(
            customer_email=request.customerEmail,
            plan_id=request.requestedPlanId,
            duration_months=request.durationMonths,
            notes=request.notes,
            reseller_id=request.resellerId,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("creating submission", e)


@router.post("/approved", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def create_approved_submission_endpoint(request: CreateApprovedSubmissionRequest):
    """Add a customer whose subscription is approved immediately"""
    logger.info(f"Admin adding approved customer {request.customerEmail} for reseller {request.resellerId}")
    try:
        return create_approved_submission(
            reseller_id=request.resellerId,
            customer_email=request.customerEmail,
            duration_months=request.durationMonths,
            plan_id=request.requestedPlanId,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("adding customer", e)


@router.get("", response_model=List[SubmissionResponse])
def list_submissions_endpoint(
    reseller_id: Optional[str] = Query(None),
    submission_status: Optional[SubmissionStatus] = Query(None, alias="status"),
):
    """List submissions, newest first"""
    try:
        return list_submissions(reseller_id=reseller_id, status=submission_status)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("listing submissions", e)


@router.get("/approved-emails", response_model=List[str])
def list_approved_emails_endpoint():
    """Customer emails with an approved subscription"""
    try:
        return list_approved_emails()
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("fetching approved emails", e)


@router.get("/{submission_id}", response_model=SubmissionResponse)
def get_submission_endpoint(submission_id: str):
    """Get a submission by id"""
    return get_submission(submission_id)


@router.put("/{submission_id}/status", response_model=SubmissionResponse)
def transition_submission_endpoint(submission_id: str, request: TransitionRequest):
    """
    Change a submission's status

    Approving sets startDate/endDate; durationMonths, when given, replaces the
    stored duration. durationMonths with Pending or Canceled is rejected with 422.
    """
    logger.info(f"Status change requested for {submission_id}: {request.status.value}")
    try:
        return transition_submission(
            submission_id,
            request.status,
            override_duration_months=request.durationMonths,
        )
    except HTTPException as e:
        logger.warning(f"Status change for {submission_id} failed: {e.status_code} - {e.detail}")
        raise
    except Exception as e:
        raise _internal_error(f"updating status of {submission_id}", e)


@router.post("/{submission_id}/renew", response_model=SubmissionResponse)
def renew_submission_endpoint(submission_id: str, request: RenewRequest):
    """Renew a subscription for extra months"""
    logger.info(f"Renewal requested for {submission_id}: +{request.extraMonths} months")
    try:
        return renew_submission(submission_id, request.extraMonths)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error(f"renewing {submission_id}", e)


@router.put("/{submission_id}/profile-name", response_model=SubmissionResponse)
def set_profile_name_endpoint(submission_id: str, request: ProfileNameRequest):
    """Set or clear the profile label"""
    try:
        return set_profile_name(submission_id, request.profileName)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error(f"updating profile name of {submission_id}", e)

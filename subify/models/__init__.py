"""Pydantic models for request/response validation"""

# Import all models for easy access
from subify.models.submission import (
    SubmissionStatus,
    ExpiryState,
    CreateSubmissionRequest,
    CreateApprovedSubmissionRequest,
    TransitionRequest,
    RenewRequest,
    ProfileNameRequest,
    SubmissionResponse,
    ExpiryClassificationResponse,
    ExpirySummaryResponse,
    NotificationReadResponse,
)

from subify.models.plan import (
    PlanResponse,
)

from subify.models.reseller import (
    ResellerUpdateRequest,
    ResellerBanRequest,
    ResellerResponse,
    ResellerDeleteResponse,
)

__all__ = [
    # Submission models
    "SubmissionStatus",
    "ExpiryState",
    "CreateSubmissionRequest",
    "CreateApprovedSubmissionRequest",
    "TransitionRequest",
    "RenewRequest",
    "ProfileNameRequest",
    "SubmissionResponse",
    "ExpiryClassificationResponse",
    "ExpirySummaryResponse",
    "NotificationReadResponse",
    # Plan models
    "PlanResponse",
    # Reseller models
    "ResellerUpdateRequest",
    "ResellerBanRequest",
    "ResellerResponse",
    "ResellerDeleteResponse",
]

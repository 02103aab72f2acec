"""
Submission-related Pydantic models
"""
from enum import Enum
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


# Upper bound on any stored duration, 100 years
MAX_DURATION_MONTHS = 1200


class SubmissionStatus(str, Enum):
    PENDING = "Pending"
    SUCCESSFUL = "Successful"
    CANCELED = "Canceled"


class ExpiryState(str, Enum):
    ACTIVE = "Active"
    EXPIRING_SOON = "ExpiringSoon"
    EXPIRED = "Expired"


# Request Models
class CreateSubmissionRequest(BaseModel):
    """Reseller request to provision a customer subscription"""
    customerEmail: EmailStr
    requestedPlanId: str
    durationMonths: int = Field(..., ge=1, le=MAX_DURATION_MONTHS)
    notes: Optional[str] = None
    resellerId: Optional[str] = None  # defaults to the admin pseudo-reseller


class CreateApprovedSubmissionRequest(BaseModel):
    """Admin shortcut: add a customer whose subscription starts immediately"""
    resellerId: str
    customerEmail: EmailStr
    durationMonths: int = Field(1, ge=1, le=MAX_DURATION_MONTHS)
    requestedPlanId: str = "plan-basic"


class TransitionRequest(BaseModel):
    status: SubmissionStatus
    # Overrides the stored duration; only valid together with status Successful
    durationMonths: Optional[int] = Field(None, ge=1, le=MAX_DURATION_MONTHS)


class RenewRequest(BaseModel):
    extraMonths: int = Field(1, ge=1, le=MAX_DURATION_MONTHS)


class ProfileNameRequest(BaseModel):
    profileName: Optional[str] = None


# Response Models
class SubmissionResponse(BaseModel):
    id: str
    customerEmail: str
    requestedPlanId: str
    durationMonths: int
    notes: Optional[str] = None
    profileName: Optional[str] = None
    status: SubmissionStatus
    resellerId: str
    resellerName: str
    requestDate: datetime
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    renewalLikelihood: Optional[float] = None
    renewalReason: Optional[str] = None
    notificationRead: bool = False
    createdAt: datetime
    updatedAt: datetime

    class Config:
        from_attributes = True


class ExpiryClassificationResponse(BaseModel):
    submissionId: str
    state: ExpiryState
    endDate: Optional[datetime] = None
    daysRemaining: Optional[int] = None  # whole days, negative once expired


class ExpirySummaryResponse(BaseModel):
    """Dashboard counters"""
    total: int
    pending: int
    successful: int
    canceled: int
    expired: int
    expiringSoon: int
    windowDays: int


class NotificationReadResponse(BaseModel):
    success: bool
    message: str

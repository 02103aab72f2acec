"""
Reseller API routes
"""
import logging
from typing import List

from fastapi import APIRouter

from subify.models.reseller import (
    ResellerBanRequest,
    ResellerDeleteResponse,
    ResellerResponse,
    ResellerUpdateRequest,
)
from subify.models.submission import SubmissionResponse
from subify.services.reseller_service import (
    delete_reseller,
    get_reseller,
    list_resellers,
    set_reseller_banned,
    update_reseller_info,
)
from subify.services.submission_service import list_submissions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resellers", tags=["resellers"])


@router.get("", response_model=List[ResellerResponse])
def list_resellers_endpoint():
    """All reseller accounts"""
    return list_resellers()


@router.get("/{reseller_id}", response_model=ResellerResponse)
def get_reseller_endpoint(reseller_id: str):
    """Get reseller by ID"""
    return get_reseller(reseller_id)


@router.put("/{reseller_id}", response_model=ResellerResponse)
def update_reseller_endpoint(reseller_id: str, updates: ResellerUpdateRequest):
    """Update a reseller's name, email or phone"""
    logger.info(f"Update requested for reseller {reseller_id}: {updates.model_dump(exclude_none=True)}")
    return update_reseller_info(reseller_id, updates)


@router.put("/{reseller_id}/ban", response_model=ResellerResponse)
def ban_reseller_endpoint(reseller_id: str, request: ResellerBanRequest):
    """Ban or unban a reseller"""
    return set_reseller_banned(reseller_id, request.banned)


@router.delete("/{reseller_id}", response_model=ResellerDeleteResponse)
def delete_reseller_endpoint(reseller_id: str):
    """Delete a reseller and all of its submissions"""
    logger.info(f"Deletion requested for reseller {reseller_id}")
    return delete_reseller(reseller_id)


@router.get("/{reseller_id}/submissions", response_model=List[SubmissionResponse])
def list_reseller_submissions_endpoint(reseller_id: str):
    """A reseller's submissions, newest first"""
    reseller = get_reseller(reseller_id)
    return list_submissions(reseller_id=reseller.id)

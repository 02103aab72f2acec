"""
Submission-related helper functions
"""
import logging
import time
import uuid
from typing import Optional

from bson import ObjectId
from pymongo.collection import Collection

from subify.models.submission import SubmissionResponse, SubmissionStatus

logger = logging.getLogger(__name__)

PROFILE_NAME_MAX_LENGTH = 100


def generate_submission_id() -> str:
    """Opaque submission id: sub-<epoch ms>-<5 random chars>"""
    return f"sub-{int(time.time() * 1000)}-{uuid.uuid4().hex[:5]}"


def find_submission_doc(collection: Collection, submission_id: str) -> Optional[dict]:
    """
    Look a submission up by its own id, then by MongoDB _id if the value looks like one

    Args:
        collection: Submissions collection
        submission_id: Submission id or stringified ObjectId

    Returns:
        The raw document or None
    """
    doc = collection.find_one({"id": submission_id})
    if doc is None and ObjectId.is_valid(submission_id):
        doc = collection.find_one({"_id": ObjectId(submission_id)})
    return doc


def id_filter(doc: dict) -> dict:
    """Update filter that targets exactly this document"""
    if doc.get("id"):
        return {"id": doc["id"]}
    return {"_id": doc["_id"]}


def normalize_profile_name(profile_name: Optional[str]) -> Optional[str]:
    """Trim a profile name; blank or whitespace-only means unset"""
    if profile_name is None:
        return None
    trimmed = profile_name.strip()
    return trimmed or None


def submission_doc_to_response(doc: dict) -> SubmissionResponse:
    """
    Convert MongoDB submission document to SubmissionResponse

    Documents created without our own id fall back to the stringified _id.
    """
    submission_id = doc.get("id") or str(doc["_id"])
    return SubmissionResponse(
        id=submission_id,
        customerEmail=doc.get("customerEmail", ""),
        requestedPlanId=doc.get("requestedPlanId", ""),
        durationMonths=doc.get("durationMonths", 1),
        notes=doc.get("notes"),
        profileName=doc.get("profileName"),
        status=doc.get("status", SubmissionStatus.PENDING.value),
        resellerId=doc.get("resellerId", ""),
        resellerName=doc.get("resellerName", ""),
        requestDate=doc.get("requestDate") or doc.get("createdAt"),
        startDate=doc.get("startDate"),
        endDate=doc.get("endDate"),
        renewalLikelihood=doc.get("renewalLikelihood"),
        renewalReason=doc.get("renewalReason"),
        notificationRead=doc.get("notificationRead", False),
        createdAt=doc.get("createdAt") or doc.get("requestDate"),
        updatedAt=doc.get("updatedAt") or doc.get("createdAt") or doc.get("requestDate"),
    )

"""
Reseller service - reseller accounts and their administration
"""
import logging
from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from subify.core.errors import ConflictError, NotFoundError, StorageError
from subify.db.mongodb import get_required_collection, SUBMISSIONS_COLLECTION, USERS_COLLECTION
from subify.models.reseller import ResellerDeleteResponse, ResellerResponse, ResellerUpdateRequest
from subify.utils.date_utils import utcnow

logger = logging.getLogger(__name__)

# Pseudo-reseller recorded on submissions an admin enters directly
ADMIN_RESELLER_ID = "admin"
ADMIN_RESELLER_NAME = "Admin"


def _user_doc_to_response(doc: dict) -> ResellerResponse:
    """Convert a MongoDB user document to ResellerResponse; password fields never leave here"""
    return ResellerResponse(
        id=doc.get("id") or str(doc["_id"]),
        email=doc.get("email", ""),
        phone=doc.get("phone"),
        name=doc.get("name"),
        role=doc.get("role", "reseller"),
        banned=doc.get("banned", False),
        createdAt=doc.get("createdAt"),
        updatedAt=doc.get("updatedAt"),
    )


def _find_user_doc(user_id: str) -> Optional[dict]:
    collection = get_required_collection(USERS_COLLECTION)
    try:
        doc = collection.find_one({"id": user_id})
        if doc is None and ObjectId.is_valid(user_id):
            doc = collection.find_one({"_id": ObjectId(user_id)})
        return doc
    except PyMongoError as e:
        logger.error(f"Error fetching user {user_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to fetch user: {str(e)}", cause=e)


def list_resellers() -> List[ResellerResponse]:
    """All reseller accounts, newest first"""
    collection = get_required_collection(USERS_COLLECTION)
    try:
        docs = collection.find({"role": "reseller"}).sort("createdAt", -1)
        return [_user_doc_to_response(doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"Error listing resellers: {e}", exc_info=True)
        raise StorageError(f"Failed to list resellers: {str(e)}", cause=e)


def _find_reseller_doc(reseller_id: str) -> dict:
    doc = _find_user_doc(reseller_id)
    if doc is None or doc.get("role") != "reseller":
        logger.warning(f"Reseller not found: {reseller_id}")
        raise NotFoundError("Reseller", reseller_id)
    return doc


def _user_filter(doc: dict) -> dict:
    if doc.get("id"):
        return {"id": doc["id"]}
    return {"_id": doc["_id"]}


def _update_reseller(doc: dict, set_fields: dict) -> ResellerResponse:
    reseller_id = doc.get("id") or str(doc["_id"])
    collection = get_required_collection(USERS_COLLECTION)
    try:
        updated = collection.find_one_and_update(
            _user_filter(doc),
            {"$set": set_fields},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Error updating reseller {reseller_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to update reseller: {str(e)}", cause=e)

    if updated is None:
        raise NotFoundError("Reseller", reseller_id)
    return _user_doc_to_response(updated)


def get_reseller(reseller_id: str) -> ResellerResponse:
    """
    Get a reseller by id

    Raises:
        NotFoundError: if no reseller account has this id
    """
    return _user_doc_to_response(_find_reseller_doc(reseller_id))


def resolve_reseller_name(reseller_id: Optional[str]) -> tuple:
    """
    Resolve the (resellerId, resellerName) pair stored on a submission

    None or "admin" maps to the admin pseudo-reseller; anything else must be
    an existing reseller, named by its display name or email.
    """
    if not reseller_id or reseller_id == ADMIN_RESELLER_ID:
        return ADMIN_RESELLER_ID, ADMIN_RESELLER_NAME

    reseller = get_reseller(reseller_id)
    return reseller.id, reseller.name or reseller.email


def set_reseller_banned(reseller_id: str, banned: bool, now: Optional[datetime] = None) -> ResellerResponse:
    """Ban or unban a reseller; only the banned flag and updatedAt change"""
    doc = _find_reseller_doc(reseller_id)
    reseller = _update_reseller(doc, {"banned": banned, "updatedAt": now or utcnow()})
    logger.info(f"Reseller {reseller.id} {'banned' if banned else 'unbanned'}")
    return reseller


def update_reseller_info(
    reseller_id: str,
    updates: ResellerUpdateRequest,
    now: Optional[datetime] = None,
) -> ResellerResponse:
    """
    Update a reseller's name, email and/or phone

    Only fields that are provided are written. Submissions keep the
    resellerName they were created with.

    Raises:
        NotFoundError: unknown reseller
        ConflictError: email already used by another account
    """
    doc = _find_reseller_doc(reseller_id)

    set_fields = {"updatedAt": now or utcnow()}
    if updates.name is not None:
        set_fields["name"] = updates.name.strip() or None
    if updates.phone is not None:
        set_fields["phone"] = updates.phone.strip() or None
    if updates.email is not None:
        collection = get_required_collection(USERS_COLLECTION)
        try:
            existing = collection.find_one({"email": updates.email, "_id": {"$ne": doc["_id"]}})
        except PyMongoError as e:
            logger.error(f"Error checking email for reseller {reseller_id}: {e}", exc_info=True)
            raise StorageError(f"Failed to update reseller: {str(e)}", cause=e)
        if existing:
            raise ConflictError("Email already in use by another account")
        set_fields["email"] = updates.email

    reseller = _update_reseller(doc, set_fields)
    logger.info(f"Reseller {reseller.id} updated: {sorted(k for k in set_fields if k != 'updatedAt')}")
    return reseller


def delete_reseller(reseller_id: str) -> ResellerDeleteResponse:
    """
    Delete a reseller account together with all of its submissions

    Raises:
        NotFoundError: unknown reseller
    """
    doc = _find_reseller_doc(reseller_id)
    stored_id = doc.get("id") or str(doc["_id"])

    users = get_required_collection(USERS_COLLECTION)
    submissions = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        removed = submissions.delete_many({"resellerId": stored_id})
        result = users.delete_one(_user_filter(doc))
    except PyMongoError as e:
        logger.error(f"Error deleting reseller {reseller_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to delete reseller: {str(e)}", cause=e)

    if result.deleted_count == 0:
        raise NotFoundError("Reseller", reseller_id)

    logger.info(f"Reseller {stored_id} deleted with {removed.deleted_count} submission(s)")
    return ResellerDeleteResponse(
        success=True,
        resellerId=stored_id,
        deletedSubmissions=removed.deleted_count,
    )

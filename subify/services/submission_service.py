"""
Submission service - lifecycle of customer subscription requests

A submission starts Pending, is approved (Successful) or rejected (Canceled)
by an admin, and can be renewed. Any status may move to any other status.
startDate/endDate are only ever written by approval or renewal and are kept
when a submission later goes back to Pending or Canceled.
"""
import logging
from datetime import datetime
from typing import List, Optional, Union

from pydantic import EmailStr, TypeAdapter, ValidationError
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from subify.core.errors import NotFoundError, PredictionError, StorageError, SubmissionValidationError
from subify.db.mongodb import get_required_collection, SUBMISSIONS_COLLECTION
from subify.models.submission import MAX_DURATION_MONTHS, SubmissionResponse, SubmissionStatus
from subify.services.plan_service import get_plan
from subify.services.renewal_prediction_service import predict_renewal_likelihood
from subify.services.reseller_service import resolve_reseller_name
from subify.utils.date_utils import add_months, utcnow
from subify.utils.submission_helpers import (
    PROFILE_NAME_MAX_LENGTH,
    find_submission_doc,
    generate_submission_id,
    id_filter,
    normalize_profile_name,
    submission_doc_to_response,
)

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def _validate_email(field: str, value: str) -> str:
    try:
        return _email_adapter.validate_python(value)
    except ValidationError:
        raise SubmissionValidationError(field, "Invalid customer email.")


def _validate_months(field: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise SubmissionValidationError(field, "Duration must be at least 1 month.")
    if value > MAX_DURATION_MONTHS:
        raise SubmissionValidationError(field, f"Duration must be at most {MAX_DURATION_MONTHS} months.")
    return value


def _term_end(field: str, start_date: datetime, months: int) -> datetime:
    try:
        return add_months(start_date, months)
    except (ValueError, OverflowError):
        raise SubmissionValidationError(field, "Subscription term ends outside the supported date range.")


def _coerce_status(value: Union[SubmissionStatus, str]) -> SubmissionStatus:
    try:
        return SubmissionStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in SubmissionStatus)
        raise SubmissionValidationError("status", f"Status must be one of: {allowed}.")


def _load_submission(collection: Collection, submission_id: str) -> dict:
    try:
        doc = find_submission_doc(collection, submission_id)
    except PyMongoError as e:
        logger.error(f"Error fetching submission {submission_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to fetch submission: {str(e)}", cause=e)

    if doc is None:
        logger.warning(f"Submission with ID {submission_id} not found")
        raise NotFoundError("Submission", submission_id)
    return doc


def _update_submission(collection: Collection, doc: dict, set_fields: dict) -> SubmissionResponse:
    """Atomically apply $set to one submission and return the post-update document"""
    submission_id = doc.get("id") or str(doc["_id"])
    try:
        updated = collection.find_one_and_update(
            id_filter(doc),
            {"$set": set_fields},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Error updating submission {submission_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to update submission: {str(e)}", cause=e)

    if updated is None:
        # Deleted between read and write
        logger.warning(f"Submission {submission_id} disappeared during update")
        raise NotFoundError("Submission", submission_id)
    return submission_doc_to_response(updated)


def _insert_submission(collection: Collection, submission_doc: dict) -> SubmissionResponse:
    try:
        result = collection.insert_one(submission_doc)
    except PyMongoError as e:
        logger.error(f"Error inserting submission: {e}", exc_info=True)
        raise StorageError(f"Failed to create submission: {str(e)}", cause=e)

    submission_doc["_id"] = result.inserted_id
    return submission_doc_to_response(submission_doc)


def create_submission(
    customer_email: str,
    plan_id: str,
    duration_months: int,
    notes: Optional[str] = None,
    reseller_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> SubmissionResponse:
    """
    Create a Pending submission

    Args:
        customer_email: Customer email address
        plan_id: Requested plan id, must exist
        duration_months: Requested duration, at least 1
        notes: Optional free text; non-blank notes are sent for renewal prediction
        reseller_id: Submitting reseller, None or "admin" for admin entries
        now: Creation time (defaults to current UTC time)

    Returns:
        The stored submission

    Raises:
        SubmissionValidationError: bad email or duration
        NotFoundError: unknown plan or reseller
        StorageError: database failure
    """
    customer_email = _validate_email("customerEmail", customer_email)
    duration_months = _validate_months("durationMonths", duration_months)
    if not plan_id:
        raise SubmissionValidationError("requestedPlanId", "Plan is required.")

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    plan = get_plan(plan_id)
    reseller_id, reseller_name = resolve_reseller_name(reseller_id)

    notes = (notes.strip() or None) if notes else None
    prediction = None
    if notes:
        try:
            prediction = predict_renewal_likelihood(notes)
        except PredictionError as e:
            # Creation proceeds without renewal fields
            logger.warning(f"Renewal prediction skipped for {customer_email}: {e}")

    now = now or utcnow()
    submission_doc = {
        "id": generate_submission_id(),
        "customerEmail": customer_email,
        "requestedPlanId": plan.id,
        "durationMonths": duration_months,
        "notes": notes,
        "profileName": None,
        "status": SubmissionStatus.PENDING.value,
        "resellerId": reseller_id,
        "resellerName": reseller_name,
        "requestDate": now,
        "startDate": None,
        "endDate": None,
        "notificationRead": False,
        "createdAt": now,
        "updatedAt": now,
    }
    if prediction is not None:
        submission_doc["renewalLikelihood"] = prediction.likelihood
        submission_doc["renewalReason"] = prediction.reason

    submission = _insert_submission(collection, submission_doc)
    logger.info(
        f"Submission {submission.id} created for {customer_email} "
        f"(plan={plan.id}, months={duration_months}, reseller={reseller_id})"
    )
    return submission


def create_approved_submission(
    reseller_id: str,
    customer_email: str,
    duration_months: int = 1,
    plan_id: str = "plan-basic",
    now: Optional[datetime] = None,
) -> SubmissionResponse:
    """
    Admin shortcut: insert a submission that is already Successful

    The subscription starts now and ends duration_months later.
    """
    customer_email = _validate_email("customerEmail", customer_email)
    duration_months = _validate_months("durationMonths", duration_months)

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    plan = get_plan(plan_id)
    reseller_id, reseller_name = resolve_reseller_name(reseller_id)

    now = now or utcnow()
    submission_doc = {
        "id": generate_submission_id(),
        "customerEmail": customer_email,
        "requestedPlanId": plan.id,
        "durationMonths": duration_months,
        "notes": None,
        "profileName": None,
        "status": SubmissionStatus.SUCCESSFUL.value,
        "resellerId": reseller_id,
        "resellerName": reseller_name,
        "requestDate": now,
        "startDate": now,
        "endDate": _term_end("durationMonths", now, duration_months),
        "notificationRead": False,
        "createdAt": now,
        "updatedAt": now,
    }
    submission = _insert_submission(collection, submission_doc)
    logger.info(f"Approved submission {submission.id} added for {customer_email} until {submission.endDate}")
    return submission


def get_submission(submission_id: str) -> SubmissionResponse:
    """Get a submission by id (or MongoDB _id)"""
    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    return submission_doc_to_response(_load_submission(collection, submission_id))


def list_submissions(
    reseller_id: Optional[str] = None,
    status: Optional[Union[SubmissionStatus, str]] = None,
) -> List[SubmissionResponse]:
    """
    List submissions, newest first

    Args:
        reseller_id: Only this reseller's submissions
        status: Only submissions in this status
    """
    query = {}
    if reseller_id:
        query["resellerId"] = reseller_id
    if status is not None:
        query["status"] = _coerce_status(status).value

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        docs = collection.find(query).sort("createdAt", -1)
        return [submission_doc_to_response(doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"Error listing submissions: {e}", exc_info=True)
        raise StorageError(f"Failed to list submissions: {str(e)}", cause=e)


def transition_submission(
    submission_id: str,
    new_status: Union[SubmissionStatus, str],
    override_duration_months: Optional[int] = None,
    now: Optional[datetime] = None,
) -> SubmissionResponse:
    """
    Move a submission to a new status

    Approval keeps an existing startDate (or starts now) and derives
    endDate = startDate + months, using the override when given; the override
    is also stored as the new durationMonths. Pending and Canceled only change
    the status and do not accept an override.

    Raises:
        NotFoundError: unknown submission id
        SubmissionValidationError: unknown status, override out of range, or an
            override on a non-approving transition
    """
    new_status = _coerce_status(new_status)
    if override_duration_months is not None:
        override_duration_months = _validate_months("durationMonths", override_duration_months)
        if new_status != SubmissionStatus.SUCCESSFUL:
            raise SubmissionValidationError(
                "durationMonths", "A duration can only be given when approving a submission."
            )

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    doc = _load_submission(collection, submission_id)

    now = now or utcnow()
    set_fields = {"status": new_status.value, "updatedAt": now}

    if new_status == SubmissionStatus.SUCCESSFUL:
        start_date = doc.get("startDate") or now
        months = override_duration_months or doc.get("durationMonths") or 1
        set_fields["startDate"] = start_date
        set_fields["endDate"] = _term_end("durationMonths", start_date, months)
        if override_duration_months:
            set_fields["durationMonths"] = override_duration_months

    submission = _update_submission(collection, doc, set_fields)
    logger.info(
        f"Submission {submission.id} status {doc.get('status')} -> {new_status.value}"
        + (f" (ends {submission.endDate})" if new_status == SubmissionStatus.SUCCESSFUL else "")
    )
    return submission


def renew_submission(
    submission_id: str,
    extra_months: int,
    now: Optional[datetime] = None,
) -> SubmissionResponse:
    """
    Renew a submission and mark it Successful

    While the term is still running (endDate >= now) the months are added to
    the stored duration and the start date is kept, extending the term. Once
    it has lapsed, or was never approved, the term restarts at now for
    extra_months. The expiry notification is re-armed either way.
    """
    extra_months = _validate_months("extraMonths", extra_months)

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    doc = _load_submission(collection, submission_id)

    now = now or utcnow()
    end_date = doc.get("endDate")
    start_date = doc.get("startDate")

    if end_date is not None and end_date >= now and start_date is not None:
        months = (doc.get("durationMonths") or 0) + extra_months
        if months > MAX_DURATION_MONTHS:
            raise SubmissionValidationError(
                "extraMonths", f"Renewed duration would exceed {MAX_DURATION_MONTHS} months."
            )
        policy = "extended"
    else:
        start_date = now
        months = extra_months
        policy = "restarted"

    set_fields = {
        "status": SubmissionStatus.SUCCESSFUL.value,
        "startDate": start_date,
        "endDate": _term_end("extraMonths", start_date, months),
        "durationMonths": months,
        "notificationRead": False,
        "updatedAt": now,
    }
    submission = _update_submission(collection, doc, set_fields)
    logger.info(f"Submission {submission.id} renewed (+{extra_months} months, {policy}), ends {submission.endDate}")
    return submission


def set_profile_name(
    submission_id: str,
    profile_name: Optional[str],
    now: Optional[datetime] = None,
) -> SubmissionResponse:
    """Set or clear the free-text profile label; allowed in any status"""
    profile_name = normalize_profile_name(profile_name)
    if profile_name is not None and len(profile_name) > PROFILE_NAME_MAX_LENGTH:
        raise SubmissionValidationError(
            "profileName", f"Profile name cannot exceed {PROFILE_NAME_MAX_LENGTH} characters."
        )

    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    doc = _load_submission(collection, submission_id)

    submission = _update_submission(
        collection,
        doc,
        {"profileName": profile_name, "updatedAt": now or utcnow()},
    )
    logger.info(f"Submission {submission.id} profile name set to {profile_name!r}")
    return submission


def list_approved_emails() -> List[str]:
    """Customer emails of all Successful submissions"""
    collection = get_required_collection(SUBMISSIONS_COLLECTION)
    try:
        docs = collection.find(
            {"status": SubmissionStatus.SUCCESSFUL.value},
            {"customerEmail": 1, "_id": 0},
        )
        return [doc["customerEmail"] for doc in docs if doc.get("customerEmail")]
    except PyMongoError as e:
        logger.error(f"Error fetching approved emails: {e}", exc_info=True)
        raise StorageError(f"Failed to fetch approved emails: {str(e)}", cause=e)

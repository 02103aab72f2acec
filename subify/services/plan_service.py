"""
Plan service - read access to subscription plans
"""
import logging
from typing import List

from pymongo.errors import PyMongoError

from subify.core.errors import NotFoundError, StorageError
from subify.db.mongodb import get_required_collection, PLANS_COLLECTION
from subify.models.plan import PlanResponse

logger = logging.getLogger(__name__)


def _plan_doc_to_response(doc: dict) -> PlanResponse:
    return PlanResponse(
        id=doc.get("id") or str(doc["_id"]),
        name=doc.get("name", ""),
        durationMonths=doc.get("durationMonths", 1),
    )


def list_plans() -> List[PlanResponse]:
    """All plans, ordered by default duration then name"""
    collection = get_required_collection(PLANS_COLLECTION)
    try:
        docs = collection.find({}).sort([("durationMonths", 1), ("name", 1)])
        return [_plan_doc_to_response(doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"Error listing plans: {e}", exc_info=True)
        raise StorageError(f"Failed to list plans: {str(e)}", cause=e)


def get_plan(plan_id: str) -> PlanResponse:
    """
    Get a plan by id

    Raises:
        NotFoundError: if no plan has this id
    """
    collection = get_required_collection(PLANS_COLLECTION)
    try:
        doc = collection.find_one({"id": plan_id})
    except PyMongoError as e:
        logger.error(f"Error fetching plan {plan_id}: {e}", exc_info=True)
        raise StorageError(f"Failed to fetch plan: {str(e)}", cause=e)

    if doc is None:
        logger.warning(f"Plan not found: {plan_id}")
        raise NotFoundError("Plan", plan_id)
    return _plan_doc_to_response(doc)

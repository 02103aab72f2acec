"""
Plan API routes
"""
from typing import List

from fastapi import APIRouter

from subify.models.plan import PlanResponse
from subify.services.plan_service import get_plan, list_plans

router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.get("", response_model=List[PlanResponse])
def list_plans_endpoint():
    """All subscription plans"""
    return list_plans()


@router.get("/{plan_id}", response_model=PlanResponse)
def get_plan_endpoint(plan_id: str):
    """Get plan by ID"""
    return get_plan(plan_id)

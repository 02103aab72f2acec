"""
Plan-related Pydantic models
"""
from pydantic import BaseModel


class PlanResponse(BaseModel):
    """A named subscription offering with its default duration"""
    id: str
    name: str
    durationMonths: int

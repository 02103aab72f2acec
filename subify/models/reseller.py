"""
Reseller-related Pydantic models
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


# Request Models
class ResellerUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class ResellerBanRequest(BaseModel):
    banned: bool


# Response Models
class ResellerResponse(BaseModel):
    id: str
    email: str
    phone: Optional[str] = None
    name: Optional[str] = None
    role: str = "reseller"  # reseller, admin
    banned: bool = False
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class ResellerDeleteResponse(BaseModel):
    success: bool
    resellerId: str
    deletedSubmissions: int

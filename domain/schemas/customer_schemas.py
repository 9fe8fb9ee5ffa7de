from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from uuid import UUID

from domain.enums import CustomerStatus, Gender, ActivityLevel
from domain.schemas.profile_schemas import ProfileResponse


def clean_tags(tags: Optional[List[str]]) -> List[str]:
    """Trim tags and drop empty or repeated ones, keeping first-seen order"""
    cleaned: List[str] = []
    for tag in tags or []:
        tag = (tag or "").strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class CustomerCreate(BaseModel):
    """Schema for creating a customer together with their profile"""

    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    height_cm: Optional[float] = Field(None, ge=50, le=280)
    weight_kg: Optional[float] = Field(
        None, gt=0, lt=500, description="Starting weight, recorded as a check-in"
    )
    weight_goal_kg: Optional[float] = Field(None, gt=0, lt=500)
    activity_level: Optional[ActivityLevel] = None
    status: CustomerStatus = CustomerStatus.ACTIVE
    subscription_type: Optional[str] = None
    subscription_start_date: Optional[date] = None
    subscription_end_date: Optional[date] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return clean_tags(v)


class CustomerUpdate(BaseModel):
    """Partial update of profile and customer fields"""

    full_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    height_cm: Optional[float] = Field(None, ge=50, le=280)
    weight_goal_kg: Optional[float] = Field(None, gt=0, lt=500)
    activity_level: Optional[ActivityLevel] = None
    status: Optional[CustomerStatus] = None
    subscription_type: Optional[str] = None
    subscription_start_date: Optional[date] = None
    subscription_end_date: Optional[date] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    assigned_admin_id: Optional[UUID] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return None if v is None else clean_tags(v)


class CustomerResponse(BaseModel):
    id: UUID
    user_id: UUID
    assigned_admin_id: Optional[UUID] = None
    status: CustomerStatus
    subscription_type: Optional[str] = None
    subscription_start_date: Optional[date] = None
    subscription_end_date: Optional[date] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None
    profile: Optional[ProfileResponse] = None

    model_config = {"from_attributes": True}

    @field_validator("tags", mode="before")
    @classmethod
    def none_tags(cls, v):
        return v or []


class CustomerDetailResponse(CustomerResponse):
    latest_weight: Optional[float] = None
    days_remaining: Optional[int] = None


class WizardValidateRequest(BaseModel):
    """Partial wizard form checked one step at a time"""

    step: int = Field(1, ge=1, le=4)
    data: Dict[str, Any] = Field(default_factory=dict)


class WizardValidateResponse(BaseModel):
    step: int
    title: str
    valid: bool
    missing_fields: List[str]
    can_submit: bool
    tags: List[str]

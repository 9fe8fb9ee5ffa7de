from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from domain.enums import Gender, ActivityLevel


class ProfileResponse(BaseModel):
    """Public view of a profile"""

    id: UUID
    email: str
    full_name: str
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    height_cm: Optional[float] = None
    weight_goal_kg: Optional[float] = None
    activity_level: Optional[ActivityLevel] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MeResponse(ProfileResponse):
    roles: List[str] = Field(default_factory=list)
    customer_id: Optional[UUID] = None


class ProfileUpdate(BaseModel):
    """Fields a user can change on their own profile"""

    full_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    height_cm: Optional[float] = Field(None, ge=50, le=280)
    weight_goal_kg: Optional[float] = Field(None, gt=0, lt=500)
    activity_level: Optional[ActivityLevel] = None


class AvatarResponse(BaseModel):
    profile_image_url: str

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
import datetime as dt
from datetime import datetime, time
from uuid import UUID

from domain.enums import BookingStatus, BookingType, BOOKING_DURATIONS


def parse_hhmm(value: str) -> time:
    """Parse a 24h ``HH:MM`` string"""
    try:
        hours, minutes = value.strip().split(":")
        return time(int(hours), int(minutes))
    except (ValueError, AttributeError):
        raise ValueError("time must be formatted as HH:MM")


def _check_duration(v):
    if v is not None and v not in BOOKING_DURATIONS:
        raise ValueError(
            f"duration_minutes must be one of {', '.join(map(str, BOOKING_DURATIONS))}"
        )
    return v


class BookingCreate(BaseModel):
    """A booking is entered as a calendar date plus an HH:MM time"""

    customer_id: UUID
    booking_type: BookingType
    date: dt.date
    time: str = Field(..., description="Start time, 24h HH:MM")
    duration_minutes: int = 60
    notes: Optional[str] = None
    meeting_link: Optional[str] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        parsed = parse_hhmm(v)
        return parsed.strftime("%H:%M")

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, v):
        return _check_duration(v)


class BookingUpdate(BaseModel):
    booking_type: Optional[BookingType] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    duration_minutes: Optional[int] = None
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None
    meeting_link: Optional[str] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        if v is None:
            return v
        return parse_hhmm(v).strftime("%H:%M")

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, v):
        return _check_duration(v)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingResponse(BaseModel):
    id: UUID
    customer_id: Optional[UUID] = None
    admin_id: Optional[UUID] = None
    booking_type: str
    scheduled_at: datetime
    duration_minutes: Optional[int] = None
    status: BookingStatus
    notes: Optional[str] = None
    meeting_link: Optional[str] = None
    created_at: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class BookableCustomer(BaseModel):
    id: UUID
    full_name: Optional[str] = None
    email: Optional[str] = None
    profile_image_url: Optional[str] = None


class BookingOptionsResponse(BaseModel):
    booking_types: List[str]
    durations: List[int]
    time_slots: List[str]

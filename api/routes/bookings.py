"""Coach calendar routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from datetime import date
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, require_admin
from api.responses import ERROR_RESPONSES, DeletedResponse, deleted_response
from domain.models import Profile
from domain.schemas.booking_schemas import (
    BookingCreate,
    BookingUpdate,
    BookingStatusUpdate,
    BookingResponse,
    BookableCustomer,
    BookingOptionsResponse,
)
from services.booking_service import BookingService

router = APIRouter(
    prefix="/bookings",
    tags=["Bookings"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger("coachdesk.api.bookings")


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    around: Optional[date] = Query(
        None, description="Any day of the month shown; defaults to today"
    ),
    db: Session = Depends(get_db),
):
    """Bookings from the previous month through the next one, by start time"""
    return BookingService.list_bookings(db, around=around)


@router.get("/options", response_model=BookingOptionsResponse)
def booking_options():
    """Booking types, durations and start times offered by the booking form"""
    return BookingService.options()


@router.get("/bookable-customers", response_model=List[BookableCustomer])
def bookable_customers(db: Session = Depends(get_db)):
    return [
        BookableCustomer(
            id=c.id,
            full_name=c.profile.full_name,
            email=c.profile.email,
            profile_image_url=c.profile.profile_image_url,
        )
        for c in BookingService.list_bookable_customers(db)
    ]


@router.get("/date/{day}", response_model=List[BookingResponse])
def bookings_for_date(day: date, db: Session = Depends(get_db)):
    return BookingService.bookings_for_date(db, day)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return BookingService.create_booking(db, admin, payload)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: UUID, db: Session = Depends(get_db)):
    return BookingService.get_booking(db, booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(booking_id: UUID, payload: BookingUpdate, db: Session = Depends(get_db)):
    return BookingService.update_booking(db, booking_id, payload)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: UUID, payload: BookingStatusUpdate, db: Session = Depends(get_db)
):
    return BookingService.update_status(db, booking_id, payload.status)


@router.delete("/{booking_id}", response_model=DeletedResponse)
def delete_booking(booking_id: UUID, db: Session = Depends(get_db)):
    BookingService.delete_booking(db, booking_id)
    return deleted_response(booking_id)

from typing import List, Optional
from datetime import date, datetime, time, timezone
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.exceptions import NotFoundError
from domain.clock import day_bounds, next_month_start, previous_month_start, today
from domain.enums import BookingStatus, BookingType, BOOKING_DURATIONS
from domain.models import Booking, Customer, Profile
from domain.schemas.booking_schemas import (
    BookingCreate,
    BookingUpdate,
    parse_hhmm,
)
from repositories import BookingRepository, CustomerRepository

logger = logging.getLogger("coachdesk.booking")

FIRST_SLOT = time(7, 0)
LAST_SLOT = time(19, 45)
SLOT_MINUTES = 15


def combine(day: date, hhmm: str) -> datetime:
    """Booking start from a calendar date and an ``HH:MM`` string (UTC)"""
    return datetime.combine(day, parse_hhmm(hhmm), tzinfo=timezone.utc)


def time_slots() -> List[str]:
    """Start times offered when booking: 07:00 to 19:45 every 15 minutes"""
    slots = []
    minutes = FIRST_SLOT.hour * 60 + FIRST_SLOT.minute
    last = LAST_SLOT.hour * 60 + LAST_SLOT.minute
    while minutes <= last:
        slots.append(f"{minutes // 60:02d}:{minutes % 60:02d}")
        minutes += SLOT_MINUTES
    return slots


class BookingService:
    """Business logic for the coach's calendar"""

    @staticmethod
    def options() -> dict:
        return {
            "booking_types": [t.value for t in BookingType],
            "durations": list(BOOKING_DURATIONS),
            "time_slots": time_slots(),
        }

    @staticmethod
    def get_booking(db: Session, booking_id: UUID) -> Booking:
        booking = BookingRepository(db).get_by_id(booking_id)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    @staticmethod
    def list_bookings(db: Session, around: Optional[date] = None) -> List[Booking]:
        """Bookings from the start of the previous month to the end of the next one"""
        around = around or today()
        start = previous_month_start(around)
        end = next_month_start(next_month_start(around))
        start_dt, _ = day_bounds(start)
        end_dt, _ = day_bounds(end)
        bookings = BookingRepository(db).list_between(start_dt, end_dt)
        logger.info(
            f"bookings_listed around={around} window={start}..{end} count={len(bookings)}"
        )
        return bookings

    @staticmethod
    def bookings_for_date(db: Session, day: date) -> List[Booking]:
        start, end = day_bounds(day)
        return BookingRepository(db).list_between(start, end)

    @staticmethod
    def list_bookable_customers(db: Session) -> List[Customer]:
        """Active customers that have a profile"""
        return [c for c in CustomerRepository(db).list_active() if c.profile is not None]

    @staticmethod
    def create_booking(db: Session, admin: Profile, data: BookingCreate) -> Booking:
        if not CustomerRepository(db).exists(data.customer_id):
            raise NotFoundError(f"Customer {data.customer_id} not found")

        booking = Booking(
            customer_id=data.customer_id,
            admin_id=admin.id,
            booking_type=data.booking_type.value,
            scheduled_at=combine(data.date, data.time),
            duration_minutes=data.duration_minutes,
            status=BookingStatus.SCHEDULED,
            notes=data.notes,
            meeting_link=data.meeting_link,
        )
        booking = BookingRepository(db).create(booking)
        logger.info(
            f"booking_created booking_id={booking.id} customer_id={data.customer_id} "
            f"type={booking.booking_type} at={booking.scheduled_at.isoformat()}"
        )
        return booking

    @staticmethod
    def update_booking(db: Session, booking_id: UUID, data: BookingUpdate) -> Booking:
        booking = BookingService.get_booking(db, booking_id)
        fields = data.model_dump(exclude_unset=True)

        if "date" in fields or "time" in fields:
            current = booking.scheduled_at
            day = fields.get("date") or current.date()
            hhmm = fields.get("time") or current.strftime("%H:%M")
            booking.scheduled_at = combine(day, hhmm)
        if fields.get("booking_type") is not None:
            booking.booking_type = fields["booking_type"].value
        for key in ("duration_minutes", "status", "notes", "meeting_link"):
            if key in fields and not (key == "status" and fields[key] is None):
                setattr(booking, key, fields[key])

        booking = BookingRepository(db).update(booking)
        logger.info(f"booking_updated booking_id={booking_id} fields={sorted(fields)}")
        return booking

    @staticmethod
    def update_status(db: Session, booking_id: UUID, status: BookingStatus) -> Booking:
        booking = BookingService.get_booking(db, booking_id)
        previous = booking.status
        booking.status = status
        booking = BookingRepository(db).update(booking)
        logger.info(
            f"booking_status_changed booking_id={booking_id} "
            f"from={previous.value} to={status.value}"
        )
        return booking

    @staticmethod
    def delete_booking(db: Session, booking_id: UUID) -> None:
        if not BookingRepository(db).delete(booking_id):
            raise NotFoundError(f"Booking {booking_id} not found")
        logger.info(f"booking_deleted booking_id={booking_id}")

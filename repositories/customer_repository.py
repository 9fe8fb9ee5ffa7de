"""
Customer Repository - Data access for customers and their bookings
"""

from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Customer, Booking, Profile
from domain.enums import CustomerStatus, BookingStatus


class CustomerRepository(BaseRepository[Customer]):
    """Repository for customer data access"""

    def __init__(self, db: Session):
        super().__init__(db, Customer)

    def get_by_user_id(self, user_id: UUID) -> Optional[Customer]:
        """Customer row linked to a login"""
        return self.db.query(Customer).filter(Customer.user_id == user_id).first()

    def list(
        self,
        search: Optional[str] = None,
        status: Optional[CustomerStatus] = None,
    ) -> List[Customer]:
        """Customers newest first, optionally filtered by name/email and status"""
        query = self.db.query(Customer).join(Profile, Customer.user_id == Profile.id)
        if search:
            query = query.filter(
                or_(
                    Profile.full_name.icontains(search, autoescape=True),
                    Profile.email.icontains(search, autoescape=True),
                )
            )
        if status is not None:
            query = query.filter(Customer.status == status)
        return query.order_by(Customer.created_at.desc()).all()

    def list_active(self) -> List[Customer]:
        return (
            self.db.query(Customer)
            .join(Profile, Customer.user_id == Profile.id)
            .filter(Customer.status == CustomerStatus.ACTIVE)
            .order_by(Profile.full_name)
            .all()
        )

    def count_by_status(self) -> Dict[str, int]:
        rows = (
            self.db.query(Customer.status, func.count(Customer.id))
            .group_by(Customer.status)
            .all()
        )
        return {status.value: count for status, count in rows}

    def count_by_subscription(self) -> Dict[str, int]:
        rows = (
            self.db.query(Customer.subscription_type, func.count(Customer.id))
            .group_by(Customer.subscription_type)
            .all()
        )
        counts: Dict[str, int] = {}
        for sub_type, count in rows:
            key = sub_type or "none"
            counts[key] = counts.get(key, 0) + count
        return counts


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access"""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def list_between(self, start: datetime, end: datetime) -> List[Booking]:
        """Bookings with start time in [start, end), earliest first"""
        return (
            self.db.query(Booking)
            .filter(Booking.scheduled_at >= start, Booking.scheduled_at < end)
            .order_by(Booking.scheduled_at.asc())
            .all()
        )

    def count_between(self, start: datetime, end: datetime) -> int:
        return (
            self.db.query(Booking)
            .filter(Booking.scheduled_at >= start, Booking.scheduled_at < end)
            .count()
        )

    def upcoming(self, after: datetime, limit: int = 5) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(
                Booking.scheduled_at >= after,
                Booking.status == BookingStatus.SCHEDULED,
            )
            .order_by(Booking.scheduled_at.asc())
            .limit(limit)
            .all()
        )

    def for_customer_since(
        self, customer_id: UUID, since: datetime, status: Optional[BookingStatus] = None
    ) -> List[Booking]:
        query = self.db.query(Booking).filter(
            Booking.customer_id == customer_id, Booking.scheduled_at >= since
        )
        if status is not None:
            query = query.filter(Booking.status == status)
        return query.all()

    def search_by_type(self, query: str, limit: int = 3) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(Booking.booking_type.icontains(query, autoescape=True))
            .order_by(Booking.scheduled_at.desc())
            .limit(limit)
            .all()
        )

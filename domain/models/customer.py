"""
Customer (coaching client) and booking models.
"""

from sqlalchemy import (
    Column,
    Text,
    String,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Uuid,
    JSON,
)
from sqlalchemy.orm import relationship
import uuid

from domain.clock import utcnow
from domain.models.database import Base
from domain.models.profile import enum_column
from domain.enums import CustomerStatus, BookingStatus


class Customer(Base):
    """A coaching client, linked one-to-one with a profile"""

    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    assigned_admin_id = Column(
        Uuid, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    status = Column(
        enum_column(CustomerStatus), nullable=False, default=CustomerStatus.ACTIVE
    )
    subscription_type = Column(String(100))
    subscription_start_date = Column(Date)
    subscription_end_date = Column(Date)
    notes = Column(Text)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    profile = relationship(
        "Profile", back_populates="customer", foreign_keys=[user_id], lazy="joined"
    )
    assigned_admin = relationship("Profile", foreign_keys=[assigned_admin_id])

    bookings = relationship(
        "Booking", back_populates="customer", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlan", back_populates="customer", cascade="all, delete-orphan"
    )
    habits = relationship(
        "Habit", back_populates="customer", cascade="all, delete-orphan"
    )
    check_ins = relationship(
        "CheckIn", back_populates="customer", cascade="all, delete-orphan"
    )
    food_logs = relationship(
        "FoodLog", back_populates="customer", cascade="all, delete-orphan"
    )
    water_logs = relationship(
        "WaterLog", back_populates="customer", cascade="all, delete-orphan"
    )
    analytics_events = relationship(
        "AnalyticsEvent", back_populates="customer", cascade="all, delete-orphan"
    )

    @property
    def full_name(self):
        return self.profile.full_name if self.profile else None


class Booking(Base):
    """A scheduled session between a coach and a client"""

    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"))
    admin_id = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"))
    booking_type = Column(String(64), nullable=False)
    scheduled_at = Column(DateTime(timezone=True), nullable=False, index=True)
    duration_minutes = Column(Integer, default=60)
    status = Column(
        enum_column(BookingStatus), nullable=False, default=BookingStatus.SCHEDULED
    )
    notes = Column(Text)
    meeting_link = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", back_populates="bookings")

    @property
    def customer_name(self):
        return self.customer.full_name if self.customer else None

    @property
    def customer_avatar_url(self):
        if self.customer and self.customer.profile:
            return self.customer.profile.profile_image_url
        return None

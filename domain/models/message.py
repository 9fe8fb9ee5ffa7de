"""
Messaging and analytics event models.
"""

from sqlalchemy import Column, Text, String, Boolean, DateTime, ForeignKey, Uuid, JSON
from sqlalchemy.orm import relationship
import uuid

from domain.clock import utcnow
from domain.models.database import Base


class Message(Base):
    """A direct message between two profiles"""

    __tablename__ = "messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    from_user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"), index=True)
    to_user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"), index=True)
    subject = Column(Text)
    body = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    is_automated = Column(Boolean, nullable=False, default=False)
    trigger_type = Column(String(64))
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    from_profile = relationship("Profile", foreign_keys=[from_user_id])
    to_profile = relationship("Profile", foreign_keys=[to_user_id])


class AnalyticsEvent(Base):
    """Free-form usage event recorded for engagement analytics"""

    __tablename__ = "analytics_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"))
    event_type = Column(String(64), nullable=False)
    event_data = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", back_populates="analytics_events")

"""
Self-tracking models: habits, check-ins, food and water logs.
"""

from sqlalchemy import (
    Column,
    Text,
    String,
    Integer,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.clock import utcnow
from domain.models.database import Base


class Habit(Base):
    """A recurring behavior goal for a customer"""

    __tablename__ = "habits"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"))
    habit_name = Column(Text, nullable=False)
    target_frequency = Column(Integer, default=7)  # days per week
    icon = Column(String(32))
    color = Column(String(16))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", back_populates="habits")
    logs = relationship(
        "HabitLog", back_populates="habit", cascade="all, delete-orphan"
    )

    @property
    def customer_name(self):
        return self.customer.full_name if self.customer else None


class HabitLog(Base):
    """Completion of a habit on a given day"""

    __tablename__ = "habit_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    habit_id = Column(
        Uuid, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False
    )
    logged_date = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, default=True)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    habit = relationship("Habit", back_populates="logs")


class CheckIn(Base):
    """Self-reported wellness snapshot"""

    __tablename__ = "check_ins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"))
    check_in_date = Column(Date, nullable=False, index=True)
    weight_kg = Column(Numeric(5, 1, asdecimal=False))
    mood_score = Column(Integer)
    energy_score = Column(Integer)
    sleep_hours = Column(Numeric(4, 1, asdecimal=False))
    stress_level = Column(Integer)
    hunger_level = Column(Integer)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", back_populates="check_ins")

    @property
    def customer_name(self):
        return self.customer.full_name if self.customer else None


class FoodLog(Base):
    """A food eaten by a customer on a day"""

    __tablename__ = "food_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"))
    logged_date = Column(Date, nullable=False, index=True)
    meal_type = Column(String(16))
    food_name = Column(Text, nullable=False)
    calories = Column(Numeric(7, 1, asdecimal=False))
    protein_g = Column(Numeric(6, 1, asdecimal=False))
    carbs_g = Column(Numeric(6, 1, asdecimal=False))
    fat_g = Column(Numeric(6, 1, asdecimal=False))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", back_populates="food_logs")


class WaterLog(Base):
    """Water intake entry"""

    __tablename__ = "water_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"))
    logged_date = Column(Date, nullable=False, index=True)
    amount_ml = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", back_populates="water_logs")

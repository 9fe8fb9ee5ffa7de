"""
Meal planning models.
"""

from sqlalchemy import Column, Text, String, Integer, Date, DateTime, ForeignKey, Numeric, Uuid
from sqlalchemy.orm import relationship
import uuid

from domain.clock import utcnow
from domain.models.database import Base


class MealPlan(Base):
    """Weekly meal plan prescribed to a customer"""

    __tablename__ = "meal_plans"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(
        Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    week_number = Column(Integer, nullable=False, default=1)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    daily_calories = Column(Integer)
    notes = Column(Text)
    created_by = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    customer = relationship("Customer", back_populates="meal_plans")
    items = relationship(
        "MealPlanItem",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="MealPlanItem.day_of_week",
    )

    @property
    def customer_name(self):
        return self.customer.full_name if self.customer else None


class MealPlanItem(Base):
    """One cell of the weekly grid: a meal for a day and meal type"""

    __tablename__ = "meal_plan_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    meal_plan_id = Column(
        Uuid, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week = Column(Integer)  # 0 = Monday
    meal_type = Column(String(16))
    recipe_name = Column(Text, nullable=False)
    calories = Column(Numeric(7, 1, asdecimal=False))
    protein_g = Column(Numeric(6, 1, asdecimal=False))
    carbs_g = Column(Numeric(6, 1, asdecimal=False))
    fat_g = Column(Numeric(6, 1, asdecimal=False))
    instructions = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    plan = relationship("MealPlan", back_populates="items")

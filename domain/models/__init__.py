"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    drop_database,
    get_db_session,
)
from domain.models.profile import Profile, UserRole
from domain.models.customer import Customer, Booking
from domain.models.meal_plan import MealPlan, MealPlanItem
from domain.models.message import Message, AnalyticsEvent
from domain.models.tracking import Habit, HabitLog, CheckIn, FoodLog, WaterLog

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "drop_database",
    "get_db_session",
    # Accounts
    "Profile",
    "UserRole",
    # Coaching
    "Customer",
    "Booking",
    "MealPlan",
    "MealPlanItem",
    # Messaging and analytics
    "Message",
    "AnalyticsEvent",
    # Self-tracking
    "Habit",
    "HabitLog",
    "CheckIn",
    "FoodLog",
    "WaterLog",
]

"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.profile_repository import ProfileRepository
from repositories.customer_repository import CustomerRepository, BookingRepository
from repositories.meal_plan_repository import MealPlanRepository, MealPlanItemRepository
from repositories.message_repository import MessageRepository
from repositories.tracking_repository import (
    CheckInRepository,
    HabitRepository,
    HabitLogRepository,
    FoodLogRepository,
    WaterLogRepository,
)
from repositories.analytics_repository import AnalyticsEventRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "CustomerRepository",
    "BookingRepository",
    "MealPlanRepository",
    "MealPlanItemRepository",
    "MessageRepository",
    "CheckInRepository",
    "HabitRepository",
    "HabitLogRepository",
    "FoodLogRepository",
    "WaterLogRepository",
    "AnalyticsEventRepository",
]

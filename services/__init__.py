"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.customer_service import CustomerService
from services.booking_service import BookingService
from services.meal_plan_service import MealPlanService
from services.message_service import MessageService
from services.check_in_service import CheckInService
from services.habit_service import HabitService
from services.dashboard_service import DashboardService
from services.food_log_service import FoodLogService
from services.water_service import WaterService
from services.analytics_service import AnalyticsService
from services.search_service import SearchService

__all__ = [
    "AuthService",
    "ProfileService",
    "CustomerService",
    "BookingService",
    "MealPlanService",
    "MessageService",
    "CheckInService",
    "HabitService",
    "DashboardService",
    "FoodLogService",
    "WaterService",
    "AnalyticsService",
    "SearchService",
]

"""
Domain enums for CoachDesk.
Contains all enumeration types used across the domain models and schemas.
"""

import enum


class AppRole(str, enum.Enum):
    """Account roles"""

    ADMIN = "admin"
    CLIENT = "client"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, enum.Enum):
    """Physical activity levels"""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class CustomerStatus(str, enum.Enum):
    """Lifecycle of a coaching client"""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class BookingStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class BookingType(str, enum.Enum):
    """Kinds of sessions a coach can book"""

    FIRST_CONSULTATION = "first_consultation"
    FOLLOW_UP = "follow_up"
    MEASUREMENT = "measurement"
    MEAL_PLAN_REVIEW = "meal_plan_review"
    MOTIVATION = "motivation"
    VIDEO_CALL = "video_call"
    PHONE_CALL = "phone_call"
    IN_PERSON = "in_person"


class MealType(str, enum.Enum):
    """Meal slots, in the order they appear in a day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


MEAL_TYPES = [m.value for m in MealType]

# Allowed booking lengths in minutes
BOOKING_DURATIONS = (15, 30, 45, 60, 90, 120)

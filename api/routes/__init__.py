"""API routes package"""

from . import (
    auth,
    profiles,
    customers,
    bookings,
    meal_plans,
    messages,
    check_ins,
    habits,
    dashboard,
    analytics,
    search,
    client,
    health,
    realtime,
)

__all__ = [
    "auth",
    "profiles",
    "customers",
    "bookings",
    "meal_plans",
    "messages",
    "check_ins",
    "habits",
    "dashboard",
    "analytics",
    "search",
    "client",
    "health",
    "realtime",
]

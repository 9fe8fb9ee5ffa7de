from typing import List
from sqlalchemy.orm import Session
import logging

from repositories import BookingRepository, MealPlanRepository, ProfileRepository

logger = logging.getLogger("coachdesk.search")

PROFILE_LIMIT = 5
BOOKING_LIMIT = 3
MEAL_PLAN_LIMIT = 3


class SearchService:
    """Global search box across customers, bookings and meal plans"""

    @staticmethod
    def search(db: Session, query: str) -> List[dict]:
        query = (query or "").strip()
        if not query:
            return []

        results = []
        for profile in ProfileRepository(db).search(query, limit=PROFILE_LIMIT):
            results.append(
                {
                    "id": profile.customer.id if profile.customer else profile.id,
                    "type": "customer",
                    "title": profile.full_name,
                    "subtitle": profile.email,
                }
            )
        for booking in BookingRepository(db).search_by_type(query, limit=BOOKING_LIMIT):
            results.append(
                {
                    "id": booking.id,
                    "type": "booking",
                    "title": booking.booking_type.replace("_", " ").capitalize(),
                    "subtitle": booking.customer_name or "Booking",
                }
            )
        for plan in MealPlanRepository(db).search_by_name(query, limit=MEAL_PLAN_LIMIT):
            results.append(
                {
                    "id": plan.id,
                    "type": "meal_plan",
                    "title": plan.name,
                    "subtitle": plan.customer_name or "Meal plan",
                }
            )
        logger.info(f"search_performed query={query!r} results={len(results)}")
        return results

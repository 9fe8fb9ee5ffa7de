from typing import Optional
from datetime import date
from sqlalchemy.orm import Session
import logging

from app.config import settings
from app.exceptions import ServiceValidationError
from domain.clock import today
from domain.models import Customer, WaterLog
from domain import nutrition
from repositories import WaterLogRepository

logger = logging.getLogger("coachdesk.water")

QUICK_ADD_AMOUNTS = (250, 500, 750)
MAX_ENTRY_ML = 5000


class WaterService:
    """Client water intake"""

    @staticmethod
    def add_water(db: Session, customer: Customer, amount_ml: int) -> WaterLog:
        """Log a drink for today"""
        if amount_ml <= 0 or amount_ml > MAX_ENTRY_ML:
            raise ServiceValidationError(
                f"amount_ml must be between 1 and {MAX_ENTRY_ML}"
            )
        entry = WaterLogRepository(db).create(
            WaterLog(customer_id=customer.id, logged_date=today(), amount_ml=amount_ml)
        )
        logger.info(f"water_logged customer_id={customer.id} amount_ml={amount_ml}")
        return entry

    @staticmethod
    def daily_summary(db: Session, customer: Customer, day: Optional[date] = None) -> dict:
        day = day or today()
        repo = WaterLogRepository(db)
        entries = repo.for_date(customer.id, day)
        total = sum(e.amount_ml for e in entries)
        goal = settings.default_water_goal_ml
        return {
            "date": day,
            "total_ml": total,
            "goal_ml": goal,
            "percentage": nutrition.percent(total, goal, cap=100),
            "remaining_ml": max(goal - total, 0),
            "quick_add_amounts": list(QUICK_ADD_AMOUNTS),
            "entries": entries,
        }

from typing import List, Optional
from datetime import date
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.exceptions import NotFoundError, ForbiddenError
from domain.clock import today
from domain.enums import MEAL_TYPES
from domain.models import Customer, FoodLog
from domain import nutrition
from domain.schemas.tracking_schemas import FoodLogCreate
from repositories import FoodLogRepository
from services.dashboard_service import DashboardService

logger = logging.getLogger("coachdesk.food_log")


class FoodLogService:
    """Client food diary"""

    @staticmethod
    def list_for_date(db: Session, customer: Customer, day: Optional[date] = None) -> List[FoodLog]:
        return FoodLogRepository(db).for_date(customer.id, day or today())

    @staticmethod
    def add_food(db: Session, customer: Customer, data: FoodLogCreate) -> FoodLog:
        fields = data.model_dump()
        fields["food_name"] = fields["food_name"].strip()
        fields["meal_type"] = data.meal_type.value
        fields["logged_date"] = data.logged_date or today()
        entry = FoodLogRepository(db).create(FoodLog(customer_id=customer.id, **fields))
        logger.info(
            f"food_logged customer_id={customer.id} food_log_id={entry.id} "
            f"meal_type={entry.meal_type} calories={entry.calories}"
        )
        return entry

    @staticmethod
    def delete_food(db: Session, customer: Customer, food_log_id: UUID) -> None:
        repo = FoodLogRepository(db)
        entry = repo.get_by_id(food_log_id)
        if not entry:
            raise NotFoundError(f"Food log {food_log_id} not found")
        if entry.customer_id != customer.id:
            raise ForbiddenError("This entry belongs to another client")
        repo.delete(food_log_id)
        logger.info(f"food_log_deleted customer_id={customer.id} food_log_id={food_log_id}")

    @staticmethod
    def daily_summary(db: Session, customer: Customer, day: Optional[date] = None) -> dict:
        """Totals for the day, calorie percentage of goal (capped) and meals by slot"""
        day = day or today()
        entries = FoodLogService.list_for_date(db, customer, day)
        totals = nutrition.sum_macros(entries)
        goal = DashboardService.calorie_goal(db, customer, day)

        meals = {meal_type: [] for meal_type in MEAL_TYPES}
        for entry in entries:
            meals.setdefault(entry.meal_type or "snack", []).append(entry)

        return {
            "date": day,
            "total_calories": totals["calories"],
            "total_protein_g": totals["protein_g"],
            "total_carbs_g": totals["carbs_g"],
            "total_fat_g": totals["fat_g"],
            "calorie_goal": goal,
            "calorie_percentage": nutrition.percent(totals["calories"], goal, cap=100),
            "meals": meals,
        }

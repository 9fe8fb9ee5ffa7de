from typing import Iterable, List, Optional
from datetime import date, timedelta
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.config import settings
from app.exceptions import ServiceValidationError, NotFoundError
from domain.clock import week_start
from domain.enums import MEAL_TYPES
from domain.meal_grid import MealEntry, MealPlanGrid
from domain import nutrition
from domain.models import MealPlan, Profile
from domain.schemas.meal_plan_schemas import GridCellIn, MealPlanCreate, MealPlanUpdate
from repositories import CustomerRepository, MealPlanItemRepository, MealPlanRepository

logger = logging.getLogger("coachdesk.meal_plan")

PLAN_LENGTH_DAYS = 7


class MealPlanService:
    """Business logic for weekly meal plans"""

    @staticmethod
    def get_meal_plan(db: Session, plan_id: UUID) -> MealPlan:
        plan = MealPlanRepository(db).get_with_items(plan_id)
        if not plan:
            raise NotFoundError(f"Meal plan {plan_id} not found")
        return plan

    @staticmethod
    def list_meal_plans(db: Session, customer_id: Optional[UUID] = None) -> List[MealPlan]:
        return MealPlanRepository(db).list(customer_id=customer_id)

    @staticmethod
    def create_meal_plan(db: Session, admin: Profile, data: MealPlanCreate) -> MealPlan:
        """Create an empty plan; end date, calories and week number get defaults"""
        if not CustomerRepository(db).exists(data.customer_id):
            raise NotFoundError(f"Customer {data.customer_id} not found")

        plan = MealPlan(
            customer_id=data.customer_id,
            name=data.name.strip(),
            start_date=data.start_date,
            end_date=data.end_date or data.start_date + timedelta(days=PLAN_LENGTH_DAYS - 1),
            week_number=data.week_number or 1,
            daily_calories=(
                data.daily_calories
                if data.daily_calories is not None
                else settings.default_calorie_goal
            ),
            notes=data.notes,
            created_by=admin.id,
        )
        plan = MealPlanRepository(db).create(plan)
        logger.info(
            f"meal_plan_created plan_id={plan.id} customer_id={plan.customer_id} "
            f"start={plan.start_date} end={plan.end_date}"
        )
        return plan

    @staticmethod
    def update_meal_plan(db: Session, plan_id: UUID, data: MealPlanUpdate) -> MealPlan:
        plan = MealPlanService.get_meal_plan(db, plan_id)
        fields = data.model_dump(exclude_unset=True)
        for key in ("name", "start_date", "end_date", "week_number"):
            if key in fields and fields[key] is None:
                raise ServiceValidationError(f"{key} must not be null")

        start = fields.get("start_date", plan.start_date)
        end = fields.get("end_date", plan.end_date)
        if end < start:
            raise ServiceValidationError("end_date must not be before start_date")

        for key, value in fields.items():
            setattr(plan, key, value)
        plan = MealPlanRepository(db).update(plan)
        logger.info(f"meal_plan_updated plan_id={plan_id} fields={sorted(fields)}")
        return plan

    @staticmethod
    def delete_meal_plan(db: Session, plan_id: UUID) -> None:
        plan = MealPlanService.get_meal_plan(db, plan_id)
        db.delete(plan)
        db.commit()
        logger.info(f"meal_plan_deleted plan_id={plan_id}")

    # ------------------------------------------------------------------ grid

    @staticmethod
    def grid_from_cells(cells: Iterable[GridCellIn]) -> MealPlanGrid:
        grid = MealPlanGrid()
        for cell in cells:
            grid.set(
                cell.day_of_week,
                cell.meal_type,
                MealEntry(
                    recipe_name=cell.recipe_name.strip(),
                    calories=cell.calories,
                    protein_g=cell.protein_g,
                    carbs_g=cell.carbs_g,
                    fat_g=cell.fat_g,
                    instructions=cell.instructions,
                ),
            )
        return grid

    @staticmethod
    def save_grid(db: Session, plan_id: UUID, grid: MealPlanGrid) -> MealPlan:
        """
        Replace every item of the plan with the grid's non-empty cells.

        Delete and insert happen in one commit; concurrent saves are last
        write wins.
        """
        plan = MealPlanService.get_meal_plan(db, plan_id)
        rows = grid.to_rows()
        MealPlanItemRepository(db).replace_all(plan, rows)
        db.commit()
        logger.info(f"meal_plan_grid_saved plan_id={plan_id} items={len(rows)}")
        return MealPlanService.get_meal_plan(db, plan_id)

    # ------------------------------------------------------------- nutrition

    @staticmethod
    def nutrition_summary(db: Session, plan_id: UUID) -> dict:
        plan = MealPlanService.get_meal_plan(db, plan_id)
        grid = MealPlanGrid.from_items(plan.items)
        return nutrition.nutrition_summary(grid, plan.daily_calories or 0)

    @staticmethod
    def shopping_list(
        db: Session,
        plan_id: UUID,
        days: Iterable[int],
        meal_types: Iterable[str],
        checked: Iterable[str] = (),
    ) -> dict:
        plan = MealPlanService.get_meal_plan(db, plan_id)
        grid = MealPlanGrid.from_items(plan.items)
        groups = nutrition.shopping_list(grid, days, meal_types, checked)
        return {
            "groups": groups,
            "total_items": sum(len(items) for items in groups.values()),
            "text": nutrition.shopping_list_text(groups, title=f"Shopping list: {plan.name}"),
        }

    # ----------------------------------------------------------- client view

    @staticmethod
    def current_plan_for_week(db: Session, customer_id: UUID, any_date: date) -> dict:
        """
        The plan overlapping the Monday to Sunday week of ``any_date``, with
        its items split per day and each day's calorie total.
        """
        monday = week_start(any_date)
        sunday = monday + timedelta(days=6)
        plans = MealPlanRepository(db).overlapping(customer_id, monday, sunday)
        plan = plans[0] if plans else None

        days = []
        if plan is not None:
            for offset in range(7):
                items = sorted(
                    (i for i in plan.items if i.day_of_week == offset),
                    key=lambda i: MEAL_TYPES.index(i.meal_type)
                    if i.meal_type in MEAL_TYPES
                    else len(MEAL_TYPES),
                )
                days.append(
                    {
                        "day_of_week": offset,
                        "date": monday + timedelta(days=offset),
                        "total_calories": nutrition.sum_macros(items)["calories"],
                        "items": items,
                    }
                )
        return {"plan": plan, "week_start": monday, "days": days}

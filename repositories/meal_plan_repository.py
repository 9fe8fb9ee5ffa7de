"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from typing import List, Optional
from datetime import date
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import MealPlan, MealPlanItem


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def get_with_items(self, plan_id: UUID) -> Optional[MealPlan]:
        """Get meal plan by ID with its items loaded"""
        return (
            self.db.query(MealPlan)
            .options(selectinload(MealPlan.items))
            .filter(MealPlan.id == plan_id)
            .first()
        )

    def list(self, customer_id: Optional[UUID] = None) -> List[MealPlan]:
        """Meal plans newest first"""
        query = self.db.query(MealPlan)
        if customer_id is not None:
            query = query.filter(MealPlan.customer_id == customer_id)
        return query.order_by(MealPlan.created_at.desc()).all()

    def overlapping(self, customer_id: UUID, start: date, end: date) -> List[MealPlan]:
        """Plans for a customer whose date range overlaps [start, end]"""
        return (
            self.db.query(MealPlan)
            .options(selectinload(MealPlan.items))
            .filter(
                MealPlan.customer_id == customer_id,
                MealPlan.start_date <= end,
                MealPlan.end_date >= start,
            )
            .order_by(MealPlan.start_date.desc(), MealPlan.created_at.desc())
            .all()
        )

    def covering(self, customer_id: UUID, day: date) -> Optional[MealPlan]:
        """Most recent plan whose range contains ``day``"""
        plans = self.overlapping(customer_id, day, day)
        return plans[0] if plans else None

    def search_by_name(self, query: str, limit: int = 3) -> List[MealPlan]:
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.name.icontains(query, autoescape=True))
            .order_by(MealPlan.created_at.desc())
            .limit(limit)
            .all()
        )


class MealPlanItemRepository(BaseRepository[MealPlanItem]):
    """Repository for meal plan item data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlanItem)

    def get_by_plan_id(self, plan_id: UUID) -> List[MealPlanItem]:
        """Get all items for a plan"""
        return (
            self.db.query(MealPlanItem)
            .filter(MealPlanItem.meal_plan_id == plan_id)
            .order_by(MealPlanItem.day_of_week)
            .all()
        )

    def replace_all(self, plan: MealPlan, rows: List[dict]) -> List[MealPlanItem]:
        """Delete every item of the plan and insert ``rows`` in their place.

        Only flushes; the caller commits.
        """
        plan.items.clear()
        self.db.flush()
        items = [MealPlanItem(**row) for row in rows]
        plan.items.extend(items)
        self.db.flush()
        return items

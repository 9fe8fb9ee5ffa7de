"""
Tracking Repositories - check-ins, habits, food and water logs
"""

from typing import Optional, List
from datetime import date
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import CheckIn, Habit, HabitLog, FoodLog, WaterLog


class CheckInRepository(BaseRepository[CheckIn]):
    """Repository for check-in data access"""

    def __init__(self, db: Session):
        super().__init__(db, CheckIn)

    def recent(self, limit: int = 50) -> List[CheckIn]:
        """All check-ins, newest first"""
        return (
            self.db.query(CheckIn)
            .order_by(CheckIn.check_in_date.desc(), CheckIn.created_at.desc())
            .limit(limit)
            .all()
        )

    def for_customer(self, customer_id: UUID) -> List[CheckIn]:
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.customer_id == customer_id)
            .order_by(CheckIn.check_in_date.desc(), CheckIn.created_at.desc())
            .all()
        )

    def latest_with_weight(self, customer_id: UUID) -> Optional[CheckIn]:
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.customer_id == customer_id, CheckIn.weight_kg.isnot(None))
            .order_by(CheckIn.check_in_date.desc(), CheckIn.created_at.desc())
            .first()
        )

    def first_with_weight(self, customer_id: UUID) -> Optional[CheckIn]:
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.customer_id == customer_id, CheckIn.weight_kg.isnot(None))
            .order_by(CheckIn.check_in_date.asc(), CheckIn.created_at.asc())
            .first()
        )

    def weight_history(self, customer_id: UUID) -> List[CheckIn]:
        """Check-ins carrying a weight, oldest first"""
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.customer_id == customer_id, CheckIn.weight_kg.isnot(None))
            .order_by(CheckIn.check_in_date.asc(), CheckIn.created_at.asc())
            .all()
        )

    def on_date(self, customer_id: UUID, day: date) -> List[CheckIn]:
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.customer_id == customer_id, CheckIn.check_in_date == day)
            .all()
        )

    def between(
        self, start: date, end: date, customer_id: Optional[UUID] = None
    ) -> List[CheckIn]:
        """Check-ins dated within [start, end]"""
        query = self.db.query(CheckIn).filter(
            CheckIn.check_in_date >= start, CheckIn.check_in_date <= end
        )
        if customer_id is not None:
            query = query.filter(CheckIn.customer_id == customer_id)
        return query.all()

    def last_date_by_customer(self) -> dict:
        rows = (
            self.db.query(CheckIn.customer_id, func.max(CheckIn.check_in_date))
            .group_by(CheckIn.customer_id)
            .all()
        )
        return dict(rows)


class HabitRepository(BaseRepository[Habit]):
    """Repository for habit data access"""

    def __init__(self, db: Session):
        super().__init__(db, Habit)

    def list(self, customer_id: Optional[UUID] = None) -> List[Habit]:
        """Habits newest first with their logs loaded"""
        query = self.db.query(Habit).options(selectinload(Habit.logs))
        if customer_id is not None:
            query = query.filter(Habit.customer_id == customer_id)
        return query.order_by(Habit.created_at.desc()).all()


class HabitLogRepository(BaseRepository[HabitLog]):
    """Repository for habit completion logs"""

    def __init__(self, db: Session):
        super().__init__(db, HabitLog)

    def on_date(self, habit_id: UUID, day: date) -> List[HabitLog]:
        return (
            self.db.query(HabitLog)
            .filter(HabitLog.habit_id == habit_id, HabitLog.logged_date == day)
            .all()
        )

    def between(
        self, start: date, end: date, customer_id: Optional[UUID] = None
    ) -> List[HabitLog]:
        """Completed logs dated within [start, end]"""
        query = (
            self.db.query(HabitLog)
            .join(Habit, HabitLog.habit_id == Habit.id)
            .filter(
                HabitLog.completed.is_(True),
                HabitLog.logged_date >= start,
                HabitLog.logged_date <= end,
            )
        )
        if customer_id is not None:
            query = query.filter(Habit.customer_id == customer_id)
        return query.all()

    def count_completed(self) -> int:
        return self.db.query(HabitLog).filter(HabitLog.completed.is_(True)).count()


class FoodLogRepository(BaseRepository[FoodLog]):
    """Repository for food log data access"""

    def __init__(self, db: Session):
        super().__init__(db, FoodLog)

    def for_date(self, customer_id: UUID, day: date) -> List[FoodLog]:
        """A customer's entries for one day, oldest first"""
        return (
            self.db.query(FoodLog)
            .filter(FoodLog.customer_id == customer_id, FoodLog.logged_date == day)
            .order_by(FoodLog.created_at.asc())
            .all()
        )

    def between(
        self, start: date, end: date, customer_id: Optional[UUID] = None
    ) -> List[FoodLog]:
        query = self.db.query(FoodLog).filter(
            FoodLog.logged_date >= start, FoodLog.logged_date <= end
        )
        if customer_id is not None:
            query = query.filter(FoodLog.customer_id == customer_id)
        return query.all()

    def last_date_by_customer(self) -> dict:
        rows = (
            self.db.query(FoodLog.customer_id, func.max(FoodLog.logged_date))
            .group_by(FoodLog.customer_id)
            .all()
        )
        return dict(rows)


class WaterLogRepository(BaseRepository[WaterLog]):
    """Repository for water intake data access"""

    def __init__(self, db: Session):
        super().__init__(db, WaterLog)

    def for_date(self, customer_id: UUID, day: date) -> List[WaterLog]:
        return (
            self.db.query(WaterLog)
            .filter(WaterLog.customer_id == customer_id, WaterLog.logged_date == day)
            .order_by(WaterLog.created_at.asc())
            .all()
        )

    def total_for_date(self, customer_id: UUID, day: date) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(WaterLog.amount_ml), 0))
            .filter(WaterLog.customer_id == customer_id, WaterLog.logged_date == day)
            .scalar()
        )
        return int(total or 0)

    def between(self, start: date, end: date) -> List[WaterLog]:
        return (
            self.db.query(WaterLog)
            .filter(WaterLog.logged_date >= start, WaterLog.logged_date <= end)
            .all()
        )

from typing import Iterable, List, Optional, Set, Tuple
from datetime import date, timedelta
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.exceptions import ServiceValidationError, NotFoundError, ForbiddenError
from domain.clock import today, week_dates, week_start
from domain.models import Customer, Habit, HabitLog
from domain.schemas.tracking_schemas import HabitCreate, HabitUpdate
from repositories import CustomerRepository, HabitLogRepository, HabitRepository

logger = logging.getLogger("coachdesk.habit")

DEFAULT_ICON = "💪"
DEFAULT_COLOR = "#FF6B35"
DEFAULT_TARGET_DAYS = 7


def completed_dates(logs: Iterable[HabitLog]) -> Set[date]:
    return {log.logged_date for log in logs if log.completed}


def week_progress(done: Set[date], on: date) -> List[bool]:
    """Seven flags, Monday to Sunday, for the week containing ``on``"""
    return [d in done for d in week_dates(on)]


def streak(done: Set[date], on: date) -> int:
    """
    Consecutive completed days ending on ``on``.

    If ``on`` itself is not logged yet the streak may still end yesterday.
    """
    cursor = on if on in done else on - timedelta(days=1)
    count = 0
    while cursor in done:
        count += 1
        cursor -= timedelta(days=1)
    return count


class HabitService:
    """Habits and their daily completion logs"""

    @staticmethod
    def get_habit(db: Session, habit_id: UUID, customer: Optional[Customer] = None) -> Habit:
        """Fetch a habit; when a customer is given it must own the habit"""
        habit = HabitRepository(db).get_by_id(habit_id)
        if not habit:
            raise NotFoundError(f"Habit {habit_id} not found")
        if customer is not None and habit.customer_id != customer.id:
            raise ForbiddenError("This habit belongs to another client")
        return habit

    @staticmethod
    def list_habits(db: Session, on: Optional[date] = None) -> List[Tuple[Habit, int]]:
        """Every habit with the number of completions since this week's Monday"""
        monday = week_start(on or today())
        result = []
        for habit in HabitRepository(db).list():
            done = [d for d in completed_dates(habit.logs) if d >= monday]
            result.append((habit, len(done)))
        return result

    @staticmethod
    def client_habits(db: Session, customer: Customer, on: Optional[date] = None) -> List[dict]:
        on = on or today()
        habits = []
        for habit in HabitRepository(db).list(customer_id=customer.id):
            done = completed_dates(habit.logs)
            progress = week_progress(done, on)
            habits.append(
                {
                    "id": habit.id,
                    "habit_name": habit.habit_name,
                    "icon": habit.icon or DEFAULT_ICON,
                    "color": habit.color or DEFAULT_COLOR,
                    "target_days": habit.target_frequency or DEFAULT_TARGET_DAYS,
                    "week_progress": progress,
                    "completed_days": sum(progress),
                    "streak": streak(done, on),
                }
            )
        return habits

    @staticmethod
    def toggle_day(
        db: Session,
        customer: Customer,
        habit_id: UUID,
        day_index: int,
        on: Optional[date] = None,
    ) -> bool:
        """
        Flip completion for a weekday of the current week.

        Returns:
            True if the day is now completed, False if the log was removed.
        """
        if not 0 <= day_index <= 6:
            raise ServiceValidationError("day_index must be between 0 (Monday) and 6 (Sunday)")
        habit = HabitService.get_habit(db, habit_id, customer)
        day = week_start(on or today()) + timedelta(days=day_index)

        log_repo = HabitLogRepository(db)
        existing = log_repo.on_date(habit.id, day)
        if any(log.completed for log in existing):
            for log in existing:
                db.delete(log)
            db.commit()
            logger.info(f"habit_unchecked habit_id={habit.id} date={day}")
            return False

        log_repo.create(HabitLog(habit_id=habit.id, logged_date=day, completed=True))
        logger.info(f"habit_checked habit_id={habit.id} date={day}")
        return True

    @staticmethod
    def add_habit(db: Session, customer_id: Optional[UUID], data: HabitCreate) -> Habit:
        if customer_id is None:
            raise ServiceValidationError("customer_id is required")
        if not CustomerRepository(db).exists(customer_id):
            raise NotFoundError(f"Customer {customer_id} not found")
        name = data.habit_name.strip()
        if not name:
            raise ServiceValidationError("Habit name is required")

        habit = HabitRepository(db).create(
            Habit(
                customer_id=customer_id,
                habit_name=name,
                target_frequency=data.target_frequency,
                icon=data.icon or DEFAULT_ICON,
                color=data.color or DEFAULT_COLOR,
            )
        )
        logger.info(f"habit_created habit_id={habit.id} customer_id={customer_id}")
        return habit

    @staticmethod
    def update_habit(
        db: Session, habit_id: UUID, data: HabitUpdate, customer: Optional[Customer] = None
    ) -> Habit:
        habit = HabitService.get_habit(db, habit_id, customer)
        fields = data.model_dump(exclude_unset=True)
        if "habit_name" in fields:
            name = (fields["habit_name"] or "").strip()
            if not name:
                raise ServiceValidationError("Habit name is required")
            fields["habit_name"] = name
        for key, value in fields.items():
            setattr(habit, key, value)
        habit = HabitRepository(db).update(habit)
        logger.info(f"habit_updated habit_id={habit_id} fields={sorted(fields)}")
        return habit

    @staticmethod
    def delete_habit(db: Session, habit_id: UUID, customer: Optional[Customer] = None) -> None:
        habit = HabitService.get_habit(db, habit_id, customer)
        db.delete(habit)
        db.commit()
        logger.info(f"habit_deleted habit_id={habit_id}")

from typing import List, Optional
from datetime import date, timedelta
from sqlalchemy.orm import Session
import logging

from app.config import settings
from domain.clock import as_utc, day_bounds, today, utcnow
from domain.enums import CustomerStatus, MealType
from domain.models import CheckIn, Customer, Profile
from domain import nutrition
from repositories import (
    BookingRepository,
    CheckInRepository,
    CustomerRepository,
    FoodLogRepository,
    HabitLogRepository,
    HabitRepository,
    MealPlanRepository,
    WaterLogRepository,
)
from services.habit_service import completed_dates, streak

logger = logging.getLogger("coachdesk.dashboard")

DASHBOARD_LIST_SIZE = 5
CONSISTENCY_WINDOW_WEEKS = 4
# Three logged actions a day over thirty days
EXPECTED_ACTIONS = 30 * 3


def _is_wellness_check_in(check_in: CheckIn) -> bool:
    """A check-in with more than a bare weight"""
    return any(
        getattr(check_in, f) is not None
        for f in ("mood_score", "energy_score", "sleep_hours", "stress_level", "hunger_level", "notes")
    )


def goal_progress(start: Optional[float], current: Optional[float], goal: Optional[float]) -> int:
    """Share of the way from start to goal weight, 0..100"""
    if not goal or start is None or current is None or start == goal:
        return 0
    value = nutrition.round_half_up((start - current) / (start - goal) * 100)
    return int(max(0, min(value, 100)))


class DashboardService:
    """Aggregates for the coach and client home screens"""

    @staticmethod
    def admin_dashboard(db: Session) -> dict:
        now = utcnow()
        start, end = day_bounds(now.date())
        status_counts = CustomerRepository(db).count_by_status()
        booking_repo = BookingRepository(db)

        dashboard = {
            "total_customers": sum(status_counts.values()),
            "active_customers": status_counts.get(CustomerStatus.ACTIVE.value, 0),
            "todays_bookings": booking_repo.count_between(start, end),
            "meal_plan_count": MealPlanRepository(db).count(),
            "upcoming_bookings": booking_repo.upcoming(now, limit=DASHBOARD_LIST_SIZE),
            "recent_check_ins": CheckInRepository(db).recent(limit=DASHBOARD_LIST_SIZE),
        }
        logger.info(
            f"admin_dashboard_built customers={dashboard['total_customers']} "
            f"todays_bookings={dashboard['todays_bookings']}"
        )
        return dashboard

    @staticmethod
    def calorie_goal(db: Session, customer: Customer, day: date) -> int:
        """Daily calories of the plan covering ``day``, else the default goal"""
        plan = MealPlanRepository(db).covering(customer.id, day)
        if plan is not None and plan.daily_calories:
            return int(plan.daily_calories)
        return settings.default_calorie_goal

    @staticmethod
    def client_dashboard(
        db: Session, profile: Profile, customer: Customer, day: Optional[date] = None
    ) -> dict:
        day = day or today()
        check_in_repo = CheckInRepository(db)

        food = FoodLogRepository(db).for_date(customer.id, day)
        water_ml = WaterLogRepository(db).total_for_date(customer.id, day)
        todays_check_ins = check_in_repo.on_date(customer.id, day)
        latest = check_in_repo.latest_with_weight(customer.id)
        first = check_in_repo.first_with_weight(customer.id)
        water_goal = settings.default_water_goal_ml

        tasks = [
            {
                "id": "breakfast",
                "label": "Breakfast logged",
                "done": any(f.meal_type == MealType.BREAKFAST.value for f in food),
            },
            {
                "id": "weight",
                "label": "Weight recorded",
                "done": any(c.weight_kg is not None for c in todays_check_ins),
            },
            {
                "id": "check_in",
                "label": "Daily check-in",
                "done": any(_is_wellness_check_in(c) for c in todays_check_ins),
            },
            {
                "id": "water",
                "label": "2L water drunk",
                "done": water_ml >= water_goal,
            },
        ]

        return {
            "first_name": profile.first_name,
            "calories_today": nutrition.sum_macros(food)["calories"],
            "calorie_goal": DashboardService.calorie_goal(db, customer, day),
            "water_today_ml": water_ml,
            "water_goal_ml": water_goal,
            "current_weight": latest.weight_kg if latest else None,
            "start_weight": first.weight_kg if first else None,
            "tasks": tasks,
        }

    @staticmethod
    def consistency_score(db: Session, customer: Customer, on: date) -> int:
        """Logged actions over the last four weeks against three a day, 0..100"""
        since = on - timedelta(weeks=CONSISTENCY_WINDOW_WEEKS)
        actions = (
            len(CheckInRepository(db).between(since, on, customer_id=customer.id))
            + len(FoodLogRepository(db).between(since, on, customer_id=customer.id))
            + len(HabitLogRepository(db).between(since, on, customer_id=customer.id))
        )
        return nutrition.percent(actions, EXPECTED_ACTIONS, cap=100)

    @staticmethod
    def achievements(
        db: Session,
        customer: Customer,
        start: Optional[float],
        current: Optional[float],
        goal: Optional[float],
        on: date,
    ) -> List[dict]:
        habits = HabitRepository(db).list(customer_id=customer.id)
        best_streak = max(
            (streak(completed_dates(h.logs), on) for h in habits), default=0
        )

        # A full week is every habit meeting its target in the previous Mon..Sun
        last_monday = on - timedelta(days=on.weekday() + 7)
        last_week = {last_monday + timedelta(days=i) for i in range(7)}
        perfect_week = bool(habits) and all(
            len(completed_dates(h.logs) & last_week) >= (h.target_frequency or 7)
            for h in habits
        )

        member_since = as_utc(customer.created_at)
        lost = (start - current) if start is not None and current is not None else 0

        return [
            {
                "id": "streak_7",
                "title": "7-day streak",
                "description": "Complete a habit 7 days in a row",
                "icon": "🔥",
                "unlocked": best_streak >= 7,
            },
            {
                "id": "first_month",
                "title": "First month",
                "description": "One month as a member",
                "icon": "🏆",
                "unlocked": member_since is not None
                and (utcnow() - member_since).days >= 30,
            },
            {
                "id": "lost_5kg",
                "title": "5 kg lost",
                "description": "Lose your first 5 kg",
                "icon": "⭐",
                "unlocked": bool(current) and lost >= 5,
            },
            {
                "id": "perfect_week",
                "title": "100% week",
                "description": "Hit every habit target in a week",
                "icon": "💎",
                "unlocked": perfect_week,
            },
            {
                "id": "halfway",
                "title": "Halfway",
                "description": "Get halfway to your goal",
                "icon": "🎯",
                "unlocked": bool(goal)
                and start is not None
                and current is not None
                and start != goal
                and lost >= (start - goal) / 2,
            },
        ]

    @staticmethod
    def client_progress(
        db: Session, profile: Profile, customer: Customer, on: Optional[date] = None
    ) -> dict:
        on = on or today()
        history = CheckInRepository(db).weight_history(customer.id)
        start = history[0].weight_kg if history else None
        current = history[-1].weight_kg if history else None
        goal = profile.weight_goal_kg

        return {
            "weight_history": [
                {"date": c.check_in_date, "weight_kg": c.weight_kg} for c in history
            ],
            "start_weight": start,
            "current_weight": current,
            "goal_weight": goal,
            "total_lost": round(start - current, 1) if history else 0.0,
            "goal_progress": goal_progress(start, current, goal),
            "consistency_score": DashboardService.consistency_score(db, customer, on),
            "achievements": DashboardService.achievements(
                db, customer, start, current, goal, on
            ),
        }

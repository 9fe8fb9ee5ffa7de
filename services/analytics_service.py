from typing import Dict, List, Optional
from collections import Counter, defaultdict
from datetime import date, timedelta
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.clock import as_utc, day_bounds, month_start, next_month_start, today, week_start
from domain.enums import BookingStatus
from domain.models import AnalyticsEvent, Customer, Message, Profile
from domain import nutrition
from repositories import (
    AnalyticsEventRepository,
    BookingRepository,
    CheckInRepository,
    CustomerRepository,
    FoodLogRepository,
    HabitLogRepository,
    MessageRepository,
    WaterLogRepository,
)

logger = logging.getLogger("coachdesk.analytics")

TREND_WEEKS = 12
ACTIVE_USER_DAYS = 30
INACTIVITY_DAYS = 7
NO_SHOW_LOOKBACK_DAYS = 30
EXPIRY_WARNING_DAYS = 7


def format_duration(seconds: Optional[float]) -> str:
    """Response time as hours ("2.5t") from one hour up, else minutes ("45m")"""
    if seconds is None:
        return "-"
    hours = seconds / 3600
    if hours >= 1:
        return f"{hours:.1f}t"
    return f"{nutrition.round_half_up(seconds / 60)}m"


def last_activity_text(last: Optional[date], on: date) -> str:
    if last is None:
        return "No activity"
    days = (on - last).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    return f"{days} days ago"


def average_response_seconds(messages: List[Message], admin_id: UUID) -> Optional[float]:
    """
    Mean time between a client's last message and the coach's next reply.

    ``messages`` must be oldest first and involve the coach.
    """
    waiting_since: Dict[UUID, object] = {}
    gaps: List[float] = []
    for message in messages:
        created = as_utc(message.created_at)
        if message.from_user_id == admin_id:
            client_id = message.to_user_id
            asked_at = waiting_since.pop(client_id, None)
            if asked_at is not None:
                gaps.append((created - asked_at).total_seconds())
        elif message.to_user_id == admin_id and message.from_user_id is not None:
            waiting_since[message.from_user_id] = created
    if not gaps:
        return None
    return sum(gaps) / len(gaps)


class AnalyticsService:
    """Reporting for the coach's analytics screen"""

    @staticmethod
    def booking_stats(db: Session, on: Optional[date] = None) -> dict:
        """This month's bookings: rates, average length and type breakdown"""
        on = on or today()
        first = month_start(on)
        start, _ = day_bounds(first)
        end, _ = day_bounds(next_month_start(on))
        bookings = BookingRepository(db).list_between(start, end)

        total = len(bookings)
        completed = sum(1 for b in bookings if b.status == BookingStatus.COMPLETED)
        no_shows = sum(1 for b in bookings if b.status == BookingStatus.NO_SHOW)
        durations = [b.duration_minutes for b in bookings if b.duration_minutes]
        return {
            "month_start": first,
            "total": total,
            "completed": completed,
            "no_shows": no_shows,
            "completion_rate": nutrition.percent(completed, total),
            "no_show_rate": nutrition.percent(no_shows, total),
            "average_duration": nutrition.round_half_up(sum(durations) / len(durations)) if durations else 0,
            "by_type": dict(Counter(b.booking_type for b in bookings)),
        }

    @staticmethod
    def segmentation(db: Session) -> dict:
        repo = CustomerRepository(db)
        by_status = repo.count_by_status()
        return {
            "total": sum(by_status.values()),
            "by_status": by_status,
            "by_subscription": repo.count_by_subscription(),
        }

    @staticmethod
    def engagement(db: Session, on: Optional[date] = None) -> dict:
        on = on or today()
        check_in_repo = CheckInRepository(db)
        food_repo = FoodLogRepository(db)
        habit_log_repo = HabitLogRepository(db)
        water_repo = WaterLogRepository(db)

        feature_usage = {
            "check_ins": check_in_repo.count(),
            "food_logs": food_repo.count(),
            "water_logs": water_repo.count(),
            "habit_logs": habit_log_repo.count_completed(),
            "messages": MessageRepository(db).count(),
        }

        # Weekly compliance, oldest week first
        this_monday = week_start(on)
        first_monday = this_monday - timedelta(weeks=TREND_WEEKS - 1)
        window_end = this_monday + timedelta(days=6)
        weekly = defaultdict(lambda: {"check_ins": 0, "food_logs": 0, "habit_logs": 0})
        for c in check_in_repo.between(first_monday, window_end):
            weekly[week_start(c.check_in_date)]["check_ins"] += 1
        for f in food_repo.between(first_monday, window_end):
            weekly[week_start(f.logged_date)]["food_logs"] += 1
        for h in habit_log_repo.between(first_monday, window_end):
            weekly[week_start(h.logged_date)]["habit_logs"] += 1
        trend = [
            {"week_start": monday, **weekly[monday]}
            for monday in (first_monday + timedelta(weeks=i) for i in range(TREND_WEEKS))
        ]

        # Distinct active customers per day
        first_day = on - timedelta(days=ACTIVE_USER_DAYS - 1)
        active = defaultdict(set)
        for c in check_in_repo.between(first_day, on):
            active[c.check_in_date].add(c.customer_id)
        for f in food_repo.between(first_day, on):
            active[f.logged_date].add(f.customer_id)
        for w in water_repo.between(first_day, on):
            active[w.logged_date].add(w.customer_id)
        for h in habit_log_repo.between(first_day, on):
            active[h.logged_date].add(h.habit.customer_id)
        since, _ = day_bounds(first_day)
        for e in AnalyticsEventRepository(db).since(since):
            if e.customer_id is not None:
                active[as_utc(e.created_at).date()].add(e.customer_id)
        daily = [
            {"date": d, "active_users": len(active[d] - {None})}
            for d in (first_day + timedelta(days=i) for i in range(ACTIVE_USER_DAYS))
        ]

        return {
            "feature_usage": feature_usage,
            "compliance_trend": trend,
            "daily_active_users": daily,
        }

    @staticmethod
    def message_stats(db: Session, admin: Profile) -> dict:
        repo = MessageRepository(db)
        sent = repo.sent_by(admin.id)
        automated = [m for m in sent if m.is_automated]

        per_trigger = defaultdict(lambda: {"sent": 0, "read": 0})
        for m in automated:
            key = m.trigger_type or "unspecified"
            per_trigger[key]["sent"] += 1
            per_trigger[key]["read"] += int(bool(m.is_read))

        response = average_response_seconds(repo.involving(admin.id, ascending=True), admin.id)
        return {
            "total_sent": len(sent),
            "automated_ratio": nutrition.percent(len(automated), len(sent)),
            "unread_count": repo.unread_count(admin.id),
            "average_response_time": format_duration(response),
            "trigger_read_rates": [
                {
                    "trigger_type": trigger,
                    "sent": counts["sent"],
                    "read": counts["read"],
                    "read_rate": nutrition.percent(counts["read"], counts["sent"]),
                }
                for trigger, counts in sorted(per_trigger.items())
            ],
        }

    @staticmethod
    def at_risk_customers(db: Session, on: Optional[date] = None) -> List[dict]:
        """Active customers showing at least one warning sign"""
        on = on or today()
        last_check_in = CheckInRepository(db).last_date_by_customer()
        last_food = FoodLogRepository(db).last_date_by_customer()
        cutoff = on - timedelta(days=INACTIVITY_DAYS)
        no_show_since, _ = day_bounds(on - timedelta(days=NO_SHOW_LOOKBACK_DAYS))
        booking_repo = BookingRepository(db)

        at_risk = []
        for customer in CustomerRepository(db).list_active():
            reasons = []
            checked_in = last_check_in.get(customer.id)
            ate = last_food.get(customer.id)
            if checked_in is None or checked_in < cutoff:
                reasons.append(f"No check-in in {INACTIVITY_DAYS} days")
            if ate is None or ate < cutoff:
                reasons.append(f"No food log in {INACTIVITY_DAYS} days")
            if booking_repo.for_customer_since(
                customer.id, no_show_since, status=BookingStatus.NO_SHOW
            ):
                reasons.append("Missed a booking recently")
            end = customer.subscription_end_date
            if end is not None and on <= end <= on + timedelta(days=EXPIRY_WARNING_DAYS):
                reasons.append("Subscription ends soon")
            if not reasons:
                continue

            last = max((d for d in (checked_in, ate) if d is not None), default=None)
            profile = customer.profile
            at_risk.append(
                {
                    "customer_id": customer.id,
                    "full_name": profile.full_name if profile else None,
                    "email": profile.email if profile else None,
                    "profile_image_url": profile.profile_image_url if profile else None,
                    "reasons": reasons,
                    "last_activity": last_activity_text(last, on),
                }
            )
        logger.info(f"at_risk_computed count={len(at_risk)}")
        return at_risk

    @staticmethod
    def record_event(
        db: Session, customer: Customer, event_type: str, data: Optional[dict] = None
    ) -> AnalyticsEvent:
        event = AnalyticsEventRepository(db).create(
            AnalyticsEvent(customer_id=customer.id, event_type=event_type, event_data=data)
        )
        logger.info(f"analytics_event_recorded customer_id={customer.id} type={event_type}")
        return event

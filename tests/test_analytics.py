"""
Tests for the coach's analytics, dashboard, usage events and global search.
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_admin, make_customer, auth_headers
from domain.clock import today
from domain.enums import BookingStatus, BookingType
from domain.models import CheckIn, FoodLog, Message
from domain.schemas import BookingCreate, MealPlanCreate
from services.analytics_service import (
    AnalyticsService,
    average_response_seconds,
    format_duration,
    last_activity_text,
)
from services.auth_service import AuthService
from services.booking_service import BookingService
from services.meal_plan_service import MealPlanService


# =============================================================================
# FORMATTING HELPERS
# =============================================================================


def test_format_duration():
    assert format_duration(None) == "-"
    assert format_duration(2700) == "45m"
    assert format_duration(150) == "3m"
    assert format_duration(3600) == "1.0t"
    assert format_duration(9000) == "2.5t"


def test_last_activity_text():
    on = date(2026, 5, 14)
    assert last_activity_text(None, on) == "No activity"
    assert last_activity_text(on, on) == "Today"
    assert last_activity_text(date(2026, 5, 13), on) == "Yesterday"
    assert last_activity_text(date(2026, 5, 4), on) == "10 days ago"


def test_average_response_seconds():
    coach, anna, ben = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    t0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)

    def msg(sender, recipient, minutes):
        return SimpleNamespace(
            from_user_id=sender, to_user_id=recipient, created_at=t0 + timedelta(minutes=minutes)
        )

    messages = [
        msg(coach, anna, 0),  # unprompted, not a reply
        msg(anna, coach, 10),
        msg(anna, coach, 20),  # the clock restarts at the latest question
        msg(coach, anna, 50),
        msg(ben, coach, 60),
        msg(coach, ben, 150),
        msg(coach, ben, 160),
    ]
    # (30 min + 90 min) / 2
    assert average_response_seconds(messages, coach) == 3600
    assert average_response_seconds(messages[:1], coach) is None


# =============================================================================
# BOOKINGS AND SEGMENTATION
# =============================================================================


def test_booking_stats_for_month(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)

    def book(day, booking_type, duration):
        return BookingService.create_booking(
            db_session,
            admin,
            BookingCreate(
                customer_id=customer.id,
                booking_type=booking_type,
                date=day,
                time="10:00",
                duration_minutes=duration,
            ),
        )

    done = book(date(2026, 5, 2), BookingType.FOLLOW_UP, 30)
    missed = book(date(2026, 5, 9), BookingType.FOLLOW_UP, 60)
    book(date(2026, 5, 31), BookingType.MEASUREMENT, 90)
    book(date(2026, 6, 1), BookingType.MEASUREMENT, 120)
    BookingService.update_status(db_session, done.id, BookingStatus.COMPLETED)
    BookingService.update_status(db_session, missed.id, BookingStatus.NO_SHOW)

    stats = AnalyticsService.booking_stats(db_session, on=date(2026, 5, 20))
    assert stats["month_start"] == date(2026, 5, 1)
    assert stats["total"] == 3
    assert stats["completed"] == 1
    assert stats["no_shows"] == 1
    assert stats["completion_rate"] == 33
    assert stats["no_show_rate"] == 33
    assert stats["average_duration"] == 60
    assert stats["by_type"] == {"follow_up": 2, "measurement": 1}


def test_booking_stats_empty_month(db_session: Session):
    stats = AnalyticsService.booking_stats(db_session, on=date(2026, 1, 10))
    assert stats["total"] == 0
    assert stats["completion_rate"] == 0
    assert stats["average_duration"] == 0


def test_segmentation_endpoint(db_session: Session):
    admin = make_admin(db_session)
    make_customer(db_session, admin, "default", subscription_type="premium")
    make_customer(db_session, admin, "athlete", subscription_type="premium", status="on_hold")
    make_customer(db_session, admin, "casual")

    r = client.get("/analytics/segmentation", headers=auth_headers(admin))
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert body["by_status"] == {"active": 2, "on_hold": 1}
    assert body["by_subscription"] == {"premium": 2, "none": 1}


# =============================================================================
# ENGAGEMENT AND AT-RISK
# =============================================================================


def test_engagement_trend_and_active_users(db_session: Session):
    admin = make_admin(db_session)
    sarah = make_customer(db_session, admin, "default")
    michael = make_customer(db_session, admin, "athlete")
    on = date(2026, 5, 14)

    db_session.add_all(
        [
            CheckIn(customer_id=sarah.id, check_in_date=on, mood_score=4),
            FoodLog(customer_id=sarah.id, logged_date=on, food_name="Oats", meal_type="breakfast"),
            FoodLog(customer_id=michael.id, logged_date=on, food_name="Eggs", meal_type="breakfast"),
            FoodLog(customer_id=michael.id, logged_date=date(2026, 5, 5), food_name="Rice"),
        ]
    )
    db_session.commit()

    result = AnalyticsService.engagement(db_session, on=on)
    assert result["feature_usage"]["check_ins"] == 1
    assert result["feature_usage"]["food_logs"] == 3

    trend = result["compliance_trend"]
    assert len(trend) == 12
    assert trend[-1] == {
        "week_start": date(2026, 5, 11),
        "check_ins": 1,
        "food_logs": 2,
        "habit_logs": 0,
    }
    assert trend[-2]["food_logs"] == 1

    daily = result["daily_active_users"]
    assert len(daily) == 30
    assert daily[-1] == {"date": on, "active_users": 2}
    assert {"date": date(2026, 5, 5), "active_users": 1} in daily


def test_at_risk_reasons(db_session: Session):
    admin = make_admin(db_session)
    on = date(2026, 5, 14)
    quiet = make_customer(db_session, admin, "default", subscription_end_date=on + timedelta(days=3))
    busy = make_customer(db_session, admin, "athlete")
    make_customer(db_session, admin, "casual", status="inactive")

    db_session.add_all(
        [
            CheckIn(customer_id=busy.id, check_in_date=on - timedelta(days=1), mood_score=3),
            FoodLog(customer_id=busy.id, logged_date=on, food_name="Oats"),
            CheckIn(customer_id=quiet.id, check_in_date=on - timedelta(days=9), mood_score=2),
        ]
    )
    db_session.commit()

    at_risk = AnalyticsService.at_risk_customers(db_session, on=on)
    assert [c["customer_id"] for c in at_risk] == [quiet.id]
    assert at_risk[0]["reasons"] == [
        "No check-in in 7 days",
        "No food log in 7 days",
        "Subscription ends soon",
    ]
    assert at_risk[0]["full_name"] == "Sarah Martinez"
    assert at_risk[0]["email"] == quiet.profile.email
    assert at_risk[0]["last_activity"] == "9 days ago"

    r = client.get("/analytics/at-risk", headers=auth_headers(admin))
    assert r.status_code == 200
    assert {c["email"] for c in r.json()} >= {quiet.profile.email}


def test_message_stats_endpoint(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    t0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)
    db_session.add_all(
        [
            Message(from_user_id=admin.id, to_user_id=customer.user_id, body="Welcome",
                    is_automated=True, trigger_type="welcome", is_read=True, created_at=t0),
            Message(from_user_id=customer.user_id, to_user_id=admin.id, body="Hi",
                    created_at=t0 + timedelta(minutes=5)),
            Message(from_user_id=admin.id, to_user_id=customer.user_id, body="Hello",
                    created_at=t0 + timedelta(minutes=50)),
            Message(from_user_id=admin.id, to_user_id=customer.user_id, body="Check in",
                    is_automated=True, trigger_type="checkin", created_at=t0 + timedelta(hours=2)),
        ]
    )
    db_session.commit()

    r = client.get("/analytics/messages", headers=auth_headers(admin))
    assert r.status_code == 200
    stats = r.json()
    assert stats["total_sent"] == 3
    assert stats["automated_ratio"] == 67
    assert stats["unread_count"] == 1
    assert stats["average_response_time"] == "45m"
    assert stats["trigger_read_rates"] == [
        {"trigger_type": "checkin", "sent": 1, "read": 0, "read_rate": 0},
        {"trigger_type": "welcome", "sent": 1, "read": 1, "read_rate": 100},
    ]


# =============================================================================
# DASHBOARD, EVENTS, SEARCH
# =============================================================================


def test_admin_dashboard(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin, weight_kg=70)
    make_customer(db_session, admin, "athlete", status="completed")
    BookingService.create_booking(
        db_session,
        admin,
        BookingCreate(
            customer_id=customer.id,
            booking_type=BookingType.FOLLOW_UP,
            date=today() + timedelta(days=1),
            time="10:00",
        ),
    )

    r = client.get("/dashboard", headers=auth_headers(admin))
    assert r.status_code == 200
    body = r.json()
    assert body["total_customers"] == 2
    assert body["active_customers"] == 1
    assert body["meal_plan_count"] == 0
    assert len(body["upcoming_bookings"]) == 1
    assert body["recent_check_ins"][0]["weight_kg"] == 70


def test_record_event(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    _, token = AuthService.sign_up(db_session, customer.profile.email, "secret123", "Sarah")
    headers = {"Authorization": f"Bearer {token}"}

    r = client.post(
        "/client/events",
        json={"event_type": " opened_meal_plan ", "event_data": {"week": 2}},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["event_type"] == "opened_meal_plan"
    assert r.json()["event_data"] == {"week": 2}
    assert r.json()["customer_id"] == str(customer.id)

    empty = client.post("/client/events", json={"event_type": ""}, headers=headers)
    assert empty.status_code == 422


def test_search_across_entities(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    MealPlanService.create_meal_plan(
        db_session,
        admin,
        MealPlanCreate(customer_id=customer.id, name="Martinez cut", start_date=today()),
    )

    r = client.get("/search", params={"q": "martinez"}, headers=auth_headers(admin))
    assert r.status_code == 200
    results = r.json()["results"]
    assert r.json()["query"] == "martinez"
    assert {(x["type"], x["title"]) for x in results} == {
        ("customer", "Sarah Martinez"),
        ("meal_plan", "Martinez cut"),
    }
    customer_hit = next(x for x in results if x["type"] == "customer")
    assert customer_hit["id"] == str(customer.id)

    blank = client.get("/search", params={"q": "  "}, headers=auth_headers(admin))
    assert blank.json()["results"] == []


def test_health_check(db_session: Session):
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["database"] == "ok"
    assert r.json()["service"] == "CoachDesk"

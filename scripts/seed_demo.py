#!/usr/bin/env python3
"""
Seed a demo coach with a handful of clients, bookings, a meal plan,
habits and messages. Intended for local development only.
"""

import argparse
import sys
import logging
from datetime import timedelta
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("seed_demo")

DEMO_ADMIN = {
    "email": "coach@coachdesk.example.com",
    "password": "coachdesk",
    "full_name": "Demo Coach",
}

DEMO_CLIENTS = [
    {
        "full_name": "Sarah Martinez",
        "email": "sarah.martinez@example.com",
        "weight_kg": 82.0,
        "weight_goal_kg": 72.0,
        "height_cm": 168,
        "activity_level": "moderate",
        "subscription_type": "premium",
        "tags": ["weight loss", "vegetarian"],
    },
    {
        "full_name": "Michael Chen",
        "email": "michael.chen@example.com",
        "weight_kg": 76.5,
        "weight_goal_kg": 80.0,
        "height_cm": 181,
        "activity_level": "very_active",
        "subscription_type": "basic",
        "tags": ["muscle gain"],
    },
    {
        "full_name": "Emma Johnson",
        "email": "emma.johnson@example.com",
        "weight_kg": 64.0,
        "subscription_type": "trial",
        "status": "on_hold",
    },
]

DEMO_GRID = [
    (0, "breakfast", "Overnight oats", 420, 18, 60, 12),
    (0, "lunch", "Chickpea salad", 560, 22, 58, 24),
    (0, "dinner", "Salmon with quinoa", 640, 42, 48, 26),
    (1, "breakfast", "Greek yoghurt with berries", 310, 20, 34, 8),
    (1, "lunch", "Chickpea salad", 560, 22, 58, 24),
    (1, "dinner", "Chicken stir fry", 590, 45, 52, 18),
    (2, "breakfast", "Overnight oats", 420, 18, 60, 12),
    (2, "snack", "Apple and almonds", 210, 6, 22, 12),
]


def seed(db) -> None:
    from domain.clock import today
    from domain.enums import AppRole, BookingType
    from domain.schemas import (
        BookingCreate,
        CustomerCreate,
        GridCellIn,
        HabitCreate,
        MealPlanCreate,
    )
    from repositories import ProfileRepository
    from services import (
        AuthService,
        BookingService,
        CustomerService,
        HabitService,
        MealPlanService,
        MessageService,
    )

    admin = ProfileRepository(db).get_by_email(DEMO_ADMIN["email"])
    if admin is None:
        admin, _ = AuthService.sign_up(db, role=AppRole.ADMIN, **DEMO_ADMIN)
        logger.info(f"✓ Created coach {admin.email} (password: {DEMO_ADMIN['password']})")
    else:
        logger.info(f"Coach {admin.email} already exists, adding demo data to it")

    start = today()
    for index, data in enumerate(DEMO_CLIENTS):
        if ProfileRepository(db).get_by_email(data["email"]):
            logger.info(f"Client {data['email']} already exists, skipping")
            continue

        customer = CustomerService.create_customer(
            db,
            admin,
            CustomerCreate(
                subscription_start_date=start - timedelta(days=30 * (index + 1)),
                subscription_end_date=start + timedelta(days=60 - 25 * index),
                **data,
            ),
        )
        logger.info(f"✓ Created client {data['full_name']}")

        BookingService.create_booking(
            db,
            admin,
            BookingCreate(
                customer_id=customer.id,
                booking_type=BookingType.FOLLOW_UP if index else BookingType.FIRST_CONSULTATION,
                date=start + timedelta(days=index + 1),
                time=f"{9 + index:02d}:30",
                duration_minutes=60,
            ),
        )
        HabitService.add_habit(
            db, customer.id, HabitCreate(habit_name="Drink 2L water", icon="💧")
        )
        HabitService.add_habit(
            db,
            customer.id,
            HabitCreate(habit_name="Walk 10 000 steps", target_frequency=5, icon="🚶"),
        )

        if index == 0:
            plan = MealPlanService.create_meal_plan(
                db,
                admin,
                MealPlanCreate(
                    customer_id=customer.id,
                    name="Week 1: getting started",
                    start_date=start - timedelta(days=start.weekday()),
                    daily_calories=1800,
                ),
            )
            cells = [
                GridCellIn(
                    day_of_week=day,
                    meal_type=meal_type,
                    recipe_name=name,
                    calories=kcal,
                    protein_g=protein,
                    carbs_g=carbs,
                    fat_g=fat,
                )
                for day, meal_type, name, kcal, protein, carbs, fat in DEMO_GRID
            ]
            MealPlanService.save_grid(db, plan.id, MealPlanService.grid_from_cells(cells))
            logger.info(f"✓ Created meal plan '{plan.name}' with {len(cells)} meals")

        subject, body = MessageService.render_template(
            db, "welcome", to_user_id=customer.user_id
        )
        MessageService.send_message(
            db,
            sender=admin,
            to_user_id=customer.user_id,
            subject=subject,
            body=body,
            is_automated=True,
            trigger_type="welcome",
        )


def main(reset: bool = False) -> int:
    from sqlalchemy.exc import SQLAlchemyError
    from app.exceptions import CoachDeskError
    from domain.models.database import SessionLocal, drop_database, init_database

    if reset:
        drop_database()
    init_database()

    db = SessionLocal()
    try:
        seed(db)
        logger.info("✓ Demo data ready")
        return 0
    except (SQLAlchemyError, CoachDeskError) as e:
        db.rollback()
        logger.error(f"✗ Seeding failed: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    sys.exit(main(reset=args.reset))

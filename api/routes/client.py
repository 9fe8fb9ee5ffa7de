"""
Client portal routes.

Every route acts on the customer record linked to the logged-in user; other
clients' data is never reachable from here.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from datetime import date
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user, get_client_customer
from api.responses import ERROR_RESPONSES, DeletedResponse, deleted_response
from domain.clock import today
from domain.mappers import HabitMapper
from domain.models import Customer, Profile
from domain.schemas.dashboard_schemas import (
    ClientDashboardResponse,
    ClientProgressResponse,
    AnalyticsEventCreate,
    AnalyticsEventResponse,
)
from domain.schemas.meal_plan_schemas import ClientWeekPlanResponse
from domain.schemas.message_schemas import ClientMessageCreate, MessageResponse
from domain.schemas.tracking_schemas import (
    CheckInCreate,
    CheckInResponse,
    WeightLogCreate,
    HabitCreate,
    HabitUpdate,
    HabitResponse,
    ClientHabitResponse,
    HabitToggleRequest,
    HabitToggleResponse,
    FoodLogCreate,
    FoodLogResponse,
    FoodDaySummary,
    WaterLogCreate,
    WaterLogResponse,
    WaterSummary,
)
from services.analytics_service import AnalyticsService
from services.check_in_service import CheckInService
from services.dashboard_service import DashboardService
from services.food_log_service import FoodLogService
from services.habit_service import HabitService
from services.meal_plan_service import MealPlanService
from services.message_service import MessageService
from services.water_service import WaterService

router = APIRouter(prefix="/client", tags=["Client"], responses=ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.client")


# ============================================================================
# Dashboard and progress
# ============================================================================


@router.get("/dashboard", response_model=ClientDashboardResponse)
def client_dashboard(
    user: Profile = Depends(get_current_user),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    """Today's calories, water, weight and the four daily tasks"""
    return DashboardService.client_dashboard(db, user, customer)


@router.get("/progress", response_model=ClientProgressResponse)
def client_progress(
    user: Profile = Depends(get_current_user),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return DashboardService.client_progress(db, user, customer)


# ============================================================================
# Food diary
# ============================================================================


@router.get("/food-logs", response_model=List[FoodLogResponse])
def list_food_logs(
    day: Optional[date] = Query(None, alias="date"),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return FoodLogService.list_for_date(db, customer, day)


@router.get("/food-logs/summary", response_model=FoodDaySummary)
def food_summary(
    day: Optional[date] = Query(None, alias="date"),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return FoodLogService.daily_summary(db, customer, day)


@router.post(
    "/food-logs", response_model=FoodLogResponse, status_code=status.HTTP_201_CREATED
)
def add_food_log(
    payload: FoodLogCreate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return FoodLogService.add_food(db, customer, payload)


@router.delete("/food-logs/{food_log_id}", response_model=DeletedResponse)
def delete_food_log(
    food_log_id: UUID,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    FoodLogService.delete_food(db, customer, food_log_id)
    return deleted_response(food_log_id)


# ============================================================================
# Water
# ============================================================================


@router.get("/water", response_model=WaterSummary)
def water_summary(
    customer: Customer = Depends(get_client_customer), db: Session = Depends(get_db)
):
    return WaterService.daily_summary(db, customer)


@router.post("/water", response_model=WaterLogResponse, status_code=status.HTTP_201_CREATED)
def add_water(
    payload: WaterLogCreate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return WaterService.add_water(db, customer, payload.amount_ml)


# ============================================================================
# Check-ins and weight
# ============================================================================


@router.get("/check-ins", response_model=List[CheckInResponse])
def list_my_check_ins(
    customer: Customer = Depends(get_client_customer), db: Session = Depends(get_db)
):
    return CheckInService.list_for_customer(db, customer)


@router.post(
    "/check-ins", response_model=CheckInResponse, status_code=status.HTTP_201_CREATED
)
def add_check_in(
    payload: CheckInCreate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return CheckInService.add_check_in(db, customer, payload)


@router.post("/weight", response_model=CheckInResponse, status_code=status.HTTP_201_CREATED)
def log_weight(
    payload: WeightLogCreate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return CheckInService.log_weight(db, customer, payload.weight_kg)


# ============================================================================
# Habits
# ============================================================================


@router.get("/habits", response_model=List[ClientHabitResponse])
def list_my_habits(
    customer: Customer = Depends(get_client_customer), db: Session = Depends(get_db)
):
    """This week's progress and current streak per habit"""
    return HabitService.client_habits(db, customer)


@router.post("/habits", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def add_my_habit(
    payload: HabitCreate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return HabitMapper.to_response(HabitService.add_habit(db, customer.id, payload))


@router.put("/habits/{habit_id}", response_model=HabitResponse)
def update_my_habit(
    habit_id: UUID,
    payload: HabitUpdate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    habit = HabitService.update_habit(db, habit_id, payload, customer=customer)
    return HabitMapper.to_response(habit)


@router.delete("/habits/{habit_id}", response_model=DeletedResponse)
def delete_my_habit(
    habit_id: UUID,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    HabitService.delete_habit(db, habit_id, customer=customer)
    return deleted_response(habit_id)


@router.post("/habits/{habit_id}/toggle", response_model=HabitToggleResponse)
def toggle_habit_day(
    habit_id: UUID,
    payload: HabitToggleRequest,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    """Tick or untick a weekday (0 = Monday) of the current week"""
    completed = HabitService.toggle_day(db, customer, habit_id, payload.day_index)
    return HabitToggleResponse(
        habit_id=habit_id, day_index=payload.day_index, completed=completed
    )


# ============================================================================
# Meal plan
# ============================================================================


@router.get("/meal-plan", response_model=ClientWeekPlanResponse)
def my_meal_plan(
    day: Optional[date] = Query(None, alias="date", description="Any day of the week"),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return MealPlanService.current_plan_for_week(db, customer.id, day or today())


# ============================================================================
# Messages
# ============================================================================


@router.get("/messages", response_model=List[MessageResponse])
def my_messages(
    user: Profile = Depends(get_current_user),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    """The whole thread with the coach, oldest first; marks incoming as read"""
    return MessageService.client_thread(db, user)


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_to_coach(
    payload: ClientMessageCreate,
    user: Profile = Depends(get_current_user),
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return MessageService.client_send(
        db, user, customer, payload.body, subject=payload.subject
    )


# ============================================================================
# Usage events
# ============================================================================


@router.post(
    "/events", response_model=AnalyticsEventResponse, status_code=status.HTTP_201_CREATED
)
def record_event(
    payload: AnalyticsEventCreate,
    customer: Customer = Depends(get_client_customer),
    db: Session = Depends(get_db),
):
    return AnalyticsService.record_event(
        db, customer, payload.event_type.strip(), payload.event_data
    )

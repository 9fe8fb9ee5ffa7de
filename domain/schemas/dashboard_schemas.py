from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import date, datetime
from uuid import UUID

from domain.schemas.booking_schemas import BookingResponse
from domain.schemas.tracking_schemas import CheckInResponse


class AdminDashboardResponse(BaseModel):
    total_customers: int
    active_customers: int
    todays_bookings: int
    meal_plan_count: int
    upcoming_bookings: List[BookingResponse]
    recent_check_ins: List[CheckInResponse]


class DailyTask(BaseModel):
    id: str
    label: str
    done: bool


class ClientDashboardResponse(BaseModel):
    first_name: str
    calories_today: float
    calorie_goal: int
    water_today_ml: int
    water_goal_ml: int
    current_weight: Optional[float] = None
    start_weight: Optional[float] = None
    tasks: List[DailyTask]


class WeightPoint(BaseModel):
    date: date
    weight_kg: float


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    unlocked: bool


class ClientProgressResponse(BaseModel):
    weight_history: List[WeightPoint]
    start_weight: Optional[float] = None
    current_weight: Optional[float] = None
    goal_weight: Optional[float] = None
    total_lost: float
    goal_progress: int
    consistency_score: int
    achievements: List[Achievement]


# ---------------------------------------------------------------- analytics


class BookingStatsResponse(BaseModel):
    month_start: date
    total: int
    completed: int
    no_shows: int
    completion_rate: int
    no_show_rate: int
    average_duration: int
    by_type: Dict[str, int]


class SegmentationResponse(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_subscription: Dict[str, int]


class WeeklyCompliance(BaseModel):
    week_start: date
    check_ins: int
    food_logs: int
    habit_logs: int


class DailyActiveUsers(BaseModel):
    date: date
    active_users: int


class EngagementResponse(BaseModel):
    feature_usage: Dict[str, int]
    compliance_trend: List[WeeklyCompliance]
    daily_active_users: List[DailyActiveUsers]


class TriggerReadRate(BaseModel):
    trigger_type: str
    sent: int
    read: int
    read_rate: int


class MessageStatsResponse(BaseModel):
    total_sent: int
    automated_ratio: int
    unread_count: int
    average_response_time: str
    trigger_read_rates: List[TriggerReadRate]


class AtRiskCustomer(BaseModel):
    customer_id: UUID
    full_name: Optional[str] = None
    email: Optional[str] = None
    profile_image_url: Optional[str] = None
    reasons: List[str]
    last_activity: str


class AnalyticsEventCreate(BaseModel):
    event_type: str = Field(..., min_length=1)
    event_data: Optional[dict] = None


class AnalyticsEventResponse(BaseModel):
    id: UUID
    customer_id: Optional[UUID] = None
    event_type: str
    event_data: Optional[dict] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ------------------------------------------------------------------- search


class SearchResult(BaseModel):
    id: UUID
    type: str
    title: str
    subtitle: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult]

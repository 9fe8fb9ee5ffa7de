"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    SignUpRequest,
    AdminSignUpRequest,
    SignInRequest,
    TokenResponse,
    PasswordResetRequest,
    PasswordResetRequested,
    PasswordResetConfirm,
    PasswordChangeRequest,
)
from domain.schemas.profile_schemas import (
    ProfileResponse,
    MeResponse,
    ProfileUpdate,
    AvatarResponse,
)
from domain.schemas.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerDetailResponse,
    WizardValidateRequest,
    WizardValidateResponse,
)
from domain.schemas.booking_schemas import (
    BookingCreate,
    BookingUpdate,
    BookingStatusUpdate,
    BookingResponse,
    BookableCustomer,
    BookingOptionsResponse,
)
from domain.schemas.meal_plan_schemas import (
    MealPlanCreate,
    MealPlanUpdate,
    MealEntryIn,
    GridCellIn,
    SaveGridRequest,
    MealPlanItemResponse,
    MealPlanResponse,
    MealPlanDetailResponse,
    NutritionSummaryResponse,
    MacroSplitRequest,
    MacroSplitResponse,
    ShoppingListRequest,
    ShoppingListResponse,
    ClientWeekPlanResponse,
)
from domain.schemas.message_schemas import (
    MessageCreate,
    ClientMessageCreate,
    MessageResponse,
    ConversationResponse,
    TemplateResponse,
    RenderTemplateRequest,
    RenderedTemplate,
)
from domain.schemas.tracking_schemas import (
    CheckInCreate,
    WeightLogCreate,
    CheckInResponse,
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
from domain.schemas.dashboard_schemas import (
    AdminDashboardResponse,
    ClientDashboardResponse,
    ClientProgressResponse,
    BookingStatsResponse,
    SegmentationResponse,
    EngagementResponse,
    MessageStatsResponse,
    AtRiskCustomer,
    AnalyticsEventCreate,
    AnalyticsEventResponse,
    SearchResult,
    SearchResponse,
)

__all__ = [
    # Auth
    "SignUpRequest",
    "AdminSignUpRequest",
    "SignInRequest",
    "TokenResponse",
    "PasswordResetRequest",
    "PasswordResetRequested",
    "PasswordResetConfirm",
    "PasswordChangeRequest",
    # Profiles
    "ProfileResponse",
    "MeResponse",
    "ProfileUpdate",
    "AvatarResponse",
    # Customers
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerDetailResponse",
    "WizardValidateRequest",
    "WizardValidateResponse",
    # Bookings
    "BookingCreate",
    "BookingUpdate",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookableCustomer",
    "BookingOptionsResponse",
    # Meal plans
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealEntryIn",
    "GridCellIn",
    "SaveGridRequest",
    "MealPlanItemResponse",
    "MealPlanResponse",
    "MealPlanDetailResponse",
    "NutritionSummaryResponse",
    "MacroSplitRequest",
    "MacroSplitResponse",
    "ShoppingListRequest",
    "ShoppingListResponse",
    "ClientWeekPlanResponse",
    # Messages
    "MessageCreate",
    "ClientMessageCreate",
    "MessageResponse",
    "ConversationResponse",
    "TemplateResponse",
    "RenderTemplateRequest",
    "RenderedTemplate",
    # Tracking
    "CheckInCreate",
    "WeightLogCreate",
    "CheckInResponse",
    "HabitCreate",
    "HabitUpdate",
    "HabitResponse",
    "ClientHabitResponse",
    "HabitToggleRequest",
    "HabitToggleResponse",
    "FoodLogCreate",
    "FoodLogResponse",
    "FoodDaySummary",
    "WaterLogCreate",
    "WaterLogResponse",
    "WaterSummary",
    # Dashboards, analytics, search
    "AdminDashboardResponse",
    "ClientDashboardResponse",
    "ClientProgressResponse",
    "BookingStatsResponse",
    "SegmentationResponse",
    "EngagementResponse",
    "MessageStatsResponse",
    "AtRiskCustomer",
    "AnalyticsEventCreate",
    "AnalyticsEventResponse",
    "SearchResult",
    "SearchResponse",
]

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import date, datetime
from uuid import UUID

from domain.enums import MealType


# ---------------------------------------------------------------- check-ins


class CheckInCreate(BaseModel):
    """Daily wellness check-in filled in by a client"""

    weight_kg: Optional[float] = Field(None, gt=0, lt=500)
    mood_score: Optional[int] = Field(None, ge=1, le=5)
    energy_score: Optional[int] = Field(None, ge=1, le=5)
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    stress_level: Optional[int] = Field(None, ge=1, le=5)
    hunger_level: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class WeightLogCreate(BaseModel):
    weight_kg: float = Field(..., gt=0, lt=500)


class CheckInResponse(BaseModel):
    id: UUID
    customer_id: Optional[UUID] = None
    check_in_date: date
    weight_kg: Optional[float] = None
    mood_score: Optional[int] = None
    energy_score: Optional[int] = None
    sleep_hours: Optional[float] = None
    stress_level: Optional[int] = None
    hunger_level: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    customer_name: Optional[str] = None

    model_config = {"from_attributes": True}


# ------------------------------------------------------------------- habits


class HabitCreate(BaseModel):
    habit_name: str = Field(..., min_length=1)
    target_frequency: int = Field(7, ge=1, le=7)
    icon: Optional[str] = None
    color: Optional[str] = None
    customer_id: Optional[UUID] = Field(
        None, description="Required when a coach creates the habit"
    )


class HabitUpdate(BaseModel):
    habit_name: Optional[str] = Field(None, min_length=1)
    target_frequency: Optional[int] = Field(None, ge=1, le=7)
    icon: Optional[str] = None
    color: Optional[str] = None


class HabitResponse(BaseModel):
    id: UUID
    customer_id: Optional[UUID] = None
    habit_name: str
    target_frequency: Optional[int] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    customer_name: Optional[str] = None
    completed_this_week: int = 0

    model_config = {"from_attributes": True}


class ClientHabitResponse(BaseModel):
    id: UUID
    habit_name: str
    icon: str
    color: str
    target_days: int
    week_progress: List[bool]
    completed_days: int
    streak: int


class HabitToggleRequest(BaseModel):
    day_index: int = Field(..., ge=0, le=6, description="0 = Monday")


class HabitToggleResponse(BaseModel):
    habit_id: UUID
    day_index: int
    completed: bool


# ---------------------------------------------------------------- food logs


class FoodLogCreate(BaseModel):
    food_name: str = Field(..., min_length=1)
    meal_type: MealType
    logged_date: Optional[date] = None
    calories: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator("food_name")
    @classmethod
    def food_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Food name must not be empty")
        return v


class FoodLogResponse(BaseModel):
    id: UUID
    customer_id: Optional[UUID] = None
    logged_date: date
    meal_type: Optional[str] = None
    food_name: str
    calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FoodDaySummary(BaseModel):
    date: date
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float
    calorie_goal: int
    calorie_percentage: int
    meals: Dict[str, List[FoodLogResponse]]


# -------------------------------------------------------------------- water


class WaterLogCreate(BaseModel):
    amount_ml: int = Field(..., gt=0, le=5000)


class WaterLogResponse(BaseModel):
    id: UUID
    logged_date: date
    amount_ml: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class WaterSummary(BaseModel):
    date: date
    total_ml: int
    goal_ml: int
    percentage: int
    remaining_ml: int
    quick_add_amounts: List[int]
    entries: List[WaterLogResponse] = Field(default_factory=list)

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict
from datetime import date, datetime
from uuid import UUID

from domain.enums import MealType


class MealPlanCreate(BaseModel):
    customer_id: UUID
    name: str = Field(..., min_length=1)
    start_date: date
    end_date: Optional[date] = Field(
        None, description="Defaults to six days after start_date"
    )
    week_number: Optional[int] = Field(None, ge=1)
    daily_calories: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MealPlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    week_number: Optional[int] = Field(None, ge=1)
    daily_calories: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class MealEntryIn(BaseModel):
    """One meal as entered into the weekly grid"""

    recipe_name: str = Field(..., min_length=1)
    calories: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    instructions: Optional[str] = None


class GridCellIn(MealEntryIn):
    day_of_week: int = Field(..., ge=0, le=6)
    meal_type: MealType


class SaveGridRequest(BaseModel):
    cells: List[GridCellIn] = Field(default_factory=list)


class MealPlanItemResponse(BaseModel):
    id: UUID
    meal_plan_id: UUID
    day_of_week: Optional[int] = None
    meal_type: Optional[str] = None
    recipe_name: str
    calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    instructions: Optional[str] = None

    model_config = {"from_attributes": True}


class MealPlanResponse(BaseModel):
    id: UUID
    customer_id: UUID
    name: str
    week_number: int
    start_date: date
    end_date: date
    daily_calories: Optional[int] = None
    notes: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    customer_name: Optional[str] = None

    model_config = {"from_attributes": True}


class MealPlanDetailResponse(MealPlanResponse):
    items: List[MealPlanItemResponse] = Field(default_factory=list)


class MacroTotals(BaseModel):
    calories: float = 0
    protein_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0


class DayNutrition(MacroTotals):
    day_of_week: int


class NutritionSummaryResponse(BaseModel):
    days: List[DayNutrition]
    weekly_totals: MacroTotals
    weekly_average: MacroTotals
    weekly_average_calories: int
    daily_goal: int
    compliance_rate: int
    average_calories: int
    calorie_progress: int


class MacroSplitRequest(BaseModel):
    protein_g: float = Field(0, ge=0)
    carbs_g: float = Field(0, ge=0)
    fat_g: float = Field(0, ge=0)


class MacroSplitResponse(BaseModel):
    protein_pct: int
    carbs_pct: int
    fat_pct: int


class ShoppingListRequest(BaseModel):
    days: List[int] = Field(default_factory=lambda: list(range(7)))
    meal_types: List[MealType] = Field(default_factory=lambda: list(MealType))
    checked: List[str] = Field(
        default_factory=list, description="Recipe names already ticked off"
    )


class ShoppingListItem(BaseModel):
    recipe_name: str
    count: int
    checked: bool = False


class ShoppingListResponse(BaseModel):
    groups: Dict[str, List[ShoppingListItem]]
    total_items: int
    text: str


class ClientDayPlan(BaseModel):
    day_of_week: int
    date: date
    total_calories: float
    items: List[MealPlanItemResponse]


class ClientWeekPlanResponse(BaseModel):
    plan: Optional[MealPlanResponse] = None
    week_start: date
    days: List[ClientDayPlan] = Field(default_factory=list)

"""Coach routes for weekly meal plans"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, require_admin
from api.responses import ERROR_RESPONSES, DeletedResponse, deleted_response
from domain import nutrition
from domain.models import Profile
from domain.schemas.meal_plan_schemas import (
    MealPlanCreate,
    MealPlanUpdate,
    SaveGridRequest,
    MealPlanResponse,
    MealPlanDetailResponse,
    NutritionSummaryResponse,
    MacroSplitRequest,
    MacroSplitResponse,
    ShoppingListRequest,
    ShoppingListResponse,
)
from services.meal_plan_service import MealPlanService

router = APIRouter(
    prefix="/meal-plans",
    tags=["Meal Plans"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger("coachdesk.api.meal_plans")


@router.get("", response_model=List[MealPlanResponse])
def list_meal_plans(
    customer_id: Optional[UUID] = Query(None), db: Session = Depends(get_db)
):
    """Plans newest first, optionally for one customer"""
    return MealPlanService.list_meal_plans(db, customer_id=customer_id)


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def create_meal_plan(
    payload: MealPlanCreate,
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return MealPlanService.create_meal_plan(db, admin, payload)


@router.post("/macro-split", response_model=MacroSplitResponse)
def macro_split(payload: MacroSplitRequest):
    """Percentage of protein, carbs and fat for a single meal"""
    return nutrition.macro_split(payload.protein_g, payload.carbs_g, payload.fat_g)


@router.get("/{plan_id}", response_model=MealPlanDetailResponse)
def get_meal_plan(plan_id: UUID, db: Session = Depends(get_db)):
    return MealPlanService.get_meal_plan(db, plan_id)


@router.put("/{plan_id}", response_model=MealPlanResponse)
def update_meal_plan(plan_id: UUID, payload: MealPlanUpdate, db: Session = Depends(get_db)):
    return MealPlanService.update_meal_plan(db, plan_id, payload)


@router.delete("/{plan_id}", response_model=DeletedResponse)
def delete_meal_plan(plan_id: UUID, db: Session = Depends(get_db)):
    MealPlanService.delete_meal_plan(db, plan_id)
    return deleted_response(plan_id)


@router.put("/{plan_id}/grid", response_model=MealPlanDetailResponse)
def save_grid(plan_id: UUID, payload: SaveGridRequest, db: Session = Depends(get_db)):
    """
    Replace the plan's meals with the submitted grid.

    Every filled cell becomes one item; cells that are left out are removed.
    """
    grid = MealPlanService.grid_from_cells(payload.cells)
    return MealPlanService.save_grid(db, plan_id, grid)


@router.get("/{plan_id}/nutrition", response_model=NutritionSummaryResponse)
def nutrition_summary(plan_id: UUID, db: Session = Depends(get_db)):
    return MealPlanService.nutrition_summary(db, plan_id)


@router.post("/{plan_id}/shopping-list", response_model=ShoppingListResponse)
def shopping_list(
    plan_id: UUID, payload: ShoppingListRequest, db: Session = Depends(get_db)
):
    return MealPlanService.shopping_list(
        db,
        plan_id,
        days=payload.days,
        meal_types=[m.value for m in payload.meal_types],
        checked=payload.checked,
    )

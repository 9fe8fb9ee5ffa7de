"""Coach routes for client habits"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_db, require_admin
from api.responses import ERROR_RESPONSES, DeletedResponse, deleted_response
from domain.mappers import HabitMapper
from domain.schemas.tracking_schemas import HabitCreate, HabitUpdate, HabitResponse
from services.habit_service import HabitService

router = APIRouter(
    prefix="/habits",
    tags=["Habits"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger("coachdesk.api.habits")


@router.get("", response_model=List[HabitResponse])
def list_habits(db: Session = Depends(get_db)):
    """Every habit with its completions since Monday"""
    return [
        HabitMapper.to_response(habit, completed)
        for habit, completed in HabitService.list_habits(db)
    ]


@router.post("", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(payload: HabitCreate, db: Session = Depends(get_db)):
    habit = HabitService.add_habit(db, payload.customer_id, payload)
    return HabitMapper.to_response(habit)


@router.put("/{habit_id}", response_model=HabitResponse)
def update_habit(habit_id: UUID, payload: HabitUpdate, db: Session = Depends(get_db)):
    return HabitMapper.to_response(HabitService.update_habit(db, habit_id, payload))


@router.delete("/{habit_id}", response_model=DeletedResponse)
def delete_habit(habit_id: UUID, db: Session = Depends(get_db)):
    HabitService.delete_habit(db, habit_id)
    return deleted_response(habit_id)

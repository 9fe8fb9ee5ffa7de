"""Coach view of client check-ins"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from api.dependencies import get_db, require_admin
from api.responses import ERROR_RESPONSES
from domain.schemas.tracking_schemas import CheckInResponse
from services.check_in_service import CheckInService

router = APIRouter(
    prefix="/check-ins",
    tags=["Check-ins"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[CheckInResponse])
def list_check_ins(
    limit: int = Query(50, ge=1, le=500), db: Session = Depends(get_db)
):
    """Latest check-ins across all customers"""
    return CheckInService.list_check_ins(db, limit=limit)

"""Coach home screen"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_admin
from domain.schemas.dashboard_schemas import AdminDashboardResponse
from services.dashboard_service import DashboardService

router = APIRouter(
    prefix="/dashboard", tags=["Dashboard"], dependencies=[Depends(require_admin)]
)


@router.get("", response_model=AdminDashboardResponse)
def admin_dashboard(db: Session = Depends(get_db)):
    return DashboardService.admin_dashboard(db)

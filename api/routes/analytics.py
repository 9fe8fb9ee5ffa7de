"""Coach analytics routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_db, require_admin
from domain.models import Profile
from domain.schemas.dashboard_schemas import (
    BookingStatsResponse,
    SegmentationResponse,
    EngagementResponse,
    MessageStatsResponse,
    AtRiskCustomer,
)
from services.analytics_service import AnalyticsService

router = APIRouter(
    prefix="/analytics", tags=["Analytics"], dependencies=[Depends(require_admin)]
)
logger = logging.getLogger("coachdesk.api.analytics")


@router.get("/bookings", response_model=BookingStatsResponse)
def booking_stats(db: Session = Depends(get_db)):
    """This month's booking totals, rates and type breakdown"""
    return AnalyticsService.booking_stats(db)


@router.get("/segmentation", response_model=SegmentationResponse)
def segmentation(db: Session = Depends(get_db)):
    return AnalyticsService.segmentation(db)


@router.get("/engagement", response_model=EngagementResponse)
def engagement(db: Session = Depends(get_db)):
    """Feature usage, twelve weeks of compliance and thirty days of active users"""
    return AnalyticsService.engagement(db)


@router.get("/messages", response_model=MessageStatsResponse)
def message_stats(admin: Profile = Depends(require_admin), db: Session = Depends(get_db)):
    return AnalyticsService.message_stats(db, admin)


@router.get("/at-risk", response_model=List[AtRiskCustomer])
def at_risk_customers(db: Session = Depends(get_db)):
    return AnalyticsService.at_risk_customers(db)

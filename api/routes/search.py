"""Global search box"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_admin
from domain.schemas.dashboard_schemas import SearchResponse
from services.search_service import SearchService

router = APIRouter(prefix="/search", tags=["Search"], dependencies=[Depends(require_admin)])


@router.get("", response_model=SearchResponse)
def search(q: str = Query("", description="Text to look for"), db: Session = Depends(get_db)):
    """Up to five customers, three bookings and three meal plans"""
    return SearchResponse(query=q, results=SearchService.search(db, q))

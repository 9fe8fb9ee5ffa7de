"""
Analytics Repository - usage events recorded by the portals
"""

from typing import List
from datetime import datetime
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import AnalyticsEvent


class AnalyticsEventRepository(BaseRepository[AnalyticsEvent]):
    """Repository for analytics events"""

    def __init__(self, db: Session):
        super().__init__(db, AnalyticsEvent)

    def since(self, start: datetime) -> List[AnalyticsEvent]:
        return (
            self.db.query(AnalyticsEvent)
            .filter(AnalyticsEvent.created_at >= start)
            .all()
        )

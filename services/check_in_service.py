from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from domain.clock import today
from domain.models import CheckIn, Customer
from domain.schemas.tracking_schemas import CheckInCreate
from repositories import CheckInRepository

logger = logging.getLogger("coachdesk.check_in")


class CheckInService:
    """Wellness check-ins and weight logging"""

    @staticmethod
    def list_check_ins(db: Session, limit: int = 50) -> List[CheckIn]:
        """Latest check-ins across all customers"""
        return CheckInRepository(db).recent(limit=limit)

    @staticmethod
    def list_for_customer(db: Session, customer: Customer) -> List[CheckIn]:
        return CheckInRepository(db).for_customer(customer.id)

    @staticmethod
    def add_check_in(db: Session, customer: Customer, data: CheckInCreate) -> CheckIn:
        """Record today's check-in for the client"""
        check_in = CheckInRepository(db).create(
            CheckIn(customer_id=customer.id, check_in_date=today(), **data.model_dump())
        )
        logger.info(
            f"check_in_recorded customer_id={customer.id} check_in_id={check_in.id} "
            f"has_weight={check_in.weight_kg is not None}"
        )
        return check_in

    @staticmethod
    def log_weight(db: Session, customer: Customer, weight_kg: float) -> CheckIn:
        """A weigh-in is stored as a check-in carrying only the weight"""
        check_in = CheckInRepository(db).create(
            CheckIn(customer_id=customer.id, check_in_date=today(), weight_kg=weight_kg)
        )
        logger.info(f"weight_logged customer_id={customer.id} weight_kg={weight_kg}")
        return check_in

    @staticmethod
    def latest_weight(db: Session, customer: Customer) -> Optional[float]:
        check_in = CheckInRepository(db).latest_with_weight(customer.id)
        return check_in.weight_kg if check_in else None

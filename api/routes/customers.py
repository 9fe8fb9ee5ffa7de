"""Coach routes for managing customers"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, require_admin
from api.responses import ERROR_RESPONSES, DeletedResponse, deleted_response
from domain.enums import CustomerStatus
from domain.mappers import CustomerMapper
from domain.models import Profile
from domain.schemas.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerDetailResponse,
    WizardValidateRequest,
    WizardValidateResponse,
)
from domain.wizard import CustomerWizard, STEP_TITLES
from services.customer_service import CustomerService

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger("coachdesk.api.customers")


@router.get("", response_model=List[CustomerResponse])
def list_customers(
    search: Optional[str] = Query(None, description="Matches name or email"),
    status: Optional[CustomerStatus] = Query(None),
    db: Session = Depends(get_db),
):
    return CustomerService.list_customers(db, search=search, status=status)


@router.post("/wizard/validate", response_model=WizardValidateResponse)
def validate_wizard_step(payload: WizardValidateRequest):
    """Check one step of the new-customer wizard without saving anything"""
    wizard = CustomerWizard(step=payload.step)
    wizard.update(**payload.data)
    missing = wizard.missing_fields(payload.step)
    return WizardValidateResponse(
        step=payload.step,
        title=STEP_TITLES[payload.step],
        valid=not missing,
        missing_fields=missing,
        can_submit=wizard.can_submit(),
        tags=wizard.tags,
    )


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a customer and the profile they will later sign up with"""
    return CustomerService.create_customer(db, admin, payload)


@router.get("/{customer_id}", response_model=CustomerDetailResponse)
def get_customer(customer_id: UUID, db: Session = Depends(get_db)):
    customer, latest_weight, days_remaining = CustomerService.get_customer_detail(
        db, customer_id
    )
    return CustomerMapper.to_detail(customer, latest_weight, days_remaining)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: UUID, payload: CustomerUpdate, db: Session = Depends(get_db)
):
    return CustomerService.update_customer(db, customer_id, payload)


@router.delete("/{customer_id}", response_model=DeletedResponse)
def delete_customer(customer_id: UUID, db: Session = Depends(get_db)):
    CustomerService.delete_customer(db, customer_id)
    return deleted_response(customer_id)

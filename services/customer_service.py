from typing import List, Optional, Tuple
from datetime import date
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from app.exceptions import ServiceValidationError, NotFoundError, ConflictError
from domain.clock import today
from domain.enums import AppRole, CustomerStatus
from domain.models import Customer, CheckIn, Profile
from domain.schemas.customer_schemas import CustomerCreate, CustomerUpdate
from repositories import CustomerRepository, ProfileRepository, CheckInRepository

logger = logging.getLogger("coachdesk.customer")

PROFILE_FIELDS = (
    "full_name",
    "phone",
    "birth_date",
    "gender",
    "height_cm",
    "weight_goal_kg",
    "activity_level",
)
CUSTOMER_FIELDS = (
    "status",
    "subscription_type",
    "subscription_start_date",
    "subscription_end_date",
    "notes",
    "tags",
    "assigned_admin_id",
)


class CustomerService:
    """Business logic for the coach's customer list"""

    @staticmethod
    def list_customers(
        db: Session,
        search: Optional[str] = None,
        status: Optional[CustomerStatus] = None,
    ) -> List[Customer]:
        search = (search or "").strip() or None
        customers = CustomerRepository(db).list(search=search, status=status)
        logger.info(
            f"customers_listed count={len(customers)} search={search!r} status={status}"
        )
        return customers

    @staticmethod
    def get_customer(db: Session, customer_id: UUID) -> Customer:
        customer = CustomerRepository(db).get_by_id(customer_id)
        if not customer:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    @staticmethod
    def get_for_user(db: Session, user_id: UUID) -> Optional[Customer]:
        return CustomerRepository(db).get_by_user_id(user_id)

    @staticmethod
    def days_remaining(end_date: Optional[date], on: Optional[date] = None) -> Optional[int]:
        """Whole days left on a subscription, never negative; None without an end date"""
        if end_date is None:
            return None
        return max((end_date - (on or today())).days, 0)

    @staticmethod
    def latest_weight(db: Session, customer_id: UUID) -> Optional[float]:
        check_in = CheckInRepository(db).latest_with_weight(customer_id)
        return check_in.weight_kg if check_in else None

    @staticmethod
    def get_customer_detail(
        db: Session, customer_id: UUID
    ) -> Tuple[Customer, Optional[float], Optional[int]]:
        """Customer with latest recorded weight and days left on the subscription"""
        customer = CustomerService.get_customer(db, customer_id)
        return (
            customer,
            CustomerService.latest_weight(db, customer.id),
            CustomerService.days_remaining(customer.subscription_end_date),
        )

    @staticmethod
    def create_customer(db: Session, admin: Profile, data: CustomerCreate) -> Customer:
        """
        Create the client's profile and customer record in one transaction.

        The profile gets the client role and no password; the client claims it
        later by signing up with the same email. A starting weight becomes the
        first check-in.
        """
        profile_repo = ProfileRepository(db)
        if profile_repo.get_by_email(data.email):
            raise ConflictError(f"A user with email {data.email} already exists")

        if (
            data.subscription_start_date
            and data.subscription_end_date
            and data.subscription_end_date < data.subscription_start_date
        ):
            raise ServiceValidationError(
                "Subscription end date must not be before the start date"
            )

        try:
            profile = profile_repo.add(
                email=data.email,
                full_name=data.full_name,
                **{f: getattr(data, f) for f in PROFILE_FIELDS if f != "full_name"},
            )
            profile_repo.add_role(profile, AppRole.CLIENT)

            customer = Customer(
                user_id=profile.id,
                assigned_admin_id=admin.id,
                status=data.status,
                subscription_type=data.subscription_type,
                subscription_start_date=data.subscription_start_date,
                subscription_end_date=data.subscription_end_date,
                notes=data.notes,
                tags=list(data.tags),
            )
            db.add(customer)
            db.flush()

            if data.weight_kg is not None:
                db.add(
                    CheckIn(
                        customer_id=customer.id,
                        check_in_date=today(),
                        weight_kg=data.weight_kg,
                    )
                )
            db.commit()
            db.refresh(customer)
        except IntegrityError as e:
            db.rollback()
            logger.error(f"customer_create_failed email={data.email} error={str(e)}")
            raise ConflictError(f"A user with email {data.email} already exists")

        logger.info(
            f"customer_created customer_id={customer.id} admin_id={admin.id} "
            f"tags={len(customer.tags or [])} starting_weight={data.weight_kg is not None}"
        )
        return customer

    @staticmethod
    def update_customer(db: Session, customer_id: UUID, data: CustomerUpdate) -> Customer:
        customer = CustomerService.get_customer(db, customer_id)
        fields = data.model_dump(exclude_unset=True)

        if "status" in fields and fields["status"] is None:
            raise ServiceValidationError("status must not be null")
        if "full_name" in fields and not (fields["full_name"] or "").strip():
            raise ServiceValidationError("full_name must not be blank")
        start = fields.get("subscription_start_date", customer.subscription_start_date)
        end = fields.get("subscription_end_date", customer.subscription_end_date)
        if start and end and end < start:
            raise ServiceValidationError(
                "Subscription end date must not be before the start date"
            )

        for key in PROFILE_FIELDS:
            if key in fields:
                setattr(customer.profile, key, fields[key])
        for key in CUSTOMER_FIELDS:
            if key in fields:
                setattr(customer, key, fields[key])

        db.commit()
        db.refresh(customer)
        logger.info(f"customer_updated customer_id={customer_id} fields={sorted(fields)}")
        return customer

    @staticmethod
    def delete_customer(db: Session, customer_id: UUID) -> None:
        """
        Remove a customer and everything recorded for them.

        The login goes too, unless it also belongs to a coach.
        """
        customer = CustomerService.get_customer(db, customer_id)
        profile = customer.profile
        if profile is not None and not profile.has_role(AppRole.ADMIN):
            db.delete(profile)
        else:
            db.delete(customer)
        db.commit()
        logger.info(f"customer_deleted customer_id={customer_id}")

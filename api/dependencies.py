"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, UnauthorizedError
from domain.enums import AppRole
from domain.models import Customer, Profile, get_db_session
from services.auth_service import AuthService
from services.customer_service import CustomerService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Profile:
    """Profile behind the ``Authorization: Bearer`` token"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")
    return AuthService.authenticate(db, credentials.credentials)


def require_admin(user: Profile = Depends(get_current_user)) -> Profile:
    """Coach-only routes"""
    if not user.has_role(AppRole.ADMIN):
        raise ForbiddenError("Admin access required")
    return user


def get_client_customer(
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Customer:
    """The customer record linked to the logged-in client"""
    customer = CustomerService.get_for_user(db, user.id)
    if customer is None:
        raise ForbiddenError("No client record is linked to this account")
    return customer

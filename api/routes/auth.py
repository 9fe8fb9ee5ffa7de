"""Sign up, sign in and password management"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from api.responses import ERROR_RESPONSES
from domain.models import Profile
from domain.schemas.auth_schemas import (
    SignUpRequest,
    AdminSignUpRequest,
    SignInRequest,
    TokenResponse,
    PasswordResetRequest,
    PasswordResetRequested,
    PasswordResetConfirm,
    PasswordChangeRequest,
)
from domain.schemas.profile_schemas import MeResponse, ProfileResponse
from services.auth_service import AuthService
from services.customer_service import CustomerService

router = APIRouter(prefix="/auth", tags=["Auth"], responses=ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.auth")

RESET_REQUESTED = "If the email is registered, a reset link has been sent"


def _token_response(profile: Profile, token: str) -> TokenResponse:
    return TokenResponse(access_token=token, user_id=profile.id, roles=profile.role_names)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, db: Session = Depends(get_db)):
    """Register a client login, or claim a profile a coach already created"""
    profile, token = AuthService.sign_up(
        db, payload.email, payload.password, payload.full_name
    )
    return _token_response(profile, token)


@router.post("/admins", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up_admin(payload: AdminSignUpRequest, db: Session = Depends(get_db)):
    """Register a coach; requires the configured signup code"""
    profile, token = AuthService.sign_up_admin(
        db, payload.email, payload.password, payload.full_name, payload.signup_code
    )
    return _token_response(profile, token)


@router.post("/signin", response_model=TokenResponse)
def sign_in(payload: SignInRequest, db: Session = Depends(get_db)):
    profile, token = AuthService.sign_in(db, payload.email, payload.password)
    return _token_response(profile, token)


@router.get("/me", response_model=MeResponse)
def me(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    """Current profile with roles and linked customer record"""
    customer = CustomerService.get_for_user(db, user.id)
    profile = ProfileResponse.model_validate(user)
    return MeResponse(
        **profile.model_dump(),
        roles=user.role_names,
        customer_id=customer.id if customer else None,
    )


@router.post("/password-reset", response_model=PasswordResetRequested)
def request_password_reset(payload: PasswordResetRequest, db: Session = Depends(get_db)):
    """Always answers the same way so registered emails cannot be discovered"""
    token = AuthService.request_password_reset(db, payload.email)
    return PasswordResetRequested(message=RESET_REQUESTED, reset_token=token)


@router.post("/password-reset/confirm", status_code=status.HTTP_204_NO_CONTENT)
def confirm_password_reset(payload: PasswordResetConfirm, db: Session = Depends(get_db)):
    AuthService.confirm_password_reset(db, payload.token, payload.new_password)


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    payload: PasswordChangeRequest,
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    AuthService.change_password(db, user, payload.current_password, payload.new_password)

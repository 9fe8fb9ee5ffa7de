from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import hmac
import logging

from app.config import settings
from app.exceptions import (
    ServiceValidationError,
    ConflictError,
    UnauthorizedError,
    ForbiddenError,
)
from app import security
from domain.enums import AppRole
from domain.models import Profile
from repositories import ProfileRepository

logger = logging.getLogger("coachdesk.auth")

INVALID_CREDENTIALS = "Invalid login credentials"


class AuthService:
    """Registration, login and password management"""

    @staticmethod
    def _check_password(password: str) -> None:
        if len(password or "") < settings.min_password_length:
            raise ServiceValidationError(
                f"Password must be at least {settings.min_password_length} characters"
            )

    @staticmethod
    def issue_token(profile: Profile) -> str:
        return security.create_access_token(profile.id, profile.role_names)

    @staticmethod
    def sign_up(
        db: Session,
        email: str,
        password: str,
        full_name: str,
        role: AppRole = AppRole.CLIENT,
    ) -> Tuple[Profile, str]:
        """
        Register a login.

        An invited profile (created by a coach, no password yet) is claimed by
        setting its password; any other existing email is a conflict.
        """
        AuthService._check_password(password)
        repo = ProfileRepository(db)
        profile = repo.get_by_email(email)

        try:
            if profile is not None:
                if profile.password_hash:
                    raise ConflictError("User already registered")
                profile.password_hash = security.hash_password(password)
                if full_name and not profile.full_name:
                    profile.full_name = full_name
                claimed = True
            else:
                profile = repo.add(
                    email=email,
                    full_name=full_name.strip(),
                    password_hash=security.hash_password(password),
                )
                claimed = False
            repo.add_role(profile, role)
            db.commit()
            db.refresh(profile)
        except IntegrityError as e:
            db.rollback()
            logger.error(f"sign_up_failed email={email} error={str(e)}")
            raise ConflictError("User already registered")

        logger.info(
            f"user_signed_up user_id={profile.id} role={role.value} claimed_invite={claimed}"
        )
        return profile, AuthService.issue_token(profile)

    @staticmethod
    def sign_up_admin(
        db: Session, email: str, password: str, full_name: str, signup_code: str
    ) -> Tuple[Profile, str]:
        """Register a coach; requires the configured admin signup code"""
        expected = settings.admin_signup_code
        if not expected or not hmac.compare_digest(signup_code or "", expected):
            logger.warning(f"admin_signup_rejected email={email}")
            raise ForbiddenError("Admin registration is not allowed")
        return AuthService.sign_up(db, email, password, full_name, role=AppRole.ADMIN)

    @staticmethod
    def sign_in(db: Session, email: str, password: str) -> Tuple[Profile, str]:
        profile = ProfileRepository(db).get_by_email(email)
        if profile is None or not security.verify_password(password, profile.password_hash):
            logger.warning(f"sign_in_failed email={email}")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        logger.info(f"user_signed_in user_id={profile.id}")
        return profile, AuthService.issue_token(profile)

    @staticmethod
    def authenticate(db: Session, token: str) -> Profile:
        """Resolve a bearer token to its profile"""
        claims = security.decode_token(token)
        try:
            user_id = UUID(str(claims["sub"]))
        except ValueError:
            raise UnauthorizedError("Invalid or expired token")
        profile = ProfileRepository(db).get_by_id(user_id)
        if profile is None:
            raise UnauthorizedError("User not found")
        return profile

    @staticmethod
    def request_password_reset(db: Session, email: str) -> Optional[str]:
        """
        Create a reset token for a known email.

        Mail delivery is not part of the service: the token is logged and
        returned outside production. Unknown emails return None.
        """
        profile = ProfileRepository(db).get_by_email(email)
        if profile is None:
            logger.info(f"password_reset_unknown_email email={email}")
            return None

        token = security.create_reset_token(profile.id, profile.password_hash)
        if settings.is_production():
            logger.info(f"password_reset_requested user_id={profile.id}")
            return None
        logger.info(f"password_reset_requested user_id={profile.id} token={token}")
        return token

    @staticmethod
    def confirm_password_reset(db: Session, token: str, new_password: str) -> Profile:
        AuthService._check_password(new_password)
        claims = security.decode_token(token, expected_type=security.RESET_TOKEN)
        try:
            profile = ProfileRepository(db).get_by_id(UUID(str(claims["sub"])))
        except ValueError:
            profile = None
        if profile is None or not security.reset_token_matches(
            claims, profile.password_hash
        ):
            raise UnauthorizedError("Invalid or expired token")

        profile.password_hash = security.hash_password(new_password)
        db.commit()
        db.refresh(profile)
        logger.info(f"password_reset_completed user_id={profile.id}")
        return profile

    @staticmethod
    def change_password(
        db: Session, profile: Profile, current_password: str, new_password: str
    ) -> Profile:
        if not security.verify_password(current_password, profile.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        AuthService._check_password(new_password)
        profile.password_hash = security.hash_password(new_password)
        db.commit()
        db.refresh(profile)
        logger.info(f"password_changed user_id={profile.id}")
        return profile

"""
Shared test fixtures and utilities for the CoachDesk test suite.

This module contains the test client, a database session fixture backed by an
in-memory SQLite database, and factories for realistic coaches and clients.
"""

import uuid
from types import SimpleNamespace
from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from main import app
from domain.enums import AppRole, CustomerStatus
from domain.models import Base, SessionLocal, engine
from domain.schemas import CustomerCreate
from services.auth_service import AuthService
from services.customer_service import CustomerService

# The lifespan is not entered, so no startup work touches the database
client = TestClient(app)


# Helper function to generate unique emails
def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


# Realistic default client profiles
REALISTIC_CLIENTS = {
    "default": {"full_name": "Sarah Martinez", "email_prefix": "sarah.martinez"},
    "athlete": {"full_name": "Michael Chen", "email_prefix": "michael.chen"},
    "casual": {"full_name": "Emma Johnson", "email_prefix": "emma.johnson"},
}


# =============================================================================
# DATABASE SESSION FIXTURE
# =============================================================================


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    The in-memory SQLite database lives on a single shared connection, so the
    routes called through ``client`` see the same rows as this session.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


# =============================================================================
# FACTORIES
# =============================================================================


def make_admin(db: Session, full_name: str = "Coach Carter", password: str = "secret123"):
    """Register a coach through the auth service and return the profile"""
    profile, _ = AuthService.sign_up(
        db, unique_email("coach"), password, full_name, role=AppRole.ADMIN
    )
    return profile


def make_customer(db: Session, admin, profile_type: str = "default", **overrides):
    """Create a client the way a coach does (profile without password)"""
    defaults = REALISTIC_CLIENTS.get(profile_type, REALISTIC_CLIENTS["default"])
    data = {
        "full_name": defaults["full_name"],
        "email": unique_email(defaults["email_prefix"]),
    }
    data.update(overrides)
    return CustomerService.create_customer(db, admin, CustomerCreate(**data))


def auth_headers(profile) -> dict:
    return {"Authorization": f"Bearer {AuthService.issue_token(profile)}"}


# =============================================================================
# LIGHTWEIGHT STAND-INS FOR MONKEYPATCHED SERVICES
# =============================================================================


def make_profile_ns(full_name: str = "Sarah Martinez", **fields) -> SimpleNamespace:
    now = datetime.now(timezone.utc)
    values = dict(
        id=uuid.uuid4(),
        email=unique_email("sarah.martinez"),
        full_name=full_name,
        phone=None,
        birth_date=None,
        gender=None,
        height_cm=None,
        weight_goal_kg=None,
        activity_level=None,
        profile_image_url=None,
        created_at=now,
        updated_at=now,
    )
    values.update(fields)
    return SimpleNamespace(**values)


def make_customer_ns(profile=None, **fields) -> SimpleNamespace:
    profile = profile or make_profile_ns()
    now = datetime.now(timezone.utc)
    values = dict(
        id=uuid.uuid4(),
        user_id=profile.id,
        assigned_admin_id=None,
        status=CustomerStatus.ACTIVE,
        subscription_type="premium",
        subscription_start_date=None,
        subscription_end_date=None,
        notes=None,
        tags=[],
        created_at=now,
        updated_at=now,
        profile=profile,
    )
    values.update(fields)
    return SimpleNamespace(**values)

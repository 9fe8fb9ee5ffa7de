"""
Tests for the shared error envelope and middleware behavior.

Every failure response has the same shape:
    {"success": false, "error": {"code", "message", "details"?}, "timestamp"}
"""

import warnings
from decimal import Decimal
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_admin, make_customer, auth_headers
from api.middleware import make_serializable
from api.responses import error_response
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError


def _assert_envelope(response, status_code: int, code: str):
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    assert "timestamp" in body
    return body


def test_error_response_shape():
    body = error_response("NOT_FOUND", "Nothing here", {"id": "x"})
    assert body["success"] is False
    assert body["error"] == {"code": "NOT_FOUND", "message": "Nothing here", "details": {"id": "x"}}
    assert "details" not in error_response("NOT_FOUND", "Nothing here")["error"]


def test_exception_defaults_and_dict():
    err = ServiceValidationError(details={"field": "email"})
    assert err.http_status == 400
    assert err.message == "Invalid input"
    assert err.to_dict() == {
        "code": "SERVICE_VALIDATION_ERROR",
        "message": "Invalid input",
        "details": {"field": "email"},
    }
    assert NotFoundError().http_status == 404
    assert ConflictError("dup").code == "CONFLICT"


def test_make_serializable_nested():
    value = {
        "amount": Decimal("1.5"),
        "when": date(2026, 5, 1),
        "ids": (UUID(int=1),),
        "raw": b"abc",
    }
    assert make_serializable(value) == {
        "amount": 1.5,
        "when": "2026-05-01",
        "ids": ["00000000-0000-0000-0000-000000000001"],
        "raw": "abc",
    }


def test_missing_token_401(db_session: Session):
    _assert_envelope(client.get("/customers"), 401, "UNAUTHORIZED")


def test_bad_token_401(db_session: Session):
    r = client.get("/customers", headers={"Authorization": "Bearer nonsense"})
    _assert_envelope(r, 401, "UNAUTHORIZED")


def test_client_on_admin_route_403(db_session: Session):
    from services.auth_service import AuthService

    profile, _ = AuthService.sign_up(db_session, "plain@example.com", "secret123", "Plain")
    r = client.get("/dashboard", headers=auth_headers(profile))
    _assert_envelope(r, 403, "FORBIDDEN")


def test_not_found_404(db_session: Session):
    admin = make_admin(db_session)
    r = client.get(
        "/bookings/00000000-0000-0000-0000-000000000000", headers=auth_headers(admin)
    )
    _assert_envelope(r, 404, "NOT_FOUND")


def test_unknown_route_uses_envelope(db_session: Session):
    _assert_envelope(client.get("/does-not-exist"), 404, "HTTP_404")


def test_validation_error_422_has_details(db_session: Session):
    admin = make_admin(db_session)
    r = client.post("/customers", json={"full_name": "X"}, headers=auth_headers(admin))
    body = _assert_envelope(r, 422, "VALIDATION_ERROR")
    assert any("email" in err["loc"] for err in body["error"]["details"])


def test_validation_handler_uses_current_status_name(db_session: Session):
    admin = make_admin(db_session)
    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*HTTP_422_UNPROCESSABLE_ENTITY.*")
        r = client.post("/customers", json={}, headers=auth_headers(admin))
    assert r.status_code == 422


def test_service_validation_400(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    r = client.put(
        f"/customers/{customer.id}", json={"full_name": "   "}, headers=auth_headers(admin)
    )
    _assert_envelope(r, 400, "SERVICE_VALIDATION_ERROR")


def test_duplicate_email_409(db_session: Session):
    admin = make_admin(db_session)
    r = client.post(
        "/customers",
        json={"full_name": "Coach Twin", "email": admin.email},
        headers=auth_headers(admin),
    )
    _assert_envelope(r, 409, "CONFLICT")


def test_request_id_headers(db_session: Session):
    r = client.get("/health-check")
    assert r.headers["X-Request-ID"]
    assert float(r.headers["X-Process-Time"]) >= 0

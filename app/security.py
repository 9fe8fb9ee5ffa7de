"""Password hashing and signed access tokens."""

import base64
import hashlib
import hmac
import os
from datetime import timedelta
from typing import Any, Dict, Iterable, Optional

from jose import JWTError, jwt

from app.config import settings
from app.exceptions import UnauthorizedError
from domain.clock import utcnow

# Password hashing (stdlib pbkdf2_hmac).
_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000

ACCESS_TOKEN = "access"
RESET_TOKEN = "reset"


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64url_encode(salt)}${_b64url_encode(dk)}"


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        scheme, iter_s, salt_b64, dk_b64 = password_hash.split("$", 3)
        if not scheme.startswith("pbkdf2_"):
            return False
        alg = scheme.split("_", 1)[1]
        actual = hashlib.pbkdf2_hmac(
            alg, password.encode("utf-8"), _b64url_decode(salt_b64), int(iter_s)
        )
        return hmac.compare_digest(actual, _b64url_decode(dk_b64))
    except ValueError:
        return False


def _encode(payload: Dict[str, Any], ttl: timedelta) -> str:
    now = utcnow()
    claims = dict(payload)
    claims["iat"] = int(now.timestamp())
    claims["exp"] = int((now + ttl).timestamp())
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id, roles: Iterable[str]) -> str:
    return _encode(
        {"sub": str(user_id), "roles": sorted(roles), "typ": ACCESS_TOKEN},
        timedelta(minutes=settings.token_ttl_minutes),
    )


def create_reset_token(user_id, password_hash: Optional[str]) -> str:
    """Reset token bound to the current password so it works only once."""
    return _encode(
        {
            "sub": str(user_id),
            "typ": RESET_TOKEN,
            "pwd": _password_fingerprint(password_hash),
        },
        timedelta(minutes=settings.reset_token_ttl_minutes),
    )


def _password_fingerprint(password_hash: Optional[str]) -> str:
    return hashlib.sha256((password_hash or "").encode("utf-8")).hexdigest()[:16]


def reset_token_matches(claims: Dict[str, Any], password_hash: Optional[str]) -> bool:
    return hmac.compare_digest(
        str(claims.get("pwd", "")), _password_fingerprint(password_hash)
    )


def decode_token(token: str, expected_type: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """Verify signature, expiry and token type.

    Raises:
        UnauthorizedError: for any invalid or expired token
    """
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as exc:
        raise UnauthorizedError("Invalid or expired token") from exc
    if claims.get("typ") != expected_type or not claims.get("sub"):
        raise UnauthorizedError("Invalid or expired token")
    return claims

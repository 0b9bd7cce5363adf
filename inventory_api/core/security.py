from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from inventory_api.config import Settings
from inventory_api.core.exceptions import AuthenticationFailed

_HASH_SCHEME = "pbkdf2_sha256"
_DEV_JWT_SECRET = "dev-only-insecure-secret"


def _pbkdf2(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def hash_password(password: str, rounds: int) -> str:
    salt = secrets.token_hex(16)
    return f"{_HASH_SCHEME}${rounds}${salt}${_pbkdf2(password, salt, rounds)}"


def verify_password(password: str, stored_hash: str) -> bool:
    try:
        scheme, rounds, salt, expected = stored_hash.split("$", 3)
        rounds_value = int(rounds)
    except ValueError:
        return False
    if scheme != _HASH_SCHEME:
        return False
    return hmac.compare_digest(_pbkdf2(password, salt, rounds_value), expected)


def jwt_secret(settings: Settings) -> str:
    if settings.JWT_SECRET:
        return settings.JWT_SECRET
    if settings.ENVIRONMENT.lower() == "local":
        return _DEV_JWT_SECRET
    raise RuntimeError("JWT_SECRET must be configured outside the local environment")


def create_access_token(
    user_id: int,
    role: str,
    settings: Settings,
    *,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES))
    payload = {"sub": str(user_id), "role": role, "iat": now, "exp": expire}
    return jwt.encode(payload, jwt_secret(settings), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> int:
    """Return the user id carried by a valid token."""
    try:
        payload = jwt.decode(
            token,
            jwt_secret(settings),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationFailed("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise AuthenticationFailed("Invalid token") from exc

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise AuthenticationFailed("Invalid token") from exc


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None

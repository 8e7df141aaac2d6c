"""Password hashing and session token helpers."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from src.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    result: bool = pwd_context.verify(plain_password, hashed_password)
    return result


def get_password_hash(password: str) -> str:
    result: str = pwd_context.hash(password)
    return result


def create_session_token(
    user_id: uuid.UUID,
    email: str,
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """Create a signed session token carrying ``sub``, ``email`` and ``exp``."""
    current_time = now_utc if now_utc is not None else datetime.now(UTC)
    expire = current_time + (expires_delta or timedelta(minutes=settings.session_expiry_minutes))
    claims = {"sub": str(user_id), "email": email, "exp": expire}
    encoded: str = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return encoded


def decode_session_token(token: str) -> dict[str, Any]:
    """Decode and verify a session token. Raises ``jose.JWTError`` on failure."""
    payload: dict[str, Any] = jwt.decode(
        token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
    )
    return payload

"""Session authentication dependencies for FastAPI.

A session token is read from the session cookie set at sign-in, or from a
``Bearer`` Authorization header for non-browser clients.
"""

import logging
import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database.session import get_db
from src.exceptions import UnauthorizedException
from src.modules.auth.identity import IdentityService
from src.modules.auth.schemas import AuthenticatedUser
from src.modules.auth.security import decode_session_token

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def get_identity(db: AsyncSession = Depends(get_db)) -> IdentityService:
    return IdentityService(db)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> AuthenticatedUser:
    """Resolve the signed-in user or raise ``UnauthorizedException``.

    Sets ``request.state.user`` for downstream handlers.
    """
    token = credentials.credentials if credentials else request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthorizedException("Authentication required")

    try:
        payload = decode_session_token(token)
    except JWTError as exc:
        logger.warning("Session token rejected: %s", exc)
        raise UnauthorizedException("Invalid or expired session") from exc

    try:
        user = AuthenticatedUser(id=uuid.UUID(payload["sub"]), email=payload["email"])
    except (KeyError, ValueError) as exc:
        raise UnauthorizedException("Session is missing required claims") from exc

    request.state.user = user
    return user

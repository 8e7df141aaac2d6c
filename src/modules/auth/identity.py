"""Identity subsystem: provider-based sign-in that issues session tokens."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.models.user import User
from src.modules.auth.errors import (
    CALLBACK_ROUTE_ERROR,
    CONFIGURATION,
    CREDENTIALS_SIGNIN,
    AuthError,
)
from src.modules.auth.schemas import Credentials, SignInResult
from src.modules.auth.security import create_session_token, verify_password

logger = logging.getLogger(__name__)

Authorizer = Callable[[Mapping[str, Any]], Awaitable[User | None]]


def _safe_redirect(target: Any) -> str:
    """Accept only same-site absolute paths as a post sign-in destination."""
    if isinstance(target, str) and target.startswith("/") and not target.startswith("//"):
        return target
    return settings.dashboard_path


class IdentityService:
    """Verifies sign-in attempts against the configured providers.

    Only the ``credentials`` provider (email + password) is registered.
    Failures raise ``AuthError`` with a category in ``type``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self._providers: dict[str, Authorizer] = {
            "credentials": self._authorize_credentials,
        }

    async def sign_in(self, provider: str, credentials: Mapping[str, Any]) -> SignInResult:
        authorize = self._providers.get(provider)
        if authorize is None:
            raise AuthError(CONFIGURATION, f"Unknown sign-in provider '{provider}'")

        try:
            user = await authorize(credentials)
        except AuthError:
            raise
        except Exception as exc:
            # Anything a provider raises while authorizing is a callback failure
            logger.exception("Provider %s failed during sign-in", provider)
            raise AuthError(CALLBACK_ROUTE_ERROR, f"Provider '{provider}' failed") from exc

        if user is None:
            raise AuthError(CREDENTIALS_SIGNIN)

        logger.info("User %s signed in via %s", user.id, provider)
        return SignInResult(
            user_id=user.id,
            email=user.email,
            session_token=create_session_token(user.id, user.email),
            redirect_to=_safe_redirect(credentials.get("redirectTo")),
        )

    async def _authorize_credentials(self, credentials: Mapping[str, Any]) -> User | None:
        try:
            parsed = Credentials.model_validate(
                {"email": credentials.get("email"), "password": credentials.get("password")}
            )
        except ValidationError:
            logger.warning("Rejected malformed credentials payload")
            return None

        result = await self.db.execute(select(User).where(User.email == parsed.email))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(parsed.password, user.password_hash):
            logger.warning("Invalid credentials for %s", parsed.email)
            return None
        return user

"""Sign-in form action."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.modules.auth.errors import CREDENTIALS_SIGNIN, AuthError
from src.modules.auth.identity import IdentityService
from src.modules.auth.schemas import SignInResult

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


async def authenticate(
    identity: IdentityService,
    prev_state: str | None,
    form_data: Mapping[str, Any],
) -> SignInResult | str:
    """Sign in with the credentials provider.

    Returns the established session on success or a message for the form.
    Exceptions that are not ``AuthError`` are re-raised untouched.
    """
    try:
        return await identity.sign_in("credentials", form_data)
    except AuthError as error:
        if error.type == CREDENTIALS_SIGNIN:
            return INVALID_CREDENTIALS_MESSAGE
        return GENERIC_FAILURE_MESSAGE

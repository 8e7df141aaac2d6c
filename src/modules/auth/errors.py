"""Sign-in failures raised by the identity subsystem.

``type`` names the failure category; the sign-in form maps categories to
user-facing text and lets every other exception propagate.
"""

from __future__ import annotations

CREDENTIALS_SIGNIN = "CredentialsSignin"
CALLBACK_ROUTE_ERROR = "CallbackRouteError"
CONFIGURATION = "Configuration"


class AuthError(Exception):
    def __init__(self, type: str, message: str | None = None) -> None:
        super().__init__(message or type)
        self.type = type

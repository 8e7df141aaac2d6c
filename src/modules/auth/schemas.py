from __future__ import annotations

import uuid
from dataclasses import dataclass

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Payload accepted by the credentials provider."""

    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)


@dataclass(frozen=True)
class SignInResult:
    """Established session returned by a successful sign-in."""

    user_id: uuid.UUID
    email: str
    session_token: str
    redirect_to: str


@dataclass
class AuthenticatedUser:
    """The user a session token belongs to."""

    id: uuid.UUID
    email: str

"""Form feedback state and the tagged outcome of a form action.

Every form action ends in exactly one of three variants:

* ``Invalid``  - the submission failed validation; nothing was persisted.
* ``Failure``  - the single persistence call failed (or hit no row).
* ``Success``  - the mutation landed; ``redirect_to`` names where the UI
  should navigate next, or is ``None`` when the caller stays put.

Routers translate these into HTTP responses; the actions themselves never
perform navigation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel


class FormState(BaseModel):
    """What the form renders after a submission attempt."""

    errors: dict[str, list[str]] | None = None
    message: str | None = None


@dataclass(frozen=True)
class Success:
    redirect_to: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class Failure:
    message: str
    kind: str = "database"
    detail: str | None = None


@dataclass(frozen=True)
class Invalid:
    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None


ActionResult = Success | Failure | Invalid


def to_form_state(result: ActionResult) -> FormState:
    """Project an action outcome onto the shape the form renders."""
    if isinstance(result, Invalid):
        return FormState(errors=result.errors, message=result.message)
    return FormState(message=result.message)

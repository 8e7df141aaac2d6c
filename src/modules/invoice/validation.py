"""Turn a raw form submission into an ``InvoiceForm`` or an ``Invalid`` result."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.modules.invoice.constants import FIELD_MESSAGES
from src.modules.invoice.schemas import InvoiceForm
from src.schemas.forms import Invalid

# Python attribute name -> submitted form field name
_FORM_NAMES: dict[str, str] = {
    name: info.alias or name for name, info in InvoiceForm.model_fields.items()
}


def collect_field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Map every pydantic error onto the form field's fixed message.

    All failing fields are reported; a field with several violations still
    shows its message once.
    """
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("",)
        field = _FORM_NAMES.get(str(loc[0]), str(loc[0]))
        message = FIELD_MESSAGES.get(field, err.get("msg", "Invalid value"))
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def validate_invoice_form(data: Mapping[str, Any], summary: str) -> InvoiceForm | Invalid:
    # Only the three form fields are read; anything else in the submission is ignored
    payload = {name: data.get(name) for name in FIELD_MESSAGES}
    try:
        return InvoiceForm.model_validate(payload)
    except ValidationError as exc:
        return Invalid(errors=collect_field_errors(exc), message=summary)

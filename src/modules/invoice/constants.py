"""Invoice form messages and listing constants."""

from __future__ import annotations

from decimal import Decimal

# ---------------------------------------------------------------------------
# Per-field validation messages, keyed by submitted form field name
# ---------------------------------------------------------------------------

FIELD_MESSAGES: dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please insert a number greater than 0",
    "status": "Please select an invoice status",
}

# ---------------------------------------------------------------------------
# Summary messages
# ---------------------------------------------------------------------------

CREATE_INVALID_MESSAGE = "Missing field. Failed to create invoice"
UPDATE_INVALID_MESSAGE = "Missing field. Failed to edit invoice"

DATABASE_FAILURE_MESSAGES: dict[str, str] = {
    "create": "Database error. Failed to create invoice",
    "update": "Database error. Failed to update invoice",
    "delete": "Database error. Failed to delete invoice",
}

NOT_FOUND_MESSAGES: dict[str, str] = {
    "update": "Invoice not found. Failed to update invoice",
    "delete": "Invoice not found. Failed to delete invoice",
}

DELETE_SUCCESS_MESSAGE = "Invoice deleted"

# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

ITEMS_PER_PAGE = 6
MAX_PAGE = 10_000

# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

# Largest amount whose cents value fits the 32-bit ``invoices.amount`` column
MAX_AMOUNT = Decimal("21474836.47")

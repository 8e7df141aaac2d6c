"""Pydantic v2 schemas for the invoice form and dashboard responses."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import InvoiceStatus
from src.modules.invoice.constants import MAX_AMOUNT
from src.modules.invoice.money import cents


# ---------------------------------------------------------------------------
# Form schema
# ---------------------------------------------------------------------------


class InvoiceForm(BaseModel):
    """Fields a caller may submit for create and edit.

    ``id`` and ``date`` are never accepted: the store assigns the id and
    the service stamps the date.
    """

    model_config = ConfigDict(extra="ignore")

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def _at_least_one_cent(cls, value: Decimal) -> Decimal:
        if cents(value) < 1:
            raise ValueError("amount rounds to zero cents")
        return value


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    customer_id: uuid.UUID
    amount: int
    status: InvoiceStatus
    date: datetime.date


class InvoiceListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    amount: int
    status: InvoiceStatus
    date: datetime.date
    name: str
    email: str
    image_url: str | None = None


class InvoicePage(BaseModel):
    items: list[InvoiceListItem]
    query: str
    page: int
    total_pages: int


class CustomerOption(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str

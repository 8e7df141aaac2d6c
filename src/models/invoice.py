"""Invoice model: one billing record owed by a customer."""

from __future__ import annotations

import datetime
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, Enum, ForeignKey, Index, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, UUIDPrimaryKeyMixin
from src.models.enums import InvoiceStatus

if TYPE_CHECKING:
    from src.models.customer import Customer


invoice_status_type = Enum(
    InvoiceStatus,
    name="invoice_status",
    values_callable=lambda members: [m.value for m in members],
)


class Invoice(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "invoices"

    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Minor currency units (cents), always positive
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[InvoiceStatus] = mapped_column(invoice_status_type, nullable=False)

    # Set once at creation, UTC calendar date
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    customer: Mapped[Customer] = relationship("Customer", back_populates="invoices", lazy="noload")

    __table_args__ = (
        Index("ix_invoices_customer_id", "customer_id"),
        Index("ix_invoices_status", "status"),
        CheckConstraint("amount > 0", name="amount_positive"),
    )

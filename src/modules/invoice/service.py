"""Invoice persistence: single-statement mutations and dashboard reads."""

from __future__ import annotations

import datetime
import logging
import math
import uuid
from typing import Any

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.base import Executable

from src.exceptions import NotFoundException, PersistenceError
from src.models.customer import Customer
from src.models.invoice import Invoice
from src.modules.invoice.constants import ITEMS_PER_PAGE
from src.modules.invoice.money import cents
from src.modules.invoice.schemas import InvoiceForm

logger = logging.getLogger(__name__)


def utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.UTC).date()


def _error_detail(exc: SQLAlchemyError) -> str:
    """Prefer the driver's own message over SQLAlchemy's wrapped repr."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class InvoiceService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Statement execution
    # ------------------------------------------------------------------

    async def _execute_mutation(self, operation: str, stmt: Executable) -> Result[Any]:
        """Run one mutating statement and commit it.

        Any store failure rolls the session back and surfaces as
        ``PersistenceError``; nothing is retried.
        """
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception("Invoice %s failed", operation)
            raise PersistenceError(operation, _error_detail(exc)) from exc
        return result

    @staticmethod
    def _customer_uuid(operation: str, customer_id: str) -> uuid.UUID:
        try:
            return uuid.UUID(customer_id)
        except ValueError as exc:
            logger.warning("Invoice %s rejected customer id %r", operation, customer_id)
            raise PersistenceError(
                operation, f'invalid input syntax for type uuid: "{customer_id}"'
            ) from exc

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_invoice(self, form: InvoiceForm) -> uuid.UUID:
        """Insert a new invoice stamped with today's UTC date; return its id."""
        stmt = (
            insert(Invoice)
            .values(
                customer_id=self._customer_uuid("create", form.customer_id),
                amount=cents(form.amount),
                status=form.status,
                date=utc_today(),
            )
            .returning(Invoice.id)
        )
        result = await self._execute_mutation("create", stmt)
        invoice_id = result.scalar_one()
        logger.info("Created invoice %s", invoice_id)
        return invoice_id

    async def update_invoice(self, invoice_id: uuid.UUID, form: InvoiceForm) -> None:
        """Overwrite customer, amount and status. ``id`` and ``date`` are left as-is."""
        stmt = (
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=self._customer_uuid("update", form.customer_id),
                amount=cents(form.amount),
                status=form.status,
            )
        )
        result = await self._execute_mutation("update", stmt)
        if result.rowcount == 0:
            raise NotFoundException(f"Invoice {invoice_id} not found")
        logger.info("Updated invoice %s", invoice_id)

    async def delete_invoice(self, invoice_id: uuid.UUID) -> None:
        result = await self._execute_mutation(
            "delete", delete(Invoice).where(Invoice.id == invoice_id)
        )
        if result.rowcount == 0:
            raise NotFoundException(f"Invoice {invoice_id} not found")
        logger.info("Deleted invoice %s", invoice_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_invoice(self, invoice_id: uuid.UUID) -> Invoice:
        result = await self.db.execute(select(Invoice).where(Invoice.id == invoice_id))
        invoice = result.scalar_one_or_none()
        if invoice is None:
            raise NotFoundException(f"Invoice {invoice_id} not found")
        return invoice

    async def list_invoices(self, query: str = "", page: int = 1) -> tuple[list[Any], int]:
        """Return one page of invoices joined with customer details, plus the page count.

        ``query`` is matched case-insensitively against customer name and
        email and the text of amount, date and status.
        """
        pattern = f"%{query}%"
        matches = or_(
            Customer.name.ilike(pattern),
            Customer.email.ilike(pattern),
            cast(Invoice.amount, String).ilike(pattern),
            cast(Invoice.date, String).ilike(pattern),
            cast(Invoice.status, String).ilike(pattern),
        )

        count_result = await self.db.execute(
            select(func.count())
            .select_from(Invoice)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(matches)
        )
        total = count_result.scalar() or 0

        rows_result = await self.db.execute(
            select(
                Invoice.id,
                Invoice.amount,
                Invoice.date,
                Invoice.status,
                Customer.name,
                Customer.email,
                Customer.image_url,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(matches)
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(ITEMS_PER_PAGE)
            .offset((page - 1) * ITEMS_PER_PAGE)
        )
        return list(rows_result.mappings().all()), math.ceil(total / ITEMS_PER_PAGE)

    async def list_customers(self) -> list[Any]:
        result = await self.db.execute(
            select(Customer.id, Customer.name).order_by(Customer.name)
        )
        return list(result.mappings().all())

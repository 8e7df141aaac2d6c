"""Invoice form actions: validate, persist once, then invalidate and navigate.

Each entry point returns an ``ActionResult`` instead of redirecting itself;
the router performs the navigation named by ``Success.redirect_to``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from src.config import settings
from src.exceptions import NotFoundException, PersistenceError
from src.modules.invoice.constants import (
    CREATE_INVALID_MESSAGE,
    DATABASE_FAILURE_MESSAGES,
    DELETE_SUCCESS_MESSAGE,
    NOT_FOUND_MESSAGES,
    UPDATE_INVALID_MESSAGE,
)
from src.modules.invoice.service import InvoiceService
from src.modules.invoice.validation import validate_invoice_form
from src.modules.views.cache import ViewInvalidator
from src.schemas.forms import ActionResult, Failure, FormState, Invalid, Success

logger = logging.getLogger(__name__)


class InvoiceActions:
    def __init__(
        self,
        service: InvoiceService,
        views: ViewInvalidator,
        *,
        listing_path: str | None = None,
        expose_errors: bool | None = None,
    ) -> None:
        self.service = service
        self.views = views
        self.listing_path = listing_path or settings.invoices_path
        self.expose_errors = (
            settings.expose_database_errors if expose_errors is None else expose_errors
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _database_failure(self, exc: PersistenceError) -> Failure:
        message = DATABASE_FAILURE_MESSAGES[exc.operation]
        if self.expose_errors:
            message = f"{message}: {exc.detail}"
        return Failure(message=message, kind="database", detail=exc.detail)

    @staticmethod
    def _not_found(operation: str, exc: NotFoundException) -> Failure:
        return Failure(message=NOT_FOUND_MESSAGES[operation], kind="not_found", detail=exc.message)

    async def _invalidate_listing(self) -> None:
        await self.views.invalidate(self.listing_path)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def create_invoice(
        self, prev_state: FormState | None, form_data: Mapping[str, Any]
    ) -> ActionResult:
        """Create an invoice from a submitted form.

        ``prev_state`` is whatever the form last rendered; the caller keeps it
        and the entered values, so it is not consulted here.
        """
        form = validate_invoice_form(form_data, CREATE_INVALID_MESSAGE)
        if isinstance(form, Invalid):
            return form

        try:
            await self.service.create_invoice(form)
        except PersistenceError as exc:
            return self._database_failure(exc)

        await self._invalidate_listing()
        return Success(redirect_to=self.listing_path)

    async def update_invoice(
        self,
        invoice_id: uuid.UUID,
        prev_state: FormState | None,
        form_data: Mapping[str, Any],
    ) -> ActionResult:
        form = validate_invoice_form(form_data, UPDATE_INVALID_MESSAGE)
        if isinstance(form, Invalid):
            return form

        try:
            await self.service.update_invoice(invoice_id, form)
        except PersistenceError as exc:
            return self._database_failure(exc)
        except NotFoundException as exc:
            logger.info("Update skipped, invoice %s does not exist", invoice_id)
            return self._not_found("update", exc)

        await self._invalidate_listing()
        return Success(redirect_to=self.listing_path)

    async def delete_invoice(self, invoice_id: uuid.UUID) -> ActionResult:
        """Delete an invoice. Success stays on the current page and carries a message."""
        try:
            await self.service.delete_invoice(invoice_id)
        except PersistenceError as exc:
            return self._database_failure(exc)
        except NotFoundException as exc:
            logger.info("Delete skipped, invoice %s does not exist", invoice_id)
            return self._not_found("delete", exc)

        await self._invalidate_listing()
        return Success(message=DELETE_SUCCESS_MESSAGE)

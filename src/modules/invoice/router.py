"""Invoice dashboard routes: listing reads and the three form actions."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database.session import get_db
from src.modules.auth.dependencies import get_current_user
from src.modules.invoice.actions import InvoiceActions
from src.modules.invoice.constants import MAX_PAGE
from src.modules.invoice.schemas import (
    CustomerOption,
    InvoiceListItem,
    InvoicePage,
    InvoiceResponse,
)
from src.modules.invoice.service import InvoiceService
from src.modules.views.cache import ViewCache, get_view_cache
from src.schemas.forms import ActionResult, Failure, Invalid, to_form_state

router = APIRouter(
    prefix=settings.invoices_path,
    tags=["invoices"],
    dependencies=[Depends(get_current_user)],
)


# ---------------------------------------------------------------------------
# Dependencies & helpers
# ---------------------------------------------------------------------------


def get_invoice_service(db: AsyncSession = Depends(get_db)) -> InvoiceService:
    return InvoiceService(db)


def get_invoice_actions(
    service: InvoiceService = Depends(get_invoice_service),
    views: ViewCache = Depends(get_view_cache),
) -> InvoiceActions:
    return InvoiceActions(service, views)


def _to_response(result: ActionResult) -> Response:
    """Perform the navigation a successful action asks for, or render its form state."""
    if isinstance(result, Invalid):
        status_code = 422
    elif isinstance(result, Failure):
        status_code = 404 if result.kind == "not_found" else 500
    elif result.redirect_to is not None:
        return RedirectResponse(result.redirect_to, status_code=303)
    else:
        status_code = 200
    return JSONResponse(
        status_code=status_code,
        content=to_form_state(result).model_dump(exclude_none=True),
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


@router.get("", response_model=InvoicePage)
async def list_invoices(
    query: str = Query("", max_length=200),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    service: InvoiceService = Depends(get_invoice_service),
    views: ViewCache = Depends(get_view_cache),
):
    """Paged, searchable invoice listing served through the view cache."""

    async def _render() -> dict:
        rows, total_pages = await service.list_invoices(query=query, page=page)
        return InvoicePage(
            items=[InvoiceListItem.model_validate(dict(row)) for row in rows],
            query=query,
            page=page,
            total_pages=total_pages,
        ).model_dump(mode="json")

    return await views.get_or_set(settings.invoices_path, _render, variant=f"{page}:{query}")


@router.get("/customers", response_model=list[CustomerOption])
async def list_customers(service: InvoiceService = Depends(get_invoice_service)):
    """Customer options for the invoice form's select."""
    rows = await service.list_customers()
    return [CustomerOption.model_validate(dict(row)) for row in rows]


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: uuid.UUID,
    service: InvoiceService = Depends(get_invoice_service),
):
    invoice = await service.get_invoice(invoice_id)
    return InvoiceResponse.model_validate(invoice)


# ---------------------------------------------------------------------------
# Form actions
# ---------------------------------------------------------------------------


@router.post("/create")
async def create_invoice(
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    form_data = await request.form()
    return _to_response(await actions.create_invoice(None, form_data))


@router.post("/{invoice_id}/edit")
async def update_invoice(
    invoice_id: uuid.UUID,
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    form_data = await request.form()
    return _to_response(await actions.update_invoice(invoice_id, None, form_data))


@router.post("/{invoice_id}/delete")
async def delete_invoice(
    invoice_id: uuid.UUID,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    return _to_response(await actions.delete_invoice(invoice_id))

"""Unit tests for InvoiceService: single-statement mutations and reads."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.exceptions import NotFoundException, PersistenceError
from src.models.enums import InvoiceStatus
from src.modules.invoice.schemas import InvoiceForm
from src.modules.invoice.service import InvoiceService

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def invoice_service(mock_db):
    return InvoiceService(mock_db)


def _make_form(amount="49.99", status="pending", customer_id=None) -> InvoiceForm:
    return InvoiceForm.model_validate(
        {
            "customerId": customer_id or str(uuid.uuid4()),
            "amount": amount,
            "status": status,
        }
    )


def _executed_params(mock_db) -> dict:
    """Bound parameters of the statement passed to the last execute() call."""
    stmt = mock_db.execute.call_args.args[0]
    return stmt.compile().params


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreateInvoice:
    @pytest.mark.asyncio
    async def test_inserts_cents_status_and_today(self, invoice_service, mock_db, mutation_result):
        new_id = uuid.uuid4()
        customer_id = uuid.uuid4()
        mock_db.execute.return_value = mutation_result(new_id=new_id)

        returned = await invoice_service.create_invoice(
            _make_form(amount="49.99", status="paid", customer_id=str(customer_id))
        )

        assert returned == new_id
        params = _executed_params(mock_db)
        assert params["customer_id"] == customer_id
        assert params["amount"] == 4999
        assert params["status"] is InvoiceStatus.PAID
        assert params["date"] == datetime.now(UTC).date()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_whole_amount_stored_in_cents(self, invoice_service, mock_db, mutation_result):
        mock_db.execute.return_value = mutation_result()

        await invoice_service.create_invoice(_make_form(amount="100"))

        assert _executed_params(mock_db)["amount"] == 10000

    @pytest.mark.asyncio
    async def test_database_error_becomes_persistence_error(self, invoice_service, mock_db):
        mock_db.execute.side_effect = IntegrityError("INSERT", {}, Exception("fk violation"))

        with pytest.raises(PersistenceError) as exc_info:
            await invoice_service.create_invoice(_make_form())

        assert exc_info.value.operation == "create"
        assert exc_info.value.detail == "fk violation"
        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_customer_id_is_persistence_error(self, invoice_service, mock_db):
        with pytest.raises(PersistenceError, match="create") as exc_info:
            await invoice_service.create_invoice(_make_form(customer_id="not-a-uuid"))

        assert "not-a-uuid" in exc_info.value.detail
        mock_db.execute.assert_not_awaited()


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------


class TestUpdateInvoice:
    @pytest.mark.asyncio
    async def test_sets_only_mutable_fields(self, invoice_service, mock_db, mutation_result):
        mock_db.execute.return_value = mutation_result(rowcount=1)
        invoice_id = uuid.uuid4()

        await invoice_service.update_invoice(invoice_id, _make_form(amount="100"))

        params = _executed_params(mock_db)
        assert params["amount"] == 10000
        assert params["status"] is InvoiceStatus.PENDING
        assert "date" not in params
        assert invoice_id in params.values()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_matching_row_raises_not_found(self, invoice_service, mock_db, mutation_result):
        mock_db.execute.return_value = mutation_result(rowcount=0)

        with pytest.raises(NotFoundException, match="not found"):
            await invoice_service.update_invoice(uuid.uuid4(), _make_form())

    @pytest.mark.asyncio
    async def test_database_error_becomes_persistence_error(self, invoice_service, mock_db):
        mock_db.execute.side_effect = OperationalError("UPDATE", {}, Exception("connection lost"))

        with pytest.raises(PersistenceError) as exc_info:
            await invoice_service.update_invoice(uuid.uuid4(), _make_form())

        assert exc_info.value.operation == "update"
        mock_db.rollback.assert_awaited_once()


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


class TestDeleteInvoice:
    @pytest.mark.asyncio
    async def test_deletes_matching_row(self, invoice_service, mock_db, mutation_result):
        mock_db.execute.return_value = mutation_result(rowcount=1)
        invoice_id = uuid.uuid4()

        await invoice_service.delete_invoice(invoice_id)

        assert list(_executed_params(mock_db).values()) == [invoice_id]
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_row_raises_not_found(self, invoice_service, mock_db, mutation_result):
        mock_db.execute.return_value = mutation_result(rowcount=0)

        with pytest.raises(NotFoundException):
            await invoice_service.delete_invoice(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_database_error_becomes_persistence_error(self, invoice_service, mock_db):
        mock_db.execute.side_effect = OperationalError("DELETE", {}, Exception("timeout"))

        with pytest.raises(PersistenceError) as exc_info:
            await invoice_service.delete_invoice(uuid.uuid4())

        assert exc_info.value.operation == "delete"
        assert exc_info.value.detail == "timeout"


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestReads:
    @pytest.mark.asyncio
    async def test_get_invoice_not_found(self, invoice_service, mock_db):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db.execute.return_value = result

        with pytest.raises(NotFoundException, match="not found"):
            await invoice_service.get_invoice(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_invoice_found(self, invoice_service, mock_db):
        invoice = MagicMock()
        result = MagicMock()
        result.scalar_one_or_none.return_value = invoice
        mock_db.execute.return_value = result

        assert await invoice_service.get_invoice(uuid.uuid4()) is invoice

    @pytest.mark.asyncio
    async def test_list_invoices_pages_results(self, invoice_service, mock_db):
        row = {
            "id": uuid.uuid4(),
            "amount": 4999,
            "date": date(2026, 10, 1),
            "status": InvoiceStatus.PENDING,
            "name": "Lee Robinson",
            "email": "lee@robinson.com",
            "image_url": None,
        }
        count_result = MagicMock()
        count_result.scalar.return_value = 7
        rows_result = MagicMock()
        rows_result.mappings.return_value.all.return_value = [row]
        mock_db.execute.side_effect = [count_result, rows_result]

        rows, total_pages = await invoice_service.list_invoices(query="lee", page=2)

        assert rows == [row]
        assert total_pages == 2
        assert mock_db.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_list_invoices_empty(self, invoice_service, mock_db):
        count_result = MagicMock()
        count_result.scalar.return_value = 0
        rows_result = MagicMock()
        rows_result.mappings.return_value.all.return_value = []
        mock_db.execute.side_effect = [count_result, rows_result]

        rows, total_pages = await invoice_service.list_invoices()

        assert rows == []
        assert total_pages == 0

import pytest
from datetime import date
from unittest.mock import AsyncMock
from uuid import UUID

from invoicedash.models.invoice import AmountMatch, Invoice, InvoiceForm, InvoiceStatus
from invoicedash.models.user import User
from invoicedash.repositories.base import PersistenceError, affected_rows
from invoicedash.repositories.invoice import InvoiceRepository
from invoicedash.repositories.user import UserRepository

INVOICE_ID = UUID("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa")
CUSTOMER_ID = UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a")

@pytest.fixture
def mock_pool():
    pool = AsyncMock()
    pool.execute.return_value = "INSERT 0 1"
    pool.fetch.return_value = []
    pool.fetchrow.return_value = None
    return pool

@pytest.fixture
def invoices(mock_pool):
    return InvoiceRepository(mock_pool, Invoice)

@pytest.mark.asyncio
async def test_create_binds_values_as_parameters(invoices, mock_pool):
    await invoices.create("c1'); DROP TABLE invoices;--", 1999, InvoiceStatus.PENDING, date(2024, 5, 1))

    query, *args = mock_pool.execute.call_args[0]
    assert "INSERT INTO invoices" in query
    assert "DROP TABLE" not in query
    assert args == ["c1'); DROP TABLE invoices;--", 1999, "pending", date(2024, 5, 1)]

@pytest.mark.asyncio
async def test_update_reports_matched_rows(invoices, mock_pool):
    mock_pool.execute.return_value = "UPDATE 1"
    assert await invoices.update("inv-1", "c1", 500, InvoiceStatus.PAID) is True

    mock_pool.execute.return_value = "UPDATE 0"
    assert await invoices.update("inv-1", "c1", 500, InvoiceStatus.PAID) is False

    query, *args = mock_pool.execute.call_args[0]
    assert "WHERE id = $4" in query
    assert args == ["c1", 500, "paid", "inv-1"]

@pytest.mark.asyncio
async def test_delete_by_id(invoices, mock_pool):
    mock_pool.execute.return_value = "DELETE 1"

    assert await invoices.delete("inv-1") is True
    mock_pool.execute.assert_awaited_once_with("DELETE FROM invoices WHERE id = $1", "inv-1")

@pytest.mark.asyncio
@pytest.mark.parametrize("error", [OSError("connection refused"), ConnectionResetError("reset")])
async def test_driver_failures_are_wrapped(invoices, mock_pool, error):
    mock_pool.execute.side_effect = error

    with pytest.raises(PersistenceError) as exc:
        await invoices.delete("inv-1")
    assert exc.value.__cause__ is error

@pytest.mark.asyncio
async def test_programming_errors_are_not_wrapped(invoices, mock_pool):
    mock_pool.execute.side_effect = TypeError("bad call")

    with pytest.raises(TypeError):
        await invoices.delete("inv-1")

@pytest.mark.asyncio
async def test_list_with_customers_converts_uuid_columns(invoices, mock_pool):
    mock_pool.fetch.return_value = [{
        "id": INVOICE_ID,
        "customer_id": CUSTOMER_ID,
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": None,
        "amount_in_cents": 15795,
        "status": "pending",
        "date": date(2022, 12, 6),
    }]

    rows = await invoices.list_with_customers(limit=10, skip=20)

    assert rows[0].id == str(INVOICE_ID)
    assert rows[0].customer_id == str(CUSTOMER_ID)
    assert rows[0].status == InvoiceStatus.PENDING
    query, *args = mock_pool.fetch.call_args[0]
    assert "LIMIT $1 OFFSET $2" in query
    assert args == [10, 20]

@pytest.mark.asyncio
async def test_get_form_converts_cents_to_dollars(invoices, mock_pool):
    mock_pool.fetchrow.return_value = {
        "id": INVOICE_ID,
        "customer_id": CUSTOMER_ID,
        "amount_in_cents": 1999,
        "status": "paid",
    }

    form = await invoices.get_form(str(INVOICE_ID))

    assert isinstance(form, InvoiceForm)
    assert str(form.amount) == "19.99"

@pytest.mark.asyncio
async def test_get_form_missing_returns_none(invoices):
    assert await invoices.get_form("missing") is None

@pytest.mark.asyncio
async def test_list_by_amount(invoices, mock_pool):
    mock_pool.fetch.return_value = [{"amount": 666, "name": "Evil Rabbit"}]

    rows = await invoices.list_by_amount(666)

    assert rows == [AmountMatch(amount=666, name="Evil Rabbit")]
    query, amount = mock_pool.fetch.call_args[0]
    assert "WHERE invoices.amount = $1" in query
    assert amount == 666

@pytest.mark.asyncio
async def test_user_lookup_by_email(mock_pool):
    mock_pool.fetchrow.return_value = {"id": CUSTOMER_ID, "name": "User", "email": "user@nextmail.com", "password": "hash"}
    users = UserRepository(mock_pool, User)

    user = await users.get_by_email("user@nextmail.com")

    assert user.email == "user@nextmail.com"
    assert "password" not in user.model_dump()

@pytest.mark.parametrize("status,count", [("INSERT 0 1", 1), ("UPDATE 3", 3), ("DELETE 0", 0), ("", 0), (None, 0)])
def test_affected_rows(status, count):
    assert affected_rows(status) == count

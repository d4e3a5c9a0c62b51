import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from invoicedash.actions.invoices import InvoiceActions
from invoicedash.cache import ViewCache
from invoicedash.repositories.invoice import InvoiceRepository
from invoicedash.repositories.customer import CustomerRepository
from invoicedash.repositories.user import UserRepository

INVOICES_PATH = "/dashboard/invoices"

@pytest.fixture
def mock_invoices():
    repo = AsyncMock(spec=InvoiceRepository)
    repo.create.return_value = None
    repo.update.return_value = True
    repo.delete.return_value = True
    return repo

@pytest.fixture
def mock_views():
    return MagicMock(spec=ViewCache)

@pytest.fixture
def view_cache(tmp_path):
    views = ViewCache(tmp_path / "views")
    yield views
    views.close()

@pytest.fixture
def mock_db(mock_invoices):
    db = MagicMock()
    db.invoices = mock_invoices
    db.customers = AsyncMock(spec=CustomerRepository)
    db.users = AsyncMock(spec=UserRepository)
    return db

@pytest.fixture
def actions(mock_invoices, mock_views):
    return InvoiceActions(
        mock_invoices,
        mock_views,
        invoices_path=INVOICES_PATH,
        today=lambda: date(2024, 5, 1)
    )

@pytest.fixture
def valid_form():
    return {"customerId": "3958dc9e-712f-4377-85e9-fec4b6a6442a", "amount": "19.99", "status": "pending"}

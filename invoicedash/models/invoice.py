from datetime import date
from decimal import Decimal
from enum import Enum
from pydantic import ConfigDict, Field, computed_field
from invoicedash.models.base import RecordModel, RecordId

class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"

class Invoice(RecordModel):
    """
    Persistent invoice row. Amounts are stored as integer cents.
    """
    id: RecordId
    customer_id: RecordId
    amount_in_cents: int = Field(..., description="Stored in the invoices.amount column")
    status: InvoiceStatus
    date: date

class InvoiceForm(RecordModel):
    """Invoice as shown in the edit form, amount converted back to dollars."""
    id: RecordId
    customer_id: RecordId
    amount_in_cents: int = Field(..., exclude=True)
    status: InvoiceStatus

    @computed_field
    @property
    def amount(self) -> Decimal:
        return Decimal(self.amount_in_cents) / 100

class InvoiceRow(RecordModel):
    """Invoice joined with its customer, as listed on the dashboard."""
    id: RecordId
    customer_id: RecordId
    name: str
    email: str
    image_url: str | None = None
    amount_in_cents: int
    status: InvoiceStatus
    date: date

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
                "customer_id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
                "name": "Delba de Oliveira",
                "email": "delba@oliveira.com",
                "amount_in_cents": 15795,
                "status": "pending",
                "date": "2022-12-06"
            }
        }
    )

class AmountMatch(RecordModel):
    """Row returned by the read endpoint."""
    amount: int
    name: str

from datetime import date
from typing import List, Optional

from invoicedash.models.invoice import AmountMatch, Invoice, InvoiceForm, InvoiceRow, InvoiceStatus
from invoicedash.repositories.base import BaseRepository, affected_rows

class InvoiceRepository(BaseRepository[Invoice]):

    async def create(self, customer_id: str, amount_in_cents: int, status: InvoiceStatus, invoice_date: date) -> None:
        await self.execute(
            """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES ($1, $2, $3, $4)
            """,
            customer_id, amount_in_cents, InvoiceStatus(status).value, invoice_date
        )

    async def update(self, invoice_id: str, customer_id: str, amount_in_cents: int, status: InvoiceStatus) -> bool:
        """Overwrite the editable fields. Returns False if no row matched the id."""
        result = await self.execute(
            """
            UPDATE invoices
            SET customer_id = $1, amount = $2, status = $3
            WHERE id = $4
            """,
            customer_id, amount_in_cents, InvoiceStatus(status).value, invoice_id
        )
        return affected_rows(result) > 0

    async def delete(self, invoice_id: str) -> bool:
        result = await self.execute("DELETE FROM invoices WHERE id = $1", invoice_id)
        return affected_rows(result) > 0

    async def get_form(self, invoice_id: str) -> Optional[InvoiceForm]:
        """Invoice shaped for the edit form."""
        return await self.fetchrow(
            """
            SELECT id, customer_id, amount AS amount_in_cents, status
            FROM invoices
            WHERE id = $1
            """,
            invoice_id,
            model_cls=InvoiceForm
        )

    async def list_with_customers(self, limit: int = 100, skip: int = 0) -> List[InvoiceRow]:
        """Invoices joined with their customer, newest first."""
        return await self.fetch(
            """
            SELECT invoices.id, invoices.customer_id, customers.name, customers.email,
                   customers.image_url, invoices.amount AS amount_in_cents,
                   invoices.status, invoices.date
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            ORDER BY invoices.date DESC
            LIMIT $1 OFFSET $2
            """,
            limit, skip,
            model_cls=InvoiceRow
        )

    async def list_by_amount(self, amount: int) -> List[AmountMatch]:
        """Invoice amounts and customer names for invoices of exactly `amount`."""
        return await self.fetch(
            """
            SELECT invoices.amount, customers.name
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE invoices.amount = $1
            """,
            amount,
            model_cls=AmountMatch
        )

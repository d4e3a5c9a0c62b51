"""
Invoice mutations behind the dashboard forms.

Every action runs validate -> persist -> revalidate the invoice list -> redirect,
stopping at the first failure and handing a MutationState back to the form.
Storage and cache are passed in, so the actions can run against substitutes.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional

from invoicedash.cache import ViewCache
from invoicedash.config import settings
from invoicedash.models.state import ActionOutcome, MutationState, Redirect
from invoicedash.repositories.base import PersistenceError
from invoicedash.repositories.invoice import InvoiceRepository
from invoicedash.validation.schemas import CreateInvoice, UpdateInvoice, read_invoice_fields, safe_parse

logger = logging.getLogger(__name__)

FormData = Mapping[str, Any]

# (previous_state, form) -> outcome, the shape stateful form bindings call
BoundAction = Callable[[Optional[MutationState], FormData], Awaitable[ActionOutcome]]

def utc_today() -> date:
    return datetime.now(timezone.utc).date()

class InvoiceActions:
    def __init__(
        self,
        invoices: InvoiceRepository,
        views: ViewCache,
        invoices_path: str = settings.INVOICES_PATH,
        today: Callable[[], date] = utc_today,
    ):
        self.invoices = invoices
        self.views = views
        self.invoices_path = invoices_path
        self.today = today

    async def create_invoice(self, form: FormData) -> ActionOutcome:
        validated = safe_parse(CreateInvoice, read_invoice_fields(form))
        if not validated.success:
            return MutationState(
                errors=validated.errors,
                message="Missing Fields. Failed to Create Invoice."
            )

        data = validated.data
        try:
            await self.invoices.create(data.customer_id, data.amount_in_cents, data.status, self.today())
        except PersistenceError as e:
            logger.error(f"Failed to create invoice: {e}")
            return MutationState(message="Database Error: Failed to Create Invoice.")

        logger.info(f"Created invoice for customer {data.customer_id}")
        return self._back_to_list()

    async def update_invoice(self, invoice_id: str, form: FormData) -> ActionOutcome:
        """Direct call: id and form together, outcome straight back."""
        validated = safe_parse(UpdateInvoice, read_invoice_fields(form))
        if not validated.success:
            return MutationState(
                errors=validated.errors,
                message="Missing Fields. Failed to Update Invoice."
            )

        data = validated.data
        try:
            updated = await self.invoices.update(invoice_id, data.customer_id, data.amount_in_cents, data.status)
        except PersistenceError as e:
            logger.error(f"Failed to update invoice {invoice_id}: {e}")
            return MutationState(message="Database Error: Failed to Update Invoice.")

        if not updated:
            logger.warning(f"Update matched no invoice with id {invoice_id}")
        return self._back_to_list()

    def bind_update_invoice(self, invoice_id: str) -> BoundAction:
        """
        Pre-bind the invoice id for a form binding that calls
        `action(previous_state, form)`. The previous state is ignored.
        """
        async def bound(previous_state: Optional[MutationState], form: FormData) -> ActionOutcome:
            return await self.update_invoice(invoice_id, form)
        return bound

    async def delete_invoice(self, invoice_id: str) -> Optional[MutationState]:
        """Delete by id. Returns None on success, a MutationState if storage failed."""
        try:
            await self.invoices.delete(invoice_id)
        except PersistenceError as e:
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            return MutationState(message="Database Error: Failed to Delete Invoice.")

        self.views.revalidate_path(self.invoices_path)
        return None

    def _back_to_list(self) -> Redirect:
        self.views.revalidate_path(self.invoices_path)
        return Redirect(path=self.invoices_path)

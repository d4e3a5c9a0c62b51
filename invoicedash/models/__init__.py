from invoicedash.models.base import RecordModel, RecordId
from invoicedash.models.invoice import Invoice, InvoiceForm, InvoiceRow, InvoiceStatus, AmountMatch
from invoicedash.models.customer import Customer, CustomerField
from invoicedash.models.user import User
from invoicedash.models.state import MutationState, Redirect, ActionOutcome, FieldErrors

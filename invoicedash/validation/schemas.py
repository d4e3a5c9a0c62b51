"""
Invoice form schemas.

Raw form submissions are flat string-keyed containers. The schemas coerce and
check the three user-editable fields and report failures per field, using a
single user-facing message per field no matter which constraint failed.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from invoicedash.models.invoice import InvoiceStatus
from invoicedash.models.state import FieldErrors

logger = logging.getLogger(__name__)

FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

# invoices.amount is an INT column of cents
MAX_AMOUNT = Decimal("21474836.47")

class InvoiceInput(BaseModel):
    """Validated invoice fields as submitted by the dashboard form."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        max_digits=10,
        decimal_places=2,
        description="Dollars, as typed in the form"
    )
    status: InvoiceStatus

    @property
    def amount_in_cents(self) -> int:
        """Integer cents. Exact, since amounts carry at most two decimal places."""
        return int((self.amount * 100).to_integral_value(rounding=ROUND_HALF_UP))

# id and date are never user-supplied on these paths, so neither variant has them
class CreateInvoice(InvoiceInput):
    pass

class UpdateInvoice(InvoiceInput):
    pass

class ValidationResult(BaseModel):
    success: bool
    data: Optional[InvoiceInput] = None
    errors: FieldErrors = Field(default_factory=dict)

def read_invoice_fields(form: Mapping[str, Any]) -> dict:
    """Pull the schema's fields out of a form container, missing ones as None."""
    return {name: form.get(name) for name in FIELD_MESSAGES}

def flatten_errors(exc: ValidationError) -> FieldErrors:
    """Collapse pydantic errors into field -> [message], one message per field."""
    errors: FieldErrors = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        message = FIELD_MESSAGES.get(field, error["msg"])
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors

def safe_parse(schema: Type[InvoiceInput], raw: Mapping[str, Any]) -> ValidationResult:
    """
    Validate raw form fields against `schema` without raising.

    Every field is checked, so a submission with several bad fields reports
    all of them at once.
    """
    try:
        data = schema.model_validate(dict(raw))
    except ValidationError as exc:
        errors = flatten_errors(exc)
        logger.debug(f"Invoice form rejected: {sorted(errors)}")
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=data)

from typing import Optional
from pydantic import Field
from invoicedash.models.base import RecordModel, RecordId

class Customer(RecordModel):
    """A customer invoices are billed to."""
    id: RecordId
    name: str
    email: str
    image_url: Optional[str] = None

class CustomerField(RecordModel):
    """Slim customer projection used to populate the invoice form's select."""
    id: RecordId
    name: str = Field(..., description="Display name shown in the customer select")

from pydantic import Field
from invoicedash.models.base import RecordModel, RecordId

class User(RecordModel):
    id: RecordId
    name: str
    email: str
    password: str = Field(..., exclude=True, description="bcrypt hash")

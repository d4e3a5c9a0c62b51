from typing import Annotated, Any, Mapping, Optional, Type, TypeVar
from uuid import UUID
from pydantic import BaseModel, BeforeValidator, ConfigDict

# Postgres hands back UUID objects; the dashboard only ever deals in strings
RecordId = Annotated[str, BeforeValidator(lambda v: str(v) if isinstance(v, UUID) else v)]

T = TypeVar("T", bound="RecordModel")

class RecordModel(BaseModel):
    """
    Base model for rows coming out of Postgres, with record conversion helpers.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    @classmethod
    def from_record(cls: Type[T], record: Optional[Mapping[str, Any]]) -> Optional[T]:
        """Convert an asyncpg Record (or any mapping) to the model."""
        if record is None:
            return None
        return cls.model_validate(dict(record))

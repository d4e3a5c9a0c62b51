import asyncio
import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

import asyncpg

from invoicedash.models.base import RecordModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=RecordModel)

class PersistenceError(Exception):
    """A statement failed in the storage layer."""

# What the driver (or the socket under it) raises when a statement can't complete
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

def affected_rows(status: str) -> int:
    """Row count from a command tag such as 'UPDATE 1' or 'INSERT 0 1'."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0

class BaseRepository(Generic[T]):
    """
    Thin wrapper over an asyncpg pool. Statements always take their values as
    bound parameters ($1, $2, ...), never by string interpolation.
    """
    def __init__(self, pool: asyncpg.Pool, model_cls: Type[T]):
        self.pool = pool
        self.model_cls = model_cls

    async def execute(self, query: str, *args: Any) -> str:
        """Run a statement and return its command tag."""
        try:
            return await self.pool.execute(query, *args)
        except DRIVER_ERRORS as e:
            raise PersistenceError(str(e)) from e

    async def fetch(self, query: str, *args: Any, model_cls: Optional[Type[RecordModel]] = None) -> List[Any]:
        """Run a query and convert every row."""
        model = model_cls or self.model_cls
        try:
            records = await self.pool.fetch(query, *args)
        except DRIVER_ERRORS as e:
            raise PersistenceError(str(e)) from e
        return [model.from_record(record) for record in records]

    async def fetchrow(self, query: str, *args: Any, model_cls: Optional[Type[RecordModel]] = None) -> Optional[Any]:
        """Run a query and convert the first row, if any."""
        model = model_cls or self.model_cls
        try:
            record = await self.pool.fetchrow(query, *args)
        except DRIVER_ERRORS as e:
            raise PersistenceError(str(e)) from e
        return model.from_record(record)

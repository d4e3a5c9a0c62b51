import logging
from typing import Optional

import asyncpg

from invoicedash.config import settings
from invoicedash.repositories.invoice import InvoiceRepository
from invoicedash.repositories.customer import CustomerRepository
from invoicedash.repositories.user import UserRepository
from invoicedash.models.invoice import Invoice
from invoicedash.models.customer import Customer
from invoicedash.models.user import User

logger = logging.getLogger(__name__)

class Database:
    pool: Optional[asyncpg.Pool] = None

    # Repositories
    invoices: InvoiceRepository = None
    customers: CustomerRepository = None
    users: UserRepository = None

    async def connect(self, dsn: Optional[str] = None):
        """Create the connection pool and the repositories on top of it."""
        dsn = dsn or settings.POSTGRES_URL
        if not dsn:
            raise ValueError("POSTGRES_URL or DATABASE_URL not configured")

        self.pool = await asyncpg.create_pool(
            dsn,
            ssl=settings.DB_SSL,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
        )

        self.invoices = InvoiceRepository(self.pool, Invoice)
        self.customers = CustomerRepository(self.pool, Customer)
        self.users = UserRepository(self.pool, User)

        logger.info("Connected to Postgres")

    async def close(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Disconnected from Postgres")

db = Database()

async def get_db() -> Database:
    """Dependency for FastAPI."""
    return db

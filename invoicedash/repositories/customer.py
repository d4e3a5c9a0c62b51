from typing import List
from invoicedash.models.customer import Customer, CustomerField
from invoicedash.repositories.base import BaseRepository

class CustomerRepository(BaseRepository[Customer]):

    async def list_fields(self) -> List[CustomerField]:
        """Id/name pairs for the invoice form, alphabetical."""
        return await self.fetch(
            "SELECT id, name FROM customers ORDER BY name ASC",
            model_cls=CustomerField
        )

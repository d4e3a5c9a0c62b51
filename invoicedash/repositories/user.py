from typing import Optional
from invoicedash.models.user import User
from invoicedash.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.fetchrow(
            "SELECT id, name, email, password FROM users WHERE email = $1",
            email
        )

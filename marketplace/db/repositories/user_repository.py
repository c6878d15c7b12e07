"""
User repository - lookups used by registration, login and token resolution.
"""

from sqlalchemy import or_, select

from marketplace.db.models.user import User
from marketplace.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by (lowercase) email - used for login."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """First user colliding on either unique field, preferring an email match."""
        result = await self.session.execute(
            select(User)
            .where(or_(User.email == email.lower(), User.username == username))
            .order_by((User.email == email.lower()).desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

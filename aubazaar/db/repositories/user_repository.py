"""
User repository - encapsulates all user data access.
"""

from sqlalchemy import select

from aubazaar.db.models.user import User
from aubazaar.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for registration and login."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_verification_token(self, token: str) -> User | None:
        result = await self.session.execute(select(User).where(User.verification_token == token))
        return result.scalar_one_or_none()

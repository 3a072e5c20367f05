"""
Message repository - direct messages between users.
"""

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from aubazaar.db.models.message import Message
from aubazaar.db.repositories.base_repository import BaseRepository


class MessageRepository(BaseRepository[Message]):
    def __init__(self, session):
        super().__init__(session, Message)

    async def list_for_user(self, user_id: int) -> list[Message]:
        """Messages the user sent or received, newest first, with listing and both parties loaded."""
        result = await self.session.execute(
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .options(
                selectinload(Message.listing),
                selectinload(Message.sender),
                selectinload(Message.receiver),
            )
            .order_by(Message.created_at.desc(), Message.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_unread(self, receiver_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Message.id)).where(
                Message.receiver_id == receiver_id, Message.is_read.is_(False)
            )
        )
        return result.scalar_one()

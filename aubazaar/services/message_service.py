"""
Messaging service - direct messages between buyers and sellers.
"""

import logging

from aubazaar.core.exceptions import Forbidden, InvalidInput, NotFound
from aubazaar.db.models.message import Message
from aubazaar.db.repositories.listing_repository import ListingRepository
from aubazaar.db.repositories.message_repository import MessageRepository
from aubazaar.db.repositories.user_repository import UserRepository
from aubazaar.schemas.message import MessageCreate, MessageResponse

logger = logging.getLogger(__name__)


def _message_to_response(msg: Message) -> MessageResponse:
    return MessageResponse(
        id=msg.id,
        listing_id=msg.listing_id,
        sender_id=msg.sender_id,
        receiver_id=msg.receiver_id,
        message=msg.message,
        is_read=msg.is_read,
        created_at=msg.created_at,
        listing_title=msg.listing.title if msg.listing else None,
        sender_name=msg.sender.full_name if msg.sender else None,
        receiver_name=msg.receiver.full_name if msg.receiver else None,
    )


class MessageService:
    def __init__(
        self,
        message_repo: MessageRepository,
        user_repo: UserRepository,
        listing_repo: ListingRepository,
    ):
        self.message_repo = message_repo
        self.user_repo = user_repo
        self.listing_repo = listing_repo

    async def send(self, sender_id: int, data: MessageCreate) -> Message:
        """Persist a message. Sender and receiver must be two distinct, existing users."""
        if data.receiver_id == sender_id:
            raise InvalidInput("You cannot send a message to yourself")
        if not await self.user_repo.get_by_id(data.receiver_id):
            raise NotFound("Receiver not found")
        if data.listing_id is not None and not await self.listing_repo.get_by_id(data.listing_id):
            raise NotFound("Listing not found")

        msg = await self.message_repo.add(
            Message(
                listing_id=data.listing_id,
                sender_id=sender_id,
                receiver_id=data.receiver_id,
                message=data.message,
                is_read=False,
            )
        )
        logger.info("Message id=%s sent from user id=%s to user id=%s", msg.id, sender_id, data.receiver_id)
        return msg

    async def list_for_user(self, user_id: int) -> list[MessageResponse]:
        messages = await self.message_repo.list_for_user(user_id)
        return [_message_to_response(m) for m in messages]

    async def mark_read(self, user_id: int, id: int) -> None:
        msg = await self.message_repo.get_by_id(id)
        if not msg:
            raise NotFound("Message not found")
        if msg.receiver_id != user_id:
            raise Forbidden("Only the receiver can mark a message as read")
        if not msg.is_read:
            msg.is_read = True
            await self.message_repo.save(msg)

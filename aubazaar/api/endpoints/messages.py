"""
Message endpoints - send, inbox/outbox listing and read receipts.
"""

from fastapi import APIRouter, status

from aubazaar.core.dependencies import CurrentIdentity
from aubazaar.db.repositories.listing_repository import ListingRepository
from aubazaar.db.repositories.message_repository import MessageRepository
from aubazaar.db.repositories.user_repository import UserRepository
from aubazaar.db.session import DbSession
from aubazaar.schemas.message import MessageCreate, MessageList, MessageSent
from aubazaar.services.message_service import MessageService

router = APIRouter()


def _get_message_service(session: DbSession) -> MessageService:
    return MessageService(MessageRepository(session), UserRepository(session), ListingRepository(session))


@router.post("", response_model=MessageSent, status_code=status.HTTP_201_CREATED)
async def send_message(session: DbSession, identity: CurrentIdentity, data: MessageCreate):
    msg = await _get_message_service(session).send(identity.id, data)
    return MessageSent(message="Message sent successfully!", messageId=msg.id)


@router.get("", response_model=MessageList)
async def list_messages(session: DbSession, identity: CurrentIdentity):
    """Every message the caller sent or received, newest first."""
    return MessageList(messages=await _get_message_service(session).list_for_user(identity.id))


@router.patch("/{message_id}/read")
async def mark_message_read(session: DbSession, identity: CurrentIdentity, message_id: int):
    await _get_message_service(session).mark_read(identity.id, message_id)
    return {"message": "Message marked as read"}

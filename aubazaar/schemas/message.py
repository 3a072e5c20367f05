"""Message request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    listing_id: int | None = None
    receiver_id: int
    message: str = Field(..., min_length=1, max_length=5000)


class MessageSent(BaseModel):
    message: str
    messageId: int


class MessageResponse(BaseModel):
    id: int
    listing_id: int | None = None
    sender_id: int
    receiver_id: int
    message: str
    is_read: bool
    created_at: datetime | None = None
    listing_title: str | None = None
    sender_name: str | None = None
    receiver_name: str | None = None


class MessageList(BaseModel):
    messages: list[MessageResponse]

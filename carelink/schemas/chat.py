"""
Conversation and message schemas
"""
from datetime import datetime

from pydantic import Field, PositiveInt

from carelink.core.constants import MESSAGE_MAX_LENGTH
from carelink.schemas.common import CamelModel


class ConversationStart(CamelModel):
    other_user_id: PositiveInt


class MessageCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)


class MessageResponse(CamelModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    sent_at: datetime

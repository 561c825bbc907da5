"""
Chat endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.chat import ConversationStart, MessageCreate, MessageResponse
from carelink.schemas.common import payload_of, serialize, success
from carelink.services.chat_service import ChatService

router = APIRouter()


@router.get("/conversations")
async def list_conversations(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(ChatService(db).get_conversations(current_user.id))


@router.post("/conversations")
async def start_conversation(
        start: ConversationStart,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Open (or reopen) the conversation with another user
    """
    conversation = ChatService(db).start_conversation(current_user.id, payload_of(start))
    return success({"conversationId": conversation.id})


@router.get("/conversations/{conversation_id}/messages")
async def list_messages(
        conversation_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    messages = ChatService(db).get_messages(conversation_id, current_user.id)
    return success([serialize(MessageResponse, m) for m in messages])


@router.post("/conversations/{conversation_id}/messages", status_code=status.HTTP_201_CREATED)
async def send_message(
        conversation_id: int,
        message_data: MessageCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    message = ChatService(db).send_message(conversation_id, current_user.id, payload_of(message_data))
    return success(serialize(MessageResponse, message), "Message sent")


@router.delete("/messages/{message_id}")
async def delete_message(
        message_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    ChatService(db).delete_message(message_id, current_user.id)
    return success(message="Message deleted successfully")

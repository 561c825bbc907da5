"""
One-to-one chat service
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime
import logging

from carelink.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from carelink.models.chat import Conversation, Message
from carelink.models.user import User
from carelink.schemas.chat import ConversationStart, MessageCreate
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, db: Session):
        self.db = db

    def _find_conversation(self, user1_id: int, user2_id: int) -> Optional[Conversation]:
        return self.db.query(Conversation).filter(
            Conversation.user1_id == user1_id,
            Conversation.user2_id == user2_id
        ).first()

    def start_conversation(self, user_id: int, payload: dict, now: Optional[datetime] = None) -> Conversation:
        """Return the conversation between the two users, creating it on first contact"""
        other_id = parse_payload(ConversationStart, payload).other_user_id
        if other_id == user_id:
            raise ValidationError(errors=["You cannot start a conversation with yourself"])
        if self.db.query(User).filter(User.id == other_id).first() is None:
            raise NotFoundError("User not found")

        user1_id, user2_id = sorted((user_id, other_id))
        conversation = self._find_conversation(user1_id, user2_id)
        if conversation:
            return conversation

        conversation = Conversation(user1_id=user1_id, user2_id=user2_id, created_at=now or datetime.utcnow())
        self.db.add(conversation)
        try:
            self.db.commit()
        except IntegrityError:
            # Both users opened the conversation at the same time
            self.db.rollback()
            return self._find_conversation(user1_id, user2_id)
        self.db.refresh(conversation)

        logger.info(f"Conversation started between users {user1_id} and {user2_id} (ID: {conversation.id})")
        return conversation

    def get_conversation(self, conversation_id: int, user_id: int) -> Conversation:
        conversation = self.db.query(Conversation).filter(Conversation.id == conversation_id).first()
        if not conversation:
            raise NotFoundError("Conversation not found")
        if not conversation.has_participant(user_id):
            raise ForbiddenError("Access denied to this conversation")
        return conversation

    def _visible_messages(self, conversation_id: int):
        return self.db.query(Message).filter(
            Message.conversation_id == conversation_id,
            Message.is_deleted.is_(False)
        )

    def get_conversations(self, user_id: int) -> List[Dict]:
        """The user's conversations, most recently active first"""
        conversations = self.db.query(Conversation).filter(
            (Conversation.user1_id == user_id) | (Conversation.user2_id == user_id)
        ).all()

        result = []
        for conversation in conversations:
            last = self._visible_messages(conversation.id).order_by(
                Message.sent_at.desc(), Message.id.desc()
            ).first()
            other = conversation.other_participant(user_id)
            result.append({
                "id": conversation.id,
                "otherUserId": other.id,
                "otherUserName": other.name,
                "lastMessage": last.content if last else None,
                "lastMessageAt": last.sent_at.isoformat() if last else None,
                "createdAt": conversation.created_at.isoformat(),
                "_activity": last.sent_at if last else conversation.created_at,
            })

        result.sort(key=lambda row: row.pop("_activity"), reverse=True)
        return result

    def get_messages(self, conversation_id: int, user_id: int) -> List[Message]:
        self.get_conversation(conversation_id, user_id)
        return self._visible_messages(conversation_id).order_by(Message.sent_at, Message.id).all()

    def send_message(
            self,
            conversation_id: int,
            user_id: int,
            payload: dict,
            now: Optional[datetime] = None
    ) -> Message:
        data = parse_payload(MessageCreate, payload)
        conversation = self.db.query(Conversation).filter(Conversation.id == conversation_id).first()
        if not conversation:
            raise NotFoundError("Conversation not found")
        if not conversation.has_participant(user_id):
            raise ForbiddenError("User not in conversation")

        message = Message(
            conversation_id=conversation.id,
            sender_id=user_id,
            content=data.content,
            sent_at=now or datetime.utcnow(),
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)

        logger.info(f"Message sent in conversation {conversation.id} by user {user_id} (ID: {message.id})")
        return message

    def delete_message(self, message_id: int, user_id: int):
        """Senders can hide their own messages"""
        message = self.db.query(Message).filter(
            Message.id == message_id,
            Message.is_deleted.is_(False)
        ).first()
        if not message:
            raise NotFoundError("Message not found")
        if message.sender_id != user_id:
            raise ForbiddenError("You can only delete your own messages")

        message.is_deleted = True
        self.db.commit()

        logger.info(f"Message deleted: ID {message_id}")

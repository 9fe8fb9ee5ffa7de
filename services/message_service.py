from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from adapters import realtime_adapter
from app.config import settings
from app.exceptions import ServiceValidationError, NotFoundError, ForbiddenError
from domain.conversations import Conversation, group_conversations
from domain.models import Customer, Message, Profile
from domain.templates import MESSAGE_TEMPLATES, MessageTemplate, render_template
from repositories import MessageRepository, ProfileRepository

logger = logging.getLogger("coachdesk.message")

CLIENT_DEFAULT_SUBJECT = "Message from client"
MESSAGE_CREATED = "message.created"


class MessageService:
    """Business logic for coach and client messaging"""

    @staticmethod
    def inbox(db: Session, user_id: UUID, limit: Optional[int] = None) -> List[Message]:
        """Messages addressed to the user, newest first"""
        return MessageRepository(db).inbox(user_id, limit or settings.inbox_limit)

    @staticmethod
    def conversations(
        db: Session, user_id: UUID
    ) -> List[Tuple[Conversation, Optional[Profile]]]:
        """Conversations of the user, each with the counterparty's profile"""
        messages = MessageRepository(db).involving(user_id)
        grouped = group_conversations(messages, user_id)
        profiles = {
            p.id: p
            for p in ProfileRepository(db).get_many([c.counterparty_id for c in grouped])
        }
        return [(c, profiles.get(c.counterparty_id)) for c in grouped]

    @staticmethod
    def mark_read(db: Session, message_id: UUID, user: Profile) -> Message:
        repo = MessageRepository(db)
        message = repo.get_by_id(message_id)
        if not message:
            raise NotFoundError(f"Message {message_id} not found")
        if message.to_user_id != user.id:
            raise ForbiddenError("Only the recipient can mark a message as read")
        if not message.is_read:
            message.is_read = True
            message = repo.update(message)
            logger.info(f"message_read message_id={message_id} user_id={user.id}")
        return message

    @staticmethod
    def send_message(
        db: Session,
        sender: Profile,
        to_user_id: UUID,
        subject: Optional[str],
        body: str,
        is_automated: bool = False,
        trigger_type: Optional[str] = None,
    ) -> Message:
        body = (body or "").strip()
        if not body:
            raise ServiceValidationError("Message body must not be empty")
        if not ProfileRepository(db).exists(to_user_id):
            raise NotFoundError(f"Recipient {to_user_id} not found")

        message = MessageRepository(db).create(
            Message(
                from_user_id=sender.id,
                to_user_id=to_user_id,
                subject=subject,
                body=body,
                is_automated=is_automated,
                trigger_type=trigger_type,
            )
        )
        logger.info(
            f"message_sent message_id={message.id} from={sender.id} to={to_user_id} "
            f"automated={is_automated}"
        )
        MessageService.publish_created(message)
        return message

    @staticmethod
    def publish_created(message: Message) -> int:
        """Tell the recipient's live connections that a message arrived"""
        event = {
            "type": MESSAGE_CREATED,
            "message": {
                "id": str(message.id),
                "from_user_id": str(message.from_user_id) if message.from_user_id else None,
                "to_user_id": str(message.to_user_id) if message.to_user_id else None,
                "subject": message.subject,
                "created_at": message.created_at.isoformat() if message.created_at else None,
            },
        }
        if message.to_user_id is None:
            return 0
        return realtime_adapter.publish(message.to_user_id, event)

    # ------------------------------------------------------------- templates

    @staticmethod
    def list_templates() -> List[MessageTemplate]:
        return list(MESSAGE_TEMPLATES)

    @staticmethod
    def render_template(
        db: Session,
        template_id: str,
        to_user_id: Optional[UUID] = None,
        name: Optional[str] = None,
        week: Optional[int] = None,
    ) -> Tuple[str, str]:
        """Render a template, taking the name from the recipient when not given"""
        if name is None and to_user_id is not None:
            recipient = ProfileRepository(db).get_by_id(to_user_id)
            if recipient is not None:
                name = recipient.full_name
        return render_template(template_id, name=name, week=week)

    # ---------------------------------------------------------------- client

    @staticmethod
    def client_thread(db: Session, user: Profile) -> List[Message]:
        """
        All messages from or to the client, oldest first.

        Opening the thread marks everything addressed to the client as read.
        """
        repo = MessageRepository(db)
        marked = repo.mark_all_read(user.id)
        db.commit()
        if marked:
            logger.info(f"client_thread_read user_id={user.id} marked={marked}")
        return repo.involving(user.id, ascending=True)

    @staticmethod
    def client_send(
        db: Session, user: Profile, customer: Customer, body: str, subject: Optional[str] = None
    ) -> Message:
        """Send from the client to their assigned coach"""
        if customer.assigned_admin_id is None:
            raise ServiceValidationError("No coach is assigned to this client yet")
        return MessageService.send_message(
            db,
            sender=user,
            to_user_id=customer.assigned_admin_id,
            subject=(subject or "").strip() or CLIENT_DEFAULT_SUBJECT,
            body=body,
        )

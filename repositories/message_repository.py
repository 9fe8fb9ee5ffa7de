"""
Message Repository - Data access for direct messages
"""

from typing import List
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Message


class MessageRepository(BaseRepository[Message]):
    """Repository for message data access"""

    def __init__(self, db: Session):
        super().__init__(db, Message)

    def inbox(self, user_id: UUID, limit: int = 50) -> List[Message]:
        """Messages addressed to a user, newest first, with sender loaded"""
        return (
            self.db.query(Message)
            .options(joinedload(Message.from_profile))
            .filter(Message.to_user_id == user_id)
            .order_by(Message.created_at.desc())
            .limit(limit)
            .all()
        )

    def involving(self, user_id: UUID, ascending: bool = False) -> List[Message]:
        """Every message sent by or to a user"""
        order = Message.created_at.asc() if ascending else Message.created_at.desc()
        return (
            self.db.query(Message)
            .options(joinedload(Message.from_profile))
            .filter(or_(Message.from_user_id == user_id, Message.to_user_id == user_id))
            .order_by(order)
            .all()
        )

    def sent_by(self, user_id: UUID) -> List[Message]:
        return self.db.query(Message).filter(Message.from_user_id == user_id).all()

    def unread_count(self, user_id: UUID) -> int:
        return (
            self.db.query(Message)
            .filter(Message.to_user_id == user_id, Message.is_read.is_(False))
            .count()
        )

    def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread message addressed to a user as read (flush only)"""
        count = (
            self.db.query(Message)
            .filter(Message.to_user_id == user_id, Message.is_read.is_(False))
            .update({Message.is_read: True}, synchronize_session="fetch")
        )
        self.db.flush()
        return count

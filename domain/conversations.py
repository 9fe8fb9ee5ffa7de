"""
Group flat message rows into per-counterparty conversations.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional
from uuid import UUID

from domain.clock import as_utc


@dataclass
class Conversation:
    counterparty_id: UUID
    latest_message: Any
    message_count: int = 0
    unread_count: int = 0
    messages: List[Any] = field(default_factory=list)

    @property
    def latest_at(self):
        return as_utc(self.latest_message.created_at)


def counterparty_of(message, viewer_id: UUID) -> Optional[UUID]:
    """The other party of a message relative to the viewer"""
    if message.from_user_id == viewer_id:
        return message.to_user_id
    return message.from_user_id


def group_conversations(messages: Iterable, viewer_id: UUID) -> List[Conversation]:
    """
    Build one conversation per counterparty.

    Unread counts only include messages addressed to the viewer. Conversations
    are ordered by latest activity, newest first.
    """
    conversations: dict[UUID, Conversation] = {}
    for message in messages:
        other = counterparty_of(message, viewer_id)
        if other is None:
            continue

        conv = conversations.get(other)
        if conv is None:
            conv = Conversation(counterparty_id=other, latest_message=message)
            conversations[other] = conv
        elif as_utc(message.created_at) > conv.latest_at:
            conv.latest_message = message

        conv.messages.append(message)
        conv.message_count += 1
        if message.to_user_id == viewer_id and not message.is_read:
            conv.unread_count += 1

    return sorted(conversations.values(), key=lambda c: c.latest_at, reverse=True)

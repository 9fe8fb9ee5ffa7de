"""
Message domain mappers.
"""

from typing import Optional
from domain.conversations import Conversation
from domain.models import Profile
from domain.schemas.message_schemas import (
    ConversationResponse,
    MessageResponse,
    SenderSummary,
)


class MessageMapper:
    """Mapper for conversation views."""

    @staticmethod
    def to_conversation(
        conversation: Conversation, counterparty: Optional[Profile]
    ) -> ConversationResponse:
        return ConversationResponse(
            counterparty_id=conversation.counterparty_id,
            counterparty=(
                SenderSummary.model_validate(counterparty) if counterparty else None
            ),
            latest_message=MessageResponse.model_validate(conversation.latest_message),
            message_count=conversation.message_count,
            unread_count=conversation.unread_count,
        )

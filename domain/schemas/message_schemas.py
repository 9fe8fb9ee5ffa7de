from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class SenderSummary(BaseModel):
    id: UUID
    full_name: str
    email: str
    profile_image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class MessageCreate(BaseModel):
    """Coach to client message"""

    to_user_id: UUID
    subject: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    is_automated: bool = False
    trigger_type: Optional[str] = None


class ClientMessageCreate(BaseModel):
    """Client to coach message; the recipient is the assigned coach"""

    body: str
    subject: Optional[str] = None

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message body must not be empty")
        return v


class MessageResponse(BaseModel):
    id: UUID
    from_user_id: Optional[UUID] = None
    to_user_id: Optional[UUID] = None
    subject: Optional[str] = None
    body: str
    is_read: bool
    is_automated: bool
    trigger_type: Optional[str] = None
    created_at: datetime
    sender: Optional[SenderSummary] = Field(
        None, validation_alias="from_profile"
    )

    model_config = {"from_attributes": True, "populate_by_name": True}


class ConversationResponse(BaseModel):
    counterparty_id: UUID
    counterparty: Optional[SenderSummary] = None
    latest_message: MessageResponse
    message_count: int
    unread_count: int


class TemplateResponse(BaseModel):
    id: str
    name: str
    subject: str
    body: str

    model_config = {"from_attributes": True}


class RenderTemplateRequest(BaseModel):
    template_id: str
    to_user_id: Optional[UUID] = None
    name: Optional[str] = None
    week: Optional[int] = Field(None, ge=1)


class RenderedTemplate(BaseModel):
    subject: str
    body: str

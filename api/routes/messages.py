"""Coach messaging routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, require_admin
from api.responses import ERROR_RESPONSES
from domain.mappers import MessageMapper
from domain.models import Profile
from domain.schemas.message_schemas import (
    MessageCreate,
    MessageResponse,
    ConversationResponse,
    TemplateResponse,
    RenderTemplateRequest,
    RenderedTemplate,
)
from services.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"], responses=ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.messages")


@router.get("/inbox", response_model=List[MessageResponse])
def inbox(
    limit: Optional[int] = Query(None, ge=1, le=500),
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return MessageService.inbox(db, admin.id, limit=limit)


@router.get("/conversations", response_model=List[ConversationResponse])
def conversations(
    admin: Profile = Depends(require_admin), db: Session = Depends(get_db)
):
    """One entry per client the coach has exchanged messages with"""
    return [
        MessageMapper.to_conversation(conversation, counterparty)
        for conversation, counterparty in MessageService.conversations(db, admin.id)
    ]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return MessageService.send_message(
        db,
        sender=admin,
        to_user_id=payload.to_user_id,
        subject=payload.subject,
        body=payload.body,
        is_automated=payload.is_automated,
        trigger_type=payload.trigger_type,
    )


@router.get("/templates", response_model=List[TemplateResponse])
def list_templates(admin: Profile = Depends(require_admin)):
    return MessageService.list_templates()


@router.post("/templates/render", response_model=RenderedTemplate)
def render_template(
    payload: RenderTemplateRequest,
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    subject, body = MessageService.render_template(
        db,
        payload.template_id,
        to_user_id=payload.to_user_id,
        name=payload.name,
        week=payload.week,
    )
    return RenderedTemplate(subject=subject, body=body)


@router.post("/{message_id}/read", response_model=MessageResponse)
def mark_read(
    message_id: UUID,
    admin: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return MessageService.mark_read(db, message_id, admin)

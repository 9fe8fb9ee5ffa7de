"""Own profile routes (details and profile picture)"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from api.responses import ERROR_RESPONSES
from app.config import settings
from domain.models import Profile
from domain.schemas.profile_schemas import (
    ProfileResponse,
    ProfileUpdate,
    AvatarResponse,
)
from services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"], responses=ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.profiles")


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(user: Profile = Depends(get_current_user)):
    return user


@router.put("/me", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdate,
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProfileService.update_profile(db, user.id, payload)


@router.post("/me/avatar", response_model=AvatarResponse)
def upload_avatar(
    file: UploadFile = File(...),
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Upload a new profile picture.

    Accepts image files up to the configured size; the previous picture is
    replaced. At most one byte over the limit is read, enough to reject it.
    """
    data = file.file.read(settings.avatar_max_bytes + 1)
    profile = ProfileService.upload_avatar(
        db, user.id, file.filename, file.content_type, data
    )
    return AvatarResponse(profile_image_url=profile.profile_image_url)

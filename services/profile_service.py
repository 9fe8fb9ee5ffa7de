from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging
import mimetypes

from adapters import storage_adapter
from app.config import settings
from app.exceptions import ServiceValidationError, NotFoundError
from domain.clock import utcnow
from domain.models import Profile
from domain.schemas.profile_schemas import ProfileUpdate
from repositories import ProfileRepository

logger = logging.getLogger("coachdesk.profile")


class ProfileService:
    """Business logic for profile management"""

    @staticmethod
    def get_profile(db: Session, user_id: UUID) -> Profile:
        """Retrieve a profile or raise NotFoundError"""
        profile = ProfileRepository(db).get_by_id(user_id)
        if not profile:
            logger.warning(f"profile_not_found user_id={user_id}")
            raise NotFoundError(f"Profile {user_id} not found")
        return profile

    @staticmethod
    def update_profile(db: Session, user_id: UUID, data: ProfileUpdate) -> Profile:
        profile = ProfileService.get_profile(db, user_id)
        fields = data.model_dump(exclude_unset=True)
        for key, value in fields.items():
            setattr(profile, key, value)
        db.commit()
        db.refresh(profile)
        logger.info(f"profile_updated user_id={user_id} fields={sorted(fields)}")
        return profile

    @staticmethod
    def _avatar_extension(filename: Optional[str], content_type: str) -> str:
        if filename and "." in filename:
            ext = filename.rsplit(".", 1)[1].lower()
            if ext.isalnum():
                return ext
        guessed = mimetypes.guess_extension(content_type) or ".img"
        return guessed.lstrip(".")

    @staticmethod
    def upload_avatar(
        db: Session,
        user_id: UUID,
        filename: Optional[str],
        content_type: Optional[str],
        data: bytes,
    ) -> Profile:
        """
        Store a profile picture and point the profile at it.

        Only image content types up to the configured size are accepted. The
        file always lands at ``<user_id>/avatar.<ext>`` so a new upload
        replaces the old one; the URL carries a timestamp to defeat caches.
        """
        profile = ProfileService.get_profile(db, user_id)
        content_type = (content_type or "").lower()
        if not content_type.startswith("image/"):
            raise ServiceValidationError("Only image files can be uploaded")
        if len(data) > settings.avatar_max_bytes:
            raise ServiceValidationError(
                f"Image is too large (max {settings.avatar_max_bytes // (1024 * 1024)} MB)"
            )
        if not data:
            raise ServiceValidationError("Uploaded file is empty")

        ext = ProfileService._avatar_extension(filename, content_type)
        path = storage_adapter.save(f"{user_id}/avatar.{ext}", data)
        stamp = int(utcnow().timestamp() * 1000)
        profile.profile_image_url = f"{storage_adapter.public_url(path)}?t={stamp}"
        db.commit()
        db.refresh(profile)
        logger.info(f"avatar_uploaded user_id={user_id} bytes={len(data)}")
        return profile

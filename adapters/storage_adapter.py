"""Local file storage for uploaded avatars.

Files live under ``settings.media_root`` and are served by the app at
``settings.media_url``.
"""

from pathlib import Path
from typing import Optional
import logging

from app.config import settings

logger = logging.getLogger("coachdesk.storage")

_root: Optional[Path] = None


def connect(media_root: Optional[str] = None) -> Path:
    """Make sure the media directory exists and remember it."""
    global _root
    _root = Path(media_root or settings.media_root)
    _root.mkdir(parents=True, exist_ok=True)
    logger.info("Media storage ready at %s", _root.resolve())
    return _root


def root() -> Path:
    if _root is None:
        return connect()
    return _root


def save(relative_path: str, data: bytes) -> str:
    """Write ``data`` to ``relative_path`` under the media root, replacing any old file.

    Returns:
        The relative path that was written.
    """
    target = root() / relative_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    logger.info("stored_file path=%s bytes=%d", relative_path, len(data))
    return relative_path


def public_url(relative_path: str) -> str:
    return f"{settings.media_url.rstrip('/')}/{relative_path}"

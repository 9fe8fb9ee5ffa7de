"""
Tests for the logged-in user's own profile and profile picture.
"""

import inspect
from pathlib import Path

from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_admin, auth_headers
from adapters import storage_adapter
from api.routes import profiles
from app.config import settings
from services.profile_service import ProfileService


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_get_and_update_my_profile(db_session: Session):
    admin = make_admin(db_session)

    r = client.get("/profiles/me", headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json()["full_name"] == "Coach Carter"

    r2 = client.put(
        "/profiles/me",
        json={"phone": "+47 555 12 345", "height_cm": 180, "activity_level": "active"},
        headers=auth_headers(admin),
    )
    assert r2.status_code == 200
    assert r2.json()["phone"] == "+47 555 12 345"
    assert r2.json()["height_cm"] == 180
    assert r2.json()["activity_level"] == "active"
    # Untouched fields stay as they were
    assert r2.json()["full_name"] == "Coach Carter"


def test_update_profile_rejects_out_of_range_height(db_session: Session):
    admin = make_admin(db_session)
    r = client.put("/profiles/me", json={"height_cm": 20}, headers=auth_headers(admin))
    assert r.status_code == 422


def test_upload_avatar_stores_file(db_session: Session):
    admin = make_admin(db_session)

    r = client.post(
        "/profiles/me/avatar",
        files={"file": ("me.PNG", PNG_BYTES, "image/png")},
        headers=auth_headers(admin),
    )
    assert r.status_code == 200
    url = r.json()["profile_image_url"]
    assert url.startswith(f"/media/{admin.id}/avatar.png?t=")

    stored = Path(storage_adapter.root()) / str(admin.id) / "avatar.png"
    assert stored.read_bytes() == PNG_BYTES

    me = client.get("/profiles/me", headers=auth_headers(admin))
    assert me.json()["profile_image_url"] == url


def test_upload_avatar_rejects_non_images(db_session: Session):
    admin = make_admin(db_session)
    r = client.post(
        "/profiles/me/avatar",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers(admin),
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Only image files can be uploaded"


def test_upload_avatar_rejects_empty_and_large(db_session: Session, monkeypatch):
    admin = make_admin(db_session)

    empty = client.post(
        "/profiles/me/avatar",
        files={"file": ("a.png", b"", "image/png")},
        headers=auth_headers(admin),
    )
    assert empty.status_code == 400

    monkeypatch.setattr(settings, "avatar_max_bytes", 10)
    large = client.post(
        "/profiles/me/avatar",
        files={"file": ("a.png", PNG_BYTES, "image/png")},
        headers=auth_headers(admin),
    )
    assert large.status_code == 400


def test_avatar_extension_guessed_from_content_type():
    assert ProfileService._avatar_extension("photo", "image/png") == "png"
    assert ProfileService._avatar_extension("photo.JPEG", "image/jpeg") == "jpeg"
    assert ProfileService._avatar_extension(None, "image/x-unknown") == "img"


def test_avatar_upload_reads_only_up_to_the_limit(db_session: Session, monkeypatch):
    # Blocking file and database work runs in the threadpool
    assert not inspect.iscoroutinefunction(profiles.upload_avatar)

    admin = make_admin(db_session)
    seen = []
    real_upload = ProfileService.upload_avatar

    def recording_upload(db, user_id, filename, content_type, data):
        seen.append(len(data))
        return real_upload(db, user_id, filename, content_type, data)

    monkeypatch.setattr(settings, "avatar_max_bytes", 16)
    monkeypatch.setattr(ProfileService, "upload_avatar", staticmethod(recording_upload))

    r = client.post(
        "/profiles/me/avatar",
        files={"file": ("a.png", b"x" * 1000, "image/png")},
        headers=auth_headers(admin),
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"].startswith("Image is too large")
    assert seen == [17]

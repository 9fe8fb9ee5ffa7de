"""
Profile Repository - Data access for accounts and role memberships
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Profile, UserRole
from domain.enums import AppRole


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class ProfileRepository(BaseRepository[Profile]):
    """Repository for profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def get_by_email(self, email: str) -> Optional[Profile]:
        """Get profile by email (case-insensitive)"""
        return (
            self.db.query(Profile)
            .filter(Profile.email == normalize_email(email))
            .first()
        )

    def add(self, email: str, full_name: str, **fields) -> Profile:
        """Stage a new profile; the caller owns the transaction"""
        profile = Profile(email=normalize_email(email), full_name=full_name, **fields)
        self.db.add(profile)
        self.db.flush()
        return profile

    def add_role(self, profile: Profile, role: AppRole) -> UserRole:
        """Grant a role unless the profile already holds it"""
        for existing in profile.roles:
            if existing.role == role:
                return existing
        user_role = UserRole(role=role)
        profile.roles.append(user_role)
        self.db.flush()
        return user_role

    def search(self, query: str, limit: int = 5) -> List[Profile]:
        """Profiles whose name or email contains ``query``"""
        return (
            self.db.query(Profile)
            .filter(
                or_(
                    Profile.full_name.icontains(query, autoescape=True),
                    Profile.email.icontains(query, autoescape=True),
                )
            )
            .order_by(Profile.full_name)
            .limit(limit)
            .all()
        )

    def get_many(self, ids: List[UUID]) -> List[Profile]:
        if not ids:
            return []
        return self.db.query(Profile).filter(Profile.id.in_(ids)).all()

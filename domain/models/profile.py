"""
Account-related database models.
"""

from sqlalchemy import (
    Column,
    Text,
    String,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    Uuid,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.clock import utcnow
from domain.models.database import Base
from domain.enums import AppRole, Gender, ActivityLevel


def enum_column(enum_cls):
    """Store enum values (not names) as plain strings on every backend"""
    return SQLEnum(
        enum_cls,
        values_callable=lambda e: [m.value for m in e],
        native_enum=False,
        length=32,
    )


class Profile(Base):
    """A person who can log in: either a coach or a client"""

    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False, index=True)
    full_name = Column(Text, nullable=False)
    phone = Column(String(40))
    birth_date = Column(Date)
    gender = Column(enum_column(Gender))
    height_cm = Column(Numeric(5, 1, asdecimal=False))
    weight_goal_kg = Column(Numeric(5, 1, asdecimal=False))
    activity_level = Column(enum_column(ActivityLevel))
    profile_image_url = Column(Text)
    # Invited clients have no password until they set one
    password_hash = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    roles = relationship(
        "UserRole", back_populates="user", cascade="all, delete-orphan", lazy="selectin"
    )
    customer = relationship(
        "Customer",
        back_populates="profile",
        uselist=False,
        foreign_keys="Customer.user_id",
        cascade="all, delete-orphan",
    )

    @property
    def role_names(self) -> list[str]:
        return sorted(r.role.value for r in self.roles)

    def has_role(self, role: AppRole) -> bool:
        return any(r.role == role for r in self.roles)

    @property
    def first_name(self) -> str:
        return (self.full_name or "").split(" ")[0]


class UserRole(Base):
    """Role membership; a profile may hold several roles"""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_role"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    role = Column(enum_column(AppRole), nullable=False)

    user = relationship("Profile", back_populates="roles")

"""SQLAlchemy models for users, secrets, and sessions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from advanced_alchemy.base import UUIDAuditBase
from advanced_alchemy.types import DateTimeUTC
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

if TYPE_CHECKING:
    from secretwall.auth.models import Session, User
    from secretwall.board.models import Secret


class UserModel(UUIDAuditBase):
    """SQLAlchemy model for User entities."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    external_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True, index=True)

    sessions: Mapped[list[SessionModel]] = relationship(
        "SessionModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class SecretModel(UUIDAuditBase):
    """SQLAlchemy model for Secret entities."""

    __tablename__ = "secrets"

    text: Mapped[str] = mapped_column(Text)


class SessionModel(UUIDAuditBase):
    """SQLAlchemy model for Session entities.

    Note: Uses string ID (token) as the primary lookup, but still has UUID for consistency.
    """

    __tablename__ = "sessions"

    session_token: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTimeUTC(timezone=True), nullable=True)

    user: Mapped[UserModel] = relationship("UserModel", back_populates="sessions")


# Conversion functions
def user_to_model(user: User) -> UserModel:
    """Convert domain User to UserModel."""
    return UserModel(
        id=user.id,
        email=user.email,
        password_hash=user.password_hash,
        external_id=user.external_id,
        created_at=user.created_at,
    )


def user_from_model(model: UserModel) -> User:
    """Convert UserModel to domain User."""
    from secretwall.auth.models import User

    return User(
        id=model.id,
        email=model.email,
        password_hash=model.password_hash,
        external_id=model.external_id,
        created_at=model.created_at,
    )


def secret_to_model(secret: Secret) -> SecretModel:
    """Convert domain Secret to SecretModel."""
    return SecretModel(id=secret.id, text=secret.text, created_at=secret.created_at)


def secret_from_model(model: SecretModel) -> Secret:
    """Convert SecretModel to domain Secret."""
    from secretwall.board.models import Secret

    return Secret(id=model.id, text=model.text, created_at=model.created_at)


def session_to_model(session: Session) -> SessionModel:
    """Convert domain Session to SessionModel."""
    return SessionModel(
        session_token=session.id,
        user_id=session.user_id,
        created_at=session.created_at,
        expires_at=session.expires_at,
    )


def session_from_model(model: SessionModel) -> Session:
    """Convert SessionModel to domain Session."""
    from secretwall.auth.models import Session

    return Session(
        id=model.session_token,
        user_id=model.user_id,
        created_at=model.created_at,
        expires_at=model.expires_at,
    )

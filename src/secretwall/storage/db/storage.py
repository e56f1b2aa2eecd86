"""Database storage implementation for secretwall."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from secretwall.exceptions import DuplicateRecordError, StorageError
from secretwall.storage.db.models import (
    SecretModel,
    SessionModel,
    UserModel,
    secret_from_model,
    secret_to_model,
    session_from_model,
    session_to_model,
    user_from_model,
    user_to_model,
)

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from secretwall.auth.models import Session, User
    from secretwall.board.models import Secret
    from secretwall.storage.db.setup import DatabaseManager

logger = structlog.get_logger(__name__)


class DatabaseStorage:
    """Async database storage implementation using SQLAlchemy.

    Every operation runs in its own transaction obtained from the
    DatabaseManager. SQLAlchemy errors are translated into StorageError, and
    unique constraint violations into DuplicateRecordError.

    Attributes:
        _db: Database manager providing sessions.
    """

    def __init__(self, db: DatabaseManager) -> None:
        """Initialize the database storage.

        Args:
            db: Database manager providing transactional sessions.
        """
        self._db = db

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Open a session and translate database errors for ``operation``."""
        try:
            async with self._db.session() as session:
                yield session
        except IntegrityError as e:
            logger.warning("Integrity constraint violated", operation=operation, error=str(e.orig))
            msg = f"{operation} violates a database constraint"
            raise DuplicateRecordError(msg) from e
        except SQLAlchemyError as e:
            logger.error("Database operation failed", operation=operation, error=str(e))
            msg = f"{operation} failed"
            raise StorageError(msg) from e

    # === Users ===

    async def create_user(self, user: User) -> User:
        """Create a new user."""
        async with self._transaction("create_user") as session:
            model = user_to_model(user)
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return user_from_model(model)

    async def get_user(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        async with self._transaction("get_user") as session:
            model = await session.get(UserModel, user_id)
            return user_from_model(model) if model else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        async with self._transaction("get_user_by_email") as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            model = result.scalar_one_or_none()
            return user_from_model(model) if model else None

    async def get_user_by_external_id(self, external_id: str) -> User | None:
        """Get user by OAuth provider ID."""
        async with self._transaction("get_user_by_external_id") as session:
            result = await session.execute(select(UserModel).where(UserModel.external_id == external_id))
            model = result.scalar_one_or_none()
            return user_from_model(model) if model else None

    async def set_external_id(self, user_id: UUID, external_id: str) -> User:
        """Attach an external id to an existing user."""
        async with self._transaction("set_external_id") as session:
            model = await session.get(UserModel, user_id)
            if model is None:
                msg = f"User {user_id} not found"
                raise StorageError(msg)

            model.external_id = external_id
            await session.flush()
            await session.refresh(model)
            return user_from_model(model)

    # === Secrets ===

    async def create_secret(self, secret: Secret) -> Secret:
        """Create a new secret."""
        async with self._transaction("create_secret") as session:
            model = secret_to_model(secret)
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return secret_from_model(model)

    async def list_secrets(self) -> list[Secret]:
        """List all secrets."""
        async with self._transaction("list_secrets") as session:
            result = await session.execute(select(SecretModel))
            return [secret_from_model(m) for m in result.scalars().all()]

    # === Sessions ===

    async def create_session(self, session: Session) -> Session:
        """Create a new session."""
        async with self._transaction("create_session") as db_session:
            model = session_to_model(session)
            db_session.add(model)
            await db_session.flush()
            await db_session.refresh(model)
            return session_from_model(model)

    async def get_session(self, session_id: str) -> Session | None:
        """Get session by token."""
        async with self._transaction("get_session") as db_session:
            result = await db_session.execute(select(SessionModel).where(SessionModel.session_token == session_id))
            model = result.scalar_one_or_none()
            return session_from_model(model) if model else None

    async def delete_session(self, session_id: str) -> bool:
        """Delete session by token."""
        async with self._transaction("delete_session") as db_session:
            result = await db_session.execute(select(SessionModel).where(SessionModel.session_token == session_id))
            model = result.scalar_one_or_none()
            if model is None:
                return False

            await db_session.delete(model)
            await db_session.flush()
            return True

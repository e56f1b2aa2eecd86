"""In-memory storage implementation for secretwall."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING

from secretwall.exceptions import DuplicateRecordError, StorageError

if TYPE_CHECKING:
    from uuid import UUID

    from secretwall.auth.models import Session, User
    from secretwall.board.models import Secret


class InMemoryStorage:
    """Thread-safe in-memory storage implementation.

    Keeps users, secrets, and sessions in dictionaries guarded by a single
    asyncio lock, and returns copies so callers cannot modify stored records.

    Note:
        All data is lost when the application stops. This storage is suitable for
        development and testing.
    """

    def __init__(self) -> None:
        """Initialize empty collections."""
        self._users: dict[UUID, User] = {}
        self._user_ids_by_email: dict[str, UUID] = {}
        self._user_ids_by_external_id: dict[str, UUID] = {}
        self._secrets: dict[UUID, Secret] = {}
        self._sessions: dict[str, Session] = {}
        self._lock = asyncio.Lock()

    # === Users ===

    async def create_user(self, user: User) -> User:
        """Create a new user, enforcing unique email and external id."""
        async with self._lock:
            if user.email in self._user_ids_by_email:
                msg = f"User with email {user.email} already exists"
                raise DuplicateRecordError(msg, field="email")
            if user.external_id is not None and user.external_id in self._user_ids_by_external_id:
                msg = f"User with external id {user.external_id} already exists"
                raise DuplicateRecordError(msg, field="external_id")

            self._users[user.id] = replace(user)
            self._user_ids_by_email[user.email] = user.id
            if user.external_id is not None:
                self._user_ids_by_external_id[user.external_id] = user.id
            return replace(user)

    async def get_user(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        async with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        async with self._lock:
            user_id = self._user_ids_by_email.get(email)
            return replace(self._users[user_id]) if user_id else None

    async def get_user_by_external_id(self, external_id: str) -> User | None:
        """Get user by external id."""
        async with self._lock:
            user_id = self._user_ids_by_external_id.get(external_id)
            return replace(self._users[user_id]) if user_id else None

    async def set_external_id(self, user_id: UUID, external_id: str) -> User:
        """Attach an external id to a user."""
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                msg = f"User {user_id} not found"
                raise StorageError(msg)
            owner = self._user_ids_by_external_id.get(external_id)
            if owner is not None and owner != user_id:
                msg = f"User with external id {external_id} already exists"
                raise DuplicateRecordError(msg, field="external_id")

            if user.external_id is not None:
                self._user_ids_by_external_id.pop(user.external_id, None)
            updated = replace(user, external_id=external_id)
            self._users[user_id] = updated
            self._user_ids_by_external_id[external_id] = user_id
            return replace(updated)

    # === Secrets ===

    async def create_secret(self, secret: Secret) -> Secret:
        """Create a new secret."""
        async with self._lock:
            self._secrets[secret.id] = replace(secret)
            return replace(secret)

    async def list_secrets(self) -> list[Secret]:
        """List all secrets."""
        async with self._lock:
            return [replace(secret) for secret in self._secrets.values()]

    # === Sessions ===

    async def create_session(self, session: Session) -> Session:
        """Create a new session, dropping any that have expired."""
        async with self._lock:
            expired = [session_id for session_id, stored in self._sessions.items() if stored.is_expired]
            for session_id in expired:
                del self._sessions[session_id]
            self._sessions[session.id] = replace(session)
            return replace(session)

    async def get_session(self, session_id: str) -> Session | None:
        """Get session by token."""
        async with self._lock:
            session = self._sessions.get(session_id)
            return replace(session) if session else None

    async def delete_session(self, session_id: str) -> bool:
        """Delete session by token."""
        async with self._lock:
            return self._sessions.pop(session_id, None) is not None

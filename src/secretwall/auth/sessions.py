"""Login session management."""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog
from itsdangerous import BadSignature, URLSafeTimedSerializer

from secretwall.auth.models import Session

if TYPE_CHECKING:
    from uuid import UUID

    from secretwall.auth.config import OAuthConfig
    from secretwall.auth.models import User
    from secretwall.storage.base import SessionStore, UserStore

logger = structlog.get_logger(__name__)

_COOKIE_SALT = "secretwall.session.v1"


class SessionManager:
    """Issues login sessions and resolves them back to users.

    Sessions live in the session store and are keyed by a random token. The
    cookie carries that token signed with the session secret, so a forged or
    tampered cookie never reaches the store.
    """

    def __init__(self, config: OAuthConfig, sessions: SessionStore, users: UserStore) -> None:
        """Initialize the session manager.

        Args:
            config: Session configuration (secret, cookie name, max age).
            sessions: The session store.
            users: The user store, used to load the session's user.
        """
        self._config = config
        self._sessions = sessions
        self._users = users
        self._serializer = URLSafeTimedSerializer(config.session_secret, salt=_COOKIE_SALT)

    @property
    def cookie_name(self) -> str:
        return self._config.session_cookie_name

    @property
    def max_age(self) -> int:
        return self._config.session_max_age

    @staticmethod
    def user_key(user: User) -> UUID:
        """Return the identifier a session stores for ``user``."""
        return user.id

    async def load_user(self, user_id: UUID) -> User | None:
        """Return the user a session identifier refers to, if it still exists."""
        return await self._users.get_user(user_id)

    async def create_session(self, user: User) -> str:
        """Create a session for an authenticated user.

        Args:
            user: The authenticated user.

        Returns:
            Signed token to set as the session cookie value.
        """
        now = datetime.now(UTC)
        session = Session(
            id=secrets.token_urlsafe(32),
            user_id=self.user_key(user),
            created_at=now,
            expires_at=now + timedelta(seconds=self.max_age),
        )
        await self._sessions.create_session(session)

        logger.info("Session created", session_id=session.id[:8] + "...", user_id=str(user.id))
        return self._serializer.dumps(session.id)

    def _unsign(self, token: str) -> str | None:
        try:
            return self._serializer.loads(token, max_age=self.max_age)
        except BadSignature:
            return None

    async def resolve_session(self, token: str | None) -> User | None:
        """Resolve a cookie value to its user.

        A missing, tampered, unknown, or expired token means "not
        authenticated" and yields None. Expired sessions are removed.

        Args:
            token: The session cookie value.

        Returns:
            The user, or None.
        """
        if not token:
            return None

        session_id = self._unsign(token)
        if not session_id:
            return None

        session = await self._sessions.get_session(session_id)
        if session is None:
            return None

        if session.is_expired:
            await self._sessions.delete_session(session_id)
            return None

        return await self.load_user(session.user_id)

    async def destroy_session(self, token: str | None) -> None:
        """Destroy the session behind a cookie value. Absent sessions are ignored."""
        if not token:
            return

        session_id = self._unsign(token)
        if session_id and await self._sessions.delete_session(session_id):
            logger.info("Session deleted", session_id=session_id[:8] + "...")

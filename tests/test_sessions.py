"""Tests for login session management."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from secretwall.auth.config import OAuthConfig
from secretwall.auth.models import Session, User
from secretwall.auth.service import AuthService
from secretwall.auth.sessions import SessionManager
from secretwall.storage.memory import InMemoryStorage


class TestSessionLifecycle:
    """Tests for creating, resolving, and destroying sessions."""

    async def test_create_and_resolve(self, auth_service: AuthService, session_manager: SessionManager) -> None:
        """Test a fresh token resolves to its user."""
        user = await auth_service.register_local("a@example.com", "pw1")
        token = await session_manager.create_session(user)

        resolved = await session_manager.resolve_session(token)
        assert resolved is not None
        assert resolved.id == user.id

    async def test_token_is_signed(self, auth_service: AuthService, session_manager: SessionManager, storage: InMemoryStorage) -> None:
        """Test the cookie value is not the raw stored session id."""
        user = await auth_service.register_local("a@example.com", "pw1")
        token = await session_manager.create_session(user)

        assert token not in storage._sessions
        assert len(storage._sessions) == 1

    async def test_resolve_missing_token(self, session_manager: SessionManager) -> None:
        """Test no cookie means no user."""
        assert await session_manager.resolve_session(None) is None
        assert await session_manager.resolve_session("") is None

    async def test_resolve_tampered_token(self, auth_service: AuthService, session_manager: SessionManager) -> None:
        """Test a modified token is rejected."""
        user = await auth_service.register_local("a@example.com", "pw1")
        token = await session_manager.create_session(user)

        assert await session_manager.resolve_session(token + "x") is None
        assert await session_manager.resolve_session("not-a-token") is None

    async def test_token_from_other_secret_rejected(self, auth_service: AuthService, storage: InMemoryStorage) -> None:
        """Test a token signed with another secret does not resolve."""
        user = await auth_service.register_local("a@example.com", "pw1")
        other = SessionManager(OAuthConfig(session_secret="other-secret"), sessions=storage, users=storage)
        mine = SessionManager(OAuthConfig(session_secret="my-secret"), sessions=storage, users=storage)

        token = await other.create_session(user)
        assert await mine.resolve_session(token) is None

    async def test_destroy_session(self, auth_service: AuthService, session_manager: SessionManager) -> None:
        """Test a destroyed session no longer resolves."""
        user = await auth_service.register_local("a@example.com", "pw1")
        token = await session_manager.create_session(user)

        await session_manager.destroy_session(token)

        assert await session_manager.resolve_session(token) is None

    async def test_destroy_is_idempotent(self, auth_service: AuthService, session_manager: SessionManager) -> None:
        """Test destroying twice, or destroying nothing, does not raise."""
        user = await auth_service.register_local("a@example.com", "pw1")
        token = await session_manager.create_session(user)

        await session_manager.destroy_session(token)
        await session_manager.destroy_session(token)
        await session_manager.destroy_session(None)
        await session_manager.destroy_session("garbage")

    async def test_sessions_are_independent(self, auth_service: AuthService, session_manager: SessionManager) -> None:
        """Test logging out one session leaves the other valid."""
        user = await auth_service.register_local("a@example.com", "pw1")
        first = await session_manager.create_session(user)
        second = await session_manager.create_session(user)

        await session_manager.destroy_session(first)

        assert await session_manager.resolve_session(first) is None
        assert await session_manager.resolve_session(second) is not None


class TestSessionExpiry:
    """Tests for expired sessions."""

    async def test_expired_session_is_removed(self, session_manager: SessionManager, storage: InMemoryStorage) -> None:
        """Test an expired session does not resolve and is deleted."""
        user = await storage.create_user(User(email="a@example.com"))
        past = datetime.now(UTC) - timedelta(minutes=1)
        await storage.create_session(
            Session(id="expired-id", user_id=user.id, created_at=past - timedelta(days=1), expires_at=past)
        )
        token = session_manager._serializer.dumps("expired-id")

        assert await session_manager.resolve_session(token) is None
        assert await storage.get_session("expired-id") is None

    async def test_session_for_deleted_user(self, session_manager: SessionManager, storage: InMemoryStorage) -> None:
        """Test a session whose user is gone resolves to None."""
        user = User(email="ghost@example.com")
        await storage.create_session(Session(id="orphan-id", user_id=user.id))
        token = session_manager._serializer.dumps("orphan-id")

        assert await session_manager.resolve_session(token) is None

    def test_session_model_expiry(self) -> None:
        """Test the is_expired property."""
        user = User(email="a@example.com")
        now = datetime.now(UTC)

        assert Session(id="a", user_id=user.id, expires_at=now - timedelta(seconds=1)).is_expired
        assert not Session(id="b", user_id=user.id, expires_at=now + timedelta(hours=1)).is_expired
        assert not Session(id="c", user_id=user.id).is_expired


class TestSessionConfig:
    """Tests for cookie settings exposed to the controllers."""

    def test_cookie_settings(self, session_manager: SessionManager) -> None:
        assert session_manager.cookie_name == "secretwall_session"
        assert session_manager.max_age == 60 * 60 * 24 * 30

    def test_user_key(self) -> None:
        user = User(email="a@example.com")
        assert SessionManager.user_key(user) == user.id

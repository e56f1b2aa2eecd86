"""Pytest configuration and fixtures for secretwall tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest
from litestar.testing import TestClient

from secretwall.app import create_app
from secretwall.auth.config import GOOGLE_OAUTH_URLS, OAuthConfig
from secretwall.auth.oauth import GoogleOAuthClient
from secretwall.auth.service import AuthService
from secretwall.auth.sessions import SessionManager
from secretwall.board.service import SecretService
from secretwall.plugin import SecretWallConfig
from secretwall.storage.memory import InMemoryStorage

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from litestar import Litestar

GOOGLE_PROFILE = {"sub": "google-123", "email": "oauth@example.com", "name": "OAuth User"}


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


# Storage and service fixtures


@pytest.fixture
def storage() -> InMemoryStorage:
    """Create a fresh InMemoryStorage instance for each test."""
    return InMemoryStorage()


@pytest.fixture
def oauth_config() -> OAuthConfig:
    """OAuth configuration with Google enabled and a fixed session secret."""
    return OAuthConfig(
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        session_secret="test-session-secret",
        base_url="http://testserver.local",
        callback_url="http://testserver.local/auth/google/secrets",
    )


@pytest.fixture
def auth_service(storage: InMemoryStorage) -> AuthService:
    return AuthService(storage)


@pytest.fixture
def session_manager(oauth_config: OAuthConfig, storage: InMemoryStorage) -> SessionManager:
    return SessionManager(oauth_config, sessions=storage, users=storage)


@pytest.fixture
def secret_service(storage: InMemoryStorage) -> SecretService:
    return SecretService(storage)


# Google stub


def _google_handler(
    profile: dict[str, Any],
    *,
    token_status: int = 200,
    userinfo_status: int = 200,
) -> Callable[[httpx.Request], httpx.Response]:
    """Build an httpx handler that answers like Google's token and userinfo endpoints."""

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == GOOGLE_OAUTH_URLS["token_url"]:
            if token_status != 200:
                return httpx.Response(token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "test-access-token", "token_type": "Bearer"})
        if str(request.url) == GOOGLE_OAUTH_URLS["userinfo_url"]:
            if request.headers.get("Authorization") != "Bearer test-access-token":
                return httpx.Response(401, json={"error": "invalid_token"})
            if userinfo_status != 200:
                return httpx.Response(userinfo_status)
            return httpx.Response(200, json=profile)
        return httpx.Response(404)

    return handler


@pytest.fixture
def google_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for mock transports standing in for Google.

    Call with an optional profile dict and ``token_status``/``userinfo_status``
    to simulate provider failures.
    """

    def factory(profile: dict[str, Any] | None = None, **statuses: int) -> httpx.MockTransport:
        return httpx.MockTransport(_google_handler(GOOGLE_PROFILE if profile is None else profile, **statuses))

    return factory


@pytest.fixture
def oauth_client(oauth_config: OAuthConfig, google_transport: Callable[..., httpx.MockTransport]) -> GoogleOAuthClient:
    """Google client whose HTTP calls are answered by the stub."""
    return GoogleOAuthClient(oauth_config, transport=google_transport())


# App and client fixtures


@pytest.fixture
def app(storage: InMemoryStorage, oauth_config: OAuthConfig, oauth_client: GoogleOAuthClient) -> Litestar:
    """Create the secretwall app backed by in-memory storage."""
    return create_app(config=SecretWallConfig(storage=storage, oauth=oauth_config, oauth_client=oauth_client))


@pytest.fixture
def client(app: Litestar) -> Iterator[TestClient[Litestar]]:
    """Create a test client for the app, running startup and shutdown hooks."""
    with TestClient(app=app) as client:
        yield client


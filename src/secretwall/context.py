"""Application context built once at startup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from secretwall.auth.oauth import GoogleOAuthClient
from secretwall.auth.service import AuthService
from secretwall.auth.sessions import SessionManager
from secretwall.board.service import SecretService
from secretwall.storage.memory import InMemoryStorage

if TYPE_CHECKING:
    from secretwall.auth.config import OAuthConfig
    from secretwall.storage.base import StorageProtocol
    from secretwall.storage.db.setup import DatabaseManager

logger = structlog.get_logger(__name__)


@dataclass
class AppContext:
    """Everything a request handler may need, wired together.

    Created once when the application is built, started on application
    startup, and closed on shutdown. Route handlers receive its members
    through dependency injection rather than module globals.

    Attributes:
        oauth_config: OAuth and session configuration.
        storage: Backend implementing the user, secret, and session stores.
        auth_service: Registration and login.
        session_manager: Session issue, lookup, and removal.
        secret_service: Board posts.
        oauth_client: Google OAuth client.
        db_manager: Database manager when ``storage`` is database-backed.
    """

    oauth_config: OAuthConfig
    storage: StorageProtocol
    auth_service: AuthService
    session_manager: SessionManager
    secret_service: SecretService
    oauth_client: GoogleOAuthClient
    db_manager: DatabaseManager | None = None

    async def startup(self) -> None:
        """Connect to the database, if any, and create tables."""
        if self.db_manager is not None and not self.db_manager.is_initialized:
            await self.db_manager.init()
        logger.info("Application context started", storage=type(self.storage).__name__)

    async def shutdown(self) -> None:
        """Release database connections."""
        if self.db_manager is not None:
            await self.db_manager.close()
        logger.info("Application context stopped")


def build_context(
    oauth_config: OAuthConfig,
    *,
    storage: StorageProtocol | None = None,
    database_url: str | None = None,
    oauth_client: GoogleOAuthClient | None = None,
) -> AppContext:
    """Build the application context.

    Args:
        oauth_config: OAuth and session configuration.
        storage: Explicit storage backend. Takes precedence over ``database_url``.
        database_url: Database URL for the SQLAlchemy backend. When neither this
            nor ``storage`` is given, in-memory storage is used.
        oauth_client: Pre-built OAuth client (e.g. with a stub transport).

    Returns:
        The unstarted context.
    """
    db_manager = None
    if storage is None and database_url:
        from secretwall.storage.db.setup import DatabaseManager
        from secretwall.storage.db.storage import DatabaseStorage

        db_manager = DatabaseManager(database_url)
        storage = DatabaseStorage(db_manager)
    elif storage is None:
        storage = InMemoryStorage()

    return AppContext(
        oauth_config=oauth_config,
        storage=storage,
        auth_service=AuthService(storage),
        session_manager=SessionManager(oauth_config, sessions=storage, users=storage),
        secret_service=SecretService(storage),
        oauth_client=oauth_client or GoogleOAuthClient(oauth_config),
        db_manager=db_manager,
    )

"""secretwall: an anonymous secrets board on Litestar.

Users register with an email and password or sign in with Google, then read
and post short anonymous "secrets" on a shared board.

Key Components:
    - Auth: AuthService (registration, login, OAuth accounts), SessionManager
    - Board: SecretService and the board pages
    - Storage: InMemoryStorage, DatabaseStorage, StorageProtocol
    - Plugin: SecretWallPlugin for Litestar integration

Quick Start:
    >>> from litestar import Litestar
    >>> from secretwall import SecretWallConfig, SecretWallPlugin
    >>>
    >>> app = Litestar(plugins=[SecretWallPlugin(SecretWallConfig())])
"""

from __future__ import annotations

from secretwall.auth import (
    AuthController,
    AuthService,
    ExternalProfile,
    GoogleOAuthClient,
    OAuthConfig,
    Session,
    SessionManager,
    User,
)
from secretwall.board import BoardController, Secret, SecretService
from secretwall.context import AppContext, build_context
from secretwall.exceptions import (
    AccountConflictError,
    AuthenticationError,
    EmailTakenError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    SecretWallError,
    StorageError,
)
from secretwall.plugin import SecretWallConfig, SecretWallPlugin
from secretwall.storage import InMemoryStorage, StorageProtocol

__all__ = [
    "AccountConflictError",
    "AppContext",
    "AuthController",
    "AuthService",
    "AuthenticationError",
    "BoardController",
    "EmailTakenError",
    "ExternalProfile",
    "GoogleOAuthClient",
    "InMemoryStorage",
    "InvalidCredentialsError",
    "NotAuthenticatedError",
    "OAuthConfig",
    "Secret",
    "SecretService",
    "SecretWallConfig",
    "SecretWallError",
    "SecretWallPlugin",
    "Session",
    "SessionManager",
    "StorageError",
    "StorageProtocol",
    "User",
    "build_context",
]

__version__ = "0.1.0"

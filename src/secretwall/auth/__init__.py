"""Authentication and sessions for secretwall."""

from __future__ import annotations

from secretwall.auth.config import OAuthConfig
from secretwall.auth.controller import AuthController
from secretwall.auth.models import Session, User
from secretwall.auth.oauth import ExternalProfile, GoogleOAuthClient
from secretwall.auth.service import AuthService
from secretwall.auth.sessions import SessionManager

__all__ = [
    "AuthController",
    "AuthService",
    "ExternalProfile",
    "GoogleOAuthClient",
    "OAuthConfig",
    "Session",
    "SessionManager",
    "User",
]

"""OAuth and session configuration for secretwall."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env(*names: str, default: str = "") -> str:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


@dataclass
class OAuthConfig:
    """Configuration for Google OAuth and the login session.

    Environment variables:
        GOOGLE_CLIENT_ID: Google OAuth client ID (``CLIENT_ID`` is also accepted)
        GOOGLE_CLIENT_SECRET: Google OAuth client secret (``CLIENT_SECRET`` is also accepted)
        SESSION_SECRET: Secret key for session cookie signing (``SECRET_KEY`` is also accepted)
        BASE_URL: Base URL for OAuth callbacks (e.g., http://localhost:3000)
        GOOGLE_CALLBACK_URL: Full callback URL, overrides the one derived from BASE_URL
    """

    # Google OAuth
    google_client_id: str = field(default_factory=lambda: _env("GOOGLE_CLIENT_ID", "CLIENT_ID"))
    google_client_secret: str = field(default_factory=lambda: _env("GOOGLE_CLIENT_SECRET", "CLIENT_SECRET"))

    # Session configuration
    session_secret: str = field(
        default_factory=lambda: _env("SESSION_SECRET", "SECRET_KEY", default="change-me-in-production")
    )
    session_cookie_name: str = "secretwall_session"
    session_max_age: int = 60 * 60 * 24 * 30  # 30 days

    # Base URL for callbacks
    base_url: str = field(default_factory=lambda: _env("BASE_URL", default="http://localhost:3000"))
    callback_url: str = field(default_factory=lambda: _env("GOOGLE_CALLBACK_URL"))

    def __post_init__(self) -> None:
        if not self.callback_url:
            self.callback_url = f"{self.base_url.rstrip('/')}/auth/google/secrets"

    @property
    def google_enabled(self) -> bool:
        """Check if Google OAuth is configured."""
        return bool(self.google_client_id and self.google_client_secret)


GOOGLE_OAUTH_URLS = {
    "authorize_url": "https://accounts.google.com/o/oauth2/v2/auth",
    "token_url": "https://oauth2.googleapis.com/token",
    "userinfo_url": "https://www.googleapis.com/oauth2/v3/userinfo",
    "scopes": ["profile", "email"],
}

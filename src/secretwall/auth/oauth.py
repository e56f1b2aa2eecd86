"""Google OAuth client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx
import structlog

from secretwall.auth.config import GOOGLE_OAUTH_URLS, OAuthConfig
from secretwall.exceptions import OAuthError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExternalProfile:
    """Identity returned by the OAuth provider.

    Attributes:
        external_id: Provider-scoped unique user ID.
        email: Primary email address.
        name: Display name, if the provider returned one.
    """

    external_id: str
    email: str
    name: str | None = None


class GoogleOAuthClient:
    """Authorization-code flow against Google.

    Args:
        config: OAuth configuration.
        transport: Optional httpx transport, used to stub the provider in tests.
    """

    def __init__(self, config: OAuthConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._config.google_enabled

    def get_authorize_url(self, state: str) -> str:
        """Build the URL that starts the handshake at Google.

        Args:
            state: State parameter for CSRF protection.

        Returns:
            Authorization URL requesting the profile and email scopes.
        """
        params = {
            "client_id": self._config.google_client_id,
            "redirect_uri": self._config.callback_url,
            "response_type": "code",
            "scope": " ".join(GOOGLE_OAUTH_URLS["scopes"]),
            "state": state,
            "prompt": "select_account",
        }
        return f"{GOOGLE_OAUTH_URLS['authorize_url']}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ExternalProfile:
        """Exchange an authorization code for the user's profile.

        Args:
            code: Authorization code from the callback.

        Returns:
            The external profile.

        Raises:
            OAuthError: If the token exchange or the profile fetch fails, or
                the profile lacks an ID or email.
        """
        token_data = {
            "client_id": self._config.google_client_id,
            "client_secret": self._config.google_client_secret,
            "code": code,
            "redirect_uri": self._config.callback_url,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    GOOGLE_OAUTH_URLS["token_url"],
                    data=token_data,
                    headers={"Accept": "application/json"},
                )
                if resp.status_code != 200:
                    logger.error("Token exchange failed", status=resp.status_code)
                    msg = f"Token exchange failed with status {resp.status_code}"
                    raise OAuthError(msg)

                access_token = resp.json().get("access_token")
                if not access_token:
                    logger.error("No access token in response")
                    msg = "No access token in token response"
                    raise OAuthError(msg)

                resp = await client.get(
                    GOOGLE_OAUTH_URLS["userinfo_url"],
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                if resp.status_code != 200:
                    logger.error("User info fetch failed", status=resp.status_code)
                    msg = f"User info fetch failed with status {resp.status_code}"
                    raise OAuthError(msg)

                info = resp.json()
        except httpx.HTTPError as e:
            logger.error("OAuth provider unreachable", error=str(e))
            msg = "OAuth provider unreachable"
            raise OAuthError(msg) from e
        except ValueError as e:
            logger.error("OAuth provider returned invalid JSON", error=str(e))
            msg = "OAuth provider returned invalid JSON"
            raise OAuthError(msg) from e

        return self._normalize_profile(info)

    def _normalize_profile(self, info: dict[str, Any]) -> ExternalProfile:
        # v3 userinfo uses "sub"; the older v2 endpoint uses "id".
        external_id = info.get("sub") or info.get("id")
        email = info.get("email")
        if not external_id or not email:
            logger.error("Profile missing id or email", has_id=bool(external_id), has_email=bool(email))
            msg = "Profile is missing an id or email"
            raise OAuthError(msg)
        return ExternalProfile(external_id=str(external_id), email=email, name=info.get("name"))

"""Authentication controller for local and Google login routes."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Annotated, ClassVar

import structlog
from litestar import Controller, get, post
from litestar.connection import Request  # noqa: TC002
from litestar.enums import RequestEncodingType
from litestar.params import Body
from litestar.response import Redirect, Template
from litestar.status_codes import HTTP_302_FOUND

from secretwall.auth.dependencies import Viewer  # noqa: TC001
from secretwall.auth.oauth import GoogleOAuthClient  # noqa: TC001
from secretwall.auth.service import AuthService  # noqa: TC001
from secretwall.auth.sessions import SessionManager  # noqa: TC001
from secretwall.exceptions import OAuthError

logger = structlog.get_logger(__name__)


@dataclass
class CredentialsForm:
    """Form data for the login and registration forms."""

    email: str
    password: str


def _login_redirect(request: Request, session_manager: SessionManager, token: str, path: str = "/secrets") -> Redirect:
    """Redirect to ``path`` carrying the session cookie."""
    response = Redirect(path=path)
    response.set_cookie(
        key=session_manager.cookie_name,
        value=token,
        max_age=session_manager.max_age,
        httponly=True,
        samesite="lax",
        secure=request.url.scheme == "https",
    )
    return response


class AuthController(Controller):
    """Controller for authentication routes.

    Handles registration, local login, logout, and the Google OAuth flow.
    Authentication failures are raised and turned into a redirect to the
    login page by the exception handlers.
    """

    path = "/"
    tags: ClassVar[list[str]] = ["Authentication"]

    @get("/login")
    async def login_page(self, viewer: Viewer) -> Template:
        """Render the login form."""
        return Template(template_name="login.html", context={"viewer": viewer})

    @get("/register")
    async def register_page(self, viewer: Viewer) -> Template:
        """Render the registration form."""
        return Template(template_name="register.html", context={"viewer": viewer})

    @post("/register", status_code=HTTP_302_FOUND)
    async def register(
        self,
        request: Request,
        auth_service: AuthService,
        session_manager: SessionManager,
        data: Annotated[CredentialsForm, Body(media_type=RequestEncodingType.URL_ENCODED)],
    ) -> Redirect:
        """Create a local account, log it in, and go to the board.

        Args:
            request: The request object.
            auth_service: Auth service instance.
            session_manager: Session manager instance.
            data: The submitted email and password.

        Returns:
            Redirect to /secrets with the session cookie.
        """
        user = await auth_service.register_local(data.email, data.password)
        token = await session_manager.create_session(user)
        return _login_redirect(request, session_manager, token)

    @post("/login", status_code=HTTP_302_FOUND)
    async def login(
        self,
        request: Request,
        auth_service: AuthService,
        session_manager: SessionManager,
        data: Annotated[CredentialsForm, Body(media_type=RequestEncodingType.URL_ENCODED)],
    ) -> Redirect:
        """Verify credentials and start a session.

        Args:
            request: The request object.
            auth_service: Auth service instance.
            session_manager: Session manager instance.
            data: The submitted email and password.

        Returns:
            Redirect to /secrets with the session cookie.
        """
        user = await auth_service.verify_local(data.email, data.password)
        token = await session_manager.create_session(user)
        logger.info("Local login successful", user_id=str(user.id))
        return _login_redirect(request, session_manager, token)

    @get("/logout")
    async def logout(self, request: Request, session_manager: SessionManager) -> Redirect:
        """Log out the current user."""
        await session_manager.destroy_session(request.cookies.get(session_manager.cookie_name))

        response = Redirect(path="/")
        response.delete_cookie(session_manager.cookie_name)
        return response

    @get("/auth/google")
    async def google_login(self, request: Request, oauth_client: GoogleOAuthClient) -> Redirect:
        """Start the Google OAuth flow.

        Args:
            request: The request object.
            oauth_client: Google OAuth client.

        Returns:
            Redirect to Google, or to /login if Google is not configured.
        """
        if not oauth_client.enabled:
            logger.warning("OAuth provider not configured", provider="google")
            return Redirect(path="/login")

        # Generate state for CSRF protection
        state = secrets.token_urlsafe(32)
        request.set_session({"oauth_state": state})

        logger.info("Starting OAuth flow", provider="google")
        return Redirect(path=oauth_client.get_authorize_url(state))

    @get("/auth/google/secrets")
    async def google_callback(
        self,
        request: Request,
        auth_service: AuthService,
        session_manager: SessionManager,
        oauth_client: GoogleOAuthClient,
        code: str | None = None,
        error: str | None = None,
    ) -> Redirect:
        """Complete the Google OAuth flow.

        Args:
            request: The request object.
            auth_service: Auth service instance.
            session_manager: Session manager instance.
            oauth_client: Google OAuth client.
            code: Authorization code from Google.
            error: Error reported by Google, if the user declined.

        Returns:
            Redirect to /secrets with the session cookie.

        Raises:
            OAuthError: If Google reported an error, the state does not match,
                or the code exchange fails.
        """
        if error:
            msg = f"Provider returned error: {error}"
            raise OAuthError(msg)
        if not code:
            msg = "Callback is missing the authorization code"
            raise OAuthError(msg)

        # "state" is a reserved handler kwarg, so read it from the query string.
        returned_state = request.query_params.get("state")
        expected_state = request.session.get("oauth_state")
        request.clear_session()
        if not expected_state or not returned_state or not secrets.compare_digest(expected_state, returned_state):
            msg = "OAuth state mismatch"
            raise OAuthError(msg)

        profile = await oauth_client.exchange_code(code)
        user, created = await auth_service.find_or_create_from_external_profile(profile)
        logger.info("OAuth login successful", provider="google", user_id=str(user.id), created=created)

        token = await session_manager.create_session(user)
        return _login_redirect(request, session_manager, token)

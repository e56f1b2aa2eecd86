"""Dependency providers that resolve the requesting user."""

from __future__ import annotations

from typing import Annotated

from litestar.connection import Request  # noqa: TC002
from litestar.params import Dependency

from secretwall.auth.models import User
from secretwall.auth.sessions import SessionManager  # noqa: TC001
from secretwall.exceptions import NotAuthenticatedError

# Users are resolved from the session store, not from request data.
Viewer = Annotated[User | None, Dependency(skip_validation=True)]
CurrentUser = Annotated[User, Dependency(skip_validation=True)]


async def provide_viewer(
    request: Request,
    session_manager: Annotated[SessionManager, Dependency(skip_validation=True)],
) -> User | None:
    """Resolve the session cookie to a user, or None for anonymous requests."""
    return await session_manager.resolve_session(request.cookies.get(session_manager.cookie_name))


async def provide_current_user(viewer: Viewer) -> User:
    """Require an authenticated user.

    Raises:
        NotAuthenticatedError: If the request has no valid session.
    """
    if viewer is None:
        raise NotAuthenticatedError
    return viewer

"""Controller for the landing page and the shared secrets board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, ClassVar

from litestar import Controller, get, post
from litestar.enums import RequestEncodingType
from litestar.params import Body
from litestar.response import Redirect, Template
from litestar.status_codes import HTTP_302_FOUND

from secretwall.auth.dependencies import CurrentUser, Viewer  # noqa: TC001
from secretwall.board.service import SecretService  # noqa: TC001


@dataclass
class SubmitSecretForm:
    """Form data for posting a secret."""

    secret: str


class BoardController(Controller):
    """Controller for board pages.

    Reading and posting secrets requires a logged-in user; the ``current_user``
    dependency redirects anonymous requests to the login page.
    """

    path = "/"
    tags: ClassVar[list[str]] = ["Board"]

    @get("/")
    async def home(self, viewer: Viewer) -> Template:
        """Render the landing page."""
        return Template(template_name="home.html", context={"viewer": viewer})

    @get("/secrets")
    async def secrets_page(self, current_user: CurrentUser, secret_service: SecretService) -> Template:
        """Render every secret on the board.

        Args:
            current_user: The logged-in user.
            secret_service: Secret service instance.

        Returns:
            The rendered board.
        """
        secrets = await secret_service.list_secrets()
        return Template(
            template_name="secrets.html",
            context={"viewer": current_user, "secrets": secrets},
        )

    @get("/submit")
    async def submit_page(self, current_user: CurrentUser) -> Template:
        """Render the form for posting a secret."""
        return Template(template_name="submit.html", context={"viewer": current_user})

    @post("/submit", status_code=HTTP_302_FOUND)
    async def submit(
        self,
        current_user: CurrentUser,
        secret_service: SecretService,
        data: Annotated[SubmitSecretForm, Body(media_type=RequestEncodingType.URL_ENCODED)],
    ) -> Redirect:
        """Post a secret and go back to the board.

        Args:
            current_user: The logged-in user. Not stored with the secret.
            secret_service: Secret service instance.
            data: The submitted secret.

        Returns:
            Redirect to /secrets.
        """
        await secret_service.post_secret(data.secret)
        return Redirect(path="/secrets")

"""Litestar plugin for secretwall integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.di import Provide
from litestar.middleware.session.server_side import ServerSideSessionConfig
from litestar.plugins import InitPluginProtocol
from litestar.template.config import TemplateConfig

from secretwall.auth.config import OAuthConfig
from secretwall.auth.controller import AuthController
from secretwall.auth.dependencies import provide_current_user, provide_viewer
from secretwall.board.controller import BoardController
from secretwall.context import AppContext, build_context

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from secretwall.auth.oauth import GoogleOAuthClient
    from secretwall.storage.base import StorageProtocol

# Lifetime of the server-side session that only carries the OAuth state.
OAUTH_STATE_MAX_AGE = 300


def _get_template_directory() -> Path:
    """Get the path to the templates directory."""
    return Path(__file__).parent / "templates"


@dataclass
class SecretWallConfig:
    """Configuration for the SecretWall plugin.

    Attributes:
        storage: Storage backend. If None, ``database_url`` decides: a URL
            selects the SQLAlchemy backend, no URL selects InMemoryStorage.
        database_url: Database URL for the SQLAlchemy backend.
        oauth: OAuth and session configuration. Read from the environment if None.
        oauth_client: Pre-built Google OAuth client, e.g. with a stub transport.
        context: Pre-built application context. Overrides all of the above.

    Example:
        >>> config = SecretWallConfig(database_url="sqlite+aiosqlite:///./data/secretwall.db")
    """

    storage: StorageProtocol | None = None
    database_url: str | None = None
    oauth: OAuthConfig = field(default_factory=OAuthConfig)
    oauth_client: GoogleOAuthClient | None = None
    context: AppContext | None = None


class SecretWallPlugin(InitPluginProtocol):
    """Litestar plugin that mounts the secretwall application.

    On app init it builds the AppContext, registers its services as
    dependencies, mounts the auth and board controllers, configures Jinja
    templates and the server-side session used for the OAuth state, and hooks
    the context into application startup and shutdown.

    Example:
        >>> from litestar import Litestar
        >>> app = Litestar(plugins=[SecretWallPlugin(SecretWallConfig())])
    """

    def __init__(self, config: SecretWallConfig | None = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Plugin configuration. Defaults to SecretWallConfig().
        """
        self._config = config or SecretWallConfig()
        self._context: AppContext | None = self._config.context

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Wire the application context into the Litestar app configuration.

        Args:
            app_config: The Litestar application configuration object.

        Returns:
            The modified application configuration.
        """
        if self._context is None:
            self._context = build_context(
                self._config.oauth,
                storage=self._config.storage,
                database_url=self._config.database_url,
                oauth_client=self._config.oauth_client,
            )
        context = self._context

        def provider(value: object) -> Provide:
            return Provide(lambda: value, sync_to_thread=False)

        app_config.dependencies.update(
            {
                "auth_service": provider(context.auth_service),
                "session_manager": provider(context.session_manager),
                "secret_service": provider(context.secret_service),
                "oauth_client": provider(context.oauth_client),
                "viewer": Provide(provide_viewer),
                "current_user": Provide(provide_current_user),
            }
        )

        app_config.route_handlers.extend([AuthController, BoardController])

        if app_config.template_config is None:
            app_config.template_config = TemplateConfig(
                directory=_get_template_directory(),
                engine=JinjaTemplateEngine,
            )

        app_config.middleware.append(
            ServerSideSessionConfig(
                max_age=OAUTH_STATE_MAX_AGE,
                session_id_bytes=32,
            ).middleware
        )

        app_config.on_startup.append(context.startup)
        app_config.on_shutdown.append(context.shutdown)
        return app_config

    @property
    def context(self) -> AppContext:
        """Get the application context.

        Raises:
            RuntimeError: If the plugin has not been initialized yet
                (on_app_init not called).
        """
        if self._context is None:
            msg = "Plugin not initialized. Call on_app_init first."
            raise RuntimeError(msg)
        return self._context

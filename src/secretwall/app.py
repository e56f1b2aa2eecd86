"""Main Litestar application for secretwall.

This module provides the application factory and the configured app instance
for running secretwall as a standalone application::

    uvicorn secretwall.app:app --port 3000
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from litestar import Litestar

from secretwall.cli import SecretWallCLIPlugin
from secretwall.core.error_handling import get_exception_handlers
from secretwall.core.logging import configure_logging, get_middleware
from secretwall.plugin import SecretWallConfig, SecretWallPlugin
from secretwall.storage.db.setup import get_database_url

if TYPE_CHECKING:
    from secretwall.context import AppContext


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def create_app(
    *,
    config: SecretWallConfig | None = None,
    context: AppContext | None = None,
    debug: bool = False,
    json_logs: bool = False,
) -> Litestar:
    """Create and configure the Litestar application.

    Args:
        config: Plugin configuration. Defaults to a SQLAlchemy backend at
            ``DATABASE_URL`` (or the SQLite default) with OAuth settings from
            the environment.
        context: Pre-built application context, used as-is.
        debug: Whether to enable debug mode.
        json_logs: Whether to output logs as JSON (for production).

    Returns:
        Configured Litestar application instance.
    """
    configure_logging(debug=debug, json_logs=json_logs)

    if config is None:
        config = SecretWallConfig(database_url=get_database_url())
    if context is not None:
        config.context = context

    return Litestar(
        route_handlers=[],
        plugins=[SecretWallPlugin(config), SecretWallCLIPlugin()],
        debug=debug,
        middleware=get_middleware(),
        exception_handlers=get_exception_handlers(),
        openapi_config=None,
    )


# Default application instance for uvicorn.
# Configuration comes from the environment, optionally via a .env file.
load_dotenv()
app = create_app(debug=_env_flag("SECRETWALL_DEBUG"), json_logs=_env_flag("SECRETWALL_JSON_LOGS"))

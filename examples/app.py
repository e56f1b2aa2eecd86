"""Minimal example running secretwall with in-memory storage.

This example mounts the secretwall plugin on a plain Litestar app without a
database, so everything is lost when the process stops.

The application will:
    - Configure AuthService, SessionManager, and SecretService on InMemoryStorage
    - Serve the board at /, /secrets, and /submit
    - Serve local login at /login and /register
    - Offer Google login at /auth/google when GOOGLE_CLIENT_ID and
      GOOGLE_CLIENT_SECRET are set

Running the Application:
    python examples/app.py

Then visit:
    - http://127.0.0.1:3000/register - Create an account
    - http://127.0.0.1:3000/submit - Share a secret

For a database-backed app, run ``uvicorn secretwall.app:app --port 3000``
with DATABASE_URL set.
"""

from __future__ import annotations

from litestar import Litestar

from secretwall import InMemoryStorage, OAuthConfig, SecretWallConfig, SecretWallPlugin
from secretwall.core.error_handling import get_exception_handlers
from secretwall.core.logging import configure_logging, get_middleware

configure_logging(debug=True)

app = Litestar(
    plugins=[
        SecretWallPlugin(
            SecretWallConfig(
                # Keep everything in process memory
                storage=InMemoryStorage(),
                # Google credentials and session secret come from the environment
                oauth=OAuthConfig(base_url="http://127.0.0.1:3000"),
            )
        )
    ],
    middleware=get_middleware(),
    exception_handlers=get_exception_handlers(),
    debug=True,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=3000)

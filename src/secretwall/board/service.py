"""Service layer for the shared secrets board."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from secretwall.board.models import Secret
from secretwall.exceptions import InvalidSecretError

if TYPE_CHECKING:
    from secretwall.storage.base import SecretStore

logger = structlog.get_logger(__name__)


class SecretService:
    """Posts and lists anonymous secrets."""

    def __init__(self, secrets: SecretStore) -> None:
        """Initialize the service.

        Args:
            secrets: The secret store.
        """
        self._secrets = secrets

    async def post_secret(self, text: str) -> Secret:
        """Store a new secret.

        Args:
            text: The secret text. Stored as given.

        Returns:
            The stored secret.

        Raises:
            InvalidSecretError: If the text is empty.
            StorageError: If the store fails.
        """
        if not text:
            raise InvalidSecretError

        secret = await self._secrets.create_secret(Secret(text=text))
        logger.info("Secret posted", secret_id=str(secret.id), length=len(text))
        return secret

    async def list_secrets(self) -> list[Secret]:
        """Return every secret on the board, in no particular order."""
        return await self._secrets.list_secrets()

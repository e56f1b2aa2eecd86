"""Storage protocol definitions for secretwall."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from secretwall.auth.models import Session, User
    from secretwall.board.models import Secret


@runtime_checkable
class UserStore(Protocol):
    """Persistence for user accounts.

    ``email`` is unique across all users and ``external_id`` is unique when present.
    """

    async def create_user(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to create.

        Returns:
            The stored user.

        Raises:
            DuplicateRecordError: If the email or external id is already taken.
            StorageError: If the insert fails for any other reason.
        """
        ...

    async def get_user(self, user_id: UUID) -> User | None:
        """Retrieve a user by its ID.

        Raises:
            StorageError: If the lookup fails.
        """
        ...

    async def get_user_by_email(self, email: str) -> User | None:
        """Retrieve a user by email.

        Raises:
            StorageError: If the lookup fails.
        """
        ...

    async def get_user_by_external_id(self, external_id: str) -> User | None:
        """Retrieve a user by the OAuth provider's ID.

        Raises:
            StorageError: If the lookup fails.
        """
        ...

    async def set_external_id(self, user_id: UUID, external_id: str) -> User:
        """Attach an external id to an existing user.

        Args:
            user_id: The user to link.
            external_id: The provider-scoped ID.

        Returns:
            The updated user.

        Raises:
            DuplicateRecordError: If another user already has this external id.
            StorageError: If the user does not exist or the update fails.
        """
        ...


@runtime_checkable
class SecretStore(Protocol):
    """Persistence for board posts."""

    async def create_secret(self, secret: Secret) -> Secret:
        """Insert a new secret.

        Raises:
            StorageError: If the insert fails.
        """
        ...

    async def list_secrets(self) -> list[Secret]:
        """Return every secret. No ordering is guaranteed.

        Raises:
            StorageError: If the read fails.
        """
        ...


@runtime_checkable
class SessionStore(Protocol):
    """Persistence for login sessions."""

    async def create_session(self, session: Session) -> Session:
        """Insert a new session.

        Raises:
            StorageError: If the insert fails.
        """
        ...

    async def get_session(self, session_id: str) -> Session | None:
        """Retrieve a session by token.

        Raises:
            StorageError: If the lookup fails.
        """
        ...

    async def delete_session(self, session_id: str) -> bool:
        """Delete a session by token.

        Returns:
            True if the session was deleted, False if it did not exist.

        Raises:
            StorageError: If the delete fails.
        """
        ...


@runtime_checkable
class StorageProtocol(UserStore, SecretStore, SessionStore, Protocol):
    """A backend that provides every store the application needs."""

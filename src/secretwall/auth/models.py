"""User and session models for secretwall."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """User account model.

    An account is keyed by email. Local accounts carry a password hash; accounts
    created or linked through Google carry the provider-scoped external id. An
    account can have both.

    Attributes:
        id: Unique user identifier (the value stored in sessions).
        email: Email address, unique across all users.
        password_hash: Encoded argon2 hash (salt included), None for OAuth-only accounts.
        external_id: ID from the OAuth provider, unique when present.
        created_at: Account creation timestamp.
    """

    email: str
    id: UUID = field(default_factory=uuid4)
    password_hash: str | None = None
    external_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_local_credentials(self) -> bool:
        """Check if the account can log in with a password."""
        return self.password_hash is not None

    @property
    def is_linked(self) -> bool:
        """Check if the account is linked to an external identity."""
        return self.external_id is not None


@dataclass
class Session:
    """Server-side login session.

    Attributes:
        id: Opaque session token (signed before it is put in the cookie).
        user_id: The authenticated user's identifier.
        created_at: Session creation timestamp.
        expires_at: Session expiration timestamp.
    """

    id: str
    user_id: UUID
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime | None = None

    @property
    def is_expired(self) -> bool:
        """Check if session has expired."""
        if self.expires_at is None:
            return False
        return self.expires_at < datetime.now(UTC)

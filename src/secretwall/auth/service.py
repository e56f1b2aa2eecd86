"""Authentication service for local and OAuth accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from secretwall.auth.models import User
from secretwall.auth.passwords import hash_password, verify_password
from secretwall.exceptions import (
    AccountConflictError,
    DuplicateRecordError,
    EmailTakenError,
    InvalidCredentialsError,
)

if TYPE_CHECKING:
    from uuid import UUID

    from secretwall.auth.oauth import ExternalProfile
    from secretwall.storage.base import UserStore

logger = structlog.get_logger(__name__)


class AuthService:
    """Service for registering and authenticating users.

    Handles local registration and password verification, and turns external
    OAuth profiles into user accounts. Failures surface as typed exceptions;
    nothing is retried.
    """

    def __init__(self, users: UserStore) -> None:
        """Initialize the auth service.

        Args:
            users: The user store.
        """
        self._users = users

    async def get_user(self, user_id: UUID) -> User | None:
        """Get a user by ID."""
        return await self._users.get_user(user_id)

    async def register_local(self, email: str, password: str) -> User:
        """Create a local account.

        Args:
            email: Account email.
            password: Plain-text password; only its hash is stored.

        Returns:
            The new user.

        Raises:
            EmailTakenError: If an account with this email already exists.
            StorageError: If the store fails.
        """
        if await self._users.get_user_by_email(email) is not None:
            logger.info("Registration rejected, email taken", email=email)
            raise EmailTakenError(email)

        user = User(email=email, password_hash=hash_password(password))
        try:
            user = await self._users.create_user(user)
        except DuplicateRecordError as e:
            # Lost a race with a concurrent registration for the same email.
            raise EmailTakenError(email) from e

        logger.info("User registered", user_id=str(user.id))
        return user

    async def verify_local(self, email: str, password: str) -> User:
        """Check an email/password pair.

        Args:
            email: Account email.
            password: Plain-text password.

        Returns:
            The matching user.

        Raises:
            InvalidCredentialsError: If the email is unknown, the account has no
                password, or the password is wrong.
            StorageError: If the store fails.
        """
        user = await self._users.get_user_by_email(email)
        if user is None or not verify_password(user.password_hash, password):
            logger.info("Local login failed")
            raise InvalidCredentialsError
        return user

    async def find_or_create_from_external_profile(self, profile: ExternalProfile) -> tuple[User, bool]:
        """Resolve an OAuth profile to an account.

        Lookup order: by external id, then by email. A local account found by
        email with no external id is linked to the profile. An account found by
        email that is already linked to a different external id is a conflict.
        Otherwise a new account is created.

        Args:
            profile: The profile returned by the provider.

        Returns:
            Tuple of (user, was_created).

        Raises:
            AccountConflictError: If the email belongs to an account linked elsewhere.
            StorageError: If the store fails.
        """
        existing = await self._users.get_user_by_external_id(profile.external_id)
        if existing:
            return existing, False

        by_email = await self._users.get_user_by_email(profile.email)
        if by_email:
            if by_email.external_id is not None:
                logger.warning("External identity conflicts with linked account", user_id=str(by_email.id))
                raise AccountConflictError(profile.email)
            try:
                linked = await self._users.set_external_id(by_email.id, profile.external_id)
            except DuplicateRecordError as e:
                return await self._winner_of_race(profile, e), False
            logger.info("Linked external identity to local account", user_id=str(linked.id))
            return linked, False

        try:
            user = await self._users.create_user(User(email=profile.email, external_id=profile.external_id))
        except DuplicateRecordError as e:
            return await self._winner_of_race(profile, e), False
        logger.info("User created from external profile", user_id=str(user.id))
        return user, True

    async def _winner_of_race(self, profile: ExternalProfile, error: DuplicateRecordError) -> User:
        """Return the account a concurrent callback created or linked for ``profile``.

        Raises:
            AccountConflictError: If the write lost to an account that is not
                linked to this external id, e.g. a concurrent local registration.
        """
        winner = await self._users.get_user_by_external_id(profile.external_id)
        if winner is None:
            logger.warning("External identity lost a race for its email", error=str(error))
            raise AccountConflictError(profile.email) from error
        logger.info("External identity resolved by concurrent login", user_id=str(winner.id))
        return winner

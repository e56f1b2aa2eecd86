"""Tests for the authentication service."""

from __future__ import annotations

import pytest

from secretwall.auth.models import User
from secretwall.auth.oauth import ExternalProfile
from secretwall.auth.service import AuthService
from secretwall.exceptions import (
    AccountConflictError,
    DuplicateRecordError,
    EmailTakenError,
    InvalidCredentialsError,
)
from secretwall.storage.memory import InMemoryStorage


class TestRegisterLocal:
    """Tests for local registration."""

    async def test_register_stores_hash_not_password(self, auth_service: AuthService) -> None:
        """Test the stored credential is a hash of the password."""
        user = await auth_service.register_local("a@example.com", "pw1")

        assert user.email == "a@example.com"
        assert user.password_hash
        assert user.password_hash != "pw1"
        assert user.password_hash.startswith("$argon2")
        assert user.external_id is None

    async def test_register_duplicate_email(self, auth_service: AuthService, storage: InMemoryStorage) -> None:
        """Test registering an existing email fails and leaves one account."""
        first = await auth_service.register_local("a@example.com", "pw1")

        with pytest.raises(EmailTakenError) as exc_info:
            await auth_service.register_local("a@example.com", "pw2")

        assert exc_info.value.email == "a@example.com"
        stored = await storage.get_user_by_email("a@example.com")
        assert stored is not None
        assert stored.id == first.id
        assert stored.password_hash == first.password_hash

    async def test_register_race_maps_to_email_taken(self, storage: InMemoryStorage) -> None:
        """Test a uniqueness violation from the store surfaces as EmailTakenError."""

        class RacingStorage(InMemoryStorage):
            async def create_user(self, user):
                raise DuplicateRecordError("duplicate", field="email")

        service = AuthService(RacingStorage())
        with pytest.raises(EmailTakenError):
            await service.register_local("a@example.com", "pw1")

    async def test_same_password_different_hashes(self, auth_service: AuthService) -> None:
        """Test each account gets its own salt."""
        a = await auth_service.register_local("a@example.com", "same")
        b = await auth_service.register_local("b@example.com", "same")

        assert a.password_hash != b.password_hash


class TestVerifyLocal:
    """Tests for password login."""

    async def test_verify_correct_password(self, auth_service: AuthService) -> None:
        """Test the right password returns the user."""
        user = await auth_service.register_local("a@example.com", "pw1")

        verified = await auth_service.verify_local("a@example.com", "pw1")
        assert verified.id == user.id

    async def test_verify_wrong_password(self, auth_service: AuthService) -> None:
        """Test a wrong password is rejected."""
        await auth_service.register_local("a@example.com", "pw1")

        with pytest.raises(InvalidCredentialsError):
            await auth_service.verify_local("a@example.com", "wrong")

    async def test_verify_unknown_email(self, auth_service: AuthService) -> None:
        """Test an unknown email fails with the same error as a wrong password."""
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await auth_service.verify_local("nobody@example.com", "pw1")

        assert str(exc_info.value) == "Invalid email or password"

    async def test_verify_oauth_only_account(self, auth_service: AuthService) -> None:
        """Test an account without a password cannot log in locally."""
        await auth_service.find_or_create_from_external_profile(ExternalProfile("g-1", "a@example.com"))

        with pytest.raises(InvalidCredentialsError):
            await auth_service.verify_local("a@example.com", "")


class TestExternalProfile:
    """Tests for resolving OAuth profiles to accounts."""

    async def test_first_login_creates_user(self, auth_service: AuthService) -> None:
        """Test a new profile creates exactly one account."""
        user, created = await auth_service.find_or_create_from_external_profile(
            ExternalProfile("g-1", "a@example.com")
        )

        assert created is True
        assert user.email == "a@example.com"
        assert user.external_id == "g-1"
        assert user.password_hash is None

    async def test_repeat_login_returns_same_user(self, auth_service: AuthService, storage: InMemoryStorage) -> None:
        """Test the same profile twice resolves to the same account."""
        profile = ExternalProfile("g-1", "a@example.com")
        first, _ = await auth_service.find_or_create_from_external_profile(profile)
        second, created = await auth_service.find_or_create_from_external_profile(profile)

        assert created is False
        assert second.id == first.id
        assert len(storage._users) == 1

    async def test_links_existing_local_account(self, auth_service: AuthService) -> None:
        """Test a profile whose email has a local account links to it."""
        local = await auth_service.register_local("a@example.com", "pw1")

        user, created = await auth_service.find_or_create_from_external_profile(
            ExternalProfile("g-1", "a@example.com")
        )

        assert created is False
        assert user.id == local.id
        assert user.external_id == "g-1"
        assert user.password_hash == local.password_hash

        # Password login still works after linking.
        verified = await auth_service.verify_local("a@example.com", "pw1")
        assert verified.id == local.id

    async def test_email_linked_elsewhere_conflicts(self, auth_service: AuthService) -> None:
        """Test a different external id for an already linked email is rejected."""
        await auth_service.find_or_create_from_external_profile(ExternalProfile("g-1", "a@example.com"))

        with pytest.raises(AccountConflictError) as exc_info:
            await auth_service.find_or_create_from_external_profile(ExternalProfile("g-2", "a@example.com"))

        assert exc_info.value.email == "a@example.com"

    async def test_get_user(self, auth_service: AuthService) -> None:
        """Test looking up a user by id."""
        user = await auth_service.register_local("a@example.com", "pw1")

        found = await auth_service.get_user(user.id)
        assert found is not None
        assert found.email == "a@example.com"


class ConcurrentCallbackStorage(InMemoryStorage):
    """In-memory storage where another writer claims the user just before ``create_user``."""

    def __init__(self, rival: User) -> None:
        super().__init__()
        self._rival: User | None = rival

    async def create_user(self, user: User) -> User:
        if self._rival is not None:
            rival, self._rival = self._rival, None
            await super().create_user(rival)
        return await super().create_user(user)


class TestExternalProfileRaces:
    """Tests for OAuth callbacks that lose a write to a concurrent request."""

    async def test_concurrent_first_login_returns_winner(self) -> None:
        """Test losing the create to the same identity resolves to the winner's account."""
        rival = User(email="a@example.com", external_id="g-1")
        storage = ConcurrentCallbackStorage(rival)
        service = AuthService(storage)

        user, created = await service.find_or_create_from_external_profile(ExternalProfile("g-1", "a@example.com"))

        assert created is False
        assert user.id == rival.id
        assert len(storage._users) == 1

    async def test_concurrent_local_registration_conflicts(self) -> None:
        """Test losing the email to an unlinked local account is a conflict, not a store failure."""
        storage = ConcurrentCallbackStorage(User(email="a@example.com", password_hash="hash"))
        service = AuthService(storage)

        with pytest.raises(AccountConflictError):
            await service.find_or_create_from_external_profile(ExternalProfile("g-1", "a@example.com"))

        assert len(storage._users) == 1

"""Custom exceptions for secretwall."""

from __future__ import annotations


class SecretWallError(Exception):
    """Base exception class for all secretwall errors."""


class ValidationError(SecretWallError):
    """Raised when submitted data violates a store constraint."""


class EmailTakenError(ValidationError):
    """Raised when registering an email that already has an account.

    Attributes:
        email: The email address that is already registered.
    """

    def __init__(self, email: str) -> None:
        """Initialize the exception with the duplicate email.

        Args:
            email: The email address that is already registered.
        """
        self.email = email
        super().__init__("Email already registered")


class InvalidSecretError(ValidationError):
    """Raised when a secret is submitted without any text."""

    def __init__(self, message: str = "Secret text is required") -> None:
        super().__init__(message)


class AuthenticationError(SecretWallError):
    """Base class for failed logins. Always answered with a redirect to the login page."""


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match a local account.

    The message is the same whether the email is unknown or the password is wrong.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class OAuthError(AuthenticationError):
    """Raised when the OAuth handshake with the external provider fails."""


class AccountConflictError(AuthenticationError):
    """Raised when an external profile's email belongs to an account linked to a different external id.

    Attributes:
        email: The email shared by both identities.
    """

    def __init__(self, email: str) -> None:
        """Initialize the exception with the conflicting email.

        Args:
            email: The email shared by both identities.
        """
        self.email = email
        super().__init__(f"Account for {email} is linked to another external identity")


class NotAuthenticatedError(SecretWallError):
    """Raised when a protected route is requested without a valid session."""


class StorageError(SecretWallError):
    """Raised when a storage operation fails."""


class DuplicateRecordError(StorageError):
    """Raised when a write violates a uniqueness constraint.

    Attributes:
        field: Name of the unique field, when known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Description of the violation.
            field: Name of the unique field, when known.
        """
        self.field = field
        super().__init__(message)

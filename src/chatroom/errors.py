from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConflictError(UserError):
    """Raised when a resource with the same unique key already exists."""


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class InvalidTokenError(UserError):
    """Raised when a verification token is missing or already consumed."""

    def __init__(self, message: str = "Invalid or expired verification link") -> None:
        super().__init__(message)


class ExpiredTokenError(UserError):
    """Raised when a verification token is past its expiry."""

    def __init__(self, message: str = "Verification link has expired") -> None:
        super().__init__(message)


class ConfigurationError(UserError):
    """Raised when a required setting is missing."""


class DependencyError(UserError):
    """Raised when the database or the email provider fails.

    The message is a short summary; the underlying cause is logged, not shown.
    """

from abc import ABC


class ConfigurationError(Exception):
    """Raised when required configuration is missing or unusable.

    Fatal for the operation that needed it. Never shown to end users,
    since the message may name internal settings.
    """


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class AuthenticationError(UserError):
    """Raised when a request has no valid session."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when input fails validation."""

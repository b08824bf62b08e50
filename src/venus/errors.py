from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a policy forbids the requested action."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConflictError(UserError):
    """Raised when a resource with the same unique key already exists."""


class AlreadyWithdrawnError(UserError):
    """Raised when withdrawing a savings goal that is already withdrawn."""

    def __init__(self, message: str = "this goal was already withdrawn.") -> None:
        super().__init__(message)

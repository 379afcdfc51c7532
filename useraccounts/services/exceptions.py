"""Exceptions raised by the account services."""


class AccountError(Exception):
    """Base class for recoverable account errors."""


class ConflictError(AccountError):
    """Another user already holds the requested email."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class NotAuthenticated(AccountError):
    """The session is not bound to an existing user."""


class InvalidCredentials(AccountError):
    """No user matches the submitted email and password."""


class CurrentPasswordMismatch(AccountError):
    """The current password submitted with a profile change is wrong."""

"""SQLAlchemy models."""

from useraccounts.models.user import User

__all__ = [
    "User",
]

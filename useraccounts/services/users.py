"""User store: persistence for user accounts."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from useraccounts.models.user import User
from useraccounts.services.exceptions import ConflictError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Canonical form used for storing and looking up emails."""
    return email.strip().lower()


class UserStore:
    """CRUD operations on users, committed immediately."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_email_and_hash(self, email: str, password_hash: str) -> User | None:
        """Get a user whose email and stored hash both match exactly.

        The hash is compared as a plain string, so this only finds users when
        the caller already holds the stored hash.
        """
        return (
            self.db.query(User)
            .filter(
                User.email == normalize_email(email),
                User.password_hash == password_hash,
            )
            .first()
        )

    def create(self, email: str, name: str, password_hash: str) -> User:
        """Create a new user.

        Raises:
            ConflictError: if the email is already registered.
        """
        email = normalize_email(email)
        if self.find_by_email(email) is not None:
            raise ConflictError(email)

        user = User(email=email, name=name, password_hash=password_hash)
        self.db.add(user)
        self._commit(email)
        self.db.refresh(user)
        logger.info(f"Created user {user.id} ({email})")
        return user

    def update(self, user: User) -> User:
        """Persist changes to name, email and password hash.

        Raises:
            ConflictError: if the new email belongs to another user.
        """
        user.email = normalize_email(user.email)
        other = (
            self.db.query(User)
            .filter(User.email == user.email, User.id != user.id)
            .first()
        )
        if other is not None:
            self.db.rollback()
            raise ConflictError(user.email)

        self._commit(user.email)
        self.db.refresh(user)
        logger.info(f"Updated user {user.id}")
        return user

    def delete(self, user_id: int) -> None:
        """Delete a user. Unknown ids are ignored."""
        deleted = self.db.query(User).filter(User.id == user_id).delete()
        self.db.commit()
        if deleted:
            logger.info(f"Deleted user {user_id}")

    def _commit(self, email: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Unique email violated for {email}: {e.orig}")
            raise ConflictError(email) from e

"""User model."""

from sqlalchemy import Column, Integer, String

from useraccounts.database import Base


class User(Base):
    """Registered account, identified by a unique email."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column("password", String(255), nullable=False)
    name = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"

"""Password hashing and verification."""

from passlib.context import CryptContext

from useraccounts.config import get_settings

settings = get_settings()

# Password hashing context. bcrypt_sha256 pre-hashes the password, so bcrypt's
# 72 byte limit and NUL byte restriction do not apply.
pwd_context = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    A missing or unrecognised hash never matches.
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def dummy_verify() -> None:
    """Spend the time of a real verification without checking anything."""
    pwd_context.dummy_verify()

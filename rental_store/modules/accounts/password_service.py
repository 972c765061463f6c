"""Password hashing for account credentials."""

from passlib.context import CryptContext

from ...config import settings

pwd_context = CryptContext(schemes=[settings.password_hash_scheme], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with a per-password random salt."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against its stored hash in constant time."""
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Unrecognised or malformed hash
        return False

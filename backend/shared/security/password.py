"""
Password hashing utilities using bcrypt.
"""

import bcrypt

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt.

    Returns the encoded hash (algorithm, cost and salt included),
    e.g. ``$2b$12$...``.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verify a password against its bcrypt hash.

    Anything that is not a bcrypt hash never verifies.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("Password check against a non-bcrypt hash rejected")
        return False

    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Over-long input or malformed hash
        return False


def needs_rehash(hashed_password: str, rounds: int | None = None) -> bool:
    """True when the stored hash uses another algorithm or a lower cost."""
    if not hashed_password.startswith(BCRYPT_PREFIXES):
        return True
    try:
        cost = int(hashed_password.split("$")[2])
    except (IndexError, ValueError):
        return True
    return cost < (rounds or settings.bcrypt_rounds)

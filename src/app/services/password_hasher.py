"""
Password hashing

bcrypt with a configurable cost factor (12 in production).
"""

import bcrypt

from config import ApplicationConfig


def hash_password(password: str) -> str:
    password_hash = bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    )
    return password_hash.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def burn_password_check() -> None:
    """Spend the same time as a real check when there is no user to check against."""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))

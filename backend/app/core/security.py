# app/core/security.py
import secrets
from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 12


def get_password_hash(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt and a fresh per-password salt."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash of a random secret at ``rounds``; checked against when an e-mail is unknown."""
    return get_password_hash(secrets.token_urlsafe(16), rounds)


def verify_dummy_password(plain_password: str, rounds: int = DEFAULT_ROUNDS) -> bool:
    # Same work factor as real users, so an unknown e-mail costs as much as a wrong password
    verify_password(plain_password, dummy_hash(rounds))
    return False


def generate_session_token() -> str:
    """256 bits from the OS CSPRNG, URL-safe."""
    return secrets.token_urlsafe(32)


def _encode(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes and newer releases refuse longer input
    return password.encode("utf-8")[:72]

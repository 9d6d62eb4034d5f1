"""Password hashing helpers backed by bcrypt."""
from __future__ import annotations

import bcrypt

# bcrypt refuses secrets longer than this many encoded bytes
BCRYPT_MAX_BYTES = 72

def check_password_length(plain_text: str) -> str:
    """
    Validate that plain_text fits bcrypt's input limit once UTF-8 encoded.

    Raises:
        ValueError: If the encoded password is longer than BCRYPT_MAX_BYTES
    """
    if len(plain_text.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return plain_text

def make_hash(plain_text: str) -> str:
    """Return a salted bcrypt hash of plain_text."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(plain_text.encode("utf-8"), salt).decode("utf-8")

def compare_hash(plain_text: str, hashed: str) -> bool:
    """
    Check plain_text against a stored bcrypt hash.

    Returns False for an empty or malformed stored hash (federated-only accounts
    store an empty password).
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain_text.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False

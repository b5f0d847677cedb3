"""Security utilities for salt generation and password hashing.

Passwords are hashed with PBKDF2-HMAC-SHA256 through passlib, using a salt the
caller supplies and stores next to the hash. Hashing is deterministic for a
given (plaintext, salt, rounds) triple, so verification recomputes the hash and
compares it in constant time.
"""

import secrets
from typing import Optional

from passlib.hash import pbkdf2_sha256
from passlib.utils import consteq

DEFAULT_PBKDF2_ROUNDS = 29000
SALT_BYTES = 16  # 128 bits


def generate_random_string(nbytes: int = SALT_BYTES) -> str:
    """Return a hex string drawn from the OS CSPRNG (``nbytes`` of entropy)."""
    return secrets.token_hex(nbytes)


def generate_salt() -> str:
    """Generate a new per-user salt with 128 bits of entropy."""
    return generate_random_string(SALT_BYTES)


def hash_password(plaintext: str, salt: str, rounds: int = DEFAULT_PBKDF2_ROUNDS) -> str:
    """Hash ``plaintext`` with ``salt``.

    Args:
        plaintext: Password to hash
        salt: Salt produced by ``generate_salt``
        rounds: PBKDF2 iteration count

    Returns:
        str: Modular-crypt formatted PBKDF2-SHA256 hash

    Raises:
        ValueError: If the salt is empty
    """
    if not salt:
        raise ValueError("Salt cannot be empty")
    handler = pbkdf2_sha256.using(salt=salt.encode("utf-8"), rounds=rounds)
    return handler.hash(plaintext)


def verify_password(plaintext: str, salt: Optional[str], stored_hash: Optional[str]) -> bool:
    """Verify ``plaintext`` against the stored salt and hash.

    Returns False for users without local credentials. The comparison runs in
    constant time.
    """
    if not salt or not stored_hash or plaintext is None:
        return False
    try:
        rounds = pbkdf2_sha256.from_string(stored_hash).rounds
    except ValueError:
        return False
    return consteq(hash_password(plaintext, salt, rounds=rounds), stored_hash)

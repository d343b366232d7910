# =============================================================================
# lib/security.py - Password Hashing
# =============================================================================
# PBKDF2-SHA256 with a random per-password salt. The stored value is
# base64(salt + derived key), so no separate salt column is needed.
# =============================================================================

import base64
import hashlib
import hmac
import os

SALT_BYTES = 32
ITERATIONS = 100_000


def hash_password(password: str, salt: bytes | None = None) -> str:
    """
    Hash a password with a salt using PBKDF2-SHA256.

    Args:
        password: Plain text password
        salt: Optional salt (generated if omitted)

    Returns:
        Base64 encoded string containing salt + hash
    """
    if salt is None:
        salt = os.urandom(SALT_BYTES)

    key = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        ITERATIONS,
    )
    return base64.b64encode(salt + key).decode("ascii")


def verify_password(stored_password: str, provided_password: str) -> bool:
    """
    Verify a password against a stored hash.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        decoded = base64.b64decode(stored_password.encode("ascii"), validate=True)
    except (ValueError, UnicodeEncodeError):
        return False

    if len(decoded) <= SALT_BYTES:
        return False

    salt, stored_key = decoded[:SALT_BYTES], decoded[SALT_BYTES:]
    key = hashlib.pbkdf2_hmac(
        "sha256",
        provided_password.encode("utf-8"),
        salt,
        ITERATIONS,
    )
    return hmac.compare_digest(key, stored_key)

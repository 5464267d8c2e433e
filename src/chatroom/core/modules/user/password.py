"""Salted SHA-256 password digests stored as ``salt:hexdigest``."""

import hashlib
import hmac

from chatroom.core.tokens import random_token

SALT_LENGTH = 16


def _digest(salt: str, password: str) -> str:
    return hashlib.sha256((salt + password).encode("utf-8")).hexdigest()


def hash_password(password: str) -> str:
    """Hash password with a fresh random salt."""
    salt = random_token(SALT_LENGTH)
    return f"{salt}:{_digest(salt, password)}"


def verify_password(password_hash: str, password: str) -> bool:
    """Check password against a stored ``salt:hexdigest`` value.

    Malformed stored values never raise, they simply do not match.
    """
    salt, _, expected = password_hash.partition(":")
    if not salt or not expected:
        return False
    computed = _digest(salt, password)
    # Constant-time: compares every byte regardless of where the first mismatch is
    return hmac.compare_digest(computed.encode("utf-8"), expected.encode("utf-8"))

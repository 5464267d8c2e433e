"""Random identifiers for users, sessions and verification tokens."""

import secrets
import string

from chatroom.utils import now_ms

TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def random_token(length: int = 32) -> str:
    """Return `length` alphanumeric characters drawn from a cryptographically secure source.

    Each random byte is reduced modulo the alphabet size; the slight bias toward the
    first characters of the alphabet is accepted.
    """
    return "".join(TOKEN_ALPHABET[byte % len(TOKEN_ALPHABET)] for byte in secrets.token_bytes(length))


def new_user_id() -> str:
    """Prefix, creation time and a random suffix; collisions are not checked."""
    return f"user_{now_ms()}_{random_token(16)}"

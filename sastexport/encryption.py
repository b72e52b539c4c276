"""Key material for the encrypted export."""

import secrets


def create_symmetric_key(length: int) -> bytes:
    """Return a cryptographically secure random key of ``length`` bytes."""
    if length < 0:
        raise ValueError("key length must not be negative")
    return secrets.token_bytes(length)
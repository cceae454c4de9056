"""Ownership tokens: random, printable, fixed length."""

import secrets

TOKEN_BYTES = 18
TOKEN_LENGTH = 24  # 18 bytes -> 24 url-safe base64 chars, no padding


def generate_token() -> str:
    """Return a fresh token from the OS CSPRNG. Random source errors propagate."""
    return secrets.token_urlsafe(TOKEN_BYTES)

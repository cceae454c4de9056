"""Domain layer: lock options and ownership tokens."""

from dlock.domain.options import MIN_LOCK_TIMEOUT, MIN_WAIT_RETRY, Options, normalize_options
from dlock.domain.token import TOKEN_LENGTH, generate_token

__all__ = [
    "MIN_LOCK_TIMEOUT",
    "MIN_WAIT_RETRY",
    "Options",
    "TOKEN_LENGTH",
    "generate_token",
    "normalize_options",
]

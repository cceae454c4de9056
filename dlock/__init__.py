"""Distributed mutual-exclusion lock on a Redis-like store."""

from dlock.domain.options import Options, normalize_options
from dlock.exceptions import CannotGetLockError, LockError
from dlock.locking import DistributedLock, LockStore, obtain_lock, run_with_lock

__version__ = "0.1.0"

__all__ = [
    "CannotGetLockError",
    "DistributedLock",
    "LockError",
    "LockStore",
    "Options",
    "normalize_options",
    "obtain_lock",
    "run_with_lock",
    "__version__",
]

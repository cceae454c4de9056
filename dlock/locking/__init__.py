"""Locking layer: the lock state machine, its store contract and convenience helpers."""

from dlock.locking.distributed_lock import DistributedLock
from dlock.locking.helpers import obtain_lock, run_with_lock
from dlock.locking.store import LockStore

__all__ = [
    "DistributedLock",
    "LockStore",
    "obtain_lock",
    "run_with_lock",
]

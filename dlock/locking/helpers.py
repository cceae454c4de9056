"""Shortcuts over DistributedLock: one-shot obtain, and run-a-coroutine-under-lock with retries."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from dlock.core.context import lock_key_ctx
from dlock.domain.options import Options
from dlock.exceptions import CannotGetLockError
from dlock.locking.distributed_lock import DistributedLock
from dlock.locking.store import LockStore

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def obtain_lock(
    store: LockStore,
    key: str,
    options: Options | None = None,
    *,
    metrics: Any = None,
) -> DistributedLock:
    """Build a lock and try it once. Raises CannotGetLockError if busy; store errors propagate."""
    lock = DistributedLock(store, key, options, metrics=metrics)
    if not await lock.lock():
        raise CannotGetLockError(key)
    return lock


async def run_with_lock(
    store: LockStore,
    key: str,
    work: Callable[[], Awaitable[T]],
    options: Options | None = None,
    *,
    metrics: Any = None,
) -> T:
    """
    Run work() while holding the lock and return its result.

    Makes 1 + retries_count attempts, sleeping wait_retry after each busy one; each
    attempt may itself wait up to wait_timeout. Raises CannotGetLockError when every
    attempt is busy. The lock is released whether work succeeds or fails; if work raises,
    its exception wins over a failing release.
    """
    lock = DistributedLock(store, key, options, metrics=metrics)
    opts = lock.options

    for attempt in range(opts.retries_count + 1):
        if attempt:
            await asyncio.sleep(opts.wait_retry)
        if await lock.lock():
            break
    else:
        raise CannotGetLockError(key)

    ctx_token = lock_key_ctx.set(key)
    try:
        result = await work()
    except BaseException:
        try:
            await lock.unlock()
        except Exception:
            logger.exception("lock_release_failed", extra={"lock_key": key})
        raise
    finally:
        lock_key_ctx.reset(ctx_token)

    await lock.unlock()
    return result

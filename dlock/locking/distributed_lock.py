"""Distributed lock over a LockStore. SET NX PX acquire, compare-and-expire refresh, compare-and-delete release."""

import asyncio
import logging
import time
from typing import Any

from dlock.domain.options import Options, normalize_options
from dlock.domain.token import generate_token
from dlock.exceptions import CannotGetLockError
from dlock.locking.store import LockStore
from dlock.observability.metrics import (
    LOCK_ACQUIRED,
    LOCK_BUSY,
    LOCK_REFRESHED,
    LOCK_RELEASED,
    LOCK_WAIT_MS,
)

logger = logging.getLogger(__name__)


class DistributedLock:
    """
    One named lock held through one store key.

    The local token is a claim, not proof: every lock() re-validates against the store.
    Store errors propagate unchanged and are never retried here; retrying busy locks is
    run_with_lock's job. Not safe for concurrent use of the same instance by several tasks.
    """

    def __init__(
        self,
        store: LockStore,
        key: str,
        options: Options | None = None,
        *,
        metrics: Any = None,
    ) -> None:
        self._store = store
        self._key = key
        self._opts = normalize_options(options)
        self._metrics = metrics
        self._token = ""

    @property
    def key(self) -> str:
        return self._key

    @property
    def options(self) -> Options:
        return self._opts

    @property
    def token(self) -> str:
        return self._token

    def is_locked(self) -> bool:
        """Local belief only; does not contact the store."""
        return self._token != ""

    async def lock(self) -> bool:
        """
        Acquire or refresh the lock. Returns True if held, False if busy.
        A held lock gets its TTL reset to lock_timeout. If the key was lost (expired and
        taken, or deleted), the token is dropped and a fresh acquisition follows, waiting
        up to wait_timeout for a foreign lock to expire.
        """
        if self._token:
            if await self._store.set_ttl_if_value_equals(self._key, self._token, self._opts.lock_timeout):
                self._record(LOCK_REFRESHED)
                logger.debug("lock_refreshed", extra={"lock_key": self._key})
                return True
            logger.info("lock_refresh_lost", extra={"lock_key": self._key})
            self._token = ""
        return await self._acquire()

    async def _acquire(self) -> bool:
        token = generate_token()
        start = time.monotonic()
        deadline = start + self._opts.wait_timeout

        while True:
            if await self._store.set_if_absent(self._key, token, self._opts.lock_timeout):
                self._token = token
                self._record(LOCK_ACQUIRED)
                if self._metrics and hasattr(self._metrics, "observe_latency"):
                    self._metrics.observe_latency(
                        LOCK_WAIT_MS, (time.monotonic() - start) * 1000, key=self._key
                    )
                logger.debug("lock_acquired", extra={"lock_key": self._key})
                return True

            left = deadline - time.monotonic()
            if left <= 0:
                self._record(LOCK_BUSY)
                logger.debug(
                    "lock_wait_timeout" if self._opts.wait_timeout else "lock_busy",
                    extra={"lock_key": self._key},
                )
                return False

            # No point polling faster than the foreign lock can expire.
            ttl = await self._store.remaining_ttl(self._key)
            delay = self._opts.wait_retry if ttl is None else min(ttl, self._opts.wait_retry)
            await asyncio.sleep(min(delay, left))

    async def unlock(self) -> None:
        """
        Release the key if it still holds our token. The local token is cleared first,
        so it is gone even if the store call raises.
        """
        token, self._token = self._token, ""
        if await self._store.delete_if_value_equals(self._key, token):
            self._record(LOCK_RELEASED)
            logger.debug("lock_released", extra={"lock_key": self._key})

    async def __aenter__(self) -> "DistributedLock":
        if not await self.lock():
            raise CannotGetLockError(self._key)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.unlock()
            return
        # the body's exception wins over a failing release
        try:
            await self.unlock()
        except Exception:
            logger.exception("lock_release_failed", extra={"lock_key": self._key})

    def _record(self, name: str) -> None:
        if self._metrics and hasattr(self._metrics, "increment"):
            self._metrics.increment(name, 1, key=self._key)

"""
Chaos: Redis outage (every store call fails).
Lock operations must surface the store error verbatim and leave local state consistent:
acquire and refresh failures keep the previous claim, release always drops it.
"""

import pytest

from dlock.domain.options import Options
from dlock.exceptions import CannotGetLockError
from dlock.infrastructure.cache.memory_store import InMemoryLockStore
from dlock.locking.distributed_lock import DistributedLock
from dlock.locking.helpers import run_with_lock


class FailingStore:
    """Store that raises on every call (simulated Redis outage)."""

    async def set_if_absent(self, key: str, value: str, ttl: float) -> bool:
        raise ConnectionError("Redis connection refused")

    async def set_ttl_if_value_equals(self, key: str, expected: str, ttl: float) -> bool:
        raise ConnectionError("Redis connection refused")

    async def delete_if_value_equals(self, key: str, expected: str) -> bool:
        raise ConnectionError("Redis connection refused")

    async def get(self, key: str) -> str | None:
        raise ConnectionError("Redis connection refused")

    async def remaining_ttl(self, key: str) -> float | None:
        raise ConnectionError("Redis connection refused")


class OutageAfterAcquire(InMemoryLockStore):
    """Works until `outage` is set, then fails like FailingStore."""

    def __init__(self) -> None:
        super().__init__()
        self.outage = False

    async def set_ttl_if_value_equals(self, key, expected, ttl):
        if self.outage:
            raise ConnectionError("Redis connection refused")
        return await super().set_ttl_if_value_equals(key, expected, ttl)

    async def delete_if_value_equals(self, key, expected):
        if self.outage:
            raise ConnectionError("Redis connection refused")
        return await super().delete_if_value_equals(key, expected)


@pytest.mark.asyncio
async def test_lock_fails_cleanly_on_redis_outage():
    lock = DistributedLock(FailingStore(), "workflow:evt-1")
    with pytest.raises(ConnectionError):
        await lock.lock()
    assert lock.is_locked() is False


@pytest.mark.asyncio
async def test_unlock_raises_but_clears_claim():
    lock = DistributedLock(FailingStore(), "workflow:evt-1")
    with pytest.raises(ConnectionError):
        await lock.unlock()
    assert lock.is_locked() is False


@pytest.mark.asyncio
async def test_refresh_failure_keeps_claim_until_release():
    store = OutageAfterAcquire()
    lock = DistributedLock(store, "workflow:evt-1", Options(lock_timeout=1.0))
    assert await lock.lock() is True
    token = lock.token

    store.outage = True
    with pytest.raises(ConnectionError):
        await lock.lock()
    assert lock.token == token

    with pytest.raises(ConnectionError):
        await lock.unlock()
    assert lock.is_locked() is False

    # the key survives the outage and expires on its own
    assert await store.get("workflow:evt-1") == token


@pytest.mark.asyncio
async def test_run_with_lock_surfaces_outage_not_busy():
    async def work():
        pytest.fail("work must not run during an outage")

    with pytest.raises(ConnectionError) as exc_info:
        await run_with_lock(FailingStore(), "workflow:evt-1", work, Options(retries_count=3))
    assert not isinstance(exc_info.value, CannotGetLockError)

"""Fixtures for lock tests."""

import pytest

from dlock.domain.options import Options
from dlock.infrastructure.cache.memory_store import InMemoryLockStore
from dlock.locking.distributed_lock import DistributedLock

TEST_KEY = "__dlock_unit_test__"


class FlakyLockStore(InMemoryLockStore):
    """In-memory store that raises ConnectionError on every call while `down` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.down = False

    def _check(self) -> None:
        if self.down:
            raise ConnectionError("Redis connection refused")

    async def set_if_absent(self, key, value, ttl):
        self._check()
        return await super().set_if_absent(key, value, ttl)

    async def set_ttl_if_value_equals(self, key, expected, ttl):
        self._check()
        return await super().set_ttl_if_value_equals(key, expected, ttl)

    async def delete_if_value_equals(self, key, expected):
        self._check()
        return await super().delete_if_value_equals(key, expected)

    async def remaining_ttl(self, key):
        self._check()
        return await super().remaining_ttl(key)


@pytest.fixture
def store():
    return FlakyLockStore()


@pytest.fixture
def options():
    return Options(wait_timeout=0.1, lock_timeout=1.0)


@pytest.fixture
def new_lock(store, options):
    def _new_lock(**kwargs) -> DistributedLock:
        return DistributedLock(store, TEST_KEY, options, **kwargs)

    return _new_lock


@pytest.fixture
def subject(new_lock):
    lock = new_lock()
    assert lock.is_locked() is False
    return lock

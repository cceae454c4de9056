# scripts/check_redis_lock.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from dlock import CannotGetLockError, DistributedLock, obtain_lock, run_with_lock
from dlock.config.logging import configure_logging
from dlock.config.settings import get_settings
from dlock.infrastructure.cache.redis_store import RedisLockStore

KEY = "dlock:smoke-test"


async def test():
    settings = get_settings()
    configure_logging(settings.log_level)
    store = RedisLockStore.from_url(settings.redis_url)
    try:
        first = await obtain_lock(store, KEY, settings.lock_options())
        print("First lock:", first.is_locked(), first.token)

        second = DistributedLock(store, KEY, settings.lock_options())
        print("Second lock while first held:", await second.lock())

        try:
            await obtain_lock(store, KEY)
        except CannotGetLockError as e:
            print("Shortcut while held:", e.message)

        await first.unlock()
        print("After unlock:", await store.get(KEY))

        async def work():
            return await store.remaining_ttl(KEY)

        print("TTL seen inside run_with_lock:", await run_with_lock(store, KEY, work))
    finally:
        await store.aclose()

asyncio.run(test())

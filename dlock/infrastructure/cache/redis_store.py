# dlock/infrastructure/cache/redis_store.py

import redis.asyncio as redis

from dlock.config.settings import get_settings

REFRESH_SCRIPT = (
    "if redis.call('get', KEYS[1]) == ARGV[1] then "
    "return redis.call('pexpire', KEYS[1], ARGV[2]) else return 0 end"
)
RELEASE_SCRIPT = (
    "if redis.call('get', KEYS[1]) == ARGV[1] then "
    "return redis.call('del', KEYS[1]) else return 0 end"
)


def _ms(seconds: float) -> int:
    return max(int(round(seconds * 1000)), 1)


class RedisLockStore:
    """
    LockStore over redis.asyncio. The caller owns the client lifecycle:
    pass an open client, or build one with from_url() and close it with aclose().
    """

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str | None = None) -> "RedisLockStore":
        return cls(
            redis.from_url(
                url or get_settings().redis_url,
                decode_responses=True,
            )
        )

    async def set_if_absent(self, key: str, value: str, ttl: float) -> bool:
        """SET key value NX PX ttl. Returns True if this call created the key."""
        return bool(await self.client.set(key, value, nx=True, px=_ms(ttl)))

    async def set_ttl_if_value_equals(self, key: str, expected: str, ttl: float) -> bool:
        """PEXPIRE key only if its value equals expected (atomic)."""
        result = await self.client.eval(REFRESH_SCRIPT, 1, key, expected, _ms(ttl))
        return bool(result)

    async def delete_if_value_equals(self, key: str, expected: str) -> bool:
        """Delete key only if its value equals expected (atomic). Returns True if deleted."""
        result = await self.client.eval(RELEASE_SCRIPT, 1, key, expected)
        return bool(result)

    async def get(self, key: str) -> str | None:
        return await self.client.get(key)

    async def remaining_ttl(self, key: str) -> float | None:
        """PTTL in seconds; None when the key is missing (-2) or never expires (-1)."""
        ms = await self.client.pttl(key)
        if ms < 0:
            return None
        return ms / 1000

    async def aclose(self) -> None:
        await self.client.aclose()

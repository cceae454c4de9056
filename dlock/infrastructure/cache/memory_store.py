"""In-memory LockStore with monotonic expiry. For tests or single-node."""

import time


class InMemoryLockStore:
    """
    key -> (value, expires_at). No operation awaits anything, so each one runs to
    completion without yielding to the event loop and is atomic for asyncio callers.
    """

    def __init__(self) -> None:
        self._data: dict[str, tuple[str, float | None]] = {}

    def _live(self, key: str) -> tuple[str, float | None] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and expires_at <= time.monotonic():
            del self._data[key]
            return None
        return entry

    async def set_if_absent(self, key: str, value: str, ttl: float) -> bool:
        if self._live(key) is not None:
            return False
        self._data[key] = (value, time.monotonic() + ttl)
        return True

    async def set_ttl_if_value_equals(self, key: str, expected: str, ttl: float) -> bool:
        entry = self._live(key)
        if entry is None or entry[0] != expected:
            return False
        self._data[key] = (expected, time.monotonic() + ttl)
        return True

    async def delete_if_value_equals(self, key: str, expected: str) -> bool:
        entry = self._live(key)
        if entry is None or entry[0] != expected:
            return False
        del self._data[key]
        return True

    async def get(self, key: str) -> str | None:
        entry = self._live(key)
        return entry[0] if entry else None

    async def remaining_ttl(self, key: str) -> float | None:
        entry = self._live(key)
        if entry is None or entry[1] is None:
            return None
        return max(entry[1] - time.monotonic(), 0.0)

    # Out-of-band helpers. They are not part of LockStore and locks never call them.

    def put(self, key: str, value: str, ttl: float | None = None) -> None:
        """Unconditional SET [PX] as issued by a second client; ttl None means no expiry."""
        self._data[key] = (value, None if ttl is None else time.monotonic() + ttl)

    def delete(self, key: str) -> None:
        """Unconditional DEL as issued by a second client (or an operator)."""
        self._data.pop(key, None)

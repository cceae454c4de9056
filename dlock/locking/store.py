"""Store contract for distributed locks. Injected; no global state."""

from typing import Protocol


class LockStore(Protocol):
    """
    Minimal key-value operations a lock needs. TTLs are seconds.
    The three mutating operations must be atomic at the store.
    """

    async def set_if_absent(self, key: str, value: str, ttl: float) -> bool: ...
    async def set_ttl_if_value_equals(self, key: str, expected: str, ttl: float) -> bool: ...
    async def delete_if_value_equals(self, key: str, expected: str) -> bool: ...
    async def get(self, key: str) -> str | None: ...
    async def remaining_ttl(self, key: str) -> float | None: ...

"""Lock options and their normalization. Pure domain layer, no I/O."""

from dataclasses import dataclass, replace

MIN_LOCK_TIMEOUT = 0.1  # seconds
MIN_WAIT_RETRY = 0.01  # seconds


@dataclass(frozen=True)
class Options:
    """
    Tuning for a single lock. Durations are seconds.

    retries_count: extra attempts made by run_with_lock after a busy attempt.
    lock_timeout: TTL put on the store key on acquire and refresh.
    wait_retry: polling step while waiting for a foreign lock; also the pause between
        run_with_lock attempts.
    wait_timeout: how long one lock() call may wait for a foreign lock to expire.
        0 means do not wait.
    """

    retries_count: int = 0
    lock_timeout: float = 0.0
    wait_retry: float = 0.0
    wait_timeout: float = 0.0

    def normalized(self) -> "Options":
        return replace(
            self,
            retries_count=max(self.retries_count, 0),
            lock_timeout=max(self.lock_timeout, MIN_LOCK_TIMEOUT),
            wait_retry=max(self.wait_retry, MIN_WAIT_RETRY),
            wait_timeout=max(self.wait_timeout, 0.0),
        )


def normalize_options(options: Options | None = None) -> Options:
    """Clamp options to their floors. None means all-zero defaults."""
    return (options or Options()).normalized()

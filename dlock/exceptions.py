"""Lock-layer exceptions. Store/transport errors are never wrapped; they propagate as raised."""


class LockError(Exception):
    """Base for all lock-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CannotGetLockError(LockError):
    """Raised when the lock is held by someone else and could not be obtained."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"can't get lock: {key}")

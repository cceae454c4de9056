"""Prometheus-style lock metrics. Thread-safe, in-memory. No real Prometheus dependency."""

import threading
from typing import Any

LOCK_ACQUIRED = "lock_acquired"
LOCK_REFRESHED = "lock_refreshed"
LOCK_BUSY = "lock_busy"
LOCK_RELEASED = "lock_released"
LOCK_WAIT_MS = "lock_wait_ms"


def _label(name: str, key: str | None) -> str:
    return name if key is None else f"{name}:key={key}"


class MetricsCollector:
    """
    In-memory registry of counters and latency histograms, optionally labelled by lock key.
    A single collector may be shared by many locks, across threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, float] = {}
        self._histograms: dict[str, list[float]] = {}

    def increment(self, name: str, value: float = 1.0, *, key: str | None = None) -> None:
        """Increment a counter. Labelled counters also roll up into the unlabelled total."""
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value
            if key is not None:
                label = _label(name, key)
                self._counters[label] = self._counters.get(label, 0) + value

    def observe_latency(self, name: str, latency_ms: float, *, key: str | None = None) -> None:
        with self._lock:
            self._histograms.setdefault(_label(name, key), []).append(latency_ms)

    def counter(self, name: str, *, key: str | None = None) -> float:
        with self._lock:
            return self._counters.get(_label(name, key), 0)

    def export_metrics(self) -> dict[str, Any]:
        """Export all metrics as a dict (simulated Prometheus-style)."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "histograms": {
                    k: {"count": len(v), "sum": sum(v), "values": list(v)}
                    for k, v in self._histograms.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()

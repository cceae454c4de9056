"""Observability: lock metrics collector."""

from dlock.observability.metrics import MetricsCollector

__all__ = ["MetricsCollector"]

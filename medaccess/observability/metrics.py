"""Prometheus-style metrics collector. Thread-safe, in-memory. No real Prometheus dependency."""

import threading
from typing import Any


class MetricsCollector:
    """
    In-memory counter registry. Plain counters plus counters labelled by
    operation or requester. Exposes increment, get, export_metrics.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, float] = {}
        self._counters_by_labels: dict[str, dict[str, float]] = {}

    def increment(
        self,
        name: str,
        value: float = 1.0,
        *,
        operation: str | None = None,
        requester: str | None = None,
    ) -> None:
        """Increment a counter. Optional operation or requester for dimensional metrics."""
        with self._lock:
            if operation is not None:
                key = f"{name}:operation={operation}"
            elif requester is not None:
                key = f"{name}:requester={requester}"
            else:
                self._counters[name] = self._counters.get(name, 0) + value
                return
            labelled = self._counters_by_labels.setdefault(name, {})
            labelled[key] = labelled.get(key, 0) + value

    def get(self, name: str, *, operation: str | None = None) -> float:
        with self._lock:
            if operation is None:
                return self._counters.get(name, 0)
            return self._counters_by_labels.get(name, {}).get(f"{name}:operation={operation}", 0)

    def export_metrics(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_labels": {
                    k: dict(v) for k, v in self._counters_by_labels.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._counters_by_labels.clear()

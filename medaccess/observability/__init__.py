"""Observability: in-memory metrics for governance operations."""

from medaccess.observability.metrics import MetricsCollector

__all__ = ["MetricsCollector"]

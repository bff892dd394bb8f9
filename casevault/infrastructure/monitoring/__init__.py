"""Monitoring infrastructure (Prometheus metrics)."""

from casevault.infrastructure.monitoring.registry_metrics import (
    RegistryMetricsCollector,
)

__all__: list[str] = [
    "RegistryMetricsCollector",
]

"""Registry metrics for Prometheus exposition.

Operational counters for case creation and verification outcomes.
Only operational metrics: no case ids, patient ids or diagnosis values are
ever used as label values.
"""

from __future__ import annotations

import os

from prometheus_client import CollectorRegistry, Counter

from casevault.application.ports.registry_metrics import RegistryMetricsPort

VERIFICATION_OUTCOMES: tuple[str, ...] = ("verified", "rejected")
OPERATIONS: tuple[str, ...] = ("create", "verify")


class RegistryMetricsCollector(RegistryMetricsPort):
    """Collects case registry metrics for Prometheus.

    Attributes:
        cases_created_total: Counter for committed case creations.
        verifications_total: Counter for verification attempts by outcome.
        rejections_total: Counter for rejected calls by operation and reason.
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        environment: str | None = None,
        service_name: str | None = None,
    ) -> None:
        """Initialize registry metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
            environment: Environment label; falls back to ENVIRONMENT.
            service_name: Service label; falls back to SERVICE_NAME.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = environment or os.environ.get("ENVIRONMENT", "development")
        self._service_name = service_name or os.environ.get("SERVICE_NAME", "casevault")

        self.cases_created_total = Counter(
            name="casevault_cases_created_total",
            documentation="Total cases created",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.verifications_total = Counter(
            name="casevault_verifications_total",
            documentation="Total diagnosis verification attempts by outcome",
            labelnames=["outcome", "service", "environment"],
            registry=self._registry,
        )

        self.rejections_total = Counter(
            name="casevault_rejections_total",
            documentation="Total rejected registry calls by operation and reason",
            labelnames=["operation", "reason", "service", "environment"],
            registry=self._registry,
        )

    def record_case_created(self) -> None:
        """Record a committed case creation."""
        self.cases_created_total.labels(
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def record_verification(self, outcome: str) -> None:
        """Record a verification attempt.

        Raises:
            ValueError: If outcome is not verified or rejected.
        """
        if outcome not in VERIFICATION_OUTCOMES:
            raise ValueError(
                f"Invalid outcome '{outcome}'. Must be one of {VERIFICATION_OUTCOMES}."
            )
        self.verifications_total.labels(
            outcome=outcome,
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def record_rejection(self, operation: str, reason: str) -> None:
        """Record a rejected call.

        Raises:
            ValueError: If operation is not create or verify.
        """
        if operation not in OPERATIONS:
            raise ValueError(
                f"Invalid operation '{operation}'. Must be one of {OPERATIONS}."
            )
        self.rejections_total.labels(
            operation=operation,
            reason=reason,
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def get_registry(self) -> CollectorRegistry:
        """Get the collector registry."""
        return self._registry


"""Registry metrics port.

Operational counters for the case registry. Implementations live in
casevault.infrastructure.monitoring.
"""

from __future__ import annotations

from typing import Protocol


class RegistryMetricsPort(Protocol):
    """Protocol for recording registry operation outcomes."""

    def record_case_created(self) -> None:
        """Record a committed case creation."""
        ...

    def record_verification(self, outcome: str) -> None:
        """Record a verification attempt by outcome (verified, rejected)."""
        ...

    def record_rejection(self, operation: str, reason: str) -> None:
        """Record a rejected operation.

        Args:
            operation: create or verify.
            reason: Error class name that rejected the call.
        """
        ...

"""Registry statistics read model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class CaseStatistics:
    """Aggregate counts over every case in the registry.

    Attributes:
        total_cases: Number of cases ever created.
        verified_cases: Number of cases in VERIFIED state.
    """

    total_cases: int
    verified_cases: int

    @property
    def pending_cases(self) -> int:
        """Cases still awaiting verification."""
        return self.total_cases - self.verified_cases

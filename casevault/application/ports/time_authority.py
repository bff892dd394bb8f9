"""Time Authority Protocol - interface for consistent timestamp provisioning.

Services that need timestamps inject a TimeAuthorityProtocol implementation
instead of calling datetime.now() directly. Tests inject FakeTimeAuthority
(tests/helpers/fake_time_authority.py) for deterministic timestamps.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.utcnow()  # NOT datetime.now()
    """

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time.

        Returns:
            Current datetime in UTC timezone.

        Note:
            This should always return a timezone-aware datetime in UTC.
        """
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Returns:
            Monotonically increasing float value (in seconds).
        """
        ...

"""Unit tests for SystemTimeAuthority."""

from datetime import timezone

from casevault.application.ports.time_authority import TimeAuthorityProtocol
from casevault.infrastructure.adapters.system_time_authority import SystemTimeAuthority


def test_utcnow_is_timezone_aware() -> None:
    now = SystemTimeAuthority().utcnow()

    assert now.tzinfo is not None
    assert now.utcoffset() == timezone.utc.utcoffset(None)


def test_monotonic_never_decreases() -> None:
    authority = SystemTimeAuthority()

    first = authority.monotonic()
    assert authority.monotonic() >= first


def test_implements_protocol() -> None:
    assert isinstance(SystemTimeAuthority(), TimeAuthorityProtocol)

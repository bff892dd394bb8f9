"""Event sink port.

The registry PUBLISHES case events. Subscribers (audit trail, UI refresh)
observe them independently.

The registry does not wait on subscribers and cannot be failed by them.
Its responsibility ends at publishing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from casevault.domain.events.case import CaseEvent

EventSubscriber = Callable[[CaseEvent], Awaitable[None]]


class EventSinkProtocol(Protocol):
    """Protocol for publishing case lifecycle events."""

    async def publish(self, event: CaseEvent) -> None:
        """Publish an event. Fire-and-forget from the registry's perspective.

        Args:
            event: The case event to publish.
        """
        ...

"""Event sink stub implementation.

Records published events for test assertions. Can be configured to raise
on publish to exercise emission-failure paths.
"""

from __future__ import annotations

from casevault.application.ports.event_sink import EventSinkProtocol
from casevault.domain.events.case import CaseEvent


class EventSinkStub(EventSinkProtocol):
    """In-memory stub implementation of EventSinkProtocol.

    Attributes:
        events: Every successfully published event, in order.
    """

    def __init__(self, fail_on_publish: bool = False) -> None:
        self._fail_on_publish = fail_on_publish
        self.events: list[CaseEvent] = []

    async def publish(self, event: CaseEvent) -> None:
        if self._fail_on_publish:
            raise RuntimeError("event sink unavailable")
        self.events.append(event)

    def events_of_type(self, event_type: str) -> list[CaseEvent]:
        """Return published events with the given event_type."""
        return [event for event in self.events if event.event_type == event_type]

    def set_fail_on_publish(self, fail_on_publish: bool) -> None:
        self._fail_on_publish = fail_on_publish

    def clear(self) -> None:
        """Clear recorded events (for testing)."""
        self.events.clear()

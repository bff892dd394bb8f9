"""In-process event bus adapter.

The registry PUBLISHES case events here. Subscribers (audit trail, UI
refresh triggers) register independently and receive every event.

publish() only schedules delivery: each subscriber runs in its own task,
bounded by the subscriber timeout. A subscriber that raises or exceeds its
time budget is logged and skipped; it can neither block nor fail the
registry's transition. drain() waits for in-flight deliveries (shutdown
and tests).
"""

from __future__ import annotations

import asyncio

from casevault.application.ports.event_sink import EventSinkProtocol, EventSubscriber
from casevault.domain.events.case import CaseEvent
from casevault.infrastructure.observability.logging import get_logger_for_component

DEFAULT_SUBSCRIBER_TIMEOUT_SECONDS: float = 5.0


class InProcessEventBus(EventSinkProtocol):
    """Fan-out publish/subscribe sink for case events.

    Subscribers run concurrently in background tasks, each bounded by the
    subscriber timeout. Delivery order between subscribers is not guaranteed.

    Attributes:
        _pending: Delivery tasks not yet finished. Holding them here keeps
            them from being garbage collected mid-flight.
    """

    def __init__(
        self,
        subscriber_timeout_seconds: float = DEFAULT_SUBSCRIBER_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the bus.

        Args:
            subscriber_timeout_seconds: Time budget per subscriber per event.
        """
        if subscriber_timeout_seconds <= 0:
            raise ValueError(
                f"subscriber_timeout_seconds must be positive, got {subscriber_timeout_seconds}"
            )
        self._timeout = subscriber_timeout_seconds
        self._subscribers: list[EventSubscriber] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._log = get_logger_for_component(self.__class__.__name__, component="events")

    def subscribe(self, subscriber: EventSubscriber) -> None:
        """Register a subscriber for every future event."""
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: EventSubscriber) -> bool:
        """Remove a subscriber.

        Returns:
            True if the subscriber was registered.
        """
        try:
            self._subscribers.remove(subscriber)
        except ValueError:
            return False
        return True

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def pending_deliveries(self) -> int:
        """Number of deliveries still running."""
        return len(self._pending)

    async def publish(self, event: CaseEvent) -> None:
        """Schedule delivery of event to every subscriber and return immediately."""
        for subscriber in list(self._subscribers):
            task = asyncio.create_task(self._deliver(subscriber, event))
            self._pending.add(task)
            task.add_done_callback(self._on_delivery_done)

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _on_delivery_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            self._log.warning("delivery_cancelled")
            return
        error = task.exception()
        if error is not None:
            self._log.error(
                "delivery_failed",
                error=str(error),
                error_type=type(error).__name__,
            )

    async def _deliver(self, subscriber: EventSubscriber, event: CaseEvent) -> None:
        log = self._log.bind(
            event_type=event.event_type,
            case_id=event.case_id,
            subscriber=getattr(subscriber, "__qualname__", repr(subscriber)),
        )
        try:
            await asyncio.wait_for(subscriber(event), timeout=self._timeout)
        except asyncio.TimeoutError:
            log.warning("subscriber_timed_out", timeout_seconds=self._timeout)
        except Exception as e:
            log.error(
                "subscriber_failed",
                error=str(e),
                error_type=type(e).__name__,
            )

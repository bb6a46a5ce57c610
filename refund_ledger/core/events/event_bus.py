"""
Synchronous transition event bus.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from refund_ledger.core.events.event_sink import EventSink
    from refund_ledger.core.events.events import TransitionEvent


class EventBus:
    """Dispatches transition events to sinks, in registration order.

    Delivery is synchronous: ``emit`` returns after every sink has seen the
    event, and a failing sink propagates to the submitter.
    """

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    def register(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def emit(self, event: TransitionEvent) -> None:
        if self._closed:
            raise RuntimeError("EventBus is closed")
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """
        Close every sink that has a close() method, once. Later emits fail.
        """
        if self._closed:
            return
        self._closed = True

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

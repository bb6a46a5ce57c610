from __future__ import annotations

from typing import TYPE_CHECKING

from refund_ledger.core.events.event_bus import EventBus

if TYPE_CHECKING:
    from refund_ledger.core.events.event_sink import EventSink
    from refund_ledger.core.events.events import TransitionEvent


class NullEventBus(EventBus):
    """Bus that drops every transition event (pure callers, tests).

    Sinks cannot be attached: a recorder registered here would silently
    record nothing.
    """

    def __init__(self) -> None:
        super().__init__(sinks=())

    def register(self, sink: EventSink) -> None:
        raise TypeError("NullEventBus does not accept sinks")

    def emit(self, event: TransitionEvent) -> None:
        return

"""
Transition event sink interface.

A sink receives every transition event the submitter emits, in order.
Sinks holding resources may also expose ``close()``; the bus calls it once.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from refund_ledger.core.events.events import TransitionEvent


class EventSink(Protocol):
    def on_event(self, event: TransitionEvent) -> None:
        """Consume one transition event."""

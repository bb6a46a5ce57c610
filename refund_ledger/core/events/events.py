"""
Domain event models.

These events are immutable facts about transition submissions: one
``TransitionRequestedEvent`` per submission, followed by exactly one of
``TransitionAppliedEvent`` or ``TransitionRejectedEvent`` unless the
authority call itself failed.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TransitionRequestedEvent:
    refund_id: str
    target_status: str
    actor: str
    force: bool
    real_amount: float | None


@dataclass(slots=True)
class TransitionAppliedEvent:
    refund_id: str
    target_status: str
    current_status: str | None
    forced: bool


@dataclass(slots=True)
class TransitionRejectedEvent:
    refund_id: str
    target_status: str
    kind: str
    message: str
    forced: bool


TransitionEvent = TransitionRequestedEvent | TransitionAppliedEvent | TransitionRejectedEvent

"""Transition submission to the external authority."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from refund_ledger.core.events.events import (
    TransitionAppliedEvent,
    TransitionRejectedEvent,
    TransitionRequestedEvent,
)
from refund_ledger.core.events.sinks.null_event_bus import NullEventBus
from refund_ledger.core.transitions.errors import TransitionRejected

if TYPE_CHECKING:
    from refund_ledger.core.domain.types import RefundRecord, TransitionRequest
    from refund_ledger.core.events.event_bus import EventBus
    from refund_ledger.core.ports.transition_authority import TransitionAuthority

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class TransitionOutcome:
    """Result of one submission.

    - accepted: the authority applied the transition
    - record: the updated refund (accepted only)
    - rejection: the structured refusal (rejected only)
    - suggest_force: the refusal was an adjacency violation on a non-forced
      request, so retrying with force=True may be offered to the operator
    """

    request: TransitionRequest
    accepted: bool
    record: RefundRecord | None
    rejection: TransitionRejected | None
    suggest_force: bool


class TransitionSubmitter:
    """Sends validated requests to the authority.

    Exactly one call per ``submit``. Retry policy belongs to the caller.
    It must NOT build or alter requests itself.
    """

    def __init__(self, authority: TransitionAuthority, event_bus: EventBus | None = None) -> None:
        self._authority = authority
        self._event_bus = event_bus if event_bus is not None else NullEventBus()

    def submit(self, refund_id: str, request: TransitionRequest) -> TransitionOutcome:
        target = request.target_status.value

        self._event_bus.emit(
            TransitionRequestedEvent(
                refund_id=refund_id,
                target_status=target,
                actor=request.actor,
                force=request.force,
                real_amount=request.real_amount,
            )
        )

        try:
            record = self._authority.apply_transition(refund_id, request)
        except TransitionRejected as rejection:
            LOGGER.info("Transition of %s to %s rejected (%s)", refund_id, target, rejection.kind)
            self._event_bus.emit(
                TransitionRejectedEvent(
                    refund_id=refund_id,
                    target_status=target,
                    kind=rejection.kind,
                    message=rejection.message,
                    forced=request.force,
                )
            )
            return TransitionOutcome(
                request=request,
                accepted=False,
                record=None,
                rejection=rejection,
                suggest_force=rejection.is_invalid_transition and not request.force,
            )

        self._event_bus.emit(
            TransitionAppliedEvent(
                refund_id=refund_id,
                target_status=target,
                current_status=record.current_status,
                forced=request.force,
            )
        )
        return TransitionOutcome(
            request=request,
            accepted=True,
            record=record,
            rejection=None,
            suggest_force=False,
        )

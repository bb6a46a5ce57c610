"""
Logging sink for transition events.
"""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from refund_ledger.core.events.events import TransitionRejectedEvent

if TYPE_CHECKING:
    from refund_ledger.core.events.events import TransitionEvent


class LoggingEventSink:
    """Logs transition events through the standard logging module.

    The event class goes in the message and its fields travel in
    ``extra={"event": ...}`` for structured handlers. Rejections are logged
    at ``rejection_level`` (WARNING by default) so they stand out.
    """

    def __init__(
        self,
        logger: logging.Logger,
        level: int = logging.INFO,
        rejection_level: int = logging.WARNING,
    ) -> None:
        self._logger = logger
        self._level = level
        self._rejection_level = rejection_level

    def on_event(self, event: TransitionEvent) -> None:
        level = self._rejection_level if isinstance(event, TransitionRejectedEvent) else self._level
        self._logger.log(
            level,
            "domain_event %s refund=%s",
            type(event).__name__,
            event.refund_id,
            extra={"event": asdict(event)},
        )

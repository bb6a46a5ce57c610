"""
Append-only audit trail of transition attempts.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from refund_ledger.core.events.events import TransitionEvent


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FileRecorderSink:
    """Appends one JSON line per event.

    Line shape: ``{"recorded_at": <ISO UTC>, "type": <event class>, **fields}``.
    Non-ASCII text (Spanish rejection messages) is written as is.
    """

    def __init__(self, path: str | Path, clock: Callable[[], datetime] = _utc_now) -> None:
        self._path = Path(path)
        self._clock = clock
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def on_event(self, event: TransitionEvent) -> None:
        record = {
            "recorded_at": self._clock().isoformat(),
            "type": type(event).__name__,
            **asdict(event),
        }
        self._fh.write(json.dumps(record, ensure_ascii=False) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh.closed:
            return
        self._fh.close()

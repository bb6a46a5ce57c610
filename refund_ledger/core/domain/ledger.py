"""Chronological, read-only view over a refund's status history.

Raw history arrives unordered-as-stored and may contain corrupt records.
Ingestion parses every entry exactly once (status via the catalog,
timestamp into a UTC instant; naive values are read in the reference time
zone) and keeps only evaluable entries, sorted ascending by ``at`` with ties
broken by original position.

Entries that cannot be evaluated are skipped, not raised: one corrupt
record must not blind the rest of the ledger. Skipped entries stay
available on ``StatusLedger.skipped`` for display elsewhere.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Iterable, Iterator

from pydantic import ValidationError

from refund_ledger.core.config.ledger_config import DEFAULT_CONFIG, LedgerConfig
from refund_ledger.core.domain.day_bounds import parse_instant
from refund_ledger.core.domain.status_catalog import Status, parse_status
from refund_ledger.core.domain.types import RefundRecord, StatusHistoryEntry

LOGGER = logging.getLogger(__name__)


class SkipReason:
    """Why an entry was left out of the evaluable ledger."""

    UNPARSABLE_TIMESTAMP = "unparsable_timestamp"
    UNKNOWN_STATUS = "unknown_status"
    MALFORMED_ENTRY = "malformed_entry"


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """An ingested transition.

    ``at`` is an aware UTC instant. ``index`` is the position in the raw history.
    """

    index: int
    to: Status
    at: datetime
    from_status: Status | None = None
    by: str | None = None
    note: str | None = None
    real_amount: float | None = None


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    index: int
    reason: str
    raw: Any


def sort_events(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Return entries ascending by ``at``; equal instants keep raw order."""
    return sorted(entries, key=lambda entry: (entry.at, entry.index))


def _ingest_one(index: int, raw: StatusHistoryEntry, tz: tzinfo) -> LedgerEntry | SkippedEntry:
    at = parse_instant(raw.at, tz)
    if at is None:
        return SkippedEntry(index=index, reason=SkipReason.UNPARSABLE_TIMESTAMP, raw=raw)

    to = parse_status(raw.to)
    if to is None:
        return SkippedEntry(index=index, reason=SkipReason.UNKNOWN_STATUS, raw=raw)

    return LedgerEntry(
        index=index,
        to=to,
        at=at,
        from_status=parse_status(raw.from_status),
        by=raw.by,
        note=raw.note,
        real_amount=raw.real_amount,
    )


@dataclass(frozen=True, slots=True)
class StatusLedger:
    """Immutable, chronologically sorted ledger for one refund request.

    Build instances with ``from_entries`` or ``from_record``; the
    constructor trusts that ``events`` is already sorted.
    """

    events: tuple[LedgerEntry, ...]
    tz: tzinfo
    skipped: tuple[SkippedEntry, ...] = field(default=(), compare=False)

    @classmethod
    def from_entries(
        cls,
        raw_entries: Iterable[StatusHistoryEntry | dict[str, Any]] | None,
        config: LedgerConfig | None = None,
    ) -> StatusLedger:
        cfg = config or DEFAULT_CONFIG
        tz = cfg.tzinfo

        events: list[LedgerEntry] = []
        skipped: list[SkippedEntry] = []

        for index, item in enumerate(raw_entries or ()):
            try:
                raw = item if isinstance(item, StatusHistoryEntry) else StatusHistoryEntry.model_validate(item)
            except ValidationError:
                result: LedgerEntry | SkippedEntry = SkippedEntry(
                    index=index,
                    reason=SkipReason.MALFORMED_ENTRY,
                    raw=item,
                )
            else:
                result = _ingest_one(index, raw, tz)

            if isinstance(result, SkippedEntry):
                LOGGER.warning("Skipping ledger entry %d: %s", index, result.reason)
                skipped.append(result)
            else:
                events.append(result)

        return cls(events=tuple(sort_events(events)), tz=tz, skipped=tuple(skipped))

    @classmethod
    def from_record(cls, record: RefundRecord, config: LedgerConfig | None = None) -> StatusLedger:
        return cls.from_entries(record.status_history, config)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self.events)

    @property
    def is_empty(self) -> bool:
        """True when no entry is evaluable (raw history empty or all skipped)."""
        return not self.events

    @property
    def last(self) -> LedgerEntry | None:
        return self.events[-1] if self.events else None

    def entries_until(self, instant: datetime) -> tuple[LedgerEntry, ...]:
        """Entries with ``at <= instant`` (inclusive upper bound)."""
        return tuple(entry for entry in self.events if entry.at <= instant)

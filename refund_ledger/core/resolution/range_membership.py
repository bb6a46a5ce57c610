"""Historical status membership over a date range.

Answers "was the refund in status S at any point during [start, end]?".
Used to filter refunds by a historical status instead of their current one.

Occupancy model:
- entry i occupies ``[events[i].at, events[i + 1].at)``;
- the last entry occupies ``[events[last].at, now)``.
A refund that entered and left S inside the query window still counts.

The range is inclusive on both days: ``start`` snaps to the first instant
of its day, ``end`` to the last. Overlap uses the closed rule
``interval.start <= range_end and interval.end >= range_start``.

Without any evaluable history the refund is assumed to have always held
its current status. That assumption is surfaced through
``MembershipDecision.basis`` rather than hidden.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Iterator

from refund_ledger.core.config.ledger_config import LedgerConfig
from refund_ledger.core.domain.day_bounds import DateLike, end_of_day, start_of_day
from refund_ledger.core.domain.ledger import StatusLedger
from refund_ledger.core.domain.status_catalog import Status, parse_status
from refund_ledger.core.domain.types import RefundRecord


class MembershipBasis:
    """What a membership answer rests on."""

    LEDGER = "ledger"
    ASSUMED_CONSTANT = "assumed_constant"


@dataclass(frozen=True, slots=True)
class MembershipDecision:
    active: bool
    basis: str


@dataclass(frozen=True, slots=True)
class OccupancyInterval:
    """Half-open span ``[start, end)`` during which ``status`` was held."""

    status: Status
    start: datetime
    end: datetime

    def overlaps(self, range_start: datetime, range_end: datetime) -> bool:
        return self.start <= range_end and self.end >= range_start


def occupancy_intervals(ledger: StatusLedger, now: datetime) -> list[OccupancyInterval]:
    """Partition the ledger's timeline into contiguous occupancy intervals."""
    events = ledger.events
    intervals: list[OccupancyInterval] = []

    for i, entry in enumerate(events):
        if i + 1 < len(events):
            end = events[i + 1].at
        else:
            # A future-dated last entry must not produce an inverted interval.
            end = max(now, entry.at)
        intervals.append(OccupancyInterval(status=entry.to, start=entry.at, end=end))

    return intervals


def evaluate_membership(
    ledger: StatusLedger,
    current_status: Status | str | None,
    target_status: Status | str,
    start: DateLike,
    end: DateLike,
    *,
    now: datetime | None = None,
) -> MembershipDecision:
    """Decide range membership and report what the answer is based on."""
    target = parse_status(target_status)

    if ledger.is_empty:
        current = parse_status(current_status)
        return MembershipDecision(
            active=target is not None and current == target,
            basis=MembershipBasis.ASSUMED_CONSTANT,
        )

    if target is None:
        return MembershipDecision(active=False, basis=MembershipBasis.LEDGER)

    range_start = start_of_day(start, ledger.tz)
    range_end = end_of_day(end, ledger.tz)
    if range_start > range_end:
        return MembershipDecision(active=False, basis=MembershipBasis.LEDGER)

    now_ts = datetime.now(timezone.utc) if now is None else now.astimezone(timezone.utc)

    for interval in occupancy_intervals(ledger, now_ts):
        if interval.status != target:
            continue
        if interval.overlaps(range_start, range_end):
            return MembershipDecision(active=True, basis=MembershipBasis.LEDGER)

    return MembershipDecision(active=False, basis=MembershipBasis.LEDGER)


def was_active_during(
    ledger: StatusLedger,
    current_status: Status | str | None,
    target_status: Status | str,
    start: DateLike,
    end: DateLike,
    *,
    now: datetime | None = None,
) -> bool:
    """Return True if ``target_status`` was held at any point in [start, end]."""
    return evaluate_membership(
        ledger,
        current_status,
        target_status,
        start,
        end,
        now=now,
    ).active


def filter_active_during(
    records: Iterable[RefundRecord],
    target_status: Status | str,
    start: DateLike,
    end: DateLike,
    *,
    config: LedgerConfig | None = None,
    now: datetime | None = None,
) -> Iterator[RefundRecord]:
    """Yield the records that held ``target_status`` during [start, end].

    Each record is evaluated independently. ``now`` is fixed once so every
    record in the batch sees the same open-interval end.
    """
    now_ts = now
    for record in records:
        ledger = StatusLedger.from_record(record, config)
        if now_ts is None:
            now_ts = datetime.now(timezone.utc)
        if was_active_during(
            ledger,
            record.current_status,
            target_status,
            start,
            end,
            now=now_ts,
        ):
            yield record

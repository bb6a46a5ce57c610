"""
Semantic test: ordering across a DST fall-back.

Invariant:
Entries are ordered by real instant, not by local wall clock. In Santiago
the clock goes back from 00:00 to 23:00 on the night of 2024-04-06, so
23:00-23:59 happens twice; an entry in the second pass is later even
though its wall-clock time is earlier.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from refund_ledger.core.config.ledger_config import LedgerConfig
from refund_ledger.core.domain.day_bounds import end_of_day, start_of_day
from refund_ledger.core.domain.ledger import StatusLedger
from refund_ledger.core.domain.status_catalog import Status
from refund_ledger.core.resolution.point_in_time import resolve_at
from refund_ledger.core.resolution.range_membership import was_active_during

SANTIAGO = LedgerConfig(reference_timezone="America/Santiago")
NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)

# 23:50 local (UTC-3), then 23:10 local in the repeated hour (UTC-4).
HISTORY = [
    {"from": None, "to": "docs_pending", "at": "2024-04-07T02:50:00Z"},
    {"from": "docs_pending", "to": "approved", "at": "2024-04-07T03:10:00Z"},
]


def test_repeated_hour_keeps_real_chronology() -> None:
    ledger = StatusLedger.from_entries(HISTORY, SANTIAGO)

    assert [entry.to for entry in ledger] == [Status.DOCS_PENDING, Status.APPROVED]


def test_storage_order_does_not_matter() -> None:
    ledger = StatusLedger.from_entries(list(reversed(HISTORY)), SANTIAGO)

    assert [entry.to for entry in ledger] == [Status.DOCS_PENDING, Status.APPROVED]


def test_day_end_covers_the_repeated_hour() -> None:
    ledger = StatusLedger.from_entries(HISTORY, SANTIAGO)

    assert end_of_day(date(2024, 4, 6), SANTIAGO.tzinfo) > datetime(2024, 4, 7, 3, 59, tzinfo=timezone.utc)
    assert resolve_at(ledger, Status.APPROVED, date(2024, 4, 6)) is Status.APPROVED


def test_both_statuses_were_held_on_the_local_day() -> None:
    ledger = StatusLedger.from_entries(HISTORY, SANTIAGO)

    for target in (Status.DOCS_PENDING, Status.APPROVED):
        assert was_active_during(ledger, Status.APPROVED, target, date(2024, 4, 6), date(2024, 4, 6), now=NOW)
    assert not was_active_during(
        ledger, Status.APPROVED, Status.DOCS_PENDING, date(2024, 4, 7), date(2024, 4, 8), now=NOW
    )


def test_next_day_starts_after_the_repeated_hour() -> None:
    assert start_of_day(date(2024, 4, 7), SANTIAGO.tzinfo) == datetime(2024, 4, 7, 4, 0, tzinfo=timezone.utc)

"""Derived facts read off a refund's ledger.

Small, pure lookups the dashboard needs next to point-in-time resolution:
the confirmed refund amount, when a status was (last) entered, and whether
the authority's current status agrees with the ledger.
"""

from __future__ import annotations

from datetime import datetime

from refund_ledger.core.domain.ledger import StatusLedger
from refund_ledger.core.domain.status_catalog import AMOUNT_BEARING_STATUSES, Status, parse_status


def confirmed_amount(ledger: StatusLedger, estimated_amount: float | None = None) -> float | None:
    """Return the latest confirmed ``real_amount``, else ``estimated_amount``.

    Only payment_scheduled / paid entries with a positive amount qualify.
    """
    for entry in reversed(ledger.events):
        if entry.to not in AMOUNT_BEARING_STATUSES:
            continue
        if entry.real_amount is not None and entry.real_amount > 0:
            return entry.real_amount
    return estimated_amount


def entered_status_at(ledger: StatusLedger, status: Status | str) -> datetime | None:
    """Instant of the latest real entry into ``status``.

    Self-transitions (from == to) are annotations, not entries, and are
    ignored. Returns None if the status was never entered.
    """
    target = parse_status(status)
    if target is None:
        return None

    for entry in reversed(ledger.events):
        if entry.to == target and entry.from_status != target:
            return entry.at
    return None


def paid_at(ledger: StatusLedger) -> datetime | None:
    return entered_status_at(ledger, Status.PAID)


def is_consistent(ledger: StatusLedger, current_status: Status | str | None) -> bool:
    """True if ``current_status`` matches the last evaluable entry.

    An empty ledger is consistent with any status.
    """
    last = ledger.last
    if last is None:
        return True
    return parse_status(current_status) == last.to

"""Point-in-time status resolution.

Answers "what status did the refund hold as of day D?". The query day is
inclusive: it is normalized to the last instant of D in the ledger's
reference time zone, so same-day transitions count.

Resolution is a pure function of (ledger, instant). Before the first
evaluable entry the refund has no tracked status and ``UNKNOWN`` is
returned; choosing a fallback is the caller's decision
(``resolve_for_display`` implements the common one).
"""

from __future__ import annotations

from dataclasses import dataclass

from refund_ledger.core.domain.day_bounds import DateLike, end_of_day
from refund_ledger.core.domain.ledger import StatusLedger
from refund_ledger.core.domain.status_catalog import UNKNOWN, ResolvedStatus, Status


@dataclass(frozen=True, slots=True)
class DisplayStatus:
    """Status to show for a day, flagged when it is not backed by the ledger."""

    status: Status | None
    is_fallback: bool


def resolve_at(
    ledger: StatusLedger,
    current_status: Status | None,  # pylint: disable=unused-argument
    instant: DateLike,
) -> ResolvedStatus:
    """Return the status active at the end of ``instant``'s day, or UNKNOWN.

    ``current_status`` is accepted for call-site symmetry with
    ``was_active_during``; the ledger alone decides the answer.
    """
    cutoff = end_of_day(instant, ledger.tz)

    active = ledger.entries_until(cutoff)
    if not active:
        return UNKNOWN
    return active[-1].to


def resolve_for_display(
    ledger: StatusLedger,
    current_status: Status | None,
    instant: DateLike,
) -> DisplayStatus:
    """Resolve, falling back to ``current_status`` (flagged) when UNKNOWN."""
    resolved = resolve_at(ledger, current_status, instant)
    if isinstance(resolved, Status):
        return DisplayStatus(status=resolved, is_fallback=False)
    return DisplayStatus(status=current_status, is_fallback=True)

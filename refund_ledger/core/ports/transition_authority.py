"""Transition authority protocol.

This module defines the boundary to the external system of record that
owns the refund state machine. Concrete implementations adapt a specific
backend (HTTP client, test double) to this protocol.
"""

from __future__ import annotations

from typing import Protocol

from refund_ledger.core.domain.types import RefundRecord, TransitionRequest


class TransitionAuthority(Protocol):
    """Applies transitions and enforces adjacency rules.

    On success the returned record carries the new current status and the
    appended history entry. On refusal implementations must raise
    ``TransitionRejected`` with a structured kind; any other exception is
    treated as an infrastructure failure and propagates to the caller.

    Requests carry lower-case catalog values; adapting them to the backend's
    casing (the admin API wants upper case) happens inside the implementation.
    """

    def apply_transition(self, refund_id: str, request: TransitionRequest) -> RefundRecord:
        """Apply ``request`` to refund ``refund_id`` and return the updated record."""

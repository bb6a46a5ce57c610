"""
Refund status catalog.

This module defines the closed set of refund statuses and the single
canonical parser that maps raw upstream values onto it. It is intentionally
passive: it does NOT define which transitions are legal. Adjacency is owned
by the external transition authority.

Status identity is by value. Display labels are presentation only.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class Status(str, Enum):
    """Refund request status, in declaration order."""

    SIMULATED = "simulated"
    REQUESTED = "requested"
    QUALIFYING = "qualifying"
    DOCS_PENDING = "docs_pending"
    DOCS_RECEIVED = "docs_received"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAYMENT_SCHEDULED = "payment_scheduled"
    PAID = "paid"
    CANCELED = "canceled"
    DATOS_SIN_SIMULACION = "datos_sin_simulacion"

    def __str__(self) -> str:
        return self.value


class StatusUnknown(Enum):
    """Sentinel type for "no tracked status at that instant"."""

    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN: Final = StatusUnknown.UNKNOWN

ResolvedStatus = Status | StatusUnknown


# Statuses whose ledger entries may carry the confirmed (real) refund amount.
AMOUNT_BEARING_STATUSES: frozenset[Status] = frozenset(
    {
        Status.PAYMENT_SCHEDULED,
        Status.PAID,
    }
)

# Informational only. The core never blocks a transition out of these.
TERMINAL_STATUSES: frozenset[Status] = frozenset(
    {
        Status.PAID,
        Status.REJECTED,
        Status.CANCELED,
    }
)


STATUS_LABELS: dict[Status, str] = {
    Status.SIMULATED: "Simulado",
    Status.REQUESTED: "Solicitado",
    Status.QUALIFYING: "En calificación",
    Status.DOCS_PENDING: "Docs pendientes",
    Status.DOCS_RECEIVED: "Docs recibidos",
    Status.SUBMITTED: "Enviado",
    Status.APPROVED: "Aprobado",
    Status.REJECTED: "Rechazado",
    Status.PAYMENT_SCHEDULED: "Pago programado",
    Status.PAID: "Pagado",
    Status.CANCELED: "Cancelado",
    Status.DATOS_SIN_SIMULACION: "Datos sin simulación",
}


_BY_VALUE: dict[str, Status] = {member.value: member for member in Status}


def parse_status(raw: object) -> Status | None:
    """Map a raw status value onto the catalog.

    The upstream API sends statuses in upper case ("DOCS_RECEIVED") while
    stored history may be lower case. Both map to the same member.
    Returns None for absent or unknown values.
    """
    if isinstance(raw, Status):
        return raw
    if not isinstance(raw, str):
        return None
    return _BY_VALUE.get(raw.strip().lower())


def status_label(status: Status) -> str:
    """Return the display label for a status."""
    return STATUS_LABELS[status]


def is_terminal_status(status: Status) -> bool:
    """Return True if the given status is terminal."""
    return status in TERMINAL_STATUSES

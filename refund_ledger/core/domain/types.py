"""Core shared data models and schemas.

This module defines the canonical Pydantic models exchanged with the
surrounding dashboard and the external transition authority: raw status
history entries, refund records, and outgoing transition requests. These
types are treated as schema definitions (see ``core/schemas``).

Inbound models are deliberately lenient about status and timestamp values.
Those are parsed exactly once, at ledger ingestion, where malformed values
are skipped instead of raised.
"""

# pylint: disable=line-too-long,missing-class-docstring,missing-function-docstring
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from refund_ledger.core.domain.status_catalog import Status

# ---------------------------------------------------------------------------
# Inbound models (surrounding system -> core)
# ---------------------------------------------------------------------------


class StatusHistoryEntry(BaseModel):
    """One raw status transition as stored by the authority."""

    from_status: str | None = Field(
        default=None,
        alias="from",
        description="Status before the transition. Absent only for the first entry.",
    )
    to: str | None = Field(
        default=None,
        description="Status entered. Raw value, parsed at ledger ingestion.",
    )
    at: str | datetime | None = Field(
        default=None,
        description="ISO-8601 instant the transition took effect.",
    )
    by: str | None = Field(default=None, description="Actor identifier, e.g. an operator email.")
    note: str | None = Field(default=None, description="Free-text annotation.")
    real_amount: float | None = Field(
        default=None,
        alias="realAmount",
        description="Confirmed refund amount. Meaningful for payment_scheduled / paid only.",
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RefundRecord(BaseModel):
    """A refund request as delivered by the surrounding system.

    Only the fields consumed by the core are modelled; everything else the
    upstream API sends is ignored.
    """

    id: str | None = None
    public_id: str | None = Field(default=None, alias="publicId")

    # The authoritative current status, maintained by the transition authority.
    current_status: str | None = Field(
        default=None,
        validation_alias=AliasChoices("currentStatus", "status", "current_status"),
        serialization_alias="currentStatus",
    )
    status_history: list[StatusHistoryEntry] = Field(
        default_factory=list,
        alias="statusHistory",
    )
    estimated_amount: float | None = Field(default=None, alias="estimatedAmountCLP")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("status_history", mode="before")
    @classmethod
    def _null_history_is_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @property
    def label(self) -> str:
        """Best identifier for logs: public id, then id."""
        return self.public_id or self.id or "<unidentified>"


# ---------------------------------------------------------------------------
# Outbound models (core -> transition authority)
# ---------------------------------------------------------------------------


class TransitionRequest(BaseModel):
    """
    A locally validated request to move a refund into ``target_status``.

    Notes:
    - force asks the authority to skip its own adjacency checks for this request only.
    - real_amount is the confirmed amount; required (> 0) for payment_scheduled.
    - Instances are produced by TransitionRequestBuilder; construct directly only in tests.
    """

    target_status: Status = Field(..., description="Status to transition into.")
    actor: str = Field(..., description="Who requests the transition (free text).")
    note: str | None = Field(default=None, description="Optional annotation stored on the ledger entry.")
    force: bool = Field(default=False, description="Bypass the authority's adjacency checks.")
    real_amount: float | None = Field(default=None, description="Confirmed refund amount.")

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the wire payload expected by the transition authority.

        ``status`` is the canonical lower-case catalog value. The admin HTTP
        API expects it upper-cased ("PAYMENT_SCHEDULED"); that casing is the
        job of the HTTP ``TransitionAuthority`` adapter, not of this payload.
        """
        payload: dict[str, Any] = {
            "status": self.target_status.value,
            "note": self.note,
            "by": self.actor,
            "force": self.force,
        }
        if self.real_amount is not None:
            payload["realAmount"] = self.real_amount
        return payload

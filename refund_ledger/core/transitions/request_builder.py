"""Outgoing transition request construction and local validation.

The builder knows nothing about the legal transition graph; adjacency is
enforced by the external authority. Its checks are limited to what must
hold before any request leaves the process:

- the target must be a catalog status;
- payment_scheduled requires a confirmed amount strictly greater than zero.

``force`` is carried through unmodified.
"""

from __future__ import annotations

import math

from refund_ledger.core.domain.status_catalog import Status, parse_status
from refund_ledger.core.domain.types import TransitionRequest
from refund_ledger.core.transitions.errors import TransitionValidationError, ValidationErrorKind

# Target statuses that cannot be requested without a confirmed amount.
AMOUNT_REQUIRED_STATUSES: frozenset[Status] = frozenset({Status.PAYMENT_SCHEDULED})


class TransitionRequestBuilder:
    """Builds validated ``TransitionRequest`` objects.

    Example:
        builder = TransitionRequestBuilder(actor="ops@example.com")
        request = builder.build("payment_scheduled", real_amount=150000)
    """

    def __init__(self, *, actor: str) -> None:
        self._actor = actor

    def build(
        self,
        target_status: Status | str,
        *,
        note: str | None = None,
        force: bool = False,
        real_amount: float | None = None,
        actor: str | None = None,
    ) -> TransitionRequest:
        """Validate and return the request; raise TransitionValidationError otherwise."""
        target = parse_status(target_status)
        if target is None:
            raise TransitionValidationError(
                ValidationErrorKind.UNKNOWN_TARGET_STATUS,
                f"Unknown target status: {target_status!r}",
            )

        if target in AMOUNT_REQUIRED_STATUSES and not self._is_positive_amount(real_amount):
            raise TransitionValidationError(
                ValidationErrorKind.MISSING_REQUIRED_AMOUNT,
                f"{target.value} requires a real amount greater than zero",
            )

        return TransitionRequest(
            target_status=target,
            actor=self._actor if actor is None else actor,
            note=note,
            force=force,
            real_amount=real_amount,
        )

    @staticmethod
    def _is_positive_amount(amount: float | None) -> bool:
        if amount is None or isinstance(amount, bool):
            return False
        try:
            value = float(amount)
        except (TypeError, ValueError):
            return False
        return math.isfinite(value) and value > 0.0

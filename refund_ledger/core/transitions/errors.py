"""Transition error kinds and exceptions.

Kinds are structured values. Callers branch on ``kind``, never on the
human-readable (and localized) message text.
"""

from __future__ import annotations


class ValidationErrorKind:
    """Local validation failures raised before any call to the authority."""

    MISSING_REQUIRED_AMOUNT = "missing_required_amount"
    UNKNOWN_TARGET_STATUS = "unknown_target_status"


class TransitionErrorKind:
    """Rejection kinds returned by the transition authority."""

    INVALID_TRANSITION = "invalid_transition"
    OTHER = "other"


class TransitionValidationError(ValueError):
    """A transition request failed local validation."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class TransitionRejected(Exception):
    """The transition authority refused the request."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def is_invalid_transition(self) -> bool:
        return self.kind == TransitionErrorKind.INVALID_TRANSITION

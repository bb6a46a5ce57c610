"""Public API for the refund_ledger package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Config API
# ----------------------------------------------------------------------
from refund_ledger.core.config.ledger_config import DEFAULT_CONFIG, LedgerConfig

# ----------------------------------------------------------------------
# Domain types
# ----------------------------------------------------------------------
from refund_ledger.core.domain.ledger import LedgerEntry, SkippedEntry, SkipReason, StatusLedger, sort_events
from refund_ledger.core.domain.status_catalog import (
    STATUS_LABELS,
    UNKNOWN,
    Status,
    parse_status,
    status_label,
)
from refund_ledger.core.domain.types import RefundRecord, StatusHistoryEntry, TransitionRequest
from refund_ledger.core.events.event_bus import EventBus
from refund_ledger.core.events.sinks.file_recorder import FileRecorderSink
from refund_ledger.core.events.sinks.null_event_bus import NullEventBus
from refund_ledger.core.events.sinks.sink_logging import LoggingEventSink
from refund_ledger.core.ports.transition_authority import TransitionAuthority

# ----------------------------------------------------------------------
# Read side: resolution
# ----------------------------------------------------------------------
from refund_ledger.core.resolution.ledger_facts import (
    confirmed_amount,
    entered_status_at,
    is_consistent,
    paid_at,
)
from refund_ledger.core.resolution.point_in_time import DisplayStatus, resolve_at, resolve_for_display
from refund_ledger.core.resolution.range_membership import (
    MembershipBasis,
    MembershipDecision,
    evaluate_membership,
    filter_active_during,
    was_active_during,
)

# ----------------------------------------------------------------------
# Write side: transitions
# ----------------------------------------------------------------------
from refund_ledger.core.transitions.errors import (
    TransitionErrorKind,
    TransitionRejected,
    TransitionValidationError,
    ValidationErrorKind,
)
from refund_ledger.core.transitions.request_builder import TransitionRequestBuilder
from refund_ledger.core.transitions.submitter import TransitionOutcome, TransitionSubmitter

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Config
    "LedgerConfig",
    "DEFAULT_CONFIG",

    # Catalog
    "Status",
    "UNKNOWN",
    "STATUS_LABELS",
    "parse_status",
    "status_label",

    # Ledger
    "StatusHistoryEntry",
    "RefundRecord",
    "StatusLedger",
    "LedgerEntry",
    "SkippedEntry",
    "SkipReason",
    "sort_events",

    # Resolution
    "resolve_at",
    "resolve_for_display",
    "DisplayStatus",
    "was_active_during",
    "evaluate_membership",
    "filter_active_during",
    "MembershipDecision",
    "MembershipBasis",
    "confirmed_amount",
    "entered_status_at",
    "paid_at",
    "is_consistent",

    # Transitions
    "TransitionRequest",
    "TransitionRequestBuilder",
    "TransitionValidationError",
    "ValidationErrorKind",
    "TransitionAuthority",
    "TransitionRejected",
    "TransitionErrorKind",
    "TransitionSubmitter",
    "TransitionOutcome",

    # Events
    "EventBus",
    "NullEventBus",
    "LoggingEventSink",
    "FileRecorderSink",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("refund-ledger")
except PackageNotFoundError:
    __version__ = "0.0.0"

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Iterable, TextIO

from pydantic import TypeAdapter

from refund_ledger.core.config.ledger_config import DEFAULT_CONFIG, LedgerConfig
from refund_ledger.core.domain.ledger import StatusLedger
from refund_ledger.core.domain.status_catalog import Status, is_terminal_status, parse_status
from refund_ledger.core.domain.types import RefundRecord
from refund_ledger.core.resolution.ledger_facts import entered_status_at, is_consistent
from refund_ledger.core.resolution.point_in_time import resolve_for_display
from refund_ledger.core.resolution.range_membership import filter_active_during

LOGGER = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[RefundRecord])


def load_records(path: Path) -> list[RefundRecord]:
    """Read refund records from a JSON array or an ``{"items": [...]}`` envelope."""
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    if isinstance(data, dict):
        data = data.get("items", [])
    return _RECORDS.validate_python(data)


def report_as_of(
    records: Iterable[RefundRecord],
    as_of: date,
    config: LedgerConfig,
) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for record in records:
        ledger = StatusLedger.from_record(record, config)
        current = parse_status(record.current_status)
        display = resolve_for_display(ledger, current, as_of)

        if not is_consistent(ledger, current):
            LOGGER.warning("Current status of %s diverges from its ledger", record.label)

        rows.append(
            {
                "refund": record.label,
                "asOf": as_of.isoformat(),
                "status": None if display.status is None else display.status.value,
                "fallback": display.is_fallback,
                "terminal": display.status is not None and is_terminal_status(display.status),
                "skippedEntries": len(ledger.skipped),
            }
        )
    return rows


def report_range(
    records: Iterable[RefundRecord],
    status: Status,
    start: date,
    end: date,
    config: LedgerConfig,
) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for record in filter_active_during(records, status, start, end, config=config):
        ledger = StatusLedger.from_record(record, config)
        since = entered_status_at(ledger, status)
        rows.append(
            {
                "refund": record.label,
                "status": status.value,
                "from": start.isoformat(),
                "to": end.isoformat(),
                "currentStatus": record.current_status,
                "enteredAt": None if since is None else since.astimezone(config.tzinfo).isoformat(),
            }
        )
    return rows


def _write_rows(rows: Iterable[dict[str, Any]], out: TextIO) -> None:
    for row in rows:
        out.write(json.dumps(row, ensure_ascii=False) + "\n")


def _status_arg(value: str) -> Status:
    status = parse_status(value)
    if status is None:
        raise argparse.ArgumentTypeError(f"unknown status: {value}")
    return status


def _date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("refund status report")

    parser.add_argument("--input", type=Path, required=True, help="JSON file with refund records")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [ledger] table")

    parser.add_argument("--as-of", type=_date_arg, default=None, help="Calendar date (YYYY-MM-DD)")

    parser.add_argument("--status", type=_status_arg, default=None)
    parser.add_argument("--from", dest="start", type=_date_arg, default=None)
    parser.add_argument("--to", dest="end", type=_date_arg, default=None)

    parser.add_argument("--log-level", type=str, default="WARNING")

    return parser


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    range_args = (args.status, args.start, args.end)
    if args.as_of is None and any(value is None for value in range_args):
        parser.error("either --as-of or all of --status/--from/--to are required")
    if args.as_of is not None and any(value is not None for value in range_args):
        parser.error("--as-of cannot be combined with --status/--from/--to")

    config = DEFAULT_CONFIG if args.config is None else LedgerConfig.from_toml(args.config)
    records = load_records(args.input)
    LOGGER.info("Loaded %d refund records from %s", len(records), args.input)

    if args.as_of is not None:
        rows = report_as_of(records, args.as_of, config)
    else:
        rows = report_range(records, args.status, args.start, args.end, config)

    _write_rows(rows, out or sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

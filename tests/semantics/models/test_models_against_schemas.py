"""Schema conformance tests for core Pydantic models.

Inbound models (status history entries, refund records) are lenient by
design: the JSON Schemas describe what a well-behaved authority sends,
while the models accept anything the ledger can later skip. Outbound
transition requests are strict: whatever the schema rejects, the model or
the builder rejects too.
"""

# pylint: disable=line-too-long,missing-function-docstring
# pylint: disable=redefined-outer-name,global-statement
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from jsonschema import ValidationError as JsonSchemaValidationError
from jsonschema import validate as jsonschema_validate
from pydantic import ValidationError as PydanticValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from refund_ledger.core.config.ledger_config import LedgerConfig
from refund_ledger.core.domain.ledger import SkipReason, StatusLedger
from refund_ledger.core.domain.types import RefundRecord, StatusHistoryEntry, TransitionRequest
from refund_ledger.core.transitions.errors import TransitionValidationError
from refund_ledger.core.transitions.request_builder import TransitionRequestBuilder

SCHEMA_REGISTRY = Registry()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def load_schema(name: str) -> dict:
    """
    Load JSON schema from the package's schema directory.
    """
    global SCHEMA_REGISTRY

    root = Path(__file__).parent.parent.parent.parent
    schema_path = root / "refund_ledger" / "core" / "schemas" / name

    with schema_path.open("r", encoding="utf-8") as f:
        schema = json.load(f)

    schema_id = schema.get("$id")
    if isinstance(schema_id, str) and schema_id:
        resource = Resource.from_contents(schema, default_specification=DRAFT202012)
        SCHEMA_REGISTRY = SCHEMA_REGISTRY.with_resource(schema_id, resource)

    return schema


def dump_for_jsonschema(model: Any) -> dict:
    """
    Dump a Pydantic model to its wire shape (aliases, no nulls).
    """
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def assert_schema_ok(instance: dict[str, Any], schema: dict[str, Any]) -> None:
    jsonschema_validate(instance=instance, schema=schema, registry=SCHEMA_REGISTRY)


def assert_schema_invalid(instance: dict[str, Any], schema: dict[str, Any]) -> None:
    with pytest.raises(JsonSchemaValidationError):
        jsonschema_validate(instance=instance, schema=schema, registry=SCHEMA_REGISTRY)


def make_entry(**overrides) -> dict[str, Any]:
    data: dict[str, Any] = {
        "from": "docs_pending",
        "to": "docs_received",
        "at": "2024-01-10T12:00:00Z",
        "by": "ops@tedevuelvo.cl",
    }
    data.update(overrides)
    return data


def make_record(**overrides) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "0b6f2c1e",
        "publicId": "TDV-0001",
        "currentStatus": "docs_received",
        "statusHistory": [
            make_entry(**{"from": None, "to": "submitted", "at": "2024-01-01T10:00:00Z"}),
            make_entry(**{"from": "submitted", "to": "docs_pending", "at": "2024-01-03T10:00:00Z"}),
            make_entry(),
        ],
        "estimatedAmountCLP": 120000,
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module", autouse=True)
def _load_shared_schemas() -> None:
    load_schema("common.schema.json")
    load_schema("status_history_entry.schema.json")


@pytest.fixture(scope="module")
def entry_schema() -> dict:
    return load_schema("status_history_entry.schema.json")


@pytest.fixture(scope="module")
def record_schema() -> dict:
    return load_schema("refund_record.schema.json")


@pytest.fixture(scope="module")
def request_schema() -> dict:
    return load_schema("transition_request.schema.json")


# ---------------------------------------------------------------------------
# StatusHistoryEntry
# ---------------------------------------------------------------------------

def test_entry_round_trips_to_schema(entry_schema):
    entry = StatusHistoryEntry.model_validate(make_entry(realAmount=150000, note="ok"))
    assert_schema_ok(dump_for_jsonschema(entry), entry_schema)


def test_first_entry_without_from_is_schema_valid(entry_schema):
    entry = StatusHistoryEntry.model_validate(make_entry(**{"from": None, "to": "simulated"}))
    dumped = dump_for_jsonschema(entry)

    assert "from" not in dumped
    assert_schema_ok(dumped, entry_schema)


def test_unknown_status_is_schema_invalid_but_ingested_as_skipped(entry_schema):
    raw = make_entry(to="archived")
    assert_schema_invalid(raw, entry_schema)

    # The model accepts it; the ledger skips it.
    StatusHistoryEntry.model_validate(raw)
    ledger = StatusLedger.from_entries([raw], LedgerConfig(reference_timezone="UTC"))

    assert ledger.is_empty
    assert [skip.reason for skip in ledger.skipped] == [SkipReason.UNKNOWN_STATUS]


def test_missing_timestamp_is_schema_invalid_but_ingested_as_skipped(entry_schema):
    raw = make_entry()
    raw.pop("at")
    assert_schema_invalid(raw, entry_schema)

    ledger = StatusLedger.from_entries([raw], LedgerConfig(reference_timezone="UTC"))

    assert [skip.reason for skip in ledger.skipped] == [SkipReason.UNPARSABLE_TIMESTAMP]


# ---------------------------------------------------------------------------
# RefundRecord
# ---------------------------------------------------------------------------

def test_record_round_trips_to_schema(record_schema):
    record = RefundRecord.model_validate(make_record())
    assert_schema_ok(dump_for_jsonschema(record), record_schema)


def test_record_accepts_upstream_status_key(record_schema):
    data = make_record()
    data["status"] = data.pop("currentStatus")

    record = RefundRecord.model_validate(data)

    assert record.current_status == "docs_received"
    assert_schema_ok(dump_for_jsonschema(record), record_schema)


def test_record_drops_unmodelled_upstream_fields(record_schema):
    data = make_record(clientName="María", rut="12.345.678-9")
    assert_schema_invalid(data, record_schema)

    record = RefundRecord.model_validate(data)
    assert_schema_ok(dump_for_jsonschema(record), record_schema)


def test_record_null_history_is_empty():
    record = RefundRecord.model_validate(make_record(statusHistory=None))

    assert record.status_history == []


def test_record_rejects_non_list_history(record_schema):
    bad = make_record(statusHistory="submitted")
    assert_schema_invalid(bad, record_schema)

    with pytest.raises(PydanticValidationError):
        RefundRecord.model_validate(bad)


# ---------------------------------------------------------------------------
# TransitionRequest
# ---------------------------------------------------------------------------

BUILDER = TransitionRequestBuilder(actor="ops@tedevuelvo.cl")


def test_request_payloads_are_schema_valid(request_schema):
    assert_schema_ok(BUILDER.build("approved").to_payload(), request_schema)
    assert_schema_ok(BUILDER.build("paid", force=True, note="manual").to_payload(), request_schema)
    assert_schema_ok(BUILDER.build("payment_scheduled", real_amount=150000).to_payload(), request_schema)


def test_payment_scheduled_without_amount_rejected_by_both(request_schema):
    assert_schema_invalid({"status": "payment_scheduled", "by": "ops", "force": False}, request_schema)
    assert_schema_invalid(
        {"status": "payment_scheduled", "by": "ops", "force": False, "realAmount": 0},
        request_schema,
    )

    with pytest.raises(TransitionValidationError):
        BUILDER.build("payment_scheduled")
    with pytest.raises(TransitionValidationError):
        BUILDER.build("payment_scheduled", real_amount=0)


def test_unknown_status_rejected_by_both(request_schema):
    assert_schema_invalid({"status": "archived", "by": "ops", "force": False}, request_schema)

    with pytest.raises(PydanticValidationError):
        TransitionRequest.model_validate({"target_status": "archived", "actor": "ops"})


def test_request_rejects_additional_properties(request_schema):
    payload = BUILDER.build("approved").to_payload()
    payload["unexpected"] = 1
    assert_schema_invalid(payload, request_schema)

    with pytest.raises(PydanticValidationError):
        TransitionRequest.model_validate({"target_status": "approved", "actor": "ops", "unexpected": 1})

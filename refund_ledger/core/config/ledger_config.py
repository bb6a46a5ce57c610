"""Ledger configuration model."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LedgerConfig(BaseModel):
    """Structured configuration for ledger ingestion and date normalization.

    TOML example:
        [ledger]
        reference_timezone = "America/Santiago"
    """

    # Calendar days ("as of 2024-01-05") are interpreted in this zone.
    reference_timezone: str = Field(default="America/Santiago", min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("reference_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject names the IANA database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown reference_timezone: {value}") from exc
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.reference_timezone)

    @classmethod
    def from_json_obj(cls, ledger_obj: dict[str, Any]) -> LedgerConfig:
        """Create a LedgerConfig instance from a JSON-compatible object."""
        return cls.model_validate(ledger_obj)

    @classmethod
    def from_toml(cls, path: str | Path) -> LedgerConfig:
        """Load the ``[ledger]`` table of a TOML file.

        A file without a ``[ledger]`` table yields the defaults.
        """
        with Path(path).open("rb") as fh:
            data = tomllib.load(fh)

        section = data.get("ledger", {})
        if not isinstance(section, dict):
            raise ValueError("[ledger] must be a table")
        return cls.from_json_obj(section)


DEFAULT_CONFIG = LedgerConfig()

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.run_config import (
    DEFAULT_GODOWN_NAME,
    DEFAULT_SALES_LEDGER_NAME,
    RunConfiguration,
    VoucherType,
)

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against contracts/config_schema.json
- Apply defaults (output ./output, voucher type Sales, local timezone)
- Apply environment overrides (TALLY_VOUCHER_TYPE / TALLY_DEFAULT_GODOWN /
  TALLY_SALES_LEDGER), which win over the YAML values
"""

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "contracts" / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/import.yml")
CONFIG_PATH_ENV = "TALLY_JSON_CONFIG"

ENV_VOUCHER_TYPE = "TALLY_VOUCHER_TYPE"
ENV_DEFAULT_GODOWN = "TALLY_DEFAULT_GODOWN"
ENV_SALES_LEDGER = "TALLY_SALES_LEDGER"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    source_directory: str
    output_directory: str
    run: RunConfiguration
    sheet_name: str | None = None  # None -> first sheet
    timezone: str | None = None  # None -> local zone
    keep_na_strings: list[str] | None = None
    column_overrides: dict[str, int | str] = field(default_factory=dict)

    @property
    def tzinfo(self) -> tzinfo | None:
        if self.timezone is None:
            return None
        return ZoneInfo(self.timezone)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data violates it
            (missing required keys, wrong types, unknown keys or voucher type)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_path: str | None = None) -> Path:
    """CLI flag > TALLY_JSON_CONFIG > config/import.yml."""
    if cli_path:
        return Path(cli_path)
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def apply_env_overrides(config: ImportConfig, environ: Mapping[str, str] | None = None) -> ImportConfig:
    env = os.environ if environ is None else environ
    run = config.run
    voucher_type = env.get(ENV_VOUCHER_TYPE)
    if voucher_type:
        try:
            run = replace(run, voucher_type=VoucherType.parse(voucher_type))
        except ValueError as e:
            raise ConfigError(f"{ENV_VOUCHER_TYPE}: {e}") from e
    godown = env.get(ENV_DEFAULT_GODOWN)
    if godown:
        run = replace(run, default_godown_name=godown)
    ledger = env.get(ENV_SALES_LEDGER)
    if ledger:
        run = replace(run, default_sales_ledger_name=ledger)
    return replace(config, run=run)


def load_config(path: Path, environ: Mapping[str, str] | None = None) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    tz = data.get("timezone")
    if tz is not None:
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"unknown timezone: {tz}") from e

    run = RunConfiguration(
        voucher_type=VoucherType(data.get("voucher_type", VoucherType.SALES.value)),
        default_godown_name=data.get("default_godown_name", DEFAULT_GODOWN_NAME),
        default_sales_ledger_name=data.get("default_sales_ledger_name", DEFAULT_SALES_LEDGER_NAME),
    )
    config = ImportConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./output"),
        run=run,
        sheet_name=data.get("sheet_name"),
        timezone=tz,
        keep_na_strings=data.get("keep_na_strings"),
        column_overrides=dict(data.get("column_overrides") or {}),
    )
    return apply_env_overrides(config, environ)

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AuditConfig

"""Config loader.

Responsibilities:
- Load YAML config (default: config/audit.yml)
- Validate against config_schema.json (unknown keys rejected)
- Apply defaults for every key that is absent
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/audit.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or unreadable, or the data
            violates it (wrong types, unknown keys, out-of-range values)
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


def load_config(path: Path | None = None, *, required: bool = False) -> AuditConfig:
    """Load the audit configuration.

    Args:
        path: YAML file; None means DEFAULT_CONFIG_PATH
        required: When False a missing file yields the built-in defaults

    Raises:
        ConfigError: missing file (when required), invalid YAML, schema violation
    """
    cfg_path = path if path is not None else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if required:
            raise ConfigError(f"config file not found: {cfg_path}")
        return AuditConfig()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = AuditConfig()
    return AuditConfig(
        delimiter=data.get("delimiter", defaults.delimiter),
        encoding=data.get("encoding", defaults.encoding),
        output_format=data.get("output_format", defaults.output_format),
        max_bad_cells=data.get("max_bad_cells", defaults.max_bad_cells),
        preview_rows=data.get("preview_rows", defaults.preview_rows),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
    )

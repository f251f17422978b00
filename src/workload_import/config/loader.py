"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from workload_import.config.settings import (
    ImportConfig,
    LoggingConfig,
    StoreConfig,
    UploadConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_bool(value: Any) -> bool:
    """Parse a boolean that may arrive as an interpolated string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def load_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> ImportConfig:
    """
    Load import configuration from YAML file(s).

    Every key is optional; without a config file the defaults apply.

    Args:
        config_path: Path to the main configuration file, or None for defaults.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated ImportConfig instance.
    """
    if config_path is None:
        return ImportConfig()

    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and potential_base != config_path
            else {}
        )

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    upload_data = merged.get("upload") or {}
    upload = UploadConfig(
        accepted_content_types=upload_data.get("accepted_content_types", ["text/csv"]),
        encoding=upload_data.get("encoding", "utf-8"),
        preview_rows=int(upload_data.get("preview_rows", 3)),
    )

    logging_data = merged.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        json_output=_parse_bool(logging_data.get("json_output", False)),
    )

    # Empty interpolations (e.g. "${IMPORTED_BY}") mean "not configured"
    store_data = merged.get("store") or {}
    store = StoreConfig(
        path=Path(store_data["path"])
        if store_data.get("path")
        else Path("./output/imports.json"),
        imported_by=store_data.get("imported_by") or None,
    )

    return ImportConfig(upload=upload, logging=logging_config, store=store)

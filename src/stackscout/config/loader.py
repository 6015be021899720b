"""Config file discovery and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from stackscout.config.settings import ScanSettings, StackScoutSettings

CONFIG_FILENAMES = ["stackscout.yaml", "stackscout.yml", ".stackscout.yaml", ".stackscout.yml"]


class ConfigError(Exception):
    """Raised when a config file or override can't be loaded."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from start_dir, walking up to root."""
    directory = start_dir or Path.cwd()
    directory = directory.resolve()

    while True:
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        parent = directory.parent
        if parent == directory:
            break
        directory = parent

    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load and parse a YAML config file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not load config file {path}: {e}") from e
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(
    project_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> StackScoutSettings:
    """Load settings with full layering: defaults -> config file -> env -> overrides."""
    file_data: dict[str, Any] = {}
    try:
        config_file = find_config_file(project_path)
    except OSError as e:
        raise ConfigError(f"Could not search for a config file from {project_path}: {e}") from e
    if config_file:
        file_data = load_config_file(config_file)

    scan_data = dict(file_data.get("scan") or {})

    # Pydantic doesn't parse env vars when we pass explicit kwargs,
    # so we need to handle them manually
    _merge_env_vars(scan_data, "STACKSCOUT_SCAN__", ScanSettings)

    if overrides:
        scan_data = _deep_merge(scan_data, overrides.get("scan", {}))

    try:
        return StackScoutSettings(scan=ScanSettings(**scan_data))
    except ValidationError as e:
        source = config_file or "environment"
        problems = "; ".join(
            f"scan.{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration ({source}): {problems}") from e


def _merge_env_vars(data: dict[str, Any], prefix: str, model: type[BaseModel]) -> None:
    """Merge environment variables with the given prefix into data dict.

    Values are only coerced for bool and int fields of ``model``; everything
    else is passed through as a string.
    """
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        field_name = key[len(prefix):].lower()
        field = model.model_fields.get(field_name)
        target = field.annotation if field else None
        if target is bool and value.lower() in ("true", "yes", "on"):
            data[field_name] = True
        elif target is bool and value.lower() in ("false", "no", "off"):
            data[field_name] = False
        elif target is int and value.isdigit():
            data[field_name] = int(value)
        else:
            data[field_name] = value

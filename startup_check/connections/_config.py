"""Configuration loader utilities shared by the CLI and the remote executors."""

import json
import os
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError
from ._logging import get_logger, redact_config

LOGGER = get_logger("config")


def _normalize_key(key: str) -> str:
    return key.strip().lower().replace("-", "_")


def _read_prefixed_env(prefix: str) -> dict[str, Any]:
    """Read environment keys matching <PREFIX>_* and normalize key names."""
    prefix_token = f"{prefix.upper()}_"
    values: dict[str, Any] = {}

    for key, value in os.environ.items():
        if key.startswith(prefix_token):
            values[_normalize_key(key.removeprefix(prefix_token))] = value

    LOGGER.info("Loaded %s config keys from environment prefix %s", len(values), prefix_token)
    return values


def _validate_json_root(data: Any) -> dict[str, Any]:
    """Ensure configuration files deserialize to a dictionary root."""
    if isinstance(data, dict):
        return {_normalize_key(key): value for key, value in data.items()}
    raise ConfigurationError("Config file must contain a JSON object at the root")


def _read_json_file(file_path: str | None) -> dict[str, Any]:
    """Read JSON config file when provided, otherwise return an empty mapping."""
    if not file_path:
        return {}

    path = Path(file_path)
    if not path.is_file():
        LOGGER.error("Config file not found: %s", file_path)
        raise ConfigurationError(f"Config file not found: {file_path}")

    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file {file_path} is not valid JSON: {exc}") from exc

    LOGGER.info("Loaded JSON config from %s", file_path)
    return _validate_json_root(raw_data)


def _not_none_values(values: dict[str, Any] | None) -> dict[str, Any]:
    """Drop keys with None values to avoid overriding previous layers."""
    if not values:
        return {}
    return {key: value for key, value in values.items() if value is not None}


def _merge_config_layers(layers: list[dict[str, Any]]) -> dict[str, Any]:
    """Merge config dictionaries in order where last layer wins."""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    LOGGER.debug("Merged %s config layers", len(layers))
    return merged


def _ensure_required_keys(config: dict[str, Any], required: tuple[str, ...]) -> None:
    """Validate required keys and raise a clear error when missing."""
    missing = [key for key in required if config.get(key) in (None, "")]
    if missing:
        joined = ", ".join(missing)
        LOGGER.error("Required config keys missing: %s", joined)
        raise ConfigurationError(f"Missing required parameter(s): {joined}")


def load_connection_config(
    config: dict[str, Any] | None = None,
    *,
    file_path: str | None = None,
    env_prefix: str | None = None,
    required: tuple[str, ...] = (),
    defaults: dict[str, Any] | None = None,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Resolve final config from defaults, file, env, config, and overrides."""
    LOGGER.info(
        "Loading check config with env_prefix=%s, file_path=%s",
        env_prefix,
        file_path,
    )
    env_config = _read_prefixed_env(env_prefix) if env_prefix else {}
    merged = _merge_config_layers(
        [
            defaults or {},
            _read_json_file(file_path),
            env_config,
            config or {},
            _not_none_values(overrides),
        ]
    )

    _ensure_required_keys(merged, required)
    LOGGER.info("Check config resolved: %s", redact_config(merged))
    return merged

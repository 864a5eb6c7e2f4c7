from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

log = structlog.get_logger(__name__)

_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")
_SECTIONS: tuple[str, ...] = ("orionoid", "server", "newznab", "features", "http", "logging")

# Flat env/CLI keys and the (section, key) they land in.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "orionoid_app_key": ("orionoid", "app_key"),
    "orionoid_user_key": ("orionoid", "user_key"),
    "orionoid_token": ("orionoid", "token"),
    "orionoid_api_url": ("orionoid", "api_url"),
    "host": ("server", "host"),
    "port": ("server", "port"),
    "base_url": ("server", "base_url"),
    "newznab_api_key": ("newznab", "api_key"),
    "newznab_server_name": ("newznab", "server_name"),
    "newznab_server_description": ("newznab", "server_description"),
    "cache_ttl_seconds": ("features", "cache_ttl_seconds"),
    "max_results": ("features", "max_results"),
    "default_results": ("features", "default_results"),
    "preferred_languages": ("features", "preferred_languages"),
    "stream_type": ("features", "stream_type"),
    "upstream_limit": ("features", "upstream_limit"),
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def _merge(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``layer`` into ``target`` in place; nested mappings merge key-wise."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        else:
            target[key] = value
    return target


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a layer into the sectioned YAML shape.

    A layer may mix section blocks (``{"features": {...}}``) with flat keys
    (``cache_ttl_seconds``); flat keys win over the same key in a block.
    """
    result: dict[str, Any] = {k: layer[k] for k in _TOP_LEVEL_KEYS if k in layer}

    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            result[section] = dict(block)

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            result.setdefault(section, {})[key] = layer[flat_key]

    return result


def _yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Build the validated AppConfig.

    Precedence, lowest first: defaults, YAML file, ORIONZB_* environment
    (including a ``.env`` file when given), CLI overrides. Nothing is
    written to disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        # Already-exported variables beat the file.
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_yaml_layer(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge(merged, _sectioned(layer))

    log.debug(
        "config_layers_merged",
        config_path=str(config_path) if config_path else None,
        dotenv_path=str(dotenv_path) if dotenv_path else None,
    )
    return AppConfig.model_validate(merged)

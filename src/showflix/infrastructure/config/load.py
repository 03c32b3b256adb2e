"""Layered configuration loading.

Precedence, lowest first: ``DEFAULT_CONFIG``, YAML file, ``SHOWFLIX_*``
environment (a ``.env`` file feeds this layer), CLI overrides. Each layer
is brought into the sectioned shape of ``config.yaml`` before merging and
``AppConfig`` validates the merged result once.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS = ("http", "logging", "backend")
_TOP_LEVEL = ("app_name", "environment")

# Replaced as a whole by a higher layer, never merged key by key.
_ATOMIC = ("categories",)

# Flat key (env var suffix / CLI override name) -> (section, key)
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "parse_base_url": ("backend", "parse_base_url"),
    "site_url": ("backend", "site_url"),
    "application_id": ("backend", "application_id"),
    "javascript_key": ("backend", "javascript_key"),
    "client_version": ("backend", "client_version"),
    "installation_id": ("backend", "installation_id"),
    "home_page_limit": ("backend", "home_page_limit"),
    "scan_limit": ("backend", "scan_limit"),
}


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Flat, sectioned or mixed layer -> sectioned dict."""
    out: dict[str, Any] = {
        section: dict(layer[section])
        for section in _SECTIONS
        if isinstance(layer.get(section), Mapping)
    }
    out.update({key: layer[key] for key in _TOP_LEVEL if key in layer})
    for key in _ATOMIC:
        if key in layer:
            out[key] = dict(layer[key] or {})

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _merge(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in layer.items():
        current = target.get(key)
        if key not in _ATOMIC and isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        else:
            target[key] = value
    return target


def _require(path: Path) -> Path:
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def _yaml_layer(path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(_require(path).read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def _env_layer(dotenv_path: Path | None) -> dict[str, Any]:
    if dotenv_path is not None:
        # Variables already set in the process win over the .env file.
        load_dotenv(_require(dotenv_path), override=False)
    return EnvOverrides().to_update_dict()


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Merge all layers and validate.

    Never creates files or directories.

    Raises:
        FileNotFoundError: An explicitly given YAML or .env path is missing.
        ValueError: The YAML document is not a mapping.
        pydantic.ValidationError: The merged values are invalid.
    """
    merged = _sectioned(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        _merge(merged, _sectioned(_yaml_layer(config_path)))
    _merge(merged, _sectioned(_env_layer(dotenv_path)))
    _merge(merged, _sectioned(cli_overrides or {}))

    return AppConfig.model_validate(merged)

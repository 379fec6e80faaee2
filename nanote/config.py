"""Shared configuration loader for Nanote."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".nanote.yaml"
_CONFIG_PATH_OVERRIDE: Path | None = None

DEFAULT_MINIMUM_RAW = 10**26
DEFAULT_CHARSET_INDEX_LENGTH = 3


@dataclass
class EngineConfig:
    """Settings used to construct a :class:`nanote.engine.Nanote`.

    ``minimum_raw`` and ``charset_index_length`` are protocol constants:
    amounts produced with non-default values cannot be read by a default
    engine.
    """

    verbose: bool = False
    minimum_raw: int = DEFAULT_MINIMUM_RAW
    charset_index_length: int = DEFAULT_CHARSET_INDEX_LENGTH


def set_default_config_path(path: str | Path | None) -> None:
    """Remember a user-supplied config path for future loads."""

    global _CONFIG_PATH_OVERRIDE
    _CONFIG_PATH_OVERRIDE = Path(path).expanduser() if path else None


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML object with a 'nanote' section")
    return loaded


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None


def _coerce_int(raw: Any, *, name: str, source: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ConfigurationError(f"Invalid {name} in {source}: {raw}")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid {name} in {source}: {raw}") from exc
    if value < 0:
        raise ConfigurationError(f"Invalid {name} in {source}: {raw}")
    return value


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def load_engine_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> EngineConfig:
    """Load engine settings from overrides, environment variables and optional YAML."""

    env_map = os.environ if env is None else env
    explicit_path = config_path is not None or _CONFIG_PATH_OVERRIDE is not None
    path = (
        Path(config_path).expanduser()
        if config_path is not None
        else _CONFIG_PATH_OVERRIDE or DEFAULT_CONFIG_PATH
    )

    file_config = _load_config_file(path, required=explicit_path)
    section = file_config.get("nanote", {}) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Expected 'nanote' to be a mapping in {path}")

    override_map = dict(overrides or {})

    resolved_verbose = _first_value(
        _coerce_bool(override_map.get("verbose")),
        _coerce_bool(env_map.get("NANOTE_VERBOSE")),
        _coerce_bool(section.get("verbose")),
        False,
    )
    resolved_minimum_raw = _first_value(
        _coerce_int(override_map.get("minimum_raw"), name="minimum_raw", source="overrides"),
        _coerce_int(env_map.get("NANOTE_MINIMUM_RAW") or None, name="minimum_raw", source="environment"),
        _coerce_int(section.get("minimum_raw"), name="minimum_raw", source=f"{path} nanote.minimum_raw"),
        DEFAULT_MINIMUM_RAW,
    )
    resolved_index_length = _first_value(
        _coerce_int(
            override_map.get("charset_index_length"),
            name="charset_index_length",
            source="overrides",
        ),
        _coerce_int(
            env_map.get("NANOTE_CHARSET_INDEX_LENGTH") or None,
            name="charset_index_length",
            source="environment",
        ),
        _coerce_int(
            section.get("charset_index_length"),
            name="charset_index_length",
            source=f"{path} nanote.charset_index_length",
        ),
        DEFAULT_CHARSET_INDEX_LENGTH,
    )

    return EngineConfig(
        verbose=bool(resolved_verbose),
        minimum_raw=resolved_minimum_raw,
        charset_index_length=resolved_index_length,
    )

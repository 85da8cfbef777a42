"""Configuration Loader - Imperative Shell.

This module handles loading threshold configuration from YAML files and
environment variables. All I/O is contained here.

Models (ThresholdConfig, FeatureFlags, EngineConfig) are defined in
hazard_alerts/core/config.py to keep the core free of I/O.
"""

import logging
import os
from dataclasses import fields, is_dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from hazard_alerts.core.config import (
    DEFAULT_CONFIG,
    EngineConfig,
    FeatureFlags,
    ThresholdConfig,
)
from hazard_alerts.core.observation import to_finite


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/thresholds.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: Any, field_name: str) -> bool:
    """Parse a boolean from YAML or environment text."""
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False

    raise ValueError(f"Invalid boolean for {field_name}: {value!r}")


def _parse_group(defaults: Any, data: dict[str, Any], prefix: str) -> Any:
    """Overlay a config mapping onto a frozen threshold dataclass.

    Nested dataclass fields recurse; everything else must be a finite number
    (booleans are rejected).
    Unknown keys are logged and ignored.

    Args:
        defaults: Dataclass instance supplying unspecified values
        data: Mapping parsed from YAML
        prefix: Dotted path used in log and error messages

    Returns:
        New dataclass instance with the overrides applied
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for {prefix or 'thresholds'}, got {type(data).__name__}")

    known = {f.name for f in fields(defaults)}
    for key in data:
        if key not in known:
            logger.warning("Unknown threshold key %s%s ignored", prefix, key)

    overrides: dict[str, Any] = {}
    for f in fields(defaults):
        if f.name not in data:
            continue
        current = getattr(defaults, f.name)
        value = data[f.name]
        if is_dataclass(current):
            overrides[f.name] = _parse_group(current, value, f"{prefix}{f.name}.")
        else:
            number = to_finite(value)
            if number is None:
                raise ValueError(f"Invalid number for {prefix}{f.name}: {value!r}")
            overrides[f.name] = number

    return replace(defaults, **overrides)


def _parse_thresholds(data: dict[str, Any]) -> ThresholdConfig:
    """Parse threshold overrides from config data."""
    return _parse_group(ThresholdConfig(), data, "")


def _parse_flags(data: dict[str, Any]) -> FeatureFlags:
    """Parse feature flags from config data."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for flags, got {type(data).__name__}")

    flags = FeatureFlags()
    if "enable_wildfire" in data:
        flags = replace(
            flags,
            enable_wildfire=_parse_bool(data["enable_wildfire"], "flags.enable_wildfire"),
        )
    return flags


def apply_env_overrides(config: EngineConfig) -> EngineConfig:
    """Apply feature flag overrides from environment variables.

    Environment variables:
        ENABLE_WILDFIRE: true/false to toggle wildfire risk alerts

    Args:
        config: Configuration loaded from file or defaults

    Returns:
        Configuration with any overrides applied
    """
    raw = os.environ.get("ENABLE_WILDFIRE")
    if raw is None or raw.strip() == "":
        return config

    enabled = _parse_bool(raw, "ENABLE_WILDFIRE")
    logger.info("Wildfire alerts %s by ENABLE_WILDFIRE", "enabled" if enabled else "disabled")
    return replace(config, flags=replace(config.flags, enable_wildfire=enabled))


def load_config_from_dict(data: dict[str, Any]) -> EngineConfig:
    """Load configuration from a dictionary.

    Pure function: no environment or file access.

    Args:
        data: Configuration dictionary with optional 'thresholds' and
            'flags' sections

    Returns:
        Parsed EngineConfig

    Raises:
        ValueError: If a value cannot be parsed
    """
    return EngineConfig(
        thresholds=_parse_thresholds(data.get("thresholds") or {}),
        flags=_parse_flags(data.get("flags") or {}),
    )


def load_config(config_path: str | Path | None = None) -> EngineConfig:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses HAZARD_CONFIG_PATH env var or default.

    Returns:
        Parsed EngineConfig, with environment overrides applied

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If a value cannot be parsed
    """
    if config_path is None:
        config_path = os.environ.get("HAZARD_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return apply_env_overrides(DEFAULT_CONFIG)

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return apply_env_overrides(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = apply_env_overrides(load_config_from_dict(data))

    logger.info(
        "Loaded config: wildfire alerts %s",
        "enabled" if config.flags.enable_wildfire else "disabled",
    )

    return config

"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
from unittest.mock import patch

import pytest
import yaml

from hazard_alerts.core.config import DEFAULT_CONFIG, EngineConfig
from hazard_alerts.shell.config_loader import (
    _parse_bool,
    apply_env_overrides,
    load_config,
    load_config_from_dict,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure no config variables leak in from the environment."""
    monkeypatch.delenv("ENABLE_WILDFIRE", raising=False)
    monkeypatch.delenv("HAZARD_CONFIG_PATH", raising=False)


class TestParseBool:
    """Tests for _parse_bool function."""

    @pytest.mark.parametrize("value", [True, "true", "YES", " on ", "1"])
    def test_truthy(self, value):
        assert _parse_bool(value, "x") is True

    @pytest.mark.parametrize("value", [False, "false", "No", "off", "0"])
    def test_falsy(self, value):
        assert _parse_bool(value, "x") is False

    def test_invalid_raises(self):
        """Unrecognized text is an error, not a silent default."""
        with pytest.raises(ValueError, match="flags.enable_wildfire"):
            _parse_bool("maybe", "flags.enable_wildfire")


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        """An empty mapping leaves every default in place."""
        assert load_config_from_dict({}) == DEFAULT_CONFIG

    def test_overrides_nested_values(self):
        """Nested groups are overlaid field by field."""
        config = load_config_from_dict({
            "thresholds": {
                "wind": {"warning_ms": 18},
                "low_pressure_hpa": 995,
            },
        })
        assert config.thresholds.wind.warning_ms == 18.0
        assert config.thresholds.wind.advisory_ms == 8.0
        assert config.thresholds.low_pressure_hpa == 995.0

    def test_parses_flags(self):
        config = load_config_from_dict({"flags": {"enable_wildfire": "false"}})
        assert config.flags.enable_wildfire is False

    def test_unknown_keys_ignored(self, caplog):
        """Unknown keys are logged and skipped."""
        config = load_config_from_dict({"thresholds": {"wind": {"bogus": 1}}})
        assert config == DEFAULT_CONFIG
        assert "wind.bogus" in caplog.text

    def test_bad_number_raises(self):
        with pytest.raises(ValueError, match="fog.vis_warning_m"):
            load_config_from_dict({"thresholds": {"fog": {"vis_warning_m": "far"}}})

    def test_group_must_be_mapping(self):
        with pytest.raises(ValueError):
            load_config_from_dict({"thresholds": {"heat": 35}})

    def test_flags_must_be_mapping(self):
        """A scalar flags section is rejected, not indexed into."""
        with pytest.raises(ValueError, match="flags"):
            load_config_from_dict({"flags": "enable_wildfire"})

    @pytest.mark.parametrize("value", [True, float("nan"), float("inf")])
    def test_rejects_bool_and_non_finite(self, value):
        """Booleans and non-finite values are not thresholds."""
        with pytest.raises(ValueError, match="wind.warning_ms"):
            load_config_from_dict({"thresholds": {"wind": {"warning_ms": value}}})

    def test_accepts_numeric_text(self):
        config = load_config_from_dict({"thresholds": {"wind": {"warning_ms": "18"}}})
        assert config.thresholds.wind.warning_ms == 18.0


class TestApplyEnvOverrides:
    """Tests for apply_env_overrides function."""

    def test_no_env_keeps_config(self):
        assert apply_env_overrides(DEFAULT_CONFIG) == DEFAULT_CONFIG

    def test_env_disables_wildfire(self):
        with patch.dict(os.environ, {"ENABLE_WILDFIRE": "false"}):
            config = apply_env_overrides(DEFAULT_CONFIG)
        assert config.flags.enable_wildfire is False
        assert config.thresholds == DEFAULT_CONFIG.thresholds

    def test_blank_env_ignored(self):
        with patch.dict(os.environ, {"ENABLE_WILDFIRE": "  "}):
            assert apply_env_overrides(DEFAULT_CONFIG) == DEFAULT_CONFIG


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_yaml_file(self, tmp_path):
        """Loads thresholds and flags from a YAML file."""
        path = tmp_path / "thresholds.yaml"
        path.write_text(
            "thresholds:\n"
            "  flood:\n"
            "    rain_24h_warn_mm: 50\n"
            "flags:\n"
            "  enable_wildfire: false\n"
        )

        config = load_config(path)

        assert isinstance(config, EngineConfig)
        assert config.thresholds.flood.rain_24h_warn_mm == 50.0
        assert config.flags.enable_wildfire is False

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.yaml") == DEFAULT_CONFIG

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DEFAULT_CONFIG

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("thresholds: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_uses_env_path(self, tmp_path):
        """Falls back to HAZARD_CONFIG_PATH when no path is given."""
        path = tmp_path / "env.yaml"
        path.write_text("thresholds:\n  ice_humidity_pct: 70\n")

        with patch.dict(os.environ, {"HAZARD_CONFIG_PATH": str(path)}):
            config = load_config()

        assert config.thresholds.ice_humidity_pct == 70.0

    def test_env_overrides_file(self, tmp_path):
        """ENABLE_WILDFIRE wins over the file."""
        path = tmp_path / "thresholds.yaml"
        path.write_text("flags:\n  enable_wildfire: false\n")

        with patch.dict(os.environ, {"ENABLE_WILDFIRE": "true"}):
            config = load_config(path)

        assert config.flags.enable_wildfire is True

"""Unit tests for threshold configuration validation.

Pure function tests - no mocks needed.
"""

import dataclasses

import pytest

from hazard_alerts.core.config import (
    DEFAULT_CONFIG,
    FogThresholds,
    HeatThresholds,
    ThresholdConfig,
    ValidationError,
    ValidationResult,
    WindChillThresholds,
    WindThresholds,
    validate_escalation,
    validate_percentage,
    validate_thresholds,
)


class TestDefaults:
    """Tests for the standard configuration."""

    def test_defaults_are_valid(self):
        """The standard configuration passes validation cleanly."""
        result = validate_thresholds(DEFAULT_CONFIG.thresholds)
        assert result.valid is True
        assert result.errors == []

    def test_wildfire_enabled_by_default(self):
        """Wildfire alerts are on unless turned off."""
        assert DEFAULT_CONFIG.flags.enable_wildfire is True

    def test_config_is_immutable(self):
        """Thresholds cannot be mutated in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.thresholds.wind.warning_ms = 1.0


class TestValidateEscalation:
    """Tests for validate_escalation() function."""

    def test_higher_is_worse_ok(self):
        """Warning above advisory is fine."""
        assert validate_escalation(8, 15, "wind.warning_ms") == []

    def test_equal_is_ok(self):
        """Equal thresholds are allowed."""
        assert validate_escalation(50, 50, "heat.warning_rh") == []

    def test_higher_is_worse_violation(self):
        """Warning below advisory is an error."""
        errors = validate_escalation(15, 8, "wind.warning_ms")
        assert len(errors) == 1
        assert errors[0].field == "wind.warning_ms"
        assert errors[0].severity == "error"

    def test_lower_is_worse_violation(self):
        """For visibility a warning above the advisory is an error."""
        errors = validate_escalation(200, 800, "fog.vis_warning_m", higher_is_worse=False)
        assert len(errors) == 1


class TestValidatePercentage:
    """Tests for validate_percentage() function."""

    @pytest.mark.parametrize("value", [0, 50, 100])
    def test_in_range(self, value):
        assert validate_percentage(value, "x") == []

    @pytest.mark.parametrize("value", [-1, 101])
    def test_out_of_range(self, value):
        assert len(validate_percentage(value, "x")) == 1


class TestValidateThresholds:
    """Tests for validate_thresholds() function."""

    def test_inverted_wind(self):
        """Inverted wind thresholds are rejected."""
        thresholds = ThresholdConfig(wind=WindThresholds(advisory_ms=20, warning_ms=10))
        result = validate_thresholds(thresholds)
        assert result.valid is False
        assert [e.field for e in result.critical_errors] == ["wind.warning_ms"]

    def test_inverted_fog(self):
        """A warning visibility above the advisory is rejected."""
        thresholds = ThresholdConfig(fog=FogThresholds(vis_advisory_m=200, vis_warning_m=800))
        assert validate_thresholds(thresholds).valid is False

    def test_inverted_heat_humidity(self):
        """A warning humidity below the advisory is rejected."""
        thresholds = ThresholdConfig(heat=HeatThresholds(advisory_rh=60, warning_rh=50))
        result = validate_thresholds(thresholds)
        assert "heat.warning_rh" in [e.field for e in result.errors]

    def test_bad_percentage(self):
        """Humidity outside [0, 100] is rejected."""
        result = validate_thresholds(ThresholdConfig(ice_humidity_pct=120))
        assert result.valid is False

    def test_warm_wind_chill_is_warning(self):
        """A wind chill advisory above freezing only warns."""
        thresholds = ThresholdConfig(wind_chill=WindChillThresholds(advisory_c=5, warning_c=-5))
        result = validate_thresholds(thresholds)
        assert result.valid is True
        assert [w.field for w in result.warnings] == ["wind_chill.advisory_c"]


class TestValidationResult:
    """Tests for ValidationResult helpers."""

    def test_splits_warnings_and_errors(self):
        result = ValidationResult(valid=False, errors=[
            ValidationError(field="a", message="bad"),
            ValidationError(field="b", message="meh", severity="warning"),
        ])
        assert [e.field for e in result.critical_errors] == ["a"]
        assert [e.field for e in result.warnings] == ["b"]

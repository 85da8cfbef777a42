"""Threshold configuration models - Pure data structures.

These are the numeric cutoffs and feature flags the rule evaluator reads.
The actual loading (I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WindThresholds:
    """Sustained wind and gust cutoffs in m/s."""
    advisory_ms: float = 8.0
    warning_ms: float = 15.0
    gust_advisory_ms: float = 14.0
    gust_warning_ms: float = 20.0


@dataclass(frozen=True)
class FloodThresholds:
    """Rain accumulation cutoffs in mm.

    Attributes:
        rain_3h_watch_mm: Single 3h step rain for a Flood Watch
        rain_3h_warn_mm: Single 3h step rain for a Flood Warning
        rain_24h_watch_mm: 24h total rain for a Flood Watch
        rain_24h_warn_mm: 24h total rain for a Flood Warning
    """
    rain_3h_watch_mm: float = 10.0
    rain_3h_warn_mm: float = 20.0
    rain_24h_watch_mm: float = 25.0
    rain_24h_warn_mm: float = 40.0


@dataclass(frozen=True)
class SnowThresholds:
    """Snow accumulation cutoffs in mm liquid equivalent."""
    snow_3h_watch_mm: float = 5.0
    snow_3h_warn_mm: float = 10.0
    snow_24h_watch_mm: float = 15.0
    snow_24h_warn_mm: float = 25.0


@dataclass(frozen=True)
class HeatThresholds:
    """Temperature (°C) and relative humidity (%) pairs for heat stress."""
    advisory_t: float = 30.0
    advisory_rh: float = 50.0
    warning_t: float = 35.0
    warning_rh: float = 50.0


@dataclass(frozen=True)
class FogThresholds:
    """Visibility cutoffs and the humidity/wind envelope fog needs.

    Attributes:
        vis_advisory_m: Visibility at or below which a Fog Advisory fires
        vis_warning_m: Visibility at or below which a Dense Fog Warning fires
        humidity_min_pct: Minimum relative humidity for fog
        wind_max_ms: Maximum wind speed for fog to persist
    """
    vis_advisory_m: float = 800.0
    vis_warning_m: float = 200.0
    humidity_min_pct: float = 90.0
    wind_max_ms: float = 5.0


@dataclass(frozen=True)
class WindChillThresholds:
    """Feels-like temperature cutoffs in °C."""
    advisory_c: float = -10.0
    warning_c: float = -25.0


@dataclass(frozen=True)
class WildfireThresholds:
    """Dry, hot and windy envelope for elevated wildfire risk."""
    rh_max_pct: float = 25.0
    t_min_c: float = 30.0
    wind_min_ms: float = 7.0


@dataclass(frozen=True)
class ThresholdConfig:
    """All numeric cutoffs, grouped by hazard.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        wind: Wind and gust cutoffs
        low_pressure_hpa: Pressure at or below which weather is unsettled
        clouds_heavy_pct: Forecast cloud cover considered heavy
        flood: Rain accumulation cutoffs
        snow: Snow accumulation cutoffs
        wintry_mix_pivot_c: Temperature at or below which rain may freeze
        ice_humidity_pct: Humidity at or above which icy surfaces form
        heat: Heat stress cutoffs
        fog: Fog cutoffs
        wind_chill: Wind chill cutoffs
        wildfire: Wildfire risk envelope
    """
    wind: WindThresholds = field(default_factory=WindThresholds)
    low_pressure_hpa: float = 1000.0
    clouds_heavy_pct: float = 85.0
    flood: FloodThresholds = field(default_factory=FloodThresholds)
    snow: SnowThresholds = field(default_factory=SnowThresholds)
    wintry_mix_pivot_c: float = 1.0
    ice_humidity_pct: float = 80.0
    heat: HeatThresholds = field(default_factory=HeatThresholds)
    fog: FogThresholds = field(default_factory=FogThresholds)
    wind_chill: WindChillThresholds = field(default_factory=WindChillThresholds)
    wildfire: WildfireThresholds = field(default_factory=WildfireThresholds)


@dataclass(frozen=True)
class FeatureFlags:
    """Boolean toggles for optional rules.

    Attributes:
        enable_wildfire: Emit wildfire risk alerts
    """
    enable_wildfire: bool = True


@dataclass(frozen=True)
class EngineConfig:
    """Thresholds and flags injected into a single derivation call."""
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    flags: FeatureFlags = field(default_factory=FeatureFlags)


DEFAULT_CONFIG = EngineConfig()


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_escalation(
    advisory: float,
    warning: float,
    field_name: str,
    higher_is_worse: bool = True,
) -> list[ValidationError]:
    """Check that a warning cutoff is at least as severe as its advisory.

    Pure function.

    Args:
        advisory: Advisory threshold
        warning: Warning threshold
        field_name: Name of the field for error messages
        higher_is_worse: True when larger values are more hazardous
            (wind, rain), False when smaller ones are (visibility, cold)

    Returns:
        List of validation errors (empty if valid)
    """
    if higher_is_worse and warning < advisory:
        return [ValidationError(
            field=field_name,
            message=f"Warning threshold ({warning}) is below advisory threshold ({advisory})",
        )]

    if not higher_is_worse and warning > advisory:
        return [ValidationError(
            field=field_name,
            message=f"Warning threshold ({warning}) is above advisory threshold ({advisory})",
        )]

    return []


def validate_percentage(value: float, field_name: str) -> list[ValidationError]:
    """Validate that a value lies within [0, 100].

    Pure function.
    """
    if not 0 <= value <= 100:
        return [ValidationError(
            field=field_name,
            message=f"Percentage {value} out of range [0, 100]",
        )]
    return []


def validate_thresholds(thresholds: ThresholdConfig) -> ValidationResult:
    """Validate threshold configuration for errors and warnings.

    Pure function.

    Args:
        thresholds: Threshold configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    wind = thresholds.wind
    errors.extend(validate_escalation(wind.advisory_ms, wind.warning_ms, "wind.warning_ms"))
    errors.extend(validate_escalation(
        wind.gust_advisory_ms, wind.gust_warning_ms, "wind.gust_warning_ms",
    ))

    flood = thresholds.flood
    errors.extend(validate_escalation(
        flood.rain_3h_watch_mm, flood.rain_3h_warn_mm, "flood.rain_3h_warn_mm",
    ))
    errors.extend(validate_escalation(
        flood.rain_24h_watch_mm, flood.rain_24h_warn_mm, "flood.rain_24h_warn_mm",
    ))

    snow = thresholds.snow
    errors.extend(validate_escalation(
        snow.snow_3h_watch_mm, snow.snow_3h_warn_mm, "snow.snow_3h_warn_mm",
    ))
    errors.extend(validate_escalation(
        snow.snow_24h_watch_mm, snow.snow_24h_warn_mm, "snow.snow_24h_warn_mm",
    ))

    heat = thresholds.heat
    errors.extend(validate_escalation(heat.advisory_t, heat.warning_t, "heat.warning_t"))
    errors.extend(validate_escalation(heat.advisory_rh, heat.warning_rh, "heat.warning_rh"))

    fog = thresholds.fog
    errors.extend(validate_escalation(
        fog.vis_advisory_m, fog.vis_warning_m, "fog.vis_warning_m", higher_is_worse=False,
    ))

    chill = thresholds.wind_chill
    errors.extend(validate_escalation(
        chill.advisory_c, chill.warning_c, "wind_chill.warning_c", higher_is_worse=False,
    ))

    # Percentages
    for name, value in (
        ("clouds_heavy_pct", thresholds.clouds_heavy_pct),
        ("ice_humidity_pct", thresholds.ice_humidity_pct),
        ("heat.advisory_rh", heat.advisory_rh),
        ("heat.warning_rh", heat.warning_rh),
        ("fog.humidity_min_pct", fog.humidity_min_pct),
        ("wildfire.rh_max_pct", thresholds.wildfire.rh_max_pct),
    ):
        errors.extend(validate_percentage(value, name))

    # Above-freezing wind chill only warns
    if chill.advisory_c > 0:
        errors.append(ValidationError(
            field="wind_chill.advisory_c",
            message=f"Wind chill advisory at {chill.advisory_c}°C is above freezing",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )

"""Functional Core - Pure functions with no side effects.

This module contains all hazard derivation logic as pure functions:
- Observation and forecast parsing
- Forecast aggregation
- Hazard rule evaluation
- Suppression of redundant advisories
- Alert assembly
- Presentation helpers

All functions here are deterministic and have no I/O.
"""

from hazard_alerts.core.alert import Alert, CATEGORIES, SEVERITIES
from hazard_alerts.core.config import (
    DEFAULT_CONFIG,
    EngineConfig,
    FeatureFlags,
    ThresholdConfig,
    validate_thresholds,
)
from hazard_alerts.core.observation import (
    ForecastStep,
    Observation,
    parse_forecast,
    parse_observation,
)
from hazard_alerts.core.aggregates import ForecastAggregates, aggregate_forecast
from hazard_alerts.core.engine import derive_alerts
from hazard_alerts.core.formatter import calm_message, format_alert_report, icon_for

__all__ = [
    # Alert
    "Alert",
    "CATEGORIES",
    "SEVERITIES",
    # Config
    "DEFAULT_CONFIG",
    "EngineConfig",
    "FeatureFlags",
    "ThresholdConfig",
    "validate_thresholds",
    # Observation
    "ForecastStep",
    "Observation",
    "parse_forecast",
    "parse_observation",
    # Aggregates
    "ForecastAggregates",
    "aggregate_forecast",
    # Engine
    "derive_alerts",
    # Formatter
    "calm_message",
    "format_alert_report",
    "icon_for",
]

"""Deterministic hazard alerts derived from weather observations and forecasts."""

from hazard_alerts.core import calm_message, derive_alerts, icon_for

__all__ = [
    "calm_message",
    "derive_alerts",
    "icon_for",
]

"""Alert presentation helpers - Pure functions.

This module maps alerts and observations to the small pieces of copy and
iconography presentation code needs. All functions are pure with no side
effects and never raise.
"""

from typing import Any

from hazard_alerts.core.alert import Alert, ADVISORY, INFO, WARNING, WATCH
from hazard_alerts.core.observation import Observation


# MaterialCommunityIcons names
CATEGORY_ICONS = {
    "Wind": "weather-windy",
    "Storm": "weather-lightning",
    "Flood": "waves",
    "Heat": "thermometer",
    "Cold": "snowflake",
    "Fire": "fire-alert",
    "Snow": "weather-snowy-heavy",
    "Rain": "weather-pouring",
    "Information": "information-outline",
    "Weather": "weather-cloudy-alert",
}

DEFAULT_ICON = "alert-circle-outline"

CALM_MESSAGES = {
    "Clear": "Clear skies. No hazardous weather expected.",
    "Clouds": "Cloudy skies, but no severe systems detected.",
    "Rain": "Light rain only. No flooding or storms predicted.",
    "Snow": "Light snow showers. Safe, just dress warmly.",
    "Drizzle": "Drizzle expected. Roads may be slick, but no major risks.",
    "Mist": "Low visibility in fog/mist. Drive carefully; otherwise conditions are stable.",
    "Fog": "Low visibility in fog/mist. Drive carefully; otherwise conditions are stable.",
}

DEFAULT_CALM_MESSAGE = "Weather is calm. No alerts in your area."


def icon_for(category: Any) -> str:
    """Get the icon name for an alert category.

    Pure function. Unknown categories get the generic alert icon.
    """
    if not isinstance(category, str):
        return DEFAULT_ICON
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)


def _condition_of(observation: Any) -> str | None:
    """Pull the primary condition text from an Observation or raw dict."""
    if isinstance(observation, Observation):
        return observation.condition or None

    if not isinstance(observation, dict):
        return None

    weather = observation.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        main = weather[0].get("main")
        return main if isinstance(main, str) else None

    return None


def calm_message(observation: Any) -> str:
    """Get reassurance copy for when no actionable alerts fired.

    Pure function.

    Args:
        observation: Observation or OpenWeather current-weather dict

    Returns:
        A sentence keyed by the primary condition, or a generic one
    """
    condition = _condition_of(observation)
    if condition is None:
        return DEFAULT_CALM_MESSAGE
    return CALM_MESSAGES.get(condition, DEFAULT_CALM_MESSAGE)


def get_severity_emoji(severity: str) -> str:
    """Get an emoji representing alert severity.

    Pure function.
    """
    return {
        WARNING: "🚨",
        WATCH: "⚠️",
        ADVISORY: "🔸",
        INFO: "ℹ️",
    }.get(severity, "🔹")


def split_actionable(alerts: list[Alert]) -> tuple[list[Alert], list[Alert]]:
    """Split alerts into actionable and informational lists.

    Pure function. Relative order is kept within each list.
    """
    actionable = [a for a in alerts if a.is_actionable]
    informational = [a for a in alerts if not a.is_actionable]
    return actionable, informational


def format_alert_summary(alert: Alert) -> str:
    """Format a one-line summary of an alert.

    Pure function.

    Args:
        alert: Alert to summarize

    Returns:
        One-line summary string
    """
    return (
        f"{get_severity_emoji(alert.severity)} {alert.title} "
        f"[{alert.category}/{alert.severity}]"
    )


def format_alert_report(alerts: list[Alert], observation: Any) -> str:
    """Format a multi-line report for a derivation result.

    Pure function. Actionable alerts come first with their description and
    precaution; when none fired, the calm message stands in for them.
    Informational notes follow.

    Args:
        alerts: Alerts from derive_alerts()
        observation: Observation or raw dict the alerts were derived from

    Returns:
        Report text
    """
    actionable, informational = split_actionable(alerts)
    lines = []

    if actionable:
        for alert in actionable:
            lines.append(format_alert_summary(alert))
            lines.append(f"    {alert.description}")
            lines.append(f"    → {alert.precaution}")
    else:
        lines.append(f"✅ {calm_message(observation)}")

    for alert in informational:
        lines.append(f"{get_severity_emoji(alert.severity)} {alert.title}: {alert.description}")

    return "\n".join(lines)

"""Alert assembly - Pure functions.

derive_alerts() is the entry point of the functional core: it parses the
raw inputs, aggregates the forecast once, runs the ordered hazard rules and
stamps each resulting alert with a timestamp derived from the observation.
"""

import logging
import time
from typing import Any, Callable

from hazard_alerts.core.aggregates import aggregate_forecast
from hazard_alerts.core.alert import Alert, AlertCandidate
from hazard_alerts.core.config import DEFAULT_CONFIG, EngineConfig
from hazard_alerts.core.observation import Observation, parse_forecast, parse_observation
from hazard_alerts.core.rules import RuleContext, evaluate_rules


logger = logging.getLogger(__name__)


def anchor_millis(observation: Observation, now: Callable[[], float] = time.time) -> int:
    """Anchor time for alert timestamps, in milliseconds.

    Uses the observation time when present, otherwise the clock.
    """
    seconds = observation.timestamp
    if seconds is None:
        seconds = int(now())
    return seconds * 1000


def assemble_alerts(
    fired: list[tuple[int, AlertCandidate]],
    anchor_ms: int,
) -> list[Alert]:
    """Stamp fired candidates with strictly increasing timestamps.

    Pure function. Each timestamp is the anchor plus the firing rule's
    position in the evaluation sequence, so identical inputs always yield
    identical timestamps.

    Args:
        fired: (rule position, AlertCandidate) pairs in evaluation order
        anchor_ms: Anchor time in milliseconds

    Returns:
        Finished alerts in evaluation order
    """
    return [candidate.stamp(anchor_ms + position) for position, candidate in fired]


def derive_alerts(
    observation: Observation | dict[str, Any] | None,
    forecast: Any = None,
    config: EngineConfig = DEFAULT_CONFIG,
    now: Callable[[], float] = time.time,
) -> list[Alert]:
    """Derive hazard alerts from current weather and a 24h forecast.

    Never raises for malformed weather data: unusable fields make the
    affected rules stay silent, and an unusable observation yields an empty
    list.

    Args:
        observation: Observation, or an OpenWeather current-weather dict
        forecast: Forecast list, a dict with a 'list' key, or None
        config: Thresholds and feature flags
        now: Clock used only when the observation carries no time

    Returns:
        Alerts in rule priority order, ending with the seismic disclaimer
        (empty if the observation is unusable)
    """
    if not isinstance(observation, Observation):
        observation = parse_observation(observation)
    if observation is None:
        logger.debug("Observation missing main data or primary condition, no alerts derived")
        return []

    steps = parse_forecast(forecast)
    aggregates = aggregate_forecast(steps)
    logger.debug(
        "Aggregated %d forecast steps: rain=%.1fmm snow=%.1fmm gust_max=%s",
        aggregates.step_count,
        aggregates.rain_24h_mm,
        aggregates.snow_24h_mm,
        aggregates.gust_24h_max_ms,
    )

    ctx = RuleContext(
        observation=observation,
        aggregates=aggregates,
        thresholds=config.thresholds,
        flags=config.flags,
    )

    alerts = assemble_alerts(evaluate_rules(ctx), anchor_millis(observation, now))
    logger.debug("Derived %d alerts for %s", len(alerts), observation.place)

    return alerts

"""Forecast aggregation - Pure functions.

This module rolls the first 24 hours of a 3-hour forecast series up into
the sums, extrema and predicates the hazard rules consume.

Extrema use infinite sentinels when no step carries a usable value:
maxima default to -inf and minima to +inf. Callers must treat a sentinel
as "undetermined"; every comparison a rule makes against one is False.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable

from hazard_alerts.core.observation import ForecastStep


# Eight 3-hour steps cover the next 24 hours
STEPS_PER_24H = 8

# OpenWeather thunderstorm codes, inclusive start, exclusive end
THUNDERSTORM_CODES = range(200, 232)


@dataclass(frozen=True)
class ForecastAggregates:
    """24-hour rollups of a forecast series.

    Attributes:
        rain_24h_mm: Total rain over the window
        snow_24h_mm: Total snow over the window (liquid equivalent)
        rain_3h_max_mm: Largest single-step rain (-inf if undetermined)
        snow_3h_max_mm: Largest single-step snow (-inf if undetermined)
        gust_24h_max_ms: Strongest gust (-inf if undetermined)
        temp_24h_max: Highest temperature (-inf if undetermined)
        temp_24h_min: Lowest temperature (+inf if undetermined)
        humidity_24h_max: Highest humidity (-inf if undetermined)
        clouds_24h_max: Highest cloud cover (-inf if undetermined)
        thunder_24h: Any step carries a thunderstorm code
        precip_any_24h: Any step carries non-zero rain or snow
        warmest: Hottest step with both temperature and humidity, if any
        step_count: Number of steps inside the window
    """
    rain_24h_mm: float = 0.0
    snow_24h_mm: float = 0.0
    rain_3h_max_mm: float = -math.inf
    snow_3h_max_mm: float = -math.inf
    gust_24h_max_ms: float = -math.inf
    temp_24h_max: float = -math.inf
    temp_24h_min: float = math.inf
    humidity_24h_max: float = -math.inf
    clouds_24h_max: float = -math.inf
    thunder_24h: bool = False
    precip_any_24h: bool = False
    warmest: ForecastStep | None = None
    step_count: int = 0


def select_next_24h(steps: Iterable[ForecastStep] | None) -> list[ForecastStep]:
    """Return the steps inside the 24-hour window.

    Pure function. Steps beyond the window are ignored.
    """
    if not steps:
        return []
    return list(steps)[:STEPS_PER_24H]


def sum_24h(steps: list[ForecastStep], read: Callable[[ForecastStep], float | None]) -> float:
    """Sum a field across steps, treating missing values as 0.

    Pure function.
    """
    return sum((read(step) or 0.0) for step in steps)


def max_24h(steps: list[ForecastStep], read: Callable[[ForecastStep], float | None]) -> float:
    """Maximum of a field across steps, -inf if no step carries it.

    Pure function.
    """
    values = [v for v in (read(step) for step in steps) if v is not None]
    return max(values, default=-math.inf)


def min_24h(steps: list[ForecastStep], read: Callable[[ForecastStep], float | None]) -> float:
    """Minimum of a field across steps, +inf if no step carries it.

    Pure function.
    """
    values = [v for v in (read(step) for step in steps) if v is not None]
    return min(values, default=math.inf)


def is_thunderstorm(condition_id: int | None) -> bool:
    """Check if a condition code is a thunderstorm code.

    Pure function.
    """
    return condition_id is not None and condition_id in THUNDERSTORM_CODES


def find_warmest(steps: list[ForecastStep]) -> ForecastStep | None:
    """Find the hottest step among those with temperature and humidity.

    Pure function. Ties keep the earliest step.
    """
    usable = [s for s in steps if s.temperature is not None and s.humidity is not None]
    if not usable:
        return None
    return max(usable, key=lambda s: s.temperature)


def has_precipitation(step: ForecastStep) -> bool:
    """Returns True if the step carries non-zero rain or snow."""
    return bool(step.rain_3h_mm) or bool(step.snow_3h_mm)


def aggregate_forecast(steps: Iterable[ForecastStep] | None) -> ForecastAggregates:
    """Compute 24-hour rollups for a forecast series.

    Pure function: an empty or missing series yields the "no data"
    sentinels, never an exception.

    Args:
        steps: Forecast steps, nearest first

    Returns:
        ForecastAggregates over the first STEPS_PER_24H steps
    """
    window = select_next_24h(steps)

    if not window:
        return ForecastAggregates()

    return ForecastAggregates(
        rain_24h_mm=sum_24h(window, lambda s: s.rain_3h_mm),
        snow_24h_mm=sum_24h(window, lambda s: s.snow_3h_mm),
        rain_3h_max_mm=max_24h(window, lambda s: s.rain_3h_mm),
        snow_3h_max_mm=max_24h(window, lambda s: s.snow_3h_mm),
        gust_24h_max_ms=max_24h(window, lambda s: s.wind_gust_ms),
        temp_24h_max=max_24h(window, lambda s: s.temperature),
        temp_24h_min=min_24h(window, lambda s: s.temperature),
        humidity_24h_max=max_24h(window, lambda s: s.humidity),
        clouds_24h_max=max_24h(window, lambda s: s.clouds_pct),
        thunder_24h=any(is_thunderstorm(s.condition_id) for s in window),
        precip_any_24h=any(has_precipitation(s) for s in window),
        warmest=find_warmest(window),
        step_count=len(window),
    )

"""Weather observation models and parsing - Pure functions.

This module handles parsing OpenWeather-shaped current weather and
forecast payloads into typed Observation and ForecastStep objects.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Observation:
    """Immutable current weather snapshot.

    Numeric fields are None when the source value is absent or not finite.

    Attributes:
        temperature: Air temperature (°C)
        feels_like: Apparent temperature (°C)
        humidity: Relative humidity (%)
        pressure_hpa: Sea-level pressure (hPa)
        wind_speed_ms: Sustained wind speed (m/s)
        wind_gust_ms: Wind gust (m/s)
        clouds_pct: Cloud cover (%)
        visibility_m: Visibility (meters)
        condition_id: OpenWeather condition code (e.g. 800 for clear)
        condition: Primary condition text (e.g. 'Clear', 'Rain')
        place: Human-readable place name
        timestamp: Observation time, seconds since epoch
    """
    temperature: float | None = None
    feels_like: float | None = None
    humidity: float | None = None
    pressure_hpa: float | None = None
    wind_speed_ms: float | None = None
    wind_gust_ms: float | None = None
    clouds_pct: float | None = None
    visibility_m: float | None = None
    condition_id: int | None = None
    condition: str = ""
    place: str = "your area"
    timestamp: int | None = None


@dataclass(frozen=True)
class ForecastStep:
    """Immutable 3-hour forecast entry.

    Attributes:
        temperature: Air temperature (°C)
        humidity: Relative humidity (%)
        wind_speed_ms: Sustained wind speed (m/s)
        wind_gust_ms: Wind gust (m/s)
        clouds_pct: Cloud cover (%)
        condition_id: OpenWeather condition code
        rain_3h_mm: Rain accumulated over the step (mm)
        snow_3h_mm: Snow accumulated over the step (mm liquid equivalent)
        timestamp: Step time, seconds since epoch
        time_text: Step time as text (e.g. '2024-01-01 12:00:00')
    """
    temperature: float | None = None
    humidity: float | None = None
    wind_speed_ms: float | None = None
    wind_gust_ms: float | None = None
    clouds_pct: float | None = None
    condition_id: int | None = None
    rain_3h_mm: float | None = None
    snow_3h_mm: float | None = None
    timestamp: int | None = None
    time_text: str = ""


def to_finite(value: Any) -> float | None:
    """Convert a raw value to a finite float, or None.

    Pure function. Booleans are rejected so that a stray True is never read
    as 1.0.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _to_int(value: Any) -> int | None:
    number = to_finite(value)
    return int(number) if number is not None else None


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a nested dict, or an empty one if missing or malformed."""
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _primary_condition(data: dict[str, Any]) -> dict[str, Any] | None:
    weather = data.get("weather")
    if not isinstance(weather, list) or not weather:
        return None
    first = weather[0]
    return first if isinstance(first, dict) else None


def parse_observation(data: Any) -> Observation | None:
    """Parse an OpenWeather current-weather dict into an Observation.

    Pure function: takes raw dict, returns typed Observation or None if the
    payload has no 'main' block or no primary condition entry.

    Args:
        data: Current weather dict from the weather API client

    Returns:
        Observation object or None if the payload is unusable
    """
    if not isinstance(data, dict):
        return None

    main = data.get("main")
    condition = _primary_condition(data)
    if not isinstance(main, dict) or condition is None:
        return None

    wind = _section(data, "wind")
    clouds = _section(data, "clouds")

    return Observation(
        temperature=to_finite(main.get("temp")),
        feels_like=to_finite(main.get("feels_like")),
        humidity=to_finite(main.get("humidity")),
        pressure_hpa=to_finite(main.get("pressure")),
        wind_speed_ms=to_finite(wind.get("speed")),
        wind_gust_ms=to_finite(wind.get("gust")),
        clouds_pct=to_finite(clouds.get("all")),
        visibility_m=to_finite(data.get("visibility")),
        condition_id=_to_int(condition.get("id")),
        condition=str(condition.get("main") or ""),
        place=str(data.get("name") or "your area"),
        timestamp=_to_int(data.get("dt")),
    )


def parse_forecast_step(item: Any) -> ForecastStep | None:
    """Parse a single forecast list entry into a ForecastStep.

    Pure function. Returns None for entries that are not dicts.
    """
    if not isinstance(item, dict):
        return None

    main = _section(item, "main")
    wind = _section(item, "wind")
    clouds = _section(item, "clouds")
    rain = _section(item, "rain")
    snow = _section(item, "snow")
    condition = _primary_condition(item) or {}

    return ForecastStep(
        temperature=to_finite(main.get("temp")),
        humidity=to_finite(main.get("humidity")),
        wind_speed_ms=to_finite(wind.get("speed")),
        wind_gust_ms=to_finite(wind.get("gust")),
        clouds_pct=to_finite(clouds.get("all")),
        condition_id=_to_int(condition.get("id")),
        rain_3h_mm=to_finite(rain.get("3h")),
        snow_3h_mm=to_finite(snow.get("3h")),
        timestamp=_to_int(item.get("dt")),
        time_text=str(item.get("dt_txt") or ""),
    )


def parse_forecast(data: Any) -> list[ForecastStep]:
    """Parse a forecast payload into a list of ForecastSteps.

    Pure function: accepts either a bare list of entries or a dict exposing
    a 'list' key. Already-parsed ForecastSteps pass through. Anything else
    yields an empty list.

    Args:
        data: Forecast payload from the weather API client

    Returns:
        ForecastSteps in their original order, malformed entries dropped
    """
    if isinstance(data, dict):
        data = data.get("list")

    if not isinstance(data, (list, tuple)):
        return []

    steps = []
    for item in data:
        if isinstance(item, ForecastStep):
            steps.append(item)
            continue
        step = parse_forecast_step(item)
        if step is not None:
            steps.append(step)

    return steps

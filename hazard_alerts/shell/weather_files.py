"""Weather payload reader - Imperative Shell.

Reads OpenWeather-shaped current weather and forecast payloads saved as
JSON files. Parsing into typed records happens in the functional core.
"""

import json
import logging
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


def read_json(path: str | Path) -> Any:
    """Read a JSON document from disk.

    This method performs file I/O.

    Args:
        path: Path to the JSON file

    Returns:
        Decoded JSON value

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    path = Path(path)
    logger.info("Reading %s", path)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_weather_inputs(
    observation_path: str | Path,
    forecast_path: str | Path | None = None,
) -> tuple[Any, Any]:
    """Read the observation and optional forecast payloads.

    Args:
        observation_path: Current weather JSON file
        forecast_path: Forecast JSON file, or None to derive without one

    Returns:
        Tuple of (observation payload, forecast payload or None)
    """
    observation = read_json(observation_path)

    forecast = None
    if forecast_path is not None:
        forecast = read_json(forecast_path)
    else:
        logger.info("No forecast given, forecast-based rules will not fire")

    return observation, forecast

"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with the outside world:
- Threshold configuration loading (YAML files/environment)
- Weather payload reading (JSON files)

Keep this layer thin and simple. All business logic should be in core.
"""

from hazard_alerts.shell.config_loader import load_config, load_config_from_dict
from hazard_alerts.shell.weather_files import read_json, read_weather_inputs

__all__ = [
    "load_config",
    "load_config_from_dict",
    "read_json",
    "read_weather_inputs",
]

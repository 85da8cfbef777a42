"""Command Line Entry Point.

Thin wrapper that loads configuration and weather payloads, runs the
functional core and prints the result.

Usage:
    # Human-readable report
    python -m hazard_alerts.main weather.json --forecast forecast.json

    # JSON array of alerts
    python -m hazard_alerts.main weather.json --forecast forecast.json --json

    # Custom thresholds, wildfire alerts off
    python -m hazard_alerts.main weather.json --config thresholds.yaml --disable-wildfire

Environment:
    HAZARD_CONFIG_PATH: Path to thresholds file (default: config/thresholds.yaml)
    ENABLE_WILDFIRE: true/false to toggle wildfire risk alerts
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import replace

import yaml

from hazard_alerts.core.config import validate_thresholds
from hazard_alerts.core.engine import derive_alerts
from hazard_alerts.core.formatter import format_alert_report
from hazard_alerts.shell.config_loader import load_config
from hazard_alerts.shell.weather_files import read_weather_inputs


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_CONFIG_INVALID = 2


def _configure_logging() -> None:
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Derive hazard alerts from a weather observation and forecast",
    )
    parser.add_argument(
        "observation",
        help="Path to the current weather JSON payload",
    )
    parser.add_argument(
        "--forecast",
        default=None,
        help="Path to the forecast JSON payload (list or object with 'list')",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a thresholds YAML file (default: HAZARD_CONFIG_PATH or config/thresholds.yaml)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print alerts as a JSON array instead of a report",
    )
    parser.add_argument(
        "--disable-wildfire",
        action="store_true",
        help="Turn off wildfire risk alerts for this run",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one derivation from the command line.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (yaml.YAMLError, ValueError) as e:
        logger.error("Failed to load configuration: %s", e)
        return EXIT_INPUT_ERROR

    if args.disable_wildfire:
        config = replace(config, flags=replace(config.flags, enable_wildfire=False))

    validation = validate_thresholds(config.thresholds)
    for warning in validation.warnings:
        logger.warning("Config warning: %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("Config error: %s: %s", error.field, error.message)
        return EXIT_CONFIG_INVALID

    try:
        observation, forecast = read_weather_inputs(args.observation, args.forecast)
    except (OSError, ValueError) as e:
        logger.error("Failed to read weather input: %s", e)
        return EXIT_INPUT_ERROR

    alerts = derive_alerts(observation, forecast, config)

    if not alerts:
        logger.warning("Observation has no usable weather data, no alerts derived")

    if args.json:
        print(json.dumps([a.to_dict() for a in alerts], indent=2, ensure_ascii=False))
    else:
        print(format_alert_report(alerts, observation))

    return EXIT_OK


def cli() -> None:
    """Console script entry point."""
    _configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    cli()

"""Tests for the command line entry point."""

import json

import pytest

from hazard_alerts.main import (
    EXIT_CONFIG_INVALID,
    EXIT_INPUT_ERROR,
    EXIT_OK,
    main,
)


WEATHER = {
    "dt": 1_700_000_000,
    "name": "Testville",
    "main": {"temp": 33, "feels_like": 33, "humidity": 15, "pressure": 1008},
    "wind": {"speed": 9},
    "clouds": {"all": 0},
    "visibility": 10000,
    "weather": [{"id": 800, "main": "Clear"}],
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("ENABLE_WILDFIRE", raising=False)
    monkeypatch.delenv("HAZARD_CONFIG_PATH", raising=False)


@pytest.fixture
def files(tmp_path):
    """Write weather, forecast and config files; return their paths."""
    weather = tmp_path / "weather.json"
    weather.write_text(json.dumps(WEATHER))
    forecast = tmp_path / "forecast.json"
    forecast.write_text(json.dumps({"list": []}))
    config = tmp_path / "thresholds.yaml"
    config.write_text("flags:\n  enable_wildfire: true\n")
    return {"weather": str(weather), "forecast": str(forecast), "config": str(config)}


class TestMain:
    """Tests for main function."""

    def test_json_output(self, files, capsys):
        """--json prints an array of alert objects."""
        code = main([
            files["weather"], "--forecast", files["forecast"],
            "--config", files["config"], "--json",
        ])

        assert code == EXIT_OK
        alerts = json.loads(capsys.readouterr().out)
        assert [a["id"] for a in alerts] == ["wind-advisory", "wildfire-risk", "seismic-info"]
        assert alerts[-1]["timestamp"] == 1_700_000_000_000 + 11

    def test_report_output(self, files, capsys):
        code = main([files["weather"], "--config", files["config"]])

        assert code == EXIT_OK
        out = capsys.readouterr().out
        assert "Wind Advisory" in out
        assert "Elevated Wildfire Risk" in out

    def test_disable_wildfire(self, files, capsys):
        code = main([files["weather"], "--config", files["config"], "--json", "--disable-wildfire"])

        assert code == EXIT_OK
        ids = [a["id"] for a in json.loads(capsys.readouterr().out)]
        assert "wildfire-risk" not in ids

    def test_missing_observation(self, files, tmp_path):
        code = main([str(tmp_path / "missing.json"), "--config", files["config"]])
        assert code == EXIT_INPUT_ERROR

    def test_invalid_json(self, files, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops")
        assert main([str(bad), "--config", files["config"]]) == EXIT_INPUT_ERROR

    def test_non_utf8_observation(self, files, tmp_path):
        """Undecodable bytes are an input error, not a crash."""
        bad = tmp_path / "latin1.json"
        bad.write_bytes(b'{"name": "\xff"}')
        assert main([str(bad), "--config", files["config"]]) == EXIT_INPUT_ERROR

    def test_nan_threshold_in_yaml(self, files, tmp_path):
        config = tmp_path / "nan.yaml"
        config.write_text("thresholds:\n  fog:\n    vis_warning_m: .nan\n")
        assert main([files["weather"], "--config", str(config)]) == EXIT_INPUT_ERROR

    def test_scalar_flags_section(self, files, tmp_path):
        config = tmp_path / "flags.yaml"
        config.write_text("flags: enable_wildfire\n")
        assert main([files["weather"], "--config", str(config)]) == EXIT_INPUT_ERROR

    def test_unparseable_config(self, files, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("thresholds:\n  wind:\n    warning_ms: strong\n")
        assert main([files["weather"], "--config", str(config)]) == EXIT_INPUT_ERROR

    def test_inverted_thresholds(self, files, tmp_path):
        """A warning below its advisory is rejected before any derivation."""
        config = tmp_path / "inverted.yaml"
        config.write_text("thresholds:\n  wind:\n    advisory_ms: 20\n    warning_ms: 10\n")
        assert main([files["weather"], "--config", str(config)]) == EXIT_CONFIG_INVALID

    def test_unusable_observation(self, tmp_path, files, capsys):
        """A payload without weather data prints an empty list."""
        empty = tmp_path / "empty.json"
        empty.write_text("{}")

        code = main([str(empty), "--config", files["config"], "--json"])

        assert code == EXIT_OK
        assert json.loads(capsys.readouterr().out) == []

"""Unit tests for alert suppression logic.

Pure function tests - no mocks needed.
"""

from hazard_alerts.core.suppression import (
    SuppressionState,
    allows_rain_advisory,
    allows_snow_advisory,
    mark_flood_issued,
    mark_winter_storm_issued,
)


class TestSuppressionState:
    """Tests for SuppressionState and its helpers."""

    def test_starts_clear(self):
        """A fresh state allows every advisory."""
        state = SuppressionState()
        assert state.any_issued is False
        assert allows_rain_advisory(state) is True
        assert allows_snow_advisory(state) is True

    def test_mark_flood_returns_copy(self):
        """Marking returns a new state and leaves the original alone."""
        state = SuppressionState()
        marked = mark_flood_issued(state)
        assert marked.flood_issued is True
        assert state.flood_issued is False

    def test_flood_blocks_rain_and_snow(self):
        """A flood alert blocks both lighter advisories."""
        state = mark_flood_issued(SuppressionState())
        assert allows_rain_advisory(state) is False
        assert allows_snow_advisory(state) is False

    def test_winter_storm_blocks_rain_and_snow(self):
        """A winter storm alert blocks both lighter advisories."""
        state = mark_winter_storm_issued(SuppressionState())
        assert state.winter_storm_issued is True
        assert allows_rain_advisory(state) is False
        assert allows_snow_advisory(state) is False

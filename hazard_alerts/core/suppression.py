"""Alert suppression logic - Pure functions.

This module tracks which heavy alerts already fired during one derivation
call so that lighter advisories for the same phenomenon can be skipped.

Note: The state lives for a single call only. Nothing here is persisted
or shared between calls.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SuppressionState:
    """Per-call record of heavy alerts already issued.

    Attributes:
        flood_issued: A heavy-rain Flood Watch or Warning fired
        winter_storm_issued: A Winter Storm Watch or Warning fired
    """
    flood_issued: bool = False
    winter_storm_issued: bool = False

    @property
    def any_issued(self) -> bool:
        """Returns True if any heavy precipitation alert fired."""
        return self.flood_issued or self.winter_storm_issued


def mark_flood_issued(state: SuppressionState) -> SuppressionState:
    """Return a copy of the state with the flood flag set.

    Pure function.
    """
    return replace(state, flood_issued=True)


def mark_winter_storm_issued(state: SuppressionState) -> SuppressionState:
    """Return a copy of the state with the winter storm flag set.

    Pure function.
    """
    return replace(state, winter_storm_issued=True)


def allows_rain_advisory(state: SuppressionState) -> bool:
    """Check whether a plain Rain Advisory may still fire.

    Pure function.
    """
    return not state.any_issued


def allows_snow_advisory(state: SuppressionState) -> bool:
    """Check whether a Snow Advisory may still fire.

    Pure function.
    """
    return not state.any_issued

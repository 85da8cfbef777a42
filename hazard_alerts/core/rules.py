"""Hazard rule evaluation - Pure functions.

This module decides which hazard alerts a weather snapshot and its 24-hour
forecast rollups should raise. Each check_* function is an independent rule
that returns a RuleOutcome holding zero or one AlertCandidate plus the
suppression state handed to the next rule.

RULES fixes the evaluation order. Order matters: the light precipitation
rule reads suppression flags set by the flood and winter storm rules that
run before it.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable

from hazard_alerts.core.aggregates import ForecastAggregates
from hazard_alerts.core.alert import (
    ADVISORY,
    COLD,
    FIRE,
    FLOOD,
    HEAT,
    INFO,
    INFORMATION,
    RAIN,
    SNOW,
    STORM,
    WARNING,
    WATCH,
    WEATHER,
    WIND,
    AlertCandidate,
)
from hazard_alerts.core.config import FeatureFlags, ThresholdConfig
from hazard_alerts.core.observation import Observation
from hazard_alerts.core.suppression import (
    SuppressionState,
    allows_rain_advisory,
    allows_snow_advisory,
    mark_flood_issued,
    mark_winter_storm_issued,
)


logger = logging.getLogger(__name__)

LEARN_MORE_URL = "https://example.com/learn"

# Fixed envelope of the low-pressure rule
UNSETTLED_CLOUDS_PCT = 70.0
UNSETTLED_PRECIP_MM = 10.0
FLOOD_HUMIDITY_PCT = 85.0

MS_TO_KMH = 3.6


@dataclass(frozen=True)
class RuleContext:
    """Inputs shared by every rule in one derivation call.

    Attributes:
        observation: Current weather snapshot
        aggregates: 24-hour forecast rollups
        thresholds: Numeric cutoffs
        flags: Feature toggles
    """
    observation: Observation
    aggregates: ForecastAggregates
    thresholds: ThresholdConfig
    flags: FeatureFlags


@dataclass(frozen=True)
class RuleOutcome:
    """Result of a single rule.

    Attributes:
        alert: Candidate alert, or None if the rule did not fire
        state: Suppression state after the rule ran
    """
    alert: AlertCandidate | None
    state: SuppressionState

    @property
    def fired(self) -> bool:
        """Returns True if the rule produced an alert."""
        return self.alert is not None


Rule = Callable[[RuleContext, SuppressionState], RuleOutcome]


def _at_least(value: float | None, threshold: float) -> bool:
    return value is not None and value >= threshold


def _at_most(value: float | None, threshold: float) -> bool:
    return value is not None and value <= threshold


def _or_floor(value: float | None) -> float:
    return value if value is not None else -math.inf


def _url(slug: str) -> str:
    return f"{LEARN_MORE_URL}/{slug}"


def check_wind(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """High Wind Warning or Wind Advisory from sustained wind and gusts.

    Pure function. The warning preempts the advisory.
    """
    obs, wind = ctx.observation, ctx.thresholds.wind
    sustained = _or_floor(obs.wind_speed_ms)
    gust_now = _or_floor(obs.wind_gust_ms)
    gust_24h = ctx.aggregates.gust_24h_max_ms

    peak = max(sustained, gust_now, gust_24h)
    if not math.isfinite(peak):
        return RuleOutcome(None, state)
    peak_kmh = round(peak * MS_TO_KMH)

    if (
        sustained >= wind.warning_ms
        or gust_now >= wind.gust_warning_ms
        or gust_24h >= wind.gust_warning_ms
    ):
        return RuleOutcome(AlertCandidate(
            id="high-wind",
            title="High Wind Warning",
            description=(
                f"Damaging winds up to ≈ {peak_kmh} km/h possible in {obs.place}. "
                "Secure loose items and use caution outdoors."
            ),
            category=WIND,
            severity=WARNING,
            url=_url("high-wind"),
            precaution="Secure outdoor items, avoid standing under trees; drive carefully on exposed routes.",
        ), state)

    if (
        sustained >= wind.advisory_ms
        or gust_now >= wind.gust_advisory_ms
        or gust_24h >= wind.gust_advisory_ms
    ):
        return RuleOutcome(AlertCandidate(
            id="wind-advisory",
            title="Wind Advisory",
            description=(
                f"Breezy conditions with gusts near ≈ {peak_kmh} km/h expected in {obs.place}. "
                "Lightweight objects may shift."
            ),
            category=WIND,
            severity=ADVISORY,
            url=_url("wind-advisory"),
            precaution="Secure light items and take care on bridges or open roads.",
        ), state)

    return RuleOutcome(None, state)


def check_low_pressure(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Low-pressure system advisory, escalated to a Flood Watch when wet.

    Pure function. Needs low pressure with heavy cloud (now or forecast)
    plus notable 24h precipitation.
    """
    obs, agg, thresholds = ctx.observation, ctx.aggregates, ctx.thresholds

    if not _at_most(obs.pressure_hpa, thresholds.low_pressure_hpa):
        return RuleOutcome(None, state)

    heavy_cloud = (
        _at_least(obs.clouds_pct, UNSETTLED_CLOUDS_PCT)
        or agg.clouds_24h_max >= thresholds.clouds_heavy_pct
    )
    wet = agg.rain_24h_mm >= UNSETTLED_PRECIP_MM or agg.snow_24h_mm >= UNSETTLED_PRECIP_MM
    if not (heavy_cloud and wet):
        return RuleOutcome(None, state)

    if (
        _at_least(obs.humidity, FLOOD_HUMIDITY_PCT)
        or agg.rain_24h_mm >= thresholds.flood.rain_24h_watch_mm
    ):
        return RuleOutcome(AlertCandidate(
            id="flood-watch",
            title="Flood Watch",
            description=(
                f"Low pressure with very humid air and/or heavy totals in {obs.place}. "
                "Localized surface water possible in poor drainage."
            ),
            category=FLOOD,
            severity=WATCH,
            url=_url("low-pressure"),
            precaution=(
                "Avoid walking/driving through water; move vehicles from flood-prone streets; "
                "head to higher ground if needed."
            ),
        ), state)

    return RuleOutcome(AlertCandidate(
        id="low-pressure",
        title="Low-Pressure System Advisory",
        description=(
            f"Low pressure (≈ {obs.pressure_hpa:.0f} hPa) with heavy cloud in {obs.place}. "
            "Showers possible; plan accordingly."
        ),
        category=WEATHER,
        severity=ADVISORY,
        url=_url("low-pressure"),
        precaution="Carry a rain layer; allow extra travel time for showers and lower visibility.",
    ), state)


def check_fog(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Dense Fog Warning or Fog Advisory from current conditions only.

    Pure function.
    """
    obs, fog = ctx.observation, ctx.thresholds.fog

    if not (
        _at_least(obs.humidity, fog.humidity_min_pct)
        and _at_most(obs.wind_speed_ms, fog.wind_max_ms)
        and obs.visibility_m is not None
    ):
        return RuleOutcome(None, state)

    visibility = obs.visibility_m

    if visibility <= fog.vis_warning_m:
        return RuleOutcome(AlertCandidate(
            id="dense-fog-warning",
            title="Dense Fog Warning",
            description=(
                f"Visibility down to ≈ {visibility:.0f} m in {obs.place}. "
                "Travel may be dangerous."
            ),
            category=WEATHER,
            severity=WARNING,
            url=_url("fog"),
            precaution="Delay travel if possible; use low-beam headlights and leave extra stopping distance.",
        ), state)

    if visibility <= fog.vis_advisory_m:
        return RuleOutcome(AlertCandidate(
            id="fog-advisory",
            title="Fog Advisory",
            description=(
                f"Patchy fog with visibility near ≈ {visibility:.0f} m in {obs.place}."
            ),
            category=WEATHER,
            severity=ADVISORY,
            url=_url("fog"),
            precaution="Slow down, use low-beam headlights, and allow extra travel time.",
        ), state)

    return RuleOutcome(None, state)


def check_thunderstorm(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Thunderstorm Watch when any 24h step carries a thunderstorm code.

    Pure function.
    """
    if not ctx.aggregates.thunder_24h:
        return RuleOutcome(None, state)

    return RuleOutcome(AlertCandidate(
        id="tstorm-watch",
        title="Thunderstorm Watch",
        description=(
            f"Model guidance shows thunderstorms within 24 hours near {ctx.observation.place}. "
            "Lightning and brief gusts possible."
        ),
        category=STORM,
        severity=WATCH,
        url=_url("thunderstorms"),
        precaution="Stay indoors during lightning; unplug sensitive electronics; avoid tall isolated trees.",
    ), state)


def check_heavy_rain(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Flood Warning or Flood Watch from heavy rain totals.

    Pure function. Either alert marks the flood as issued.
    """
    agg, flood, place = ctx.aggregates, ctx.thresholds.flood, ctx.observation.place

    if agg.rain_24h_mm >= flood.rain_24h_warn_mm or agg.rain_3h_max_mm >= flood.rain_3h_warn_mm:
        return RuleOutcome(AlertCandidate(
            id="flood-warning-rain",
            title="Flood Warning (Heavy Rain)",
            description=(
                f"Very heavy rain (≈ {agg.rain_24h_mm:.0f} mm) expected within 24h in {place}. "
                "Rapid water level rise possible."
            ),
            category=FLOOD,
            severity=WARNING,
            url=_url("flooding"),
            precaution="Avoid flood zones; never drive through floodwaters; move valuables above ground level.",
        ), mark_flood_issued(state))

    if agg.rain_24h_mm >= flood.rain_24h_watch_mm or agg.rain_3h_max_mm >= flood.rain_3h_watch_mm:
        return RuleOutcome(AlertCandidate(
            id="flood-watch-rain",
            title="Flood Watch (Heavy Rain)",
            description=(
                f"Heavy rain (≈ {agg.rain_24h_mm:.0f} mm) expected within 24h in {place}. "
                "Minor flooding possible in low-lying areas."
            ),
            category=FLOOD,
            severity=WATCH,
            url=_url("flooding"),
            precaution="Check local drainage; avoid underpasses and low spots; plan alternate travel routes.",
        ), mark_flood_issued(state))

    return RuleOutcome(None, state)


def check_heavy_snow(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Winter Storm Warning or Watch from heavy snow totals.

    Pure function. Either alert marks the winter storm as issued.
    """
    agg, snow, place = ctx.aggregates, ctx.thresholds.snow, ctx.observation.place

    if agg.snow_24h_mm >= snow.snow_24h_warn_mm or agg.snow_3h_max_mm >= snow.snow_3h_warn_mm:
        return RuleOutcome(AlertCandidate(
            id="winter-storm-warning",
            title="Winter Storm Warning",
            description=(
                f"Heavy snowfall (≈ {agg.snow_24h_mm:.0f} mm liquid) possible within 24h in {place}. "
                "Hazardous travel and reduced visibility likely."
            ),
            category=SNOW,
            severity=WARNING,
            url=_url("winter-storm"),
            precaution=(
                "Avoid non-essential travel; carry emergency kit; "
                "clear snow safely to prevent overexertion."
            ),
        ), mark_winter_storm_issued(state))

    if agg.snow_24h_mm >= snow.snow_24h_watch_mm or agg.snow_3h_max_mm >= snow.snow_3h_watch_mm:
        return RuleOutcome(AlertCandidate(
            id="winter-storm-watch",
            title="Winter Storm Watch",
            description=(
                f"Significant snowfall (≈ {agg.snow_24h_mm:.0f} mm liquid) possible within 24h "
                f"in {place}. Travel disruptions likely."
            ),
            category=SNOW,
            severity=WATCH,
            url=_url("winter-storm"),
            precaution="Delay travel if possible; keep warm clothing and supplies in vehicles.",
        ), mark_winter_storm_issued(state))

    return RuleOutcome(None, state)


def is_near_freezing(ctx: RuleContext) -> bool:
    """Check whether rain may freeze on contact.

    Pure function. True if the current temperature is at or below the pivot,
    or the forecast minimum is at or below 0°C or the pivot.
    """
    pivot = ctx.thresholds.wintry_mix_pivot_c
    min_temp = ctx.aggregates.temp_24h_min
    return (
        _at_most(ctx.observation.temperature, pivot)
        or min_temp <= 0
        or min_temp <= pivot
    )


def check_light_precipitation(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Freezing rain, wintry mix, rain or snow advisory.

    Pure function. Skipped entirely once a heavy-rain flood alert fired; the
    plain rain and snow advisories also yield to a winter storm alert.
    """
    if state.flood_issued:
        return RuleOutcome(None, state)

    agg, place = ctx.aggregates, ctx.observation.place

    if agg.rain_24h_mm > 0:
        near_freezing = is_near_freezing(ctx)

        if near_freezing and agg.snow_24h_mm == 0:
            return RuleOutcome(AlertCandidate(
                id="freezing-rain-advisory",
                title="Freezing Rain Advisory",
                description=(
                    f"Rain near freezing expected within 24h in {place}. "
                    "A glaze of ice may form on roads and power lines."
                ),
                category=COLD,
                severity=ADVISORY,
                url=_url("freezing-rain"),
                precaution="Avoid travel during icing; watch for falling branches and downed lines.",
            ), state)

        if near_freezing:
            return RuleOutcome(AlertCandidate(
                id="wintry-mix-advisory",
                title="Wintry Mix Advisory",
                description=(
                    f"A mix of rain and snow expected within 24h in {place}. "
                    "Roads and pavements may turn slushy and slick."
                ),
                category=COLD,
                severity=ADVISORY,
                url=_url("wintry-mix"),
                precaution="Drive slowly, increase following distance, and wear footwear with good grip.",
            ), state)

        if allows_rain_advisory(state):
            return RuleOutcome(AlertCandidate(
                id="rain-advisory",
                title="Rain Advisory",
                description=f"Showers (≈ {agg.rain_24h_mm:.0f} mm) expected within 24h in {place}.",
                category=RAIN,
                severity=ADVISORY,
                url=_url("rain"),
                precaution="Carry an umbrella; watch for slick roads and reduced visibility.",
            ), state)

        return RuleOutcome(None, state)

    if agg.rain_24h_mm == 0 and agg.snow_24h_mm > 0 and allows_snow_advisory(state):
        return RuleOutcome(AlertCandidate(
            id="snow-advisory",
            title="Snow Advisory",
            description=f"Light snow showers expected within 24h in {place}. Roads may be slick.",
            category=SNOW,
            severity=ADVISORY,
            url=_url("snow"),
            precaution="Drive slowly, increase following distance, and dress warmly.",
        ), state)

    return RuleOutcome(None, state)


def check_ice(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Icy Surface Advisory when freezing meets moisture.

    Pure function. Independent of suppression flags.
    """
    obs, agg, thresholds = ctx.observation, ctx.aggregates, ctx.thresholds

    freezing = _at_most(obs.temperature, 0) or agg.temp_24h_min <= 0
    precip_likely = agg.rain_24h_mm > 0 or agg.snow_24h_mm > 0 or agg.precip_any_24h
    moist = (
        _at_least(obs.humidity, thresholds.ice_humidity_pct)
        or agg.humidity_24h_max >= thresholds.ice_humidity_pct
    )

    if not (freezing and precip_likely and moist):
        return RuleOutcome(None, state)

    return RuleOutcome(AlertCandidate(
        id="ice-advisory",
        title="Icy Surface Advisory",
        description=(
            f"Freezing conditions with moisture in {obs.place}. "
            "Black ice possible on roads and pavements."
        ),
        category=COLD,
        severity=ADVISORY,
        url=_url("ice"),
        precaution="Walk/drive with caution; avoid sudden braking; use salt/grit where available.",
    ), state)


def check_wind_chill(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Wind Chill Warning or Advisory from the current feels-like temperature.

    Pure function.
    """
    obs, chill = ctx.observation, ctx.thresholds.wind_chill
    feels = obs.feels_like

    if _at_most(feels, chill.warning_c):
        return RuleOutcome(AlertCandidate(
            id="wind-chill-warning",
            title="Wind Chill Warning",
            description=(
                f"Dangerously cold wind chill (feels like ≈ {feels:.0f}°C) in {obs.place}. "
                "Frostbite can occur within minutes on exposed skin."
            ),
            category=COLD,
            severity=WARNING,
            url=_url("wind-chill"),
            precaution="Stay indoors if possible; cover all exposed skin and dress in layers.",
        ), state)

    if _at_most(feels, chill.advisory_c):
        return RuleOutcome(AlertCandidate(
            id="wind-chill-advisory",
            title="Wind Chill Advisory",
            description=f"Very cold wind chill (feels like ≈ {feels:.0f}°C) in {obs.place}.",
            category=COLD,
            severity=ADVISORY,
            url=_url("wind-chill"),
            precaution="Wear a hat, gloves and layers; limit time outdoors.",
        ), state)

    return RuleOutcome(None, state)


def heat_severity(temperature: float, humidity: float, ctx: RuleContext) -> str | None:
    """Coarse heat-index escalation.

    Pure function.

    Returns:
        WARNING, ADVISORY, or None
    """
    heat = ctx.thresholds.heat
    if temperature >= heat.warning_t and humidity >= heat.warning_rh:
        return WARNING
    if temperature >= heat.advisory_t and humidity >= heat.advisory_rh:
        return ADVISORY
    return None


def check_heat(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Heat Warning or Advisory at the warmest point of the next 24 hours.

    Pure function. Falls back to the current observation when no forecast
    step carries both temperature and humidity.
    """
    obs, warmest = ctx.observation, ctx.aggregates.warmest

    if warmest is not None:
        temperature, humidity = warmest.temperature, warmest.humidity
        when = "within 24h"
    else:
        temperature, humidity = obs.temperature, obs.humidity
        when = "now"

    if temperature is None or humidity is None:
        return RuleOutcome(None, state)

    severity = heat_severity(temperature, humidity, ctx)
    if severity is None:
        return RuleOutcome(None, state)

    if severity == WARNING:
        return RuleOutcome(AlertCandidate(
            id="heat-warning",
            title="Heat Warning",
            description=(
                f"Dangerously hot conditions (≈ {temperature:.0f}°C, {humidity:.0f}% RH) "
                f"{when} in {obs.place}."
            ),
            category=HEAT,
            severity=WARNING,
            url=_url("heat-safety"),
            precaution=(
                "Limit outdoor activity, drink water frequently, seek shade/AC, "
                "and check on vulnerable neighbors."
            ),
        ), state)

    return RuleOutcome(AlertCandidate(
        id="heat-advisory",
        title="Heat Advisory",
        description=(
            f"Hot and humid conditions (≈ {temperature:.0f}°C, {humidity:.0f}% RH) "
            f"{when} in {obs.place}."
        ),
        category=HEAT,
        severity=ADVISORY,
        url=_url("heat-safety"),
        precaution="Hydrate often, avoid strenuous activity at midday, and take breaks in the shade.",
    ), state)


def check_wildfire(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Elevated Wildfire Risk from current humidity against temperature and wind.

    Pure function. Gated by the enable_wildfire feature flag.
    """
    if not ctx.flags.enable_wildfire:
        return RuleOutcome(None, state)

    obs, fire = ctx.observation, ctx.thresholds.wildfire

    if not (
        _at_most(obs.humidity, fire.rh_max_pct)
        and _at_least(obs.temperature, fire.t_min_c)
        and _at_least(obs.wind_speed_ms, fire.wind_min_ms)
    ):
        return RuleOutcome(None, state)

    return RuleOutcome(AlertCandidate(
        id="wildfire-risk",
        title="Elevated Wildfire Risk",
        description=(
            f"Hot, dry and windy conditions ({obs.humidity:.0f}% RH, ≈ {obs.temperature:.0f}°C) "
            f"in {obs.place}. Fires may start and spread quickly."
        ),
        category=FIRE,
        severity=WATCH,
        url=_url("wildfire"),
        precaution="Avoid open flames and spark-producing equipment; follow local burn bans.",
    ), state)


def check_seismic_disclaimer(ctx: RuleContext, state: SuppressionState) -> RuleOutcome:
    """Informational note that seismic hazards are not derived from weather.

    Pure function. Always fires.
    """
    return RuleOutcome(AlertCandidate(
        id="seismic-info",
        title="No Seismic Alerts From Weather",
        description=(
            "Earthquakes and volcanic activity are not predictable from weather data. "
            "For real seismic alerts, integrate official feeds (e.g., USGS/EMSC)."
        ),
        category=INFORMATION,
        severity=INFO,
        url=_url("seismic"),
        precaution="Keep an emergency kit and family plan; follow national seismic agency guidance.",
    ), state)


RULES: tuple[Rule, ...] = (
    check_wind,
    check_low_pressure,
    check_fog,
    check_thunderstorm,
    check_heavy_rain,
    check_heavy_snow,
    check_light_precipitation,
    check_ice,
    check_wind_chill,
    check_heat,
    check_wildfire,
    check_seismic_disclaimer,
)


def evaluate_rules(
    ctx: RuleContext,
    rules: tuple[Rule, ...] = RULES,
) -> list[tuple[int, AlertCandidate]]:
    """Run every rule in order, threading the suppression state.

    Pure function.

    Args:
        ctx: Inputs shared by all rules
        rules: Rules in priority order

    Returns:
        (rule position, candidate) pairs for the rules that fired, in order
    """
    state = SuppressionState()
    fired = []

    for position, rule in enumerate(rules):
        outcome = rule(ctx, state)
        state = outcome.state
        if outcome.alert is not None:
            logger.debug("Rule %s fired: %s", rule.__name__, outcome.alert.id)
            fired.append((position, outcome.alert))

    return fired

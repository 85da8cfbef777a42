"""Alert data model - Pure data structures.

An Alert is the engine's output record. Alerts are created fresh on every
derivation call and never mutated afterwards.
"""

from dataclasses import asdict, dataclass
from typing import Any


# Closed category set
WIND = "Wind"
FLOOD = "Flood"
SNOW = "Snow"
COLD = "Cold"
HEAT = "Heat"
FIRE = "Fire"
STORM = "Storm"
RAIN = "Rain"
WEATHER = "Weather"
INFORMATION = "Information"

CATEGORIES = (WIND, FLOOD, SNOW, COLD, HEAT, FIRE, STORM, RAIN, WEATHER, INFORMATION)

# Severity tiers, ascending urgency
INFO = "Info"
ADVISORY = "Advisory"
WATCH = "Watch"
WARNING = "Warning"

SEVERITIES = (INFO, ADVISORY, WATCH, WARNING)


@dataclass(frozen=True)
class Alert:
    """Immutable hazard alert.

    Attributes:
        id: Stable short identifier (e.g. 'high-wind')
        title: Short human label
        description: Sentence naming the place and representative magnitude
        category: One of CATEGORIES
        severity: One of SEVERITIES
        timestamp: Milliseconds since epoch, offset by rule position
        url: Static reference URL for this alert id
        precaution: Actionable guidance
    """
    id: str
    title: str
    description: str
    category: str
    severity: str
    timestamp: int
    url: str
    precaution: str

    @property
    def is_actionable(self) -> bool:
        """Returns True for anything more urgent than Info."""
        return self.severity != INFO

    def to_dict(self) -> dict[str, Any]:
        """Return the alert as a JSON-ready dict."""
        return asdict(self)


@dataclass(frozen=True)
class AlertCandidate:
    """An alert a rule decided to raise, before it is stamped.

    The assembler turns candidates into Alerts once their position in the
    rule sequence is known.
    """
    id: str
    title: str
    description: str
    category: str
    severity: str
    url: str
    precaution: str

    def stamp(self, timestamp: int) -> Alert:
        """Return the finished Alert carrying the given timestamp."""
        return Alert(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            severity=self.severity,
            timestamp=timestamp,
            url=self.url,
            precaution=self.precaution,
        )

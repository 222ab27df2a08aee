"""Political and social-media state of the operation, and its status panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PoliticalPosition(Enum):
    """Office held by a politician."""

    PRESIDENT = "President"
    DEFENSE_MINISTER = "DefenseMinister"
    INTERIOR_MINISTER = "InteriorMinister"
    STATE_GOVERNOR = "StateGovernor"
    LOCAL_MAYOR = "LocalMayor"
    OPPOSITION = "Opposition"


class EventType(Enum):
    """Kinds of political events."""

    CIVILIAN_CASUALTY = "CivilianCasualty"
    MILITARY_CASUALTY = "MilitaryCasualty"
    CARTEL_SURRENDER = "CartelSurrender"
    INFRASTRUCTURE_DAMAGE = "InfrastructureDamage"
    PUBLIC_PROTEST = "PublicProtest"
    INTERNATIONAL_CRITICISM = "InternationalCriticism"
    MEDIA_EXPOSURE = "MediaExposure"
    POLITICAL_STATEMENT = "PoliticalStatement"
    OPERATION_ESCALATION = "OperationEscalation"
    CEASEFIRE = "Ceasefire"


class GovernmentResponseLevel(Enum):
    """How hard the government is willing to push."""

    LIMITED = "Limited"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"
    ALL_OUT = "AllOut"


class ContentType(Enum):
    """Kinds of viral social-media content."""

    COMBAT_FOOTAGE = "CombatFootage"
    CIVILIAN_FLEEING = "CivilianFleeing"
    PROPERTY_DAMAGE = "PropertyDamage"
    POLITICAL_SPEECH = "PoliticalSpeech"
    PROTEST_FOOTAGE = "ProtestFootage"
    CARTEL_PROPAGANDA = "CartelPropaganda"


@dataclass
class Politician:
    """A decision maker and the pressure on them."""

    name: str
    position: PoliticalPosition
    influence: float
    support_for_operation: float
    pressure_received: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "position": self.position.value,
            "influence": float(self.influence),
            "support_for_operation": float(self.support_for_operation),
            "pressure_received": float(self.pressure_received),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Politician":
        return cls(
            name=str(data["name"]),
            position=PoliticalPosition(data["position"]),
            influence=float(data["influence"]),
            support_for_operation=float(data["support_for_operation"]),
            pressure_received=float(data["pressure_received"]),
        )


@dataclass
class PoliticalEvent:
    """Something that happened and how much it mattered."""

    event_type: EventType
    timestamp: float
    impact_score: float
    description: str
    media_coverage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "timestamp": float(self.timestamp),
            "impact_score": float(self.impact_score),
            "description": self.description,
            "media_coverage": float(self.media_coverage),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PoliticalEvent":
        return cls(
            event_type=EventType(data["event_type"]),
            timestamp=float(data["timestamp"]),
            impact_score=float(data["impact_score"]),
            description=str(data["description"]),
            media_coverage=float(data["media_coverage"]),
        )


@dataclass
class ViralContent:
    """A piece of content spreading on social media."""

    content_type: ContentType
    reach: int
    sentiment: float
    timestamp: float
    impact_multiplier: float


def _default_politicians() -> list[Politician]:
    return [
        Politician("President López Obrador", PoliticalPosition.PRESIDENT, 0.9, 0.8),
        Politician("Defense Minister", PoliticalPosition.DEFENSE_MINISTER, 0.7, 0.9),
        Politician("Interior Minister", PoliticalPosition.INTERIOR_MINISTER, 0.6, 0.7),
        Politician("Sinaloa Governor", PoliticalPosition.STATE_GOVERNOR, 0.5, 0.4),
    ]


@dataclass
class PoliticalState:
    """Stability, support, pressure and casualties; fractions run from 0 to 1."""

    government_stability: float = 0.7
    public_support_cartel: float = 0.3
    public_support_government: float = 0.6
    international_pressure: float = 0.2
    media_attention: float = 0.1
    political_will: float = 0.8
    casualties_civilian: int = 0
    casualties_military: int = 0
    casualties_cartel: int = 0
    infrastructure_damage: float = 0.0
    operation_duration: float = 0.0
    decision_threshold: float = 0.3
    active_politicians: list[Politician] = field(default_factory=_default_politicians)
    recent_events: list[PoliticalEvent] = field(default_factory=list)
    government_response_level: GovernmentResponseLevel = GovernmentResponseLevel.LIMITED

    _FLOAT_FIELDS = (
        "government_stability",
        "public_support_cartel",
        "public_support_government",
        "international_pressure",
        "media_attention",
        "political_will",
        "infrastructure_damage",
        "operation_duration",
        "decision_threshold",
    )
    _INT_FIELDS = ("casualties_civilian", "casualties_military", "casualties_cartel")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this state."""
        data: dict[str, Any] = {name: float(getattr(self, name)) for name in self._FLOAT_FIELDS}
        data.update({name: int(getattr(self, name)) for name in self._INT_FIELDS})
        data["active_politicians"] = [p.to_dict() for p in self.active_politicians]
        data["recent_events"] = [e.to_dict() for e in self.recent_events]
        data["government_response_level"] = self.government_response_level.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PoliticalState":
        """Build a state from a mapping produced by :meth:`to_dict`."""
        kwargs: dict[str, Any] = {name: float(data[name]) for name in cls._FLOAT_FIELDS}
        kwargs.update({name: int(data[name]) for name in cls._INT_FIELDS})
        return cls(
            active_politicians=[Politician.from_dict(p) for p in data["active_politicians"]],
            recent_events=[PoliticalEvent.from_dict(e) for e in data["recent_events"]],
            government_response_level=GovernmentResponseLevel(data["government_response_level"]),
            **kwargs,
        )


def _default_hashtags() -> dict[str, float]:
    return {"#Culiacan": 0.1, "#OvidioGuzman": 0.05, "#Mexico": 0.03}


@dataclass
class SocialMediaInfluence:
    """Online sentiment, viral content and trending hashtags."""

    twitter_sentiment: float = -0.2
    facebook_engagement: float = 0.1
    viral_videos: list[ViralContent] = field(default_factory=list)
    hashtag_trends: dict[str, float] = field(default_factory=_default_hashtags)
    international_coverage: float = 0.05
    journalist_presence: int = 3


def response_level_for(pressure: float) -> GovernmentResponseLevel:
    """Response level the government adopts under a given decision pressure."""
    if pressure < 0.2:
        return GovernmentResponseLevel.ALL_OUT
    if pressure < 0.4:
        return GovernmentResponseLevel.AGGRESSIVE
    if pressure < 0.6:
        return GovernmentResponseLevel.MODERATE
    return GovernmentResponseLevel.LIMITED


def _graded(value: float, high: float, low: float, colors: tuple[str, str, str]) -> str:
    if value > high:
        return colors[0]
    if value > low:
        return colors[1]
    return colors[2]


def status_panel(state: PoliticalState, social: SocialMediaInfluence) -> list[tuple[str, str]]:
    """Lines of the political status panel as (text, colour name) pairs."""
    lines = [("🏛️ POLITICAL STATUS", "gold")]
    lines.append(
        (
            f"Stability: {state.government_stability * 100.0:.1f}%",
            _graded(state.government_stability, 0.7, 0.4, ("green", "yellow", "red")),
        )
    )
    lines.append(
        (
            f"Political Will: {state.political_will * 100.0:.1f}%",
            _graded(state.political_will, 0.6, 0.3, ("green", "yellow", "red")),
        )
    )
    lines.append((f"Public Support: {state.public_support_government * 100.0:.1f}%", "white"))
    lines.append(
        (
            f"Media Attention: {state.media_attention * 100.0:.1f}%",
            _graded(state.media_attention, 0.7, 0.4, ("red", "orange", "white")),
        )
    )
    lines.append((f"Intl. Pressure: {state.international_pressure * 100.0:.1f}%", "orange"))

    if state.casualties_civilian > 0 or state.casualties_military > 0:
        lines.append(
            (f"Casualties: {state.casualties_civilian}C {state.casualties_military}M", "red")
        )

    hours = int(state.operation_duration / 3600.0)
    minutes = int((state.operation_duration % 3600.0) / 60.0)
    lines.append((f"Duration: {hours}h {minutes}m", "gray"))

    if social.hashtag_trends:
        hashtag, trend = max(social.hashtag_trends.items(), key=lambda item: item[1])
        lines.append((f"Trending: {hashtag} ({trend * 100.0:.1f}%)", "cyan"))

    if state.recent_events:
        lines.append(("📰 LATEST:", "yellow"))
        lines.append((f"• {state.recent_events[-1].description}", "white"))

    return lines
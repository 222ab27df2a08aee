"""Simulation of political pressure, public opinion and media coverage."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from culiacan.model import GamePhase, GameState
from culiacan.political_state import (
    ContentType,
    EventType,
    PoliticalEvent,
    PoliticalPosition,
    PoliticalState,
    SocialMediaInfluence,
    ViralContent,
    response_level_for,
)

MAX_VIRAL_HISTORY = 10
MAX_EVENT_HISTORY = 20

_VIRAL_TYPES = (
    ContentType.COMBAT_FOOTAGE,
    ContentType.CIVILIAN_FLEEING,
    ContentType.PROPERTY_DAMAGE,
    ContentType.POLITICAL_SPEECH,
    ContentType.PROTEST_FOOTAGE,
)

_SENTIMENT_RANGES = {
    ContentType.COMBAT_FOOTAGE: (-0.8, -0.2),
    ContentType.CIVILIAN_FLEEING: (-0.9, -0.5),
    ContentType.PROPERTY_DAMAGE: (-0.7, -0.3),
    ContentType.POLITICAL_SPEECH: (-0.3, 0.3),
    ContentType.PROTEST_FOOTAGE: (-0.6, -0.1),
    ContentType.CARTEL_PROPAGANDA: (0.2, 0.6),
}

_POSITION_MULTIPLIERS = {
    PoliticalPosition.PRESIDENT: 1.0,
    PoliticalPosition.DEFENSE_MINISTER: 0.8,
    PoliticalPosition.INTERIOR_MINISTER: 0.6,
    PoliticalPosition.STATE_GOVERNOR: 0.9,
}

_HASHTAG_MULTIPLIERS = {
    "#Culiacan": 2.0,
    "#OvidioGuzman": 1.5,
    "#Mexico": 0.8,
}

CAPITULATION_TEXT = "Government orders cessation of operation and release of target"
CRITICISM_TEXT = "International human rights organizations express concern"


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass
class PoliticalSimulation:
    """Advances a political state and its social-media picture over time."""

    state: PoliticalState = field(default_factory=PoliticalState)
    social: SocialMediaInfluence = field(default_factory=SocialMediaInfluence)
    rng: random.Random = field(default_factory=random.Random)

    def update_pressure(self, dt: float, cartel_units: int, military_units: int) -> None:
        """Erode political will and stability as fighting and coverage go on."""
        state = self.state
        state.operation_duration += dt

        intensity = (cartel_units + military_units) / 50.0
        duration_pressure = min(state.operation_duration / 3600.0, 2.0)

        casualty_pressure = state.casualties_civilian * 0.05 + state.casualties_military * 0.03
        media_pressure = state.media_attention * 0.02
        duration_fatigue = duration_pressure * 0.01
        international_effect = state.international_pressure * 0.015

        state.political_will -= (
            casualty_pressure + media_pressure + duration_fatigue + international_effect
        ) * dt
        state.political_will = max(state.political_will, 0.0)

        stability_factors = (
            (1.0 - state.public_support_government) * 0.5
            + state.infrastructure_damage * 0.3
            + intensity * 0.2
        )
        state.government_stability = _clamp(
            state.government_stability - stability_factors * dt * 0.1
        )

        media_growth = intensity * 0.02 + state.casualties_civilian * 0.001
        state.media_attention = _clamp(state.media_attention + media_growth * dt)

        if self.rng.random() < intensity * dt * 0.1:
            self.generate_viral_content()

        self.update_hashtag_trends(dt)

        for politician in state.active_politicians:
            multiplier = _POSITION_MULTIPLIERS.get(politician.position, 0.4)
            politician.pressure_received += (media_pressure + international_effect) * multiplier * dt
            if politician.pressure_received > 0.5:
                politician.support_for_operation = max(
                    politician.support_for_operation - 0.1 * dt, 0.0
                )

    def generate_viral_content(self) -> ViralContent:
        """Create a new viral post, keep the history short and return the post."""
        content_type = self.rng.choice(_VIRAL_TYPES)
        reach = self.rng.randrange(1000, 100000)
        low, high = _SENTIMENT_RANGES[content_type]
        content = ViralContent(
            content_type=content_type,
            reach=reach,
            sentiment=self.rng.uniform(low, high),
            timestamp=self.state.operation_duration,
            impact_multiplier=self.rng.uniform(1.0, 3.0),
        )
        videos = self.social.viral_videos
        videos.append(content)
        if len(videos) > MAX_VIRAL_HISTORY:
            videos.pop(0)
        return content

    def update_hashtag_trends(self, dt: float) -> None:
        """Grow hashtag trends with media attention and add event-driven tags."""
        state = self.state
        trends = self.social.hashtag_trends
        base_growth = state.media_attention * dt * 0.1

        for hashtag, value in trends.items():
            growth = base_growth * _HASHTAG_MULTIPLIERS.get(hashtag, 0.5)
            trends[hashtag] = _clamp(value + growth)

        if state.casualties_civilian > 5:
            trends["#CivilianCasualties"] = state.casualties_civilian * 0.02
        if state.operation_duration > 7200.0:
            trends["#EndTheViolence"] = 0.3

    def decide(self, game_state: GameState, elapsed: float) -> float:
        """Weigh whether the government gives in; return the decision pressure."""
        state = self.state
        if not state.active_politicians:
            raise ValueError("no politicians to take the decision")
        president = next(
            (p for p in state.active_politicians if p.position is PoliticalPosition.PRESIDENT),
            state.active_politicians[0],
        )

        pressure = (
            (1.0 - state.political_will) * 0.4
            + (1.0 - state.government_stability) * 0.3
            + (1.0 - president.support_for_operation) * 0.3
        )

        if pressure > state.decision_threshold and game_state.game_phase not in (
            GamePhase.VICTORY,
            GamePhase.DEFEAT,
        ):
            state.recent_events.append(
                PoliticalEvent(
                    event_type=EventType.POLITICAL_STATEMENT,
                    timestamp=elapsed,
                    impact_score=1.0,
                    description=CAPITULATION_TEXT,
                    media_coverage=1.0,
                )
            )
            game_state.game_phase = GamePhase.VICTORY

        state.government_response_level = response_level_for(pressure)
        return pressure

    def update_public_opinion(self, dt: float) -> None:
        """Shift public support in response to social media and casualties."""
        state = self.state
        social = self.social

        social_impact = (
            sum(v.sentiment * (v.reach / 100000.0) for v in social.viral_videos) * 0.1
        )
        twitter_influence = social.twitter_sentiment * 0.05
        media_effect = state.media_attention * 0.03
        casualty_impact = state.casualties_civilian * 0.02 + state.casualties_military * 0.01

        state.public_support_government = _clamp(
            state.public_support_government
            + (social_impact + twitter_influence - casualty_impact - media_effect) * dt
        )
        state.public_support_cartel = _clamp(
            state.public_support_cartel
            + (casualty_impact * 0.5 - social_impact * 0.3 + media_effect * 0.2) * dt
        )

    def update_media_coverage(self, dt: float) -> None:
        """Raise media attention and, at high attention, draw international press."""
        state = self.state
        social = self.social

        coverage = (
            state.infrastructure_damage * 0.2
            + state.casualties_civilian * 0.05
            + state.operation_duration / 7200.0
        )
        state.media_attention = _clamp(state.media_attention + coverage * dt * 0.1)

        if state.media_attention > 0.7 and self.rng.random() < dt * 0.1:
            social.international_coverage += 0.1
            social.journalist_presence += 1
            state.international_pressure += 0.05

        social.international_coverage = _clamp(social.international_coverage)
        state.international_pressure = _clamp(state.international_pressure)

    def update_international_pressure(self, dt: float, elapsed: float) -> None:
        """Grow international pressure and occasionally record criticism."""
        state = self.state
        factors = (
            self.social.international_coverage * 0.5
            + state.media_attention * 0.3
            + state.casualties_civilian * 0.02
        )
        state.international_pressure = _clamp(state.international_pressure + factors * dt * 0.05)

        if state.international_pressure > 0.6 and self.rng.random() < dt * 0.05:
            events = state.recent_events
            events.append(
                PoliticalEvent(
                    event_type=EventType.INTERNATIONAL_CRITICISM,
                    timestamp=elapsed,
                    impact_score=0.7,
                    description=CRITICISM_TEXT,
                    media_coverage=0.8,
                )
            )
            if len(events) > MAX_EVENT_HISTORY:
                events.pop(0)

    def step(
        self,
        dt: float,
        elapsed: float,
        game_state: GameState,
        cartel_units: int,
        military_units: int,
    ) -> None:
        """Run every part of the simulation once."""
        self.update_pressure(dt, cartel_units, military_units)
        self.decide(game_state, elapsed)
        self.update_public_opinion(dt)
        self.update_media_coverage(dt)
        self.update_international_pressure(dt, elapsed)
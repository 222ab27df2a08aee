"""Core game state, shared enumerations and global resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GamePhase(Enum):
    """Phases the game moves through, from menus to the end of a mission."""

    MAIN_MENU = "MainMenu"
    SAVE_MENU = "SaveMenu"
    LOAD_MENU = "LoadMenu"
    MISSION_BRIEFING = "MissionBriefing"
    PREPARATION = "Preparation"
    INITIAL_RAID = "InitialRaid"
    BLOCK_CONVOY = "BlockConvoy"
    APPLY_PRESSURE = "ApplyPressure"
    HOLD_THE_LINE = "HoldTheLine"
    VICTORY = "Victory"
    DEFEAT = "Defeat"
    GAME_OVER = "GameOver"


class Faction(Enum):
    """Sides that units belong to."""

    CARTEL = "Cartel"
    MILITARY = "Military"


class UnitType(Enum):
    """Every kind of unit that can be spawned."""

    SICARIO = "Sicario"
    ENFORCER = "Enforcer"
    SNIPER = "Sniper"
    HEAVY_GUNNER = "HeavyGunner"
    MEDIC = "Medic"
    OVIDIO = "Ovidio"
    ROADBLOCK = "Roadblock"
    SOLDIER = "Soldier"
    SPECIAL_FORCES = "SpecialForces"
    TANK = "Tank"
    HELICOPTER = "Helicopter"
    ENGINEER = "Engineer"
    VEHICLE = "Vehicle"


_MENU_PHASES = frozenset(
    {
        GamePhase.MAIN_MENU,
        GamePhase.SAVE_MENU,
        GamePhase.LOAD_MENU,
        GamePhase.VICTORY,
        GamePhase.DEFEAT,
    }
)


@dataclass
class GameState:
    """Mission progress: timer, wave, scores and current phase."""

    mission_timer: float = 0.0
    current_wave: int = 0
    cartel_score: int = 0
    military_score: int = 0
    game_phase: GamePhase = GamePhase.MAIN_MENU
    ovidio_captured: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this state."""
        return {
            "mission_timer": float(self.mission_timer),
            "current_wave": int(self.current_wave),
            "cartel_score": int(self.cartel_score),
            "military_score": int(self.military_score),
            "game_phase": self.game_phase.value,
            "ovidio_captured": bool(self.ovidio_captured),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """Build a state from a mapping produced by :meth:`to_dict`."""
        return cls(
            mission_timer=float(data["mission_timer"]),
            current_wave=int(data["current_wave"]),
            cartel_score=int(data["cartel_score"]),
            military_score=int(data["military_score"]),
            game_phase=GamePhase(data["game_phase"]),
            ovidio_captured=bool(data["ovidio_captured"]),
        )


@dataclass
class AiDirector:
    """Adaptive difficulty settings."""

    intensity_level: float = 1.0
    last_spawn_time: float = 0.0
    player_performance: float = 0.5  # 0.0 struggling, 1.0 dominating
    adaptive_difficulty: bool = True


@dataclass
class IntelSystem:
    """Global intelligence network and radio settings."""

    active_intercepts: list[Any] = field(default_factory=list)
    informant_reports: list[Any] = field(default_factory=list)
    reconnaissance_data: list[Any] = field(default_factory=list)
    counter_intel_alerts: list[Any] = field(default_factory=list)
    radio_frequency: float = 27.185
    jamming_active: bool = False
    jamming_strength: float = 0.0
    intercept_chance: float = 0.3
    informant_reliability: float = 0.7
    counter_intel_level: float = 0.4


@dataclass
class SaveData:
    """Minimal saved game: state plus when and by which version it was saved."""

    game_state: GameState
    timestamp: str
    version: str


def not_in_menu_phase(game_state: GameState) -> bool:
    """True while the game is actually being played."""
    return game_state.game_phase not in _MENU_PHASES
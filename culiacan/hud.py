"""Text and health-bar values shown on the heads-up display."""

from __future__ import annotations

from dataclasses import dataclass

from culiacan.model import AiDirector, Faction, GamePhase, GameState, UnitType

_PHASE_TEXT = {
    GamePhase.MAIN_MENU: "🎮 Main Menu",
    GamePhase.SAVE_MENU: "💾 Save Game",
    GamePhase.LOAD_MENU: "📂 Load Game",
    GamePhase.MISSION_BRIEFING: "📋 Mission Briefing",
    GamePhase.PREPARATION: "🔄 Phase: Preparation",
    GamePhase.INITIAL_RAID: "⚔️ Phase: Initial Raid",
    GamePhase.BLOCK_CONVOY: "🚧 Phase: Block Convoy",
    GamePhase.APPLY_PRESSURE: "🔥 Phase: Apply Pressure",
    GamePhase.HOLD_THE_LINE: "🛡️ Phase: Hold The Line",
    GamePhase.VICTORY: "🏆 VICTORY!",
    GamePhase.DEFEAT: "💀 DEFEAT!",
    GamePhase.GAME_OVER: "🏁 Mission Complete",
}

_GREEN = (0.2, 0.8, 0.2)
_YELLOW = (0.8, 0.8, 0.2)
_RED = (0.8, 0.2, 0.2)

HEALTH_BAR_FULL_WIDTH = 50.0


@dataclass(frozen=True)
class UnitSnapshot:
    """The parts of a unit the HUD needs."""

    faction: Faction
    unit_type: UnitType
    health: float


def status_line(game_state: GameState, units: list[UnitSnapshot]) -> str:
    """Mission status text with living unit counts per faction."""
    alive = [u for u in units if u.health > 0.0]
    cartel = sum(1 for u in alive if u.faction is Faction.CARTEL)
    military = sum(1 for u in alive if u.faction is Faction.MILITARY)
    ovidio_alive = any(u.unit_type is UnitType.OVIDIO for u in alive)

    if not ovidio_alive:
        status = "❌ MISSION FAILED: Ovidio captured!"
    elif game_state.game_phase is GamePhase.GAME_OVER:
        status = "✅ MISSION SUCCESS: Government retreats!"
    else:
        status = _PHASE_TEXT[game_state.game_phase]
    return f"{status}\nCartel: {cartel} | Military: {military}"


def wave_line(game_state: GameState) -> str:
    """Current wave and mission timer."""
    return f"Wave: {game_state.current_wave} - Timer: {game_state.mission_timer:.1f}s"


def score_line(game_state: GameState) -> str:
    """Score of both sides."""
    return f"Score: Cartel {game_state.cartel_score} - Military {game_state.military_score}"


def difficulty_line(ai_director: AiDirector) -> str:
    """Difficulty level, mode and player performance, with key hints."""
    mode = "AUTO" if ai_director.adaptive_difficulty else "MANUAL"
    return (
        f"Difficulty: {ai_director.intensity_level:.1f} ({mode}) | "
        f"Performance: {ai_director.player_performance * 100.0:.0f}%\n"
        "D=Toggle | F1-F4=Set Level"
    )


def health_bar_color(fraction: float) -> tuple[float, float, float]:
    """RGB colour of a health bar at the given health fraction."""
    if fraction > 0.6:
        return _GREEN
    if fraction > 0.3:
        return _YELLOW
    return _RED


def health_bar_width(fraction: float) -> float:
    """Width of the foreground health bar at the given health fraction."""
    return HEALTH_BAR_FULL_WIDTH * fraction
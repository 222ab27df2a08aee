import pytest

from culiacan.model import (
    AiDirector,
    GamePhase,
    GameState,
    IntelSystem,
    UnitType,
    not_in_menu_phase,
)


def test_default_state_starts_in_main_menu():
    state = GameState()
    assert state.game_phase is GamePhase.MAIN_MENU
    assert state.current_wave == 0
    assert state.ovidio_captured is False


def test_to_dict_uses_variant_names():
    data = GameState(game_phase=GamePhase.HOLD_THE_LINE).to_dict()
    assert data["game_phase"] == "HoldTheLine"


def test_round_trip():
    state = GameState(
        mission_timer=42.5,
        current_wave=3,
        cartel_score=120,
        military_score=80,
        game_phase=GamePhase.BLOCK_CONVOY,
        ovidio_captured=True,
    )
    assert GameState.from_dict(state.to_dict()) == state


def test_from_dict_rejects_unknown_phase():
    data = GameState().to_dict()
    data["game_phase"] = "Nowhere"
    with pytest.raises(ValueError):
        GameState.from_dict(data)


def test_from_dict_requires_fields():
    data = GameState().to_dict()
    del data["cartel_score"]
    with pytest.raises(KeyError):
        GameState.from_dict(data)


@pytest.mark.parametrize(
    "phase",
    [
        GamePhase.MAIN_MENU,
        GamePhase.SAVE_MENU,
        GamePhase.LOAD_MENU,
        GamePhase.VICTORY,
        GamePhase.DEFEAT,
    ],
)
def test_menu_phases_are_not_in_play(phase):
    assert not_in_menu_phase(GameState(game_phase=phase)) is False


@pytest.mark.parametrize(
    "phase",
    [
        GamePhase.MISSION_BRIEFING,
        GamePhase.PREPARATION,
        GamePhase.INITIAL_RAID,
        GamePhase.BLOCK_CONVOY,
        GamePhase.APPLY_PRESSURE,
        GamePhase.HOLD_THE_LINE,
        GamePhase.GAME_OVER,
    ],
)
def test_play_phases_are_in_play(phase):
    assert not_in_menu_phase(GameState(game_phase=phase)) is True


def test_ai_director_defaults():
    director = AiDirector()
    assert director.intensity_level == 1.0
    assert director.adaptive_difficulty is True


def test_intel_system_defaults():
    intel = IntelSystem()
    assert intel.radio_frequency == pytest.approx(27.185)
    assert intel.jamming_active is False
    assert intel.active_intercepts == []


def test_intel_networks_are_independent():
    first = IntelSystem()
    second = IntelSystem()
    first.informant_reports.append("report")
    assert second.informant_reports == []


def test_unit_type_lookup_by_name():
    assert UnitType("HeavyGunner") is UnitType.HEAVY_GUNNER
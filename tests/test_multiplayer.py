import uuid

import pytest

from culiacan.model import GamePhase, GameState
from culiacan.multiplayer import (
    AuthRequest,
    AuthResponse,
    ConnectionState,
    ConnectionStatus,
    GameStart,
    MultiplayerGameMode,
    MultiplayerScenario,
    MultiplayerSession,
    PlayerInfo,
    PlayerJoin,
    PlayerLeave,
    PlayerReady,
    PlayerRole,
    ScenarioKind,
    historical_scenario,
    player_ping,
    scenario_player_roles,
)


def _join(session, name):
    info = PlayerInfo(user_id=uuid.uuid4(), username=name)
    session.process_message(PlayerJoin(info))
    return info


def test_ping_is_stable_and_in_range():
    for _ in range(50):
        pid = uuid.uuid4()
        ping = player_ping(pid)
        assert 20 <= ping < 300
        assert player_ping(pid) == ping


def test_historical_scenario_roles():
    scenario = historical_scenario()
    assert scenario.kind is ScenarioKind.HISTORICAL_OCTOBER_17
    assert scenario_player_roles(scenario) == [
        PlayerRole.GOVERNMENT_ADVISOR,
        PlayerRole.MILITARY_COMMANDER,
        PlayerRole.INTELLIGENCE_OFFICER,
        PlayerRole.OBSERVER,
    ]


def test_other_scenario_roles():
    scenario = MultiplayerScenario(ScenarioKind.CUSTOM, "what if")
    assert scenario_player_roles(scenario)[0] is PlayerRole.CARTEL_COMMANDER
    with pytest.raises(ValueError):
        MultiplayerScenario(ScenarioKind.CUSTOM)


def test_historical_mode_assigns_roles_in_order():
    session = MultiplayerSession(game_mode=MultiplayerGameMode.HISTORICAL)
    players = [_join(session, f"p{i}") for i in range(5)]
    roles = [session.player_assignments[p.user_id] for p in players]
    assert roles == [
        PlayerRole.GOVERNMENT_ADVISOR,
        PlayerRole.MILITARY_COMMANDER,
        PlayerRole.INTELLIGENCE_OFFICER,
        PlayerRole.OBSERVER,
        PlayerRole.OBSERVER,
    ]


def test_asymmetric_mode_shares_cartel_commander():
    session = MultiplayerSession()
    a = _join(session, "a")
    b = _join(session, "b")
    assert session.player_assignments[a.user_id] is PlayerRole.CARTEL_COMMANDER
    assert session.player_assignments[b.user_id] is PlayerRole.CARTEL_COMMANDER


def test_leave_removes_player_and_role():
    session = MultiplayerSession()
    a = _join(session, "a")
    session.process_message(PlayerLeave(a.user_id))
    assert a.user_id not in session.connected_players
    assert a.user_id not in session.player_assignments


def test_auth_response_sets_status():
    session = MultiplayerSession()
    session.process_message(AuthResponse(success=False, player_id=session.player_id))
    assert session.connection_status == ConnectionStatus.error("Authentication failed")
    session.process_message(AuthResponse(success=True, player_id=session.player_id))
    assert session.connection_status.state is ConnectionState.CONNECTED


def test_lobby_auto_starts_when_all_ready():
    sent = []
    session = MultiplayerSession(sender=sent.append)
    a = _join(session, "a")
    b = _join(session, "b")
    session.inbox.append(PlayerReady(a.user_id, True))
    session.lobby_update(0.05)
    assert not session.game_started
    session.inbox.append(PlayerReady(b.user_id, True))
    session.lobby_update(0.05)
    assert session.game_started
    assert sent == [GameStart(scenario=session.scenario)]


def test_single_ready_player_does_not_start():
    session = MultiplayerSession()
    a = _join(session, "a")
    session.process_message(PlayerReady(a.user_id, True))
    session.lobby_update(1.0)
    assert session.game_started is False


def test_check_connections_sets_pings_and_keeps_players():
    session = MultiplayerSession()
    a = _join(session, "a")
    assert session.check_connections() == []
    assert session.connected_players[a.user_id].ping == player_ping(a.user_id)


def test_build_sync_only_for_running_host_on_tick():
    sent = []
    session = MultiplayerSession(is_host=True, sender=sent.append)
    state = GameState(game_phase=GamePhase.PREPARATION)
    units = [(1, (1.0, 2.0, 0.0), 80.0)]
    session.lobby_update(0.2)
    assert session.build_sync(state, units, 3.0) is None
    session.start_game()
    session.lobby_update(0.2)
    snap = session.build_sync(state, units, 3.0)
    assert snap.unit_positions == {1: (1.0, 2.0, 0.0)}
    assert snap.unit_health == {1: 80.0}
    assert snap.game_phase is GamePhase.PREPARATION
    assert sent[-1] == snap
    session.lobby_update(0.01)
    assert session.build_sync(state, units, 3.1) is None


def test_status_lines_hidden_when_offline_and_alone():
    session = MultiplayerSession()
    assert session.status_lines() == []


def test_status_lines_content():
    session = MultiplayerSession(is_host=True)
    session.connection_status = ConnectionStatus(ConnectionState.HOSTING)
    a = _join(session, "alice")
    lines = session.status_lines()
    texts = [t for t, _ in lines]
    assert lines[1] == ("Status: Hosting", "green")
    assert "Mode: Asymmetric (2v2)" in texts
    assert "Players: 1/4" in texts
    ping = player_ping(a.user_id)
    session.check_connections()
    player_line = session.status_lines()[4][0]
    assert player_line == f"○ alice ({ping}ms) - CartelCommander"
    assert texts[-1] == f"Session: {str(session.session_id)[:8].upper()}"


def test_status_lines_error_message():
    session = MultiplayerSession()
    session.connection_status = ConnectionStatus.error("Authentication failed")
    assert session.status_lines()[1] == ("Status: Authentication failed", "red")


def test_authenticate_sends_request():
    sent = []
    session = MultiplayerSession(sender=sent.append)
    user_id = uuid.uuid4()
    token = session.authenticate(user_id)
    assert token.startswith(f"mp_{user_id}_")
    assert session.auth_token == token
    assert session.player_id == user_id
    assert sent == [AuthRequest(token=token)]


def test_authenticate_send_failure():
    def broken(_message):
        raise RuntimeError("closed")

    session = MultiplayerSession(sender=broken)
    with pytest.raises(ConnectionError):
        session.authenticate(uuid.uuid4())
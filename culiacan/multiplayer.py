"""Multiplayer lobby, role assignment, network messages and state sync."""

from __future__ import annotations

import hashlib
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

from culiacan.model import Faction, GamePhase, GameState
from culiacan.political_state import PoliticalState

logger = logging.getLogger(__name__)

SYNC_INTERVAL = 0.1
PING_TIMEOUT_MS = 5000
DEFAULT_MAX_PLAYERS = 4


class MultiplayerGameMode(Enum):
    """How players are split between the sides."""

    ASYMMETRIC = "Asymmetric"
    HISTORICAL = "Historical"
    COOPERATIVE = "Cooperative"
    COMPETITIVE = "Competitive"


class ScenarioKind(Enum):
    """Kinds of multiplayer scenario."""

    HISTORICAL_OCTOBER_17 = "HistoricalOctober17"
    ALTERNATE_HISTORY = "AlternateHistory"
    MODERN_DAY = "ModernDay"
    CUSTOM = "CustomScenario"


@dataclass(frozen=True)
class MultiplayerScenario:
    """A scenario; custom scenarios carry a name."""

    kind: ScenarioKind
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.kind is ScenarioKind.CUSTOM) != (self.name is not None):
            raise ValueError("only custom scenarios carry a name, and they must")


class PlayerRole(Enum):
    """What a player controls."""

    CARTEL_COMMANDER = "CartelCommander"
    MILITARY_COMMANDER = "MilitaryCommander"
    GOVERNMENT_ADVISOR = "GovernmentAdvisor"
    INTELLIGENCE_OFFICER = "IntelligenceOfficer"
    OBSERVER = "Observer"


class PlayerConnectionStatus(Enum):
    """Connection state of one remote player."""

    CONNECTED = "Connected"
    DISCONNECTED = "Disconnected"
    RECONNECTING = "Reconnecting"
    TIMED_OUT = "TimedOut"


class ConnectionState(Enum):
    """Connection state of this session."""

    DISCONNECTED = "Disconnected"
    CONNECTING = "Connecting"
    CONNECTED = "Connected"
    HOSTING = "Hosting"
    ERROR = "Error"


@dataclass(frozen=True)
class ConnectionStatus:
    """Session connection state; an error carries its message."""

    state: ConnectionState = ConnectionState.DISCONNECTED
    message: Optional[str] = None

    @classmethod
    def error(cls, message: str) -> "ConnectionStatus":
        return cls(ConnectionState.ERROR, message)


@dataclass
class PlayerInfo:
    """A player in the lobby."""

    user_id: uuid.UUID
    username: str
    role: PlayerRole = PlayerRole.OBSERVER
    connection_status: PlayerConnectionStatus = PlayerConnectionStatus.CONNECTED
    ping: int = 0
    ready: bool = False
    faction_preference: Optional[Faction] = None


@dataclass(frozen=True)
class PlayerJoin:
    player_info: PlayerInfo


@dataclass(frozen=True)
class PlayerLeave:
    player_id: uuid.UUID


@dataclass(frozen=True)
class PlayerReady:
    player_id: uuid.UUID
    ready: bool


@dataclass(frozen=True)
class AuthRequest:
    token: str


@dataclass(frozen=True)
class AuthResponse:
    success: bool
    player_id: uuid.UUID


@dataclass(frozen=True)
class GameStart:
    scenario: MultiplayerScenario


@dataclass(frozen=True)
class GameStateSync:
    """Snapshot of the game sent by the host to clients."""

    timestamp: float
    unit_positions: dict[Any, tuple[float, float, float]]
    unit_health: dict[Any, float]
    political_state: Optional[PoliticalState]
    game_phase: GamePhase
    resources: dict[Faction, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PoliticalDecisionMessage:
    """A political decision taken by a player."""

    player_id: uuid.UUID
    decision_type: str
    parameters: dict[str, float] = field(default_factory=dict)


Message = Union[
    PlayerJoin,
    PlayerLeave,
    PlayerReady,
    AuthRequest,
    AuthResponse,
    GameStart,
    GameStateSync,
    PoliticalDecisionMessage,
]

_ROLES_BY_MODE = {
    MultiplayerGameMode.ASYMMETRIC: (
        PlayerRole.CARTEL_COMMANDER,
        PlayerRole.MILITARY_COMMANDER,
        PlayerRole.GOVERNMENT_ADVISOR,
        PlayerRole.INTELLIGENCE_OFFICER,
    ),
    MultiplayerGameMode.HISTORICAL: (
        PlayerRole.GOVERNMENT_ADVISOR,
        PlayerRole.MILITARY_COMMANDER,
        PlayerRole.INTELLIGENCE_OFFICER,
        PlayerRole.OBSERVER,
    ),
    MultiplayerGameMode.COOPERATIVE: (
        PlayerRole.CARTEL_COMMANDER,
        PlayerRole.CARTEL_COMMANDER,
        PlayerRole.INTELLIGENCE_OFFICER,
        PlayerRole.OBSERVER,
    ),
    MultiplayerGameMode.COMPETITIVE: (PlayerRole.CARTEL_COMMANDER,) * 4,
}

_SHAREABLE_ROLES = frozenset({PlayerRole.CARTEL_COMMANDER, PlayerRole.OBSERVER})

_MODE_TEXT = {
    MultiplayerGameMode.ASYMMETRIC: "Asymmetric (2v2)",
    MultiplayerGameMode.HISTORICAL: "Historical",
    MultiplayerGameMode.COOPERATIVE: "Cooperative",
    MultiplayerGameMode.COMPETITIVE: "Competitive",
}

_STATUS_TEXT = {
    ConnectionState.DISCONNECTED: ("Offline", "gray"),
    ConnectionState.CONNECTING: ("Connecting...", "yellow"),
    ConnectionState.CONNECTED: ("Connected", "green"),
    ConnectionState.HOSTING: ("Hosting", "green"),
}


def player_ping(player_id: uuid.UUID) -> int:
    """Simulated, stable ping of a player in milliseconds (20 to 299)."""
    digest = hashlib.blake2b(player_id.bytes, digest_size=8).digest()
    return 20 + int.from_bytes(digest, "little") % 280


def historical_scenario() -> MultiplayerScenario:
    """The historical October 17 scenario."""
    return MultiplayerScenario(ScenarioKind.HISTORICAL_OCTOBER_17)


def scenario_player_roles(scenario: MultiplayerScenario) -> list[PlayerRole]:
    """Roles offered to players in a scenario."""
    if scenario.kind is ScenarioKind.HISTORICAL_OCTOBER_17:
        return [
            PlayerRole.GOVERNMENT_ADVISOR,
            PlayerRole.MILITARY_COMMANDER,
            PlayerRole.INTELLIGENCE_OFFICER,
            PlayerRole.OBSERVER,
        ]
    return [
        PlayerRole.CARTEL_COMMANDER,
        PlayerRole.MILITARY_COMMANDER,
        PlayerRole.GOVERNMENT_ADVISOR,
        PlayerRole.OBSERVER,
    ]


@dataclass
class MultiplayerSession:
    """Lobby and game session; outgoing messages go to ``sender`` if set."""

    session_id: uuid.UUID = field(default_factory=uuid.uuid4)
    is_host: bool = False
    game_mode: MultiplayerGameMode = MultiplayerGameMode.ASYMMETRIC
    connected_players: dict[uuid.UUID, PlayerInfo] = field(default_factory=dict)
    max_players: int = DEFAULT_MAX_PLAYERS
    game_started: bool = False
    scenario: MultiplayerScenario = field(default_factory=historical_scenario)
    player_assignments: dict[uuid.UUID, PlayerRole] = field(default_factory=dict)
    sync_interval: float = SYNC_INTERVAL
    connection_status: ConnectionStatus = field(default_factory=ConnectionStatus)
    player_id: uuid.UUID = field(default_factory=uuid.uuid4)
    auth_token: Optional[str] = None
    sender: Optional[Callable[[Message], None]] = None
    inbox: deque = field(default_factory=deque)
    _sync_elapsed: float = 0.0
    _sync_due: bool = False

    def _send(self, message: Message) -> None:
        if self.sender is not None:
            self.sender(message)

    def process_message(self, message: Message) -> None:
        """Apply an incoming lobby or authentication message."""
        if isinstance(message, PlayerJoin):
            info = message.player_info
            self.connected_players[info.user_id] = info
            self.assign_role(info.user_id)
        elif isinstance(message, PlayerLeave):
            self.connected_players.pop(message.player_id, None)
            self.player_assignments.pop(message.player_id, None)
        elif isinstance(message, PlayerReady):
            player = self.connected_players.get(message.player_id)
            if player is not None:
                player.ready = message.ready
        elif isinstance(message, AuthResponse):
            if message.success:
                self.connection_status = ConnectionStatus(ConnectionState.CONNECTED)
            else:
                self.connection_status = ConnectionStatus.error("Authentication failed")

    def assign_role(self, player_id: uuid.UUID) -> Optional[PlayerRole]:
        """Give the player the first free role of the game mode; return it."""
        taken = set(self.player_assignments.values())
        for role in _ROLES_BY_MODE[self.game_mode]:
            if role not in taken or role in _SHAREABLE_ROLES:
                logger.info("Assigned role %s to player %s", role.value, player_id)
                self.player_assignments[player_id] = role
                return role
        return None

    def lobby_update(self, dt: float) -> None:
        """Advance the sync timer, handle queued messages and auto-start."""
        self._sync_elapsed += dt
        if self.sync_interval > 0 and self._sync_elapsed >= self.sync_interval:
            self._sync_elapsed %= self.sync_interval
            self._sync_due = True
        else:
            self._sync_due = False

        while self.inbox:
            self.process_message(self.inbox.popleft())

        if (
            not self.game_started
            and len(self.connected_players) >= 2
            and all(p.ready for p in self.connected_players.values())
        ):
            self.start_game()

    def start_game(self) -> None:
        """Mark the game started and announce it."""
        self.game_started = True
        self._send(GameStart(scenario=self.scenario))

    def check_connections(self) -> list[uuid.UUID]:
        """Refresh pings and drop players that timed out; return those dropped."""
        dropped = []
        for player_id, info in self.connected_players.items():
            info.ping = player_ping(player_id)
            if info.ping > PING_TIMEOUT_MS:
                info.connection_status = PlayerConnectionStatus.TIMED_OUT
                dropped.append(player_id)
        for player_id in dropped:
            self.connected_players.pop(player_id, None)
            self.player_assignments.pop(player_id, None)
        return dropped

    def build_sync(
        self,
        game_state: GameState,
        units: Iterable[tuple[Any, tuple[float, float, float], float]],
        timestamp: float,
        political_state: Optional[PoliticalState] = None,
    ) -> Optional[GameStateSync]:
        """As a host in a running game, on a sync tick, build and send a snapshot."""
        if not self._sync_due or not (self.is_host and self.game_started):
            return None
        positions: dict[Any, tuple[float, float, float]] = {}
        health: dict[Any, float] = {}
        for entity, position, unit_health in units:
            positions[entity] = position
            health[entity] = unit_health
        snapshot = GameStateSync(
            timestamp=timestamp,
            unit_positions=positions,
            unit_health=health,
            political_state=political_state,
            game_phase=game_state.game_phase,
        )
        self._send(snapshot)
        return snapshot

    def status_lines(self) -> list[tuple[str, str]]:
        """Lines of the multiplayer panel as (text, colour name); empty when hidden."""
        status = self.connection_status
        if len(self.connected_players) <= 1 and status.state is ConnectionState.DISCONNECTED:
            return []

        if status.state is ConnectionState.ERROR:
            status_text, status_color = status.message or "", "red"
        else:
            status_text, status_color = _STATUS_TEXT[status.state]

        lines = [
            ("🌐 MULTIPLAYER", "cyan"),
            (f"Status: {status_text}", status_color),
            (f"Mode: {_MODE_TEXT[self.game_mode]}", "white"),
            (f"Players: {len(self.connected_players)}/{self.max_players}", "white"),
        ]
        for player_id, info in self.connected_players.items():
            role = self.player_assignments.get(player_id)
            role_text = role.value if role is not None else "Unassigned"
            if info.ping < 100:
                color = "green"
            elif info.ping < 300:
                color = "yellow"
            else:
                color = "red"
            mark = "✓" if info.ready else "○"
            lines.append((f"{mark} {info.username} ({info.ping}ms) - {role_text}", color))

        if self.is_host:
            lines.append((f"Session: {str(self.session_id)[:8].upper()}", "gray"))
        return lines

    def authenticate(self, user_id: uuid.UUID) -> str:
        """Create a session token for the user and request authentication."""
        token = f"mp_{user_id}_{uuid.uuid4()}"
        self.auth_token = token
        self.player_id = user_id
        try:
            self._send(AuthRequest(token=token))
        except Exception as exc:
            raise ConnectionError(f"Failed to send auth request: {exc}") from exc
        return token
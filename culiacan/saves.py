"""Save slots, campaign progress and auto-saving."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from culiacan.model import GamePhase, GameState, SaveData

logger = logging.getLogger(__name__)

SAVE_DIR = Path(".culiacan-rts") / "saves"
MAX_SAVE_SLOTS = 10
SAVE_VERSION = "2.0.0"


class SaveSlotError(ValueError):
    """Raised for an invalid slot number or an unreadable save file."""


class MissionId(Enum):
    """Campaign missions, in historical order."""

    INITIAL_RAID = "InitialRaid"
    URBAN_WARFARE = "UrbanWarfare"
    LAS_FLORESI_DEFENSE = "LasFloresiDefense"
    TIERRA_BLANCA_ROADBLOCKS = "TierraBlancaRoadblocks"
    CENTRO_URBAN_FIGHT = "CentroUrbanFight"
    LAS_QUINTAS_SIEGE = "LasQuintasSiege"
    AIRPORT_ASSAULT = "AirportAssault"
    GOVERNMENT_RESPONSE = "GovernmentResponse"
    CIVILIAN_EVACUATION = "CivilianEvacuation"
    POLITICAL_NEGOTIATION = "PoliticalNegotiation"
    CEASEFIRE_NEGOTIATION = "CeasefireNegotiation"
    ORDERED_WITHDRAWAL = "OrderedWithdrawal"
    RESOLUTION = "Resolution"


class DifficultyLevel(Enum):
    """Campaign difficulty."""

    RECRUIT = "Recruit"
    VETERAN = "Veteran"
    ELITE = "Elite"


_MISSION_ORDER = list(MissionId)

_DISPLAY_NAMES = {
    MissionId.INITIAL_RAID: "Initial Raid",
    MissionId.URBAN_WARFARE: "Urban Warfare",
    MissionId.LAS_FLORESI_DEFENSE: "Las Flores Defense",
    MissionId.TIERRA_BLANCA_ROADBLOCKS: "Tierra Blanca Roadblocks",
    MissionId.CENTRO_URBAN_FIGHT: "Centro Battle",
    MissionId.LAS_QUINTAS_SIEGE: "Las Quintas Siege",
    MissionId.AIRPORT_ASSAULT: "Airport Control",
    MissionId.GOVERNMENT_RESPONSE: "Government Response",
    MissionId.CIVILIAN_EVACUATION: "Civilian Protection",
    MissionId.POLITICAL_NEGOTIATION: "Political Pressure",
    MissionId.CEASEFIRE_NEGOTIATION: "Ceasefire Management",
    MissionId.ORDERED_WITHDRAWAL: "Ordered Withdrawal",
    MissionId.RESOLUTION: "Victory Secured",
}

_DESCRIPTIONS = {
    MissionId.INITIAL_RAID: "3:15 PM - Government forces storm residential complex. Defend Ovidio during the initial arrest attempt.",
    MissionId.URBAN_WARFARE: "3:30 PM - Street fighting erupts as cartel responds. Coordinate counter-attack across multiple fronts.",
    MissionId.LAS_FLORESI_DEFENSE: "3:45 PM - Defend Las Flores neighborhood. Establish defensive perimeters around civilian areas.",
    MissionId.TIERRA_BLANCA_ROADBLOCKS: "4:00 PM - Deploy roadblocks across Tierra Blanca. Cut off military reinforcement routes.",
    MissionId.CENTRO_URBAN_FIGHT: "4:30 PM - Battle for downtown Culiacán. Control key government buildings and intersections.",
    MissionId.LAS_QUINTAS_SIEGE: "5:00 PM - Secure Las Quintas wealthy district. Apply pressure on political families.",
    MissionId.AIRPORT_ASSAULT: "5:30 PM - Control Bachigualato Airport. Secure escape routes and limit government air support.",
    MissionId.GOVERNMENT_RESPONSE: "6:00 PM - Military escalation reaches peak. Survive overwhelming government counter-offensive.",
    MissionId.CIVILIAN_EVACUATION: "6:30 PM - Protect civilian evacuation zones. Maintain humanitarian corridors under fire.",
    MissionId.POLITICAL_NEGOTIATION: "7:00 PM - Behind-scenes political pressure mounts. Hold positions while negotiations proceed.",
    MissionId.CEASEFIRE_NEGOTIATION: "7:30 PM - Presidential order arrives. Manage ceasefire while maintaining tactical advantage.",
    MissionId.ORDERED_WITHDRAWAL: "8:00 PM - Government forces ordered to withdraw. Ensure orderly retreat without further casualties.",
    MissionId.RESOLUTION: "8:30 PM - Final mission complete. Secure the victory and Ovidio's freedom through political pressure.",
}


def mission_display_name(mission_id: MissionId) -> str:
    """Human-readable name of a mission."""
    return _DISPLAY_NAMES[mission_id]


def default_save_root() -> Path:
    """Directory for save files: under the home directory, else the working one."""
    try:
        return Path.home() / SAVE_DIR
    except RuntimeError:
        return Path(".")


@dataclass
class CampaignProgress:
    """Which missions are done and how well."""

    current_mission: MissionId = MissionId.INITIAL_RAID
    completed_missions: list[MissionId] = field(default_factory=list)
    difficulty_level: DifficultyLevel = DifficultyLevel.VETERAN
    total_score: int = 0
    best_times: dict[MissionId, float] = field(default_factory=dict)

    def complete_mission(
        self, mission_id: MissionId, completion_time: float, score: int
    ) -> None:
        """Record a finished mission and advance to the next one."""
        if mission_id not in self.completed_missions:
            self.completed_missions.append(mission_id)

        best = self.best_times.get(mission_id)
        if best is None or completion_time < best:
            self.best_times[mission_id] = completion_time

        self.total_score += score

        index = _MISSION_ORDER.index(mission_id)
        self.current_mission = _MISSION_ORDER[min(index + 1, len(_MISSION_ORDER) - 1)]

    def is_mission_unlocked(self, mission_id: MissionId) -> bool:
        """The first mission is always open; others need their predecessor done."""
        index = _MISSION_ORDER.index(mission_id)
        if index == 0:
            return True
        return _MISSION_ORDER[index - 1] in self.completed_missions

    def mission_description(self, mission_id: MissionId) -> str:
        """Briefing text for a mission."""
        return _DESCRIPTIONS[mission_id]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this progress."""
        return {
            "current_mission": self.current_mission.value,
            "completed_missions": [m.value for m in self.completed_missions],
            "difficulty_level": self.difficulty_level.value,
            "total_score": int(self.total_score),
            "best_times": {m.value: float(t) for m, t in self.best_times.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CampaignProgress":
        """Build progress from a mapping produced by :meth:`to_dict`."""
        return cls(
            current_mission=MissionId(data["current_mission"]),
            completed_missions=[MissionId(m) for m in data["completed_missions"]],
            difficulty_level=DifficultyLevel(data["difficulty_level"]),
            total_score=int(data["total_score"]),
            best_times={MissionId(k): float(v) for k, v in data["best_times"].items()},
        )


@dataclass
class EnhancedSaveData:
    """Everything stored in one save slot."""

    game_state: GameState
    campaign_progress: CampaignProgress
    timestamp: str
    version: str
    slot_number: int
    mission_name: str
    playtime_seconds: int


def _encode_save(save: EnhancedSaveData) -> dict[str, Any]:
    return {
        "game_state": save.game_state.to_dict(),
        "campaign_progress": save.campaign_progress.to_dict(),
        "timestamp": save.timestamp,
        "version": save.version,
        "slot_number": save.slot_number,
        "mission_name": save.mission_name,
        "playtime_seconds": save.playtime_seconds,
    }


def _decode_save(text: str) -> EnhancedSaveData:
    try:
        data = json.loads(text)
        return EnhancedSaveData(
            game_state=GameState.from_dict(data["game_state"]),
            campaign_progress=CampaignProgress.from_dict(data["campaign_progress"]),
            timestamp=str(data["timestamp"]),
            version=str(data["version"]),
            slot_number=int(data["slot_number"]),
            mission_name=str(data["mission_name"]),
            playtime_seconds=int(data["playtime_seconds"]),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as exc:
        raise SaveSlotError(f"Corrupt save data: {exc}") from exc


_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(\.\d+)?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


def _parse_rfc3339(text: str) -> datetime | None:
    match = _RFC3339.match(text)
    if not match:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.group(1, 2, 3, 4, 5, 6))
    if match.group(8):
        tz = timezone.utc
    else:
        sign = -1 if match.group(9) == "-" else 1
        offset = timedelta(hours=int(match.group(10)), minutes=int(match.group(11)))
        if offset >= timedelta(hours=24):
            return None
        tz = timezone(sign * offset)
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError:
        return None


@dataclass
class SaveSlotInfo:
    """Summary of one save slot, for menus."""

    slot_number: int
    mission_name: str
    timestamp: str
    playtime_seconds: int
    total_score: int
    completed_missions: int

    def display_text(self) -> str:
        """One-line description shown in the load menu."""
        hours = self.playtime_seconds // 3600
        minutes = (self.playtime_seconds % 3600) // 60
        return (
            f"Slot {self.slot_number + 1}: {self.mission_name} | "
            f"{hours}h {minutes}m | Score: {self.total_score} | "
            f"Missions: {self.completed_missions}"
        )

    def formatted_timestamp(self) -> str:
        """Timestamp as 'YYYY-MM-DD HH:MM', or unchanged if it cannot be parsed."""
        parsed = _parse_rfc3339(self.timestamp)
        if parsed is None:
            return self.timestamp
        return parsed.strftime("%Y-%m-%d %H:%M")


class SaveStore:
    """Save slots kept as JSON files in one directory."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root is not None else default_save_root()

    @staticmethod
    def _check_slot(slot: int) -> None:
        if slot < 0 or slot >= MAX_SAVE_SLOTS:
            raise SaveSlotError(f"Save slot {slot} exceeds maximum {MAX_SAVE_SLOTS}")

    def path_for(self, slot: int) -> Path:
        """File path of a slot."""
        return self.root / f"save_slot_{slot}.json"

    def save(self, game_state: GameState, campaign: CampaignProgress, slot: int) -> Path:
        """Write the game and campaign to a slot; return the file written."""
        self._check_slot(slot)
        save = EnhancedSaveData(
            game_state=game_state,
            campaign_progress=campaign,
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=SAVE_VERSION,
            slot_number=slot,
            mission_name=mission_display_name(campaign.current_mission),
            playtime_seconds=max(0, int(game_state.mission_timer)),
        )
        path = self.path_for(slot)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_encode_save(save), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Game saved to slot %d at %s", slot, path)
        return path

    def load(self, slot: int) -> EnhancedSaveData:
        """Read a slot; raises OSError if missing and SaveSlotError if corrupt."""
        self._check_slot(slot)
        text = self.path_for(slot).read_text(encoding="utf-8")
        save = _decode_save(text)
        logger.info("Game loaded from slot %d (%s)", slot, save.timestamp)
        return save

    def slot_info(self, slot: int) -> SaveSlotInfo | None:
        """Summary of a slot, or None if it is out of range, empty or unreadable."""
        if slot < 0 or slot >= MAX_SAVE_SLOTS or not self.path_for(slot).exists():
            return None
        try:
            save = self.load(slot)
        except (OSError, SaveSlotError):
            return None
        return SaveSlotInfo(
            slot_number=slot,
            mission_name=save.mission_name,
            timestamp=save.timestamp,
            playtime_seconds=save.playtime_seconds,
            total_score=save.campaign_progress.total_score,
            completed_missions=len(save.campaign_progress.completed_missions),
        )

    def list_saves(self) -> list[SaveSlotInfo]:
        """All readable slots, most recent first."""
        infos = (self.slot_info(slot) for slot in range(MAX_SAVE_SLOTS))
        return sorted(
            (info for info in infos if info is not None),
            key=lambda info: info.timestamp,
            reverse=True,
        )

    def delete(self, slot: int) -> None:
        """Remove a slot's file if it exists."""
        self._check_slot(slot)
        path = self.path_for(slot)
        if path.exists():
            path.unlink()
            logger.info("Deleted save slot %d", slot)

    def save_game(self, game_state: GameState) -> Path:
        """Save to slot 0 with a fresh campaign."""
        return self.save(game_state, CampaignProgress(), 0)

    def load_game(self) -> SaveData:
        """Load slot 0 as a plain save."""
        save = self.load(0)
        return SaveData(
            game_state=save.game_state,
            timestamp=save.timestamp,
            version=save.version,
        )

    def has_save_file(self) -> bool:
        """True if slot 0 holds a file."""
        return self.path_for(0).exists()


@dataclass
class AutoSaveTimer:
    """Saves the game to slot 0 at a fixed interval."""

    interval: float = 60.0
    enabled: bool = True
    elapsed: float = 0.0

    def tick(self, dt: float, game_state: GameState, store: SaveStore) -> bool:
        """Advance the timer; return True if an auto-save was written."""
        if not self.enabled:
            return False
        self.elapsed += dt
        if self.elapsed < self.interval:
            return False
        self.elapsed = self.elapsed % self.interval if self.interval > 0 else 0.0
        if game_state.game_phase is GamePhase.GAME_OVER:
            return False
        try:
            store.save_game(game_state)
        except (OSError, SaveSlotError) as exc:
            logger.warning("Auto-save failed: %s", exc)
            return False
        logger.info("Auto-save completed")
        return True
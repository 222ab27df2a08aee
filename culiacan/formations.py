"""Formation offsets for unit groups and picking units under the cursor."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from culiacan.model import Faction
from culiacan.pathing import Vec3

FORMATION_SPACING = 60.0
CLICK_RADIUS = 50.0


class FormationType(Enum):
    """Shapes a group of units can move in."""

    LINE = "Line"
    CIRCLE = "Circle"
    WEDGE = "Wedge"
    FLANKING = "Flanking"
    OVERWATCH = "Overwatch"
    RETREAT = "Retreat"


@dataclass
class SelectableUnit:
    """A unit that can be clicked: its handle, where it is and whose it is."""

    key: Any
    position: Vec3
    faction: Faction
    health: float
    selected: bool = False

    @property
    def alive(self) -> bool:
        return self.health > 0.0


def _centered(index: int, count: int) -> float:
    return index - (count - 1) / 2.0


def formation_offset(formation: FormationType, index: int, count: int) -> Vec3:
    """Offset from the formation centre of unit ``index`` out of ``count``."""
    if count <= 0:
        raise ValueError("a formation needs at least one unit")
    if not 0 <= index < count:
        raise ValueError(f"unit index {index} outside formation of {count}")

    spacing = FORMATION_SPACING
    if formation is FormationType.LINE:
        return Vec3(_centered(index, count) * spacing, 0.0, 0.0)
    if formation is FormationType.CIRCLE:
        angle = index / count * 2.0 * math.pi
        radius = spacing * max(count / (2.0 * math.pi), 1.0)
        return Vec3(math.cos(angle) * radius, math.sin(angle) * radius, 0.0)
    if formation is FormationType.WEDGE:
        if index == 0:
            return Vec3()
        side = -1.0 if index % 2 == 1 else 1.0
        row = (index + 1) // 2
        return Vec3(side * spacing * 0.7, -row * spacing * 0.5, 0.0)
    if formation is FormationType.FLANKING:
        half = count // 2
        if index < half:
            side, position_in_side = -1.0, index
        else:
            side, position_in_side = 1.0, index - half
        return Vec3(side * spacing * 1.5, position_in_side * spacing * 0.5, 0.0)
    if formation is FormationType.OVERWATCH:
        return Vec3(_centered(index, count) * spacing * 1.2, spacing * 0.8, 0.0)
    if formation is FormationType.RETREAT:
        return Vec3(_centered(index, count) * spacing * 0.8, -(index * spacing * 0.3), 0.0)
    raise ValueError(f"unknown formation {formation!r}")


def assign_formation_positions(
    count: int, center: Vec3, formation: FormationType
) -> list[Vec3]:
    """Target positions for ``count`` units arranged around ``center``."""
    return [center + formation_offset(formation, i, count) for i in range(count)]


def _closest(
    position: Vec3, units: Iterable[SelectableUnit], faction: Faction
) -> Optional[SelectableUnit]:
    best: Optional[SelectableUnit] = None
    best_distance = math.inf
    for unit in units:
        if unit.faction is not faction or not unit.alive:
            continue
        distance = unit.position.distance(position)
        if distance < CLICK_RADIUS and distance < best_distance:
            best, best_distance = unit, distance
    return best


def find_enemy_at_position(position: Vec3, units: Iterable[SelectableUnit]) -> Optional[Any]:
    """Key of the closest living military unit within click range, if any."""
    enemy = _closest(position, units, Faction.MILITARY)
    return enemy.key if enemy is not None else None


def closest_selectable(
    position: Vec3, units: Iterable[SelectableUnit]
) -> Optional[SelectableUnit]:
    """Closest living cartel unit within click range, if any."""
    return _closest(position, units, Faction.CARTEL)
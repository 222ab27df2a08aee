"""Mapping of battlefield positions and factions onto the minimap."""

from __future__ import annotations

from typing import Optional

from culiacan.model import Faction

MINIMAP_WIDTH = 200.0
MINIMAP_HEIGHT = 150.0
WORLD_HALF_WIDTH = 1000.0
WORLD_HALF_HEIGHT = 750.0


def minimap_position(x: float, y: float) -> tuple[float, float]:
    """Minimap pixel position of a world position; the world centre maps to the middle."""
    half_w = MINIMAP_WIDTH / 2.0
    half_h = MINIMAP_HEIGHT / 2.0
    return (x / WORLD_HALF_WIDTH * half_w + half_w, y / WORLD_HALF_HEIGHT * half_h + half_h)


def minimap_color(faction: Optional[Faction]) -> str:
    """Colour name of a unit's minimap icon."""
    if faction is Faction.CARTEL:
        return "red"
    if faction is Faction.MILITARY:
        return "green"
    return "white"
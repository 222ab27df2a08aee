"""Simple unit pathfinding, steering and timed ability effects."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

PATH_STEP = 50.0
OBSTACLE_CLEARANCE = 60.0
OBSTACLE_OFFSET = 40.0
WAYPOINT_REACHED = 10.0
STUCK_AFTER = 2.0
UNIT_AVOIDANCE_SCALE = 0.7


@dataclass(frozen=True)
class Vec3:
    """Immutable 3-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vec3":
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def distance(self, other: "Vec3") -> float:
        return (self - other).length()

    def normalize_or_zero(self) -> "Vec3":
        """Unit vector in the same direction, or zero if that is undefined."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return Vec3()
        inverse = 1.0 / length
        if not math.isfinite(inverse):
            return Vec3()
        return self * inverse

    def lerp(self, other: "Vec3", t: float) -> "Vec3":
        return self + (other - self) * t


ZERO = Vec3()


def generate_simple_path(start: Vec3, end: Vec3, obstacles: Iterable[Vec3]) -> list[Vec3]:
    """Straight-line waypoints every 50 units, pushed sideways around obstacles."""
    obstacles = list(obstacles)
    direction = (end - start).normalize_or_zero()
    steps = math.ceil(start.distance(end) / PATH_STEP)
    perpendicular = Vec3(-direction.y, direction.x, 0.0)

    path = []
    for i in range(1, steps + 1):
        point = start.lerp(end, i / steps)
        for obstacle in obstacles:
            if point.distance(obstacle) < OBSTACLE_CLEARANCE:
                side = -1.0 if obstacle.dot(perpendicular) > 0.0 else 1.0
                point = point + perpendicular * (side * OBSTACLE_OFFSET)
        path.append(point)

    return path or [end]


def avoidance_force(
    position: Vec3,
    avoidance_radius: float,
    obstacles: Iterable[Vec3],
    others: Iterable[Vec3],
) -> Vec3:
    """Push away from nearby obstacles (strongly) and other units (gently)."""
    force = ZERO

    for obstacle in obstacles:
        distance = position.distance(obstacle)
        if 0.0 < distance < avoidance_radius:
            away = (position - obstacle).normalize_or_zero()
            strength = (avoidance_radius - distance) / avoidance_radius
            force = force + away * (strength * 2.0)

    unit_radius = avoidance_radius * UNIT_AVOIDANCE_SCALE
    for other in others:
        distance = position.distance(other)
        if 0.0 < distance < unit_radius:
            away = (position - other).normalize_or_zero()
            strength = (unit_radius - distance) / unit_radius
            force = force + away * strength

    return force


@dataclass
class PathfindingAgent:
    """Waypoint-following state of one unit."""

    path: list[Vec3] = field(default_factory=list)
    current_waypoint: int = 0
    avoidance_radius: float = 40.0
    max_speed: float = 40.0
    stuck_timer: float = 0.0

    def step(
        self,
        position: Vec3,
        target: Optional[Vec3],
        speed: float,
        dt: float,
        obstacles: Iterable[Vec3],
        others: Iterable[Vec3],
    ) -> tuple[Vec3, Optional[Vec3]]:
        """Advance one frame; return the new position and the remaining target."""
        self.stuck_timer += dt
        if target is None:
            return position, None

        obstacles = list(obstacles)
        others = list(others)

        if not self.path or self.current_waypoint >= len(self.path):
            self.path = generate_simple_path(position, target, obstacles)
            self.current_waypoint = 0
            self.stuck_timer = 0.0

        if self.current_waypoint >= len(self.path):
            self.path.clear()
            self.current_waypoint = 0
            return position, None

        waypoint = self.path[self.current_waypoint]
        direction = (waypoint - position).normalize_or_zero()
        push = avoidance_force(position, self.avoidance_radius, obstacles, others)
        final_direction = (direction + push * 0.5).normalize_or_zero()
        move_delta = final_direction * (speed * dt)

        if position.distance(waypoint) < WAYPOINT_REACHED:
            self.current_waypoint += 1
            self.stuck_timer = 0.0

        if self.stuck_timer > STUCK_AFTER:
            self.path.clear()
            self.stuck_timer = 0.0

        return position + move_delta, target


class EffectType(Enum):
    """Kinds of temporary ability effects."""

    DAMAGE_BOOST = "DamageBoost"
    SPEED_BOOST = "SpeedBoost"
    DAMAGE_REDUCTION = "DamageReduction"
    STUNNED = "Stunned"
    INTIMIDATED = "Intimidated"
    HEALING = "Healing"
    SUPPRESSED = "Suppressed"
    ARMOR_PIERCING = "ArmorPiercing"
    AERIAL_VIEW = "AerialView"
    FORTIFIED = "Fortified"


_INSTANT_DAMAGE = frozenset({EffectType.STUNNED, EffectType.ARMOR_PIERCING})


@dataclass
class AbilityEffect:
    """An effect on a unit lasting ``duration`` seconds.

    ``amount`` is the effect's parameter (multiplier, reduction or healing
    per second); ``strength`` is one-off damage for stun and armour piercing.
    """

    effect_type: EffectType
    duration: float
    strength: float = 0.0
    amount: float = 0.0
    elapsed: float = 0.0

    @property
    def finished(self) -> bool:
        return self.elapsed >= self.duration


@dataclass
class UnitHealth:
    """Current and maximum health of a unit."""

    health: float
    max_health: float


def apply_ability_effect(effect: AbilityEffect, unit: UnitHealth, dt: float) -> bool:
    """Tick an effect and apply it to the unit; return True once it has expired."""
    effect.elapsed = min(effect.elapsed + dt, effect.duration)

    if effect.effect_type in _INSTANT_DAMAGE:
        if effect.strength > 0.0:
            unit.health -= effect.strength
            effect.strength = 0.0
    elif effect.effect_type is EffectType.HEALING:
        unit.health = min(unit.health + effect.amount * dt, unit.max_health)

    return effect.finished
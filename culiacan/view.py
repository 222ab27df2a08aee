"""Sprite pulsing, movement bobbing and isometric camera control."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from culiacan.pathing import Vec3


def _tick_repeating(elapsed: float, dt: float, duration: float) -> tuple[float, bool]:
    """Advance a repeating timer; return the wrapped time and whether it wrapped."""
    elapsed += dt
    if duration > 0.0 and elapsed >= duration:
        return elapsed % duration, True
    return elapsed, False


@dataclass
class SpriteAnimation:
    """Gentle pulsing and slow rotation of a unit sprite."""

    duration: float = 2.0
    scale_amplitude: float = 0.05
    rotation_speed: float = 0.1
    base_scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))
    elapsed: float = 0.0
    rotation: float = 0.0

    def update(self, dt: float) -> tuple[Vec3, float]:
        """Advance by ``dt``; return the sprite scale and its z rotation in radians."""
        self.elapsed, finished = _tick_repeating(self.elapsed, dt, self.duration)
        pulse = math.sin(self.elapsed / self.duration * math.pi * 2.0)
        scale = self.base_scale * (1.0 + pulse * self.scale_amplitude)
        self.rotation += self.rotation_speed * dt
        if finished:
            self.elapsed = 0.0
        return scale, self.rotation


@dataclass
class BobAnimation:
    """Small vertical bob of a unit while it moves."""

    base_y: float
    duration: float = 0.5
    bob_amplitude: float = 2.0
    elapsed: float = 0.0

    def update(self, dt: float, moving: bool) -> float:
        """Advance by ``dt``; return the sprite's vertical position."""
        self.elapsed, finished = _tick_repeating(self.elapsed, dt, self.duration)
        if moving:
            y = self.base_y + math.sin(self.elapsed * 8.0) * self.bob_amplitude
        else:
            y = self.base_y
        if finished:
            self.elapsed = 0.0
        return y


_KEY_DIRECTIONS = {
    "w": (0.0, 1.0),
    "s": (0.0, -1.0),
    "a": (-1.0, 0.0),
    "d": (1.0, 0.0),
}


@dataclass
class IsometricCamera:
    """Panning and zoom limits of the battlefield camera."""

    pan_speed: float = 300.0
    zoom_speed: float = 0.1
    min_zoom: float = 0.5
    max_zoom: float = 3.0

    def pan(self, position: Vec3, keys: Iterable[str], dt: float) -> Vec3:
        """New camera position after holding the given WASD keys for ``dt``."""
        pressed = {key.lower() for key in keys}
        dx = sum(d[0] for k, d in _KEY_DIRECTIONS.items() if k in pressed)
        dy = sum(d[1] for k, d in _KEY_DIRECTIONS.items() if k in pressed)
        movement = Vec3(dx, dy, 0.0)
        if movement == Vec3():
            return position
        return position + movement.normalize_or_zero() * (self.pan_speed * dt)

    def zoom(self, scale: float, scroll: Iterable[float]) -> float:
        """Camera scale after the given mouse-wheel deltas, within the zoom limits."""
        for amount in scroll:
            scale = min(max(scale - amount * self.zoom_speed, self.min_zoom), self.max_zoom)
        return scale
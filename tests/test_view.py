import math

import pytest

from culiacan.pathing import Vec3
from culiacan.view import BobAnimation, IsometricCamera, SpriteAnimation


def test_sprite_pulse_peaks_at_quarter_cycle():
    anim = SpriteAnimation()
    scale, _ = anim.update(anim.duration / 4)
    assert scale.x == pytest.approx(1.0 + anim.scale_amplitude)
    assert scale.x == scale.y == scale.z


def test_sprite_pulse_bounded():
    anim = SpriteAnimation()
    for _ in range(50):
        scale, _ = anim.update(0.13)
        assert 1.0 - anim.scale_amplitude - 1e-9 <= scale.x <= 1.0 + anim.scale_amplitude + 1e-9


def test_sprite_rotation_accumulates():
    anim = SpriteAnimation()
    anim.update(0.5)
    _, rotation = anim.update(0.5)
    assert rotation == pytest.approx(anim.rotation_speed * 1.0)


def test_sprite_timer_resets_after_cycle():
    anim = SpriteAnimation()
    anim.update(anim.duration + 0.3)
    assert anim.elapsed == 0.0


def test_bob_rests_when_still():
    bob = BobAnimation(base_y=12.5)
    assert bob.update(0.1, moving=False) == 12.5


def test_bob_stays_within_amplitude_while_moving():
    bob = BobAnimation(base_y=-4.0)
    ys = [bob.update(0.07, moving=True) for _ in range(30)]
    assert all(abs(y + 4.0) <= bob.bob_amplitude + 1e-9 for y in ys)
    assert any(y != -4.0 for y in ys)


def test_bob_timer_resets():
    bob = BobAnimation(base_y=0.0)
    bob.update(bob.duration + 0.1, moving=True)
    assert bob.elapsed == 0.0


def test_camera_pans_up():
    camera = IsometricCamera()
    start = Vec3(0.0, 0.0, 999.9)
    moved = camera.pan(start, {"w"}, 0.5)
    assert moved.y == pytest.approx(camera.pan_speed * 0.5)
    assert moved.x == 0.0 and moved.z == start.z


def test_camera_diagonal_speed_is_normalized():
    camera = IsometricCamera()
    moved = camera.pan(Vec3(), ["D", "S"], 1.0)
    assert moved.length() == pytest.approx(camera.pan_speed)
    assert moved.x > 0 > moved.y


def test_camera_no_keys_or_opposite_keys_stay():
    camera = IsometricCamera()
    start = Vec3(3.0, 4.0, 0.0)
    assert camera.pan(start, [], 1.0) == start
    assert camera.pan(start, ["a", "d"], 1.0) == start


def test_camera_zoom_direction_and_limits():
    camera = IsometricCamera()
    assert camera.zoom(1.5, [1.0]) < 1.5
    assert camera.zoom(1.5, [-1.0]) > 1.5
    assert camera.zoom(1.5, [100.0]) == camera.min_zoom
    assert camera.zoom(1.5, [-100.0]) == camera.max_zoom
    assert camera.zoom(1.5, []) == 1.5


def test_camera_zoom_applies_each_event():
    camera = IsometricCamera()
    once = camera.zoom(1.5, [2.0])
    twice = camera.zoom(1.5, [1.0, 1.0])
    assert math.isclose(once, twice)
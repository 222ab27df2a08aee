import math

import pytest

from culiacan.pathing import (
    AbilityEffect,
    EffectType,
    PathfindingAgent,
    UnitHealth,
    Vec3,
    apply_ability_effect,
    avoidance_force,
    generate_simple_path,
)


def test_vec3_arithmetic_round_trip():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(4.0, -5.0, 6.0)
    assert (a + b) - b == a
    assert a * 2.0 == 2.0 * a
    assert a.dot(b) == b.dot(a)


def test_normalize_or_zero():
    assert Vec3().normalize_or_zero() == Vec3()
    unit = Vec3(3.0, 4.0, 0.0).normalize_or_zero()
    assert math.isclose(unit.length(), 1.0)


def test_lerp_endpoints():
    a = Vec3(0.0, 0.0, 0.0)
    b = Vec3(10.0, 20.0, 30.0)
    assert a.lerp(b, 0.0) == a
    assert a.lerp(b, 1.0) == b


def test_path_without_obstacles_follows_line():
    start = Vec3(0.0, 0.0, 0.0)
    end = Vec3(100.0, 0.0, 0.0)
    path = generate_simple_path(start, end, [])
    assert len(path) == 2
    assert path[-1] == end
    assert path[0] == start.lerp(end, 0.5)
    for point in path:
        assert point.y == 0.0


def test_path_step_count_rounds_up():
    start = Vec3(0.0, 0.0, 0.0)
    end = Vec3(0.0, 120.0, 0.0)
    path = generate_simple_path(start, end, [])
    assert len(path) == math.ceil(120.0 / 50.0)
    assert path[-1] == end


def test_path_of_zero_length_is_end():
    point = Vec3(5.0, 5.0, 0.0)
    assert generate_simple_path(point, point, []) == [point]


def test_avoidance_pushes_away_from_obstacle():
    force = avoidance_force(Vec3(), 40.0, [Vec3(20.0, 0.0, 0.0)], [])
    assert force.x < 0.0
    assert force.y == 0.0 and force.z == 0.0


def test_avoidance_ignores_distant_and_coincident():
    far = avoidance_force(Vec3(), 40.0, [Vec3(100.0, 0.0, 0.0)], [Vec3(0.0, 30.0, 0.0)])
    assert far == Vec3()
    same = avoidance_force(Vec3(), 40.0, [Vec3()], [Vec3()])
    assert same == Vec3()


def test_avoidance_of_units_is_weaker_than_obstacles():
    pos = Vec3()
    other = Vec3(10.0, 0.0, 0.0)
    from_obstacle = avoidance_force(pos, 40.0, [other], [])
    from_unit = avoidance_force(pos, 40.0, [], [other])
    assert from_unit.x < 0.0
    assert abs(from_unit.x) < abs(from_obstacle.x)


def test_step_without_target_only_counts_time():
    agent = PathfindingAgent()
    pos = Vec3(1.0, 2.0, 0.0)
    new_pos, target = agent.step(pos, None, 10.0, 0.5, [], [])
    assert new_pos == pos
    assert target is None
    assert agent.stuck_timer == 0.5


def test_step_moves_towards_target():
    agent = PathfindingAgent()
    target = Vec3(100.0, 0.0, 0.0)
    new_pos, remaining = agent.step(Vec3(), target, 10.0, 1.0, [], [])
    assert remaining == target
    assert new_pos == Vec3(10.0, 0.0, 0.0)
    assert len(agent.path) == 2
    assert agent.current_waypoint == 0


def test_step_advances_waypoint_when_close():
    agent = PathfindingAgent()
    target = Vec3(100.0, 0.0, 0.0)
    agent.step(Vec3(), target, 10.0, 0.1, [], [])
    agent.step(Vec3(45.0, 0.0, 0.0), target, 10.0, 0.1, [], [])
    assert agent.current_waypoint == 1
    assert agent.stuck_timer == 0.0


def test_step_clears_path_when_stuck():
    agent = PathfindingAgent()
    target = Vec3(100.0, 0.0, 0.0)
    agent.step(Vec3(), target, 10.0, 0.1, [], [])
    agent.stuck_timer = 5.0
    agent.step(Vec3(), target, 10.0, 0.1, [], [])
    assert agent.path == []
    assert agent.stuck_timer == 0.0


def test_healing_is_capped_at_max():
    unit = UnitHealth(health=90.0, max_health=100.0)
    effect = AbilityEffect(EffectType.HEALING, duration=5.0, amount=50.0)
    expired = apply_ability_effect(effect, unit, 1.0)
    assert unit.health == 100.0
    assert expired is False


def test_stun_damage_applies_once():
    unit = UnitHealth(health=100.0, max_health=100.0)
    effect = AbilityEffect(EffectType.STUNNED, duration=3.0, strength=25.0)
    apply_ability_effect(effect, unit, 0.5)
    apply_ability_effect(effect, unit, 0.5)
    assert unit.health == 75.0
    assert effect.strength == 0.0


@pytest.mark.parametrize("kind", [EffectType.DAMAGE_BOOST, EffectType.FORTIFIED, EffectType.SUPPRESSED])
def test_passive_effects_leave_health_alone(kind):
    unit = UnitHealth(health=60.0, max_health=100.0)
    effect = AbilityEffect(kind, duration=2.0, strength=10.0, amount=1.5)
    apply_ability_effect(effect, unit, 0.5)
    assert unit.health == 60.0


def test_effect_expires_after_duration():
    unit = UnitHealth(health=50.0, max_health=100.0)
    effect = AbilityEffect(EffectType.ARMOR_PIERCING, duration=1.0, strength=5.0)
    assert apply_ability_effect(effect, unit, 0.6) is False
    assert apply_ability_effect(effect, unit, 0.6) is True
    assert effect.finished
    assert unit.health == 45.0
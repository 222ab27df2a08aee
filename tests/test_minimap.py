import pytest

from culiacan.minimap import MINIMAP_HEIGHT, MINIMAP_WIDTH, minimap_color, minimap_position
from culiacan.model import Faction


def test_world_origin_maps_to_center():
    assert minimap_position(0.0, 0.0) == (100.0, 75.0)


def test_world_edges_map_to_minimap_edges():
    assert minimap_position(1000.0, 750.0) == pytest.approx((MINIMAP_WIDTH, MINIMAP_HEIGHT))
    assert minimap_position(-1000.0, -750.0) == pytest.approx((0.0, 0.0))


def test_mapping_is_monotonic():
    a = minimap_position(-200.0, -100.0)
    b = minimap_position(300.0, 400.0)
    assert a[0] < b[0] and a[1] < b[1]


def test_mapping_is_symmetric_about_center():
    left = minimap_position(-420.0, 0.0)
    right = minimap_position(420.0, 0.0)
    assert left[0] + right[0] == pytest.approx(MINIMAP_WIDTH)


@pytest.mark.parametrize(
    "faction,color",
    [(Faction.CARTEL, "red"), (Faction.MILITARY, "green"), (None, "white")],
)
def test_faction_colors(faction, color):
    assert minimap_color(faction) == color
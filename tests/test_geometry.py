"""Tests for region classification and map geometry."""
import pytest
from tactics.geometry import (LANE_ANCHORS, clamp_to_map, classify, distance, lane_anchor,
                              nearest_lane)
from tactics.model import Lane, MapRegion, Position


def test_base_region():
    assert classify(1000, 1000) == MapRegion.BASE


@pytest.mark.parametrize("x, y, region", [
    (2000, 11000, MapRegion.TOP_JUNGLE),
    (12000, 2000, MapRegion.BOT_JUNGLE),
    (7000, 7000, MapRegion.MID_JUNGLE),
])
def test_jungle_regions(x, y, region):
    assert classify(x, y) == region


@pytest.mark.parametrize("x, y, region", [
    (2500, 13500, MapRegion.TOP_LANE),
    (13500, 2500, MapRegion.BOT_LANE),
    (7500, 7500, MapRegion.MID_LANE),
])
def test_lane_regions(x, y, region):
    assert classify(x, y) == region


def test_river_surrounds_mid_jungle_box():
    assert classify(4500, 4500) == MapRegion.RIVER
    assert classify(10500, 10500) == MapRegion.RIVER


def test_unmatched_coordinates_default_to_mid_jungle():
    assert classify(15000, 15000) == MapRegion.MID_JUNGLE
    assert classify(0, 8000) == MapRegion.MID_JUNGLE


def test_classification_is_total_and_deterministic():
    """Every point of the map maps to exactly one zone, the same one each time."""
    for x in range(0, 15001, 250):
        for y in range(0, 15001, 250):
            region = classify(x, y)
            assert isinstance(region, MapRegion)
            assert classify(x, y) == region


def test_distance():
    assert distance(Position(0, 0), Position(3, 4)) == 5


def test_distance_identity_and_symmetry():
    a = Position(1200.5, 8000)
    b = Position(9000, 300.25)
    assert distance(a, a) == 0
    assert distance(a, b) == distance(b, a)


def test_lane_anchor_only_for_lanes():
    for region in MapRegion:
        if region in LANE_ANCHORS:
            assert lane_anchor(region) == LANE_ANCHORS[region]
        else:
            assert lane_anchor(region) is None


def test_nearest_lane_and_side():
    assert nearest_lane(MapRegion.TOP_JUNGLE) == Lane.TOP
    assert nearest_lane(MapRegion.BOT_LANE) == Lane.BOT
    assert nearest_lane(MapRegion.RIVER) == Lane.MID
    assert nearest_lane(MapRegion.BASE) == Lane.MID
    assert MapRegion.BOT_JUNGLE.side == "bot"
    assert MapRegion.MID_JUNGLE.is_jungle
    assert not MapRegion.RIVER.is_jungle


def test_clamp_to_map():
    assert clamp_to_map(-5, 16000) == Position(0, 15000)
    assert clamp_to_map(100, 200) == Position(100, 200)

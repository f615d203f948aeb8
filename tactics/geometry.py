import math
from typing import Dict, Optional
from .model import MAP_MAX, MAP_MIN, Lane, MapRegion, Position

# Lane anchors exist for the three lanes only
LANE_ANCHORS: Dict[MapRegion, Position] = {
    MapRegion.TOP_LANE: Position(2500, 13000),
    MapRegion.MID_LANE: Position(7500, 7500),
    MapRegion.BOT_LANE: Position(12500, 2500),
}

# Approximate centre of every zone, used to place simulated units
REGION_ANCHORS: Dict[MapRegion, Position] = {
    MapRegion.BASE: Position(1500, 1500),
    MapRegion.TOP_JUNGLE: Position(2500, 11000),
    MapRegion.MID_JUNGLE: Position(7500, 7500),
    MapRegion.BOT_JUNGLE: Position(11000, 2500),
    MapRegion.TOP_LANE: Position(2500, 13000),
    MapRegion.MID_LANE: Position(7500, 7500),
    MapRegion.BOT_LANE: Position(12500, 2500),
    MapRegion.RIVER: Position(5000, 5000),
}

def classify(x: float, y: float) -> MapRegion:
    """Map a coordinate to exactly one zone.

    Rules are checked in a fixed priority order; anything that falls through
    every box is treated as mid jungle.
    """
    if x < 2000 and y < 2000:
        return MapRegion.BASE

    if y > 12000 and x < 5000:
        return MapRegion.TOP_LANE
    if y < 3000 and x > 12000:
        return MapRegion.BOT_LANE
    if 7000 < x < 8000:
        return MapRegion.MID_LANE

    if x < 5000 and y > 10000:
        return MapRegion.TOP_JUNGLE
    if x > 10000 and y < 5000:
        return MapRegion.BOT_JUNGLE

    in_mid_jungle = 5000 < x < 10000 and 5000 < y < 10000
    if in_mid_jungle:
        return MapRegion.MID_JUNGLE

    if 4000 < x < 11000 and 4000 < y < 11000:
        return MapRegion.RIVER

    return MapRegion.MID_JUNGLE

def classify_position(pos: Position) -> MapRegion:
    return classify(pos.x, pos.y)

def distance(a: Position, b: Position) -> float:
    """Calculate Euclidean distance between two positions."""
    dx = b.x - a.x
    dy = b.y - a.y
    return math.sqrt(dx * dx + dy * dy)

def lane_anchor(region: MapRegion) -> Optional[Position]:
    """Anchor point for a lane region, or None for jungle, base and river."""
    if region in LANE_ANCHORS:
        return LANE_ANCHORS[region]
    return None

def region_anchor(region: MapRegion) -> Position:
    return REGION_ANCHORS[region]

def nearest_lane(region: MapRegion) -> Lane:
    side = region.side
    if side == "top":
        return Lane.TOP
    if side == "bot":
        return Lane.BOT
    return Lane.MID

def clamp_to_map(x: float, y: float) -> Position:
    return Position(max(MAP_MIN, min(MAP_MAX, x)), max(MAP_MIN, min(MAP_MAX, y)))

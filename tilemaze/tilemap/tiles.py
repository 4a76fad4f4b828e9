"""
Tile code vocabularies for the terrain and food layers.

A tile code is a small non-negative integer stored per cell. Each layer has
its own vocabulary and its own value limit: any code at or above the limit is
invalid for that layer and is replaced by EMPTY when parsing map text.

Terrain codes come in two families:
- single walls (WALL_*, CORNER_*): thin obstacle outlines inside the maze
- double walls (DWALL_*, DCORNER_*, DCORNER_ANGULAR_*, DOOR): the maze border,
  tunnel entries and the ghost house. Doors are double walls for tracing.

Corner codes name the compass corner of the obstacle they sit on, so a
CORNER_NW tile is the top-left corner of its obstacle.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class TerrainTile(IntEnum):
    EMPTY = 0
    WALL_H = 1
    WALL_V = 2
    CORNER_NW = 3
    CORNER_NE = 4
    CORNER_SE = 5
    CORNER_SW = 6
    TUNNEL = 7
    # 8 and 9 were food codes before food moved to its own layer. They are
    # still inside the value limit so old maps parse unchanged.
    DWALL_H = 10
    DWALL_V = 11
    DCORNER_NW = 12
    DCORNER_NE = 13
    DCORNER_SE = 14
    DCORNER_SW = 15
    DOOR = 16
    DCORNER_ANGULAR_NW = 17
    DCORNER_ANGULAR_NE = 18
    DCORNER_ANGULAR_SE = 19
    DCORNER_ANGULAR_SW = 20


class FoodTile(IntEnum):
    EMPTY = 0
    PELLET = 1
    ENERGIZER = 2


TERRAIN_VALUE_LIMIT = 21
FOOD_VALUE_LIMIT = 3

EMPTY = 0


class Corner(Enum):
    """Compass corner of an obstacle that a corner tile belongs to."""

    NW = "nw"
    NE = "ne"
    SE = "se"
    SW = "sw"


_CORNERS: dict[int, Corner] = {
    TerrainTile.CORNER_NW: Corner.NW,
    TerrainTile.CORNER_NE: Corner.NE,
    TerrainTile.CORNER_SE: Corner.SE,
    TerrainTile.CORNER_SW: Corner.SW,
    TerrainTile.DCORNER_NW: Corner.NW,
    TerrainTile.DCORNER_NE: Corner.NE,
    TerrainTile.DCORNER_SE: Corner.SE,
    TerrainTile.DCORNER_SW: Corner.SW,
    TerrainTile.DCORNER_ANGULAR_NW: Corner.NW,
    TerrainTile.DCORNER_ANGULAR_NE: Corner.NE,
    TerrainTile.DCORNER_ANGULAR_SE: Corner.SE,
    TerrainTile.DCORNER_ANGULAR_SW: Corner.SW,
}

_ANGULAR_CORNERS = frozenset(
    {
        TerrainTile.DCORNER_ANGULAR_NW,
        TerrainTile.DCORNER_ANGULAR_NE,
        TerrainTile.DCORNER_ANGULAR_SE,
        TerrainTile.DCORNER_ANGULAR_SW,
    }
)

SINGLE_WALL_CODES = frozenset(
    {
        TerrainTile.WALL_H,
        TerrainTile.WALL_V,
        TerrainTile.CORNER_NW,
        TerrainTile.CORNER_NE,
        TerrainTile.CORNER_SE,
        TerrainTile.CORNER_SW,
    }
)

DOUBLE_WALL_CODES = frozenset(
    {
        TerrainTile.DWALL_H,
        TerrainTile.DWALL_V,
        TerrainTile.DCORNER_NW,
        TerrainTile.DCORNER_NE,
        TerrainTile.DCORNER_SE,
        TerrainTile.DCORNER_SW,
        TerrainTile.DOOR,
    }
    | _ANGULAR_CORNERS
)

HORIZONTAL_WALL_CODES = frozenset(
    {TerrainTile.WALL_H, TerrainTile.DWALL_H, TerrainTile.DOOR}
)
VERTICAL_WALL_CODES = frozenset({TerrainTile.WALL_V, TerrainTile.DWALL_V})


def is_terrain_code(code: int) -> bool:
    return 0 <= code < TERRAIN_VALUE_LIMIT


def is_food_code(code: int) -> bool:
    return 0 <= code < FOOD_VALUE_LIMIT


def is_single_wall(code: int) -> bool:
    return code in SINGLE_WALL_CODES


def is_double_wall(code: int) -> bool:
    return code in DOUBLE_WALL_CODES


def is_wall(code: int) -> bool:
    return code in SINGLE_WALL_CODES or code in DOUBLE_WALL_CODES


def corner_of(code: int) -> Corner | None:
    """Compass corner encoded by a corner tile code, None for non-corner codes."""
    return _CORNERS.get(code)


def is_angular_corner(code: int) -> bool:
    return code in _ANGULAR_CORNERS


def is_blocked(code: int) -> bool:
    """True for terrain an actor cannot walk through. Tunnels are passable."""
    return is_wall(code)

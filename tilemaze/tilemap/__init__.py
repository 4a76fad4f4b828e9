"""Layered tile grids and their text format.

- TileGrid: one rectangular layer of integer tile codes plus properties
- WorldMap: terrain and food layers of one maze
- tiles: the terrain and food code vocabularies
"""

from .tile_grid import ParseIssue, TileGrid, TileOutOfBoundsError
from .tiles import (
    FOOD_VALUE_LIMIT,
    TERRAIN_VALUE_LIMIT,
    Corner,
    FoodTile,
    TerrainTile,
)
from .world_map import LayerID, WorldMap

__all__ = [
    "FOOD_VALUE_LIMIT",
    "TERRAIN_VALUE_LIMIT",
    "Corner",
    "FoodTile",
    "LayerID",
    "ParseIssue",
    "TerrainTile",
    "TileGrid",
    "TileOutOfBoundsError",
    "WorldMap",
]

"""Sample maps and small grid builders shared by the tests."""

from __future__ import annotations

import numpy as np

from tilemaze.tilemap import TERRAIN_VALUE_LIMIT, TileGrid

# 6 cols x 5 rows: a closed double-wall border around one single-wall
# rectangle obstacle whose NW corner is tile (1, 1).
SAMPLE_MAP_TEXT = """\
!terrain
pos_pac=(2,3)
pos_bonus=(4,3)
!data
12,10,10,10,10,13
11, 3, 1, 4, 0,11
11, 6, 1, 5, 0,11
11, 0, 0, 0, 0,11
15,10,10,10,10,14
!food
!data
 0, 0, 0, 0, 0, 0
 0, 0, 0, 0, 1, 0
 0, 0, 0, 0, 1, 0
 0, 1, 1, 1, 2, 0
 0, 0, 0, 0, 0, 0
"""

SAMPLE_MAP_ROWS = 5
SAMPLE_MAP_COLS = 6

# Walkable tiles of the sample map
SAMPLE_MAP_PASSABLE = {(4, 1), (4, 2), (1, 3), (2, 3), (3, 3), (4, 3)}

# Single-wall rectangle: tiles (1,1)..(3,2)
RECTANGLE_OBSTACLE = [
    [0, 0, 0, 0, 0],
    [0, 3, 1, 4, 0],
    [0, 6, 1, 5, 0],
    [0, 0, 0, 0, 0],
]

# Single-wall L shape. Its corner tiles centre on the polygon
# (12,12) (12,44) (28,44) (28,28) (36,28) (36,12), area 640.
L_SHAPED_OBSTACLE = [
    [0, 0, 0, 0, 0, 0],
    [0, 3, 1, 1, 4, 0],
    [0, 2, 0, 0, 2, 0],
    [0, 2, 0, 3, 5, 0],
    [0, 2, 0, 2, 0, 0],
    [0, 6, 1, 5, 0, 0],
    [0, 0, 0, 0, 0, 0],
]


def terrain_grid(rows: list[list[int]]) -> TileGrid:
    """Terrain grid from a row-major list of code rows."""
    return TileGrid.from_array(np.array(rows, dtype=np.uint8), TERRAIN_VALUE_LIMIT)


def rects_overlap(rects: list) -> bool:
    return any(
        a.overlaps(b) for i, a in enumerate(rects) for b in rects[i + 1 :]
    )


# 10 cols x 9 rows: a closed double-wall border around three single-wall
# obstacles (2x2, 3x3 ring and 3x2).
MULTI_OBSTACLE_MAP = [
    [12, 10, 10, 10, 10, 10, 10, 10, 10, 13],
    [11, 0, 0, 0, 0, 0, 0, 0, 0, 11],
    [11, 0, 3, 4, 0, 3, 1, 4, 0, 11],
    [11, 0, 6, 5, 0, 2, 0, 2, 0, 11],
    [11, 0, 0, 0, 0, 6, 1, 5, 0, 11],
    [11, 0, 3, 1, 4, 0, 0, 0, 0, 11],
    [11, 0, 6, 1, 5, 0, 0, 0, 0, 11],
    [11, 0, 0, 0, 0, 0, 0, 0, 0, 11],
    [15, 10, 10, 10, 10, 10, 10, 10, 10, 14],
]

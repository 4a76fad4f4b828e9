"""Grid reachability and shortest paths over passable-tile masks.

Masks are boolean numpy arrays of shape (rows, cols), the same layout as
TileGrid storage. Positions are (x, y) = (column, row) tile positions.
Movement is 4-connected: maze corridors never connect diagonally.
"""

from __future__ import annotations

import numpy as np
import tcod.path

from tilemaze.types import TilePos
from tilemaze.util.coordinates import is_valid_tile_pos


def _check_start(passable: np.ndarray, pos: TilePos) -> None:
    rows, cols = passable.shape
    if not is_valid_tile_pos(pos, cols, rows):
        raise ValueError(f"Position {pos} is outside the {cols}x{rows} mask")


def reachable_mask(passable: np.ndarray, start: TilePos) -> np.ndarray:
    """Boolean mask of all tiles reachable from start through passable tiles.

    A blocked start tile reaches nothing, not even itself.
    """
    _check_start(passable, start)
    x, y = start
    reachable = np.zeros(passable.shape, dtype=bool)
    if not passable[y, x]:
        return reachable

    cost = passable.astype(np.int8)
    dist = tcod.path.maxarray(passable.shape, dtype=np.int32)
    dist[y, x] = 0
    dist = tcod.path.dijkstra2d(dist, cost, cardinal=1, diagonal=None, out=dist)
    unreached = np.iinfo(np.int32).max
    reachable[:] = (dist != unreached) & passable
    return reachable


def is_connected(passable: np.ndarray) -> bool:
    """True if every passable tile can reach every other passable tile."""
    ys, xs = np.nonzero(passable)
    if len(xs) == 0:
        return True
    reached = reachable_mask(passable, (int(xs[0]), int(ys[0])))
    return bool(np.array_equal(reached, passable.astype(bool)))


def find_path(passable: np.ndarray, start: TilePos, goal: TilePos) -> list[TilePos]:
    """
    Calculates a shortest 4-connected path from start to goal using A*.

    Returns:
        A list of (x, y) positions from start to goal. The list does not include
        the start position. Returns an empty list if no path exists.
    """
    _check_start(passable, start)
    _check_start(passable, goal)
    cost = np.array(passable, dtype=np.int8)
    astar = tcod.path.AStar(cost=cost, diagonal=0)
    # The cost array is indexed [row, col], so A* works in (row, col) pairs.
    steps = astar.get_path(start[1], start[0], goal[1], goal[0])
    return [(col, row) for row, col in steps]

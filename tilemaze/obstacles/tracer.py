"""
Obstacle path tracing over terrain grids.

The tracer turns the wall tiles of a terrain grid into Obstacles: ordered
segment paths that walk along the centre line of each contiguous wall.

Seeds are processed in this order, and a tile explored by one trace is never
the seed of another:

1. Single-wall NW corners. Each starts a closed boundary walked
   counter-clockwise: the NW corner turns left and down, then the trace runs
   down the left side, along the bottom, up the right side and back along
   the top.
2. Double-wall handles on the left and right map border: a horizontal double
   wall or a corner leading inward. These start border walls, such as the
   ones around tunnel entries, that may leave the map again.
3. Double-wall NW corners, rounded or angular. These pick up the closed outer
   border and the ghost house. Doors are walls here.

A trace follows the tile under the cursor: straight tiles continue in the
current heading, corner tiles turn according to the heading they are entered
with. It stops when it comes back to its seed tile (closed obstacle), leaves
the map, reaches an explored tile or finds a tile it cannot continue through
(open obstacle). Tiles of the last kind are reported in `tiles_with_errors`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from tilemaze import config
from tilemaze.obstacles.obstacle import Obstacle
from tilemaze.obstacles.segment import CornerSegment, StraightSegment
from tilemaze.tilemap.tile_grid import TileGrid
from tilemaze.tilemap.tiles import (
    EMPTY,
    HORIZONTAL_WALL_CODES,
    VERTICAL_WALL_CODES,
    Corner,
    TerrainTile,
    corner_of,
    is_angular_corner,
    is_double_wall,
)
from tilemaze.types import Direction, Point, TilePos
from tilemaze.util.coordinates import add, scale, tile_origin

logger = logging.getLogger(__name__)

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)

# (corner, heading when entering the tile) -> (counter-clockwise, heading when leaving)
_CORNER_TURNS: dict[tuple[Corner, Direction], tuple[bool, Direction]] = {
    (Corner.SW, DOWN): (True, RIGHT),
    (Corner.SW, LEFT): (False, UP),
    (Corner.SE, DOWN): (False, LEFT),
    (Corner.SE, RIGHT): (True, UP),
    (Corner.NE, UP): (True, LEFT),
    (Corner.NE, RIGHT): (False, DOWN),
    (Corner.NW, UP): (False, RIGHT),
    (Corner.NW, LEFT): (True, DOWN),
}

# Border handle corners: (corner, on left border) -> (counter-clockwise, heading)
_BORDER_CORNERS: dict[tuple[Corner, bool], tuple[bool, Direction]] = {
    (Corner.SE, True): (True, UP),
    (Corner.NE, True): (False, DOWN),
    (Corner.SW, False): (False, UP),
    (Corner.NW, False): (True, DOWN),
}

_DOUBLE_NW_CODES = frozenset({TerrainTile.DCORNER_NW, TerrainTile.DCORNER_ANGULAR_NW})


@dataclass
class TraceResult:
    wall_paths: list[Obstacle] = field(default_factory=list)
    dwall_paths: list[Obstacle] = field(default_factory=list)
    tiles_with_errors: list[TilePos] = field(default_factory=list)

    @property
    def obstacles(self) -> list[Obstacle]:
        return self.wall_paths + self.dwall_paths


class _Cursor:
    """Current tile of a trace and the heading it was entered with."""

    def __init__(self, tile: TilePos) -> None:
        self.tile = tile
        self.heading: Direction | None = None

    def move(self, direction: Direction) -> None:
        self.tile = add(self.tile, direction)
        self.heading = direction


class _TraceRun:
    """State of one trace() call over one grid."""

    def __init__(self, grid: TileGrid, step_limit: int) -> None:
        self.grid = grid
        self.step_limit = step_limit
        self.explored = np.zeros((grid.num_rows, grid.num_cols), dtype=bool)
        self.tiles_with_errors: list[TilePos] = []

    def is_explored(self, tile: TilePos) -> bool:
        return bool(self.explored[tile[1], tile[0]])

    def set_explored(self, tile: TilePos) -> None:
        self.explored[tile[1], tile[0]] = True

    def code(self, tile: TilePos) -> int:
        return self.grid.get_tile(tile)

    # -------------------------------------------------------------------------
    # Seeds
    # -------------------------------------------------------------------------

    def closed_obstacle(self, corner_nw: TilePos) -> Obstacle:
        code = self.code(corner_nw)
        obstacle = Obstacle(
            _point(corner_nw, config.TILE_SIZE, config.HALF_TILE_SIZE),
            double_walls=is_double_wall(code),
        )
        obstacle.add_segment(_corner_segment(Corner.NW, True, code))
        self.set_explored(corner_nw)
        cursor = _Cursor(corner_nw)
        cursor.move(DOWN)
        self.follow(obstacle, corner_nw, cursor)
        if obstacle.is_closed:
            logger.debug(f"Closed obstacle with top-left tile {corner_nw}: {obstacle}")
        return obstacle

    def border_obstacle(self, tile: TilePos) -> Obstacle | None:
        """Trace from a border handle, or None if the tile is not a handle."""
        at_left = tile[0] == 0
        code = self.code(tile)
        obstacle = Obstacle(
            _point(tile, 0 if at_left else config.TILE_SIZE, config.HALF_TILE_SIZE),
            border_obstacle=True,
            double_walls=True,
        )
        corner = corner_of(code)
        if code == TerrainTile.DWALL_H:
            heading = RIGHT if at_left else LEFT
            obstacle.add_segment(StraightSegment(scale(heading, config.TILE_SIZE), code))
        elif corner is not None and (corner, at_left) in _BORDER_CORNERS:
            ccw, heading = _BORDER_CORNERS[corner, at_left]
            obstacle.add_segment(_corner_segment(corner, ccw, code))
        else:
            return None
        self.set_explored(tile)
        cursor = _Cursor(tile)
        cursor.move(heading)
        self.follow(obstacle, tile, cursor)
        logger.debug(f"Border obstacle from tile {tile}: {obstacle}")
        return obstacle

    # -------------------------------------------------------------------------
    # Walking
    # -------------------------------------------------------------------------

    def follow(self, obstacle: Obstacle, start_tile: TilePos, cursor: _Cursor) -> None:
        """Extend obstacle tile by tile until the boundary closes or ends."""
        for _ in range(self.step_limit):
            tile = cursor.tile
            if tile == start_tile:
                return
            if self.grid.tile_out_of_bounds(tile) or self.is_explored(tile):
                return
            self.set_explored(tile)
            code = self.code(tile)
            heading = cursor.heading
            corner = corner_of(code)

            if code in VERTICAL_WALL_CODES and heading in (UP, DOWN):
                obstacle.add_segment(StraightSegment(scale(heading, config.TILE_SIZE), code))
                cursor.move(heading)
            elif code in HORIZONTAL_WALL_CODES and heading in (LEFT, RIGHT):
                obstacle.add_segment(StraightSegment(scale(heading, config.TILE_SIZE), code))
                cursor.move(heading)
            elif corner is not None and (corner, heading) in _CORNER_TURNS:
                ccw, next_heading = _CORNER_TURNS[corner, heading]
                obstacle.add_segment(_corner_segment(corner, ccw, code))
                cursor.move(next_heading)
            else:
                logger.debug(f"Did not expect content {code} at tile {tile}")
                self.tiles_with_errors.append(tile)
                return
        logger.warning(
            f"Trace from tile {start_tile} stopped after {self.step_limit} steps"
        )


def _point(tile: TilePos, dx: int, dy: int) -> Point:
    return add(tile_origin(tile, config.TILE_SIZE), (dx, dy))


def _corner_segment(corner: Corner, ccw: bool, code: int) -> CornerSegment:
    return CornerSegment(corner, ccw, code, angular=is_angular_corner(code))


class ObstaclePathTracer:
    """Finds all wall boundaries of a terrain grid.

    The tracer keeps no state between calls: the same grid always yields the
    same obstacles.
    """

    def __init__(
        self, step_limit: int = config.TRACE_STEP_LIMIT, optimize: bool = True
    ) -> None:
        self.step_limit = step_limit
        self.optimize = optimize

    def trace(self, terrain: TileGrid) -> TraceResult:
        run = _TraceRun(terrain, self.step_limit)
        result = TraceResult()
        logger.debug(
            f"Tracing obstacles in {terrain.num_rows}x{terrain.num_cols} terrain grid"
        )

        for tile in terrain.tiles_with(TerrainTile.CORNER_NW):
            if not run.is_explored(tile):
                result.wall_paths.append(run.closed_obstacle(tile))

        last_col = terrain.num_cols - 1
        for tile in terrain.tiles():
            if tile[0] not in (0, last_col) or run.is_explored(tile):
                continue
            if terrain.get_tile(tile) == EMPTY:
                continue
            obstacle = run.border_obstacle(tile)
            if obstacle is not None:
                result.dwall_paths.append(obstacle)

        first_wall = next(
            (tile for tile in terrain.tiles() if terrain.get_tile(tile) != EMPTY), None
        )
        for tile in terrain.tiles():
            if terrain.get_tile(tile) in _DOUBLE_NW_CODES and not run.is_explored(tile):
                obstacle = run.closed_obstacle(tile)
                # A closed map border whose top-left corner is not in column 0
                if tile == first_wall:
                    obstacle.border_obstacle = True
                result.dwall_paths.append(obstacle)

        if self.optimize:
            result.wall_paths = [o.optimized() for o in result.wall_paths]
            result.dwall_paths = [o.optimized() for o in result.dwall_paths]
        result.tiles_with_errors = run.tiles_with_errors
        logger.debug(
            f"Found {len(result.wall_paths)} wall paths, "
            f"{len(result.dwall_paths)} double wall paths, "
            f"{len(result.tiles_with_errors)} tiles with errors"
        )
        return result

    def trace_obstacle(self, terrain: TileGrid, corner_nw: TilePos) -> Obstacle:
        """Trace the single boundary starting at an NW corner tile."""
        if terrain.tile_out_of_bounds(corner_nw):
            raise ValueError(f"Start tile {corner_nw} is outside the map")
        if corner_of(terrain.get_tile(corner_nw)) is not Corner.NW:
            raise ValueError(f"Start tile {corner_nw} is not an NW corner")
        obstacle = _TraceRun(terrain, self.step_limit).closed_obstacle(corner_nw)
        return obstacle.optimized() if self.optimize else obstacle

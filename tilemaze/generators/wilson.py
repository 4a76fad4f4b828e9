"""
Perfect mazes from uniform spanning trees (Wilson's algorithm).

Wilson's algorithm builds a spanning tree of the grid graph from loop-erased
random walks. Starting from a tree holding a single vertex, each vertex not
yet in the tree starts a random walk that runs until it hits the tree. The
walk remembers only the last direction it left each vertex in, so replaying it
from the start follows the walk with all its loops cut out. The replayed path
joins the tree. Every spanning tree is produced with equal probability.

The tree is rasterized into a terrain grid at three times the resolution:
vertex (row, col) becomes the 3x3 tile block centred on tile
(3 * row + 1, 3 * col + 1). The centre tile and the edge tiles towards
connected neighbors are open, all other tiles of the block are walls.
All walls use a single code and no corner codes, so the obstacle tracer finds
no closed obstacles in a generated maze.
"""

from __future__ import annotations

import logging

from tilemaze import config
from tilemaze.generators.base import BaseMazeGenerator
from tilemaze.generators.grid_graph import GridDirection, GridGraph
from tilemaze.tilemap.tiles import EMPTY, TerrainTile, is_wall
from tilemaze.tilemap.world_map import WorldMap
from tilemaze.util import rng
from tilemaze.util.rng import RNG

logger = logging.getLogger(__name__)

_rng = rng.get("maze.wilson")


class MazeGraphGenerator(BaseMazeGenerator):
    """Generates random perfect mazes.

    Args:
        rng: Source of randomness. Defaults to the "maze.wilson" stream.
        wall_code: Terrain code written to blocked tiles.
    """

    def __init__(
        self, rng: RNG | None = None, wall_code: int = TerrainTile.WALL_H
    ) -> None:
        if not is_wall(wall_code):
            raise ValueError(f"Tile code {wall_code} is not a wall code")
        self.rng = rng if rng is not None else _rng
        self.wall_code = wall_code

    def generate(self, num_rows: int, num_cols: int) -> WorldMap:
        graph = self.create_spanning_tree(num_rows, num_cols)
        world = self.rasterize(graph)
        logger.debug(
            f"Generated {num_rows}x{num_cols} maze, "
            f"{world.num_rows}x{world.num_cols} tiles"
        )
        return world

    def create_spanning_tree(self, num_rows: int, num_cols: int) -> GridGraph:
        graph = GridGraph(num_rows, num_cols)
        in_tree = [False] * graph.num_vertices
        in_tree[self.rng.randrange(graph.num_vertices)] = True

        order = list(range(graph.num_vertices))
        self.rng.shuffle(order)

        # Last direction each vertex was left in during the current walk
        exit_direction: list[GridDirection | None] = [None] * graph.num_vertices
        for start in order:
            v = start
            while not in_tree[v]:
                direction = self.rng.choice(graph.directions(v))
                exit_direction[v] = direction
                v = graph.neighbor(v, direction)

            v = start
            while not in_tree[v]:
                direction = exit_direction[v]
                graph.connect(v, direction)
                in_tree[v] = True
                v = graph.neighbor(v, direction)

        return graph

    def rasterize(self, graph: GridGraph) -> WorldMap:
        size = config.MAZE_BLOCK_SIZE
        world = WorldMap.blank(size * graph.num_rows, size * graph.num_cols)
        terrain = world.terrain

        def write(row: int, col: int, code: int) -> None:
            if not terrain.out_of_bounds(row, col):
                terrain.set(row, col, code)

        for v in range(graph.num_vertices):
            center_row = size * graph.row(v) + 1
            center_col = size * graph.col(v) + 1
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    write(center_row + dr, center_col + dc, self.wall_code)
            write(center_row, center_col, EMPTY)
            for direction in GridDirection:
                if graph.connected(v, direction):
                    dr, dc = direction.delta
                    write(center_row + dr, center_col + dc, EMPTY)

        terrain.set_property(config.PROPERTY_MAZE_ROWS, str(graph.num_rows))
        terrain.set_property(config.PROPERTY_MAZE_COLS, str(graph.num_cols))
        return world


def generate_maze(
    num_rows: int, num_cols: int, wall_code: int = TerrainTile.WALL_H
) -> WorldMap:
    """Generate a maze using the shared "maze.wilson" stream."""
    return MazeGraphGenerator(wall_code=wall_code).generate(num_rows, num_cols)

#!/usr/bin/env python3
"""Generate a random maze, or load a map file, and report its geometry."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tilemaze import config
from tilemaze.generators import MazeGraphGenerator
from tilemaze.tilemap import TerrainTile, WorldMap
from tilemaze.util import pathfinding, rng

WALL_CODES = {
    "wall_h": TerrainTile.WALL_H,
    "wall_v": TerrainTile.WALL_V,
    "dwall_h": TerrainTile.DWALL_H,
}


class MazeReport:
    """Prints connectivity and obstacle statistics for one map."""

    def __init__(self, world: WorldMap) -> None:
        self.world = world

    def _print_connectivity(self) -> None:
        passable = self.world.passable_mask()
        print(f"Passable tiles:  {int(passable.sum())}")
        print(f"Connected:       {pathfinding.is_connected(passable)}")

    def _print_obstacles(self) -> None:
        obstacles = self.world.obstacles()
        closed = [o for o in obstacles if o.is_closed and not o.double_walls]
        print(f"Obstacles:       {len(obstacles)} ({len(closed)} closed single-wall)")
        for obstacle in closed:
            rects = obstacle.inner_area_rectangles()
            area = sum(r.area for r in rects)
            print(f"  {obstacle}: {len(rects)} rectangles, area {area}")
        if self.world.tiles_with_errors:
            print(f"Tiles with errors: {self.world.tiles_with_errors}")

    def run(self, show_map: bool, trace_obstacles: bool) -> None:
        print(f"Map {self.world.num_cols}x{self.world.num_rows} tiles")
        print("=" * 42)
        if self.world.has_parse_issues:
            print(f"Parse issues:    {len(self.world.parse_issues)}")
        self._print_connectivity()
        if trace_obstacles:
            self._print_obstacles()
        if show_map:
            print()
            print(self.world.source_text_with_line_numbers())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Generate and inspect maze maps",
        epilog=(
            "Generated mazes fill every blocked tile with one wall code and have no "
            "corner tiles, so they contain no traceable obstacles. Obstacle and "
            "rectangle statistics are only reported for maps loaded with --map."
        ),
    )
    parser.add_argument("--rows", type=int, default=10, help="Maze rows (graph vertices)")
    parser.add_argument("--cols", type=int, default=10, help="Maze columns (graph vertices)")
    parser.add_argument(
        "--seed",
        type=str,
        default=config.RANDOM_SEED,
        help="Master random seed",
    )
    parser.add_argument(
        "--wall",
        choices=sorted(WALL_CODES),
        default="wall_h",
        help="Tile code written to maze walls",
    )
    parser.add_argument("--map", type=Path, help="Inspect an existing map file instead")
    parser.add_argument("--save", type=Path, help="Save the generated map to this file")
    parser.add_argument("--show", action="store_true", help="Print the map source")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.map is not None:
        world = WorldMap.from_file(args.map)
    else:
        rng.init(args.seed)
        generator = MazeGraphGenerator(wall_code=WALL_CODES[args.wall])
        world = generator.generate(args.rows, args.cols)
        if args.save is not None and world.save(args.save):
            print(f"Saved to {args.save}")

    MazeReport(world).run(args.show, trace_obstacles=args.map is not None)


if __name__ == "__main__":
    main()

"""
WorldMap: the terrain and food layers of one maze.

Both layers are TileGrids of identical size. The terrain layer also carries the
map-level properties (actor start tiles, ghost house corners) and is the input
for obstacle tracing. Copies are always deep: two WorldMaps never share grid
storage.

File format:

    !terrain
    <terrain properties>
    !data
    <terrain rows>
    !food
    <food properties>
    !data
    <food rows>
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from tilemaze import config
from tilemaze.tilemap.tile_grid import ParseIssue, TileGrid, TileOutOfBoundsError
from tilemaze.tilemap.tiles import (
    EMPTY,
    FOOD_VALUE_LIMIT,
    TERRAIN_VALUE_LIMIT,
    TerrainTile,
    is_blocked,
)
from tilemaze.types import TileCode, TilePos
from tilemaze.util import pathfinding

if TYPE_CHECKING:
    from tilemaze.obstacles.obstacle import Obstacle

logger = logging.getLogger(__name__)


class LayerID(Enum):
    TERRAIN = auto()
    FOOD = auto()


class WorldMap:
    """Terrain and food layers of a maze plus the source they were read from."""

    def __init__(
        self,
        terrain: TileGrid,
        food: TileGrid,
        source: str | None = None,
    ) -> None:
        if (terrain.num_rows, terrain.num_cols) != (food.num_rows, food.num_cols):
            raise ValueError(
                f"Layer sizes differ: terrain {terrain.num_rows}x{terrain.num_cols}, "
                f"food {food.num_rows}x{food.num_cols}"
            )
        self._terrain = terrain
        self._food = food
        self.source = source
        self.parse_issues: list[ParseIssue] = []
        self._obstacles: list[Obstacle] | None = None
        self._tiles_with_errors: list[TilePos] = []

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def blank(cls, num_rows: int, num_cols: int) -> WorldMap:
        return cls(
            TileGrid(num_rows, num_cols, TERRAIN_VALUE_LIMIT),
            TileGrid(num_rows, num_cols, FOOD_VALUE_LIMIT),
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str | None = None) -> WorldMap:
        """Split lines into the terrain and food sections and parse each one."""
        terrain_lines: list[str] = []
        food_lines: list[str] = []
        section: list[str] | None = None
        issues: list[ParseIssue] = []
        for index, raw in enumerate(lines):
            line = raw.rstrip("\r\n")
            marker = line.strip()
            if marker == config.MARKER_TERRAIN_SECTION:
                section = terrain_lines
            elif marker == config.MARKER_FOOD_SECTION:
                section = food_lines
            elif section is not None:
                section.append(line)
            elif marker:
                logger.warning(f"Line skipped: '{line}'")
                issues.append(ParseIssue(index, line, "Line outside any section"))

        terrain = TileGrid.parse(terrain_lines, TERRAIN_VALUE_LIMIT)
        food = TileGrid.parse(food_lines, FOOD_VALUE_LIMIT)
        issues.extend(terrain.parse_issues)
        issues.extend(food.parse_issues)
        if (food.num_rows, food.num_cols) != (terrain.num_rows, terrain.num_cols):
            logger.error(
                f"Food layer is {food.num_rows}x{food.num_cols}, terrain is "
                f"{terrain.num_rows}x{terrain.num_cols}; food layer cleared"
            )
            issues.append(ParseIssue(0, "", "Food layer size differs from terrain"))
            properties = food.properties
            food = TileGrid(terrain.num_rows, terrain.num_cols, FOOD_VALUE_LIMIT)
            food.replace_properties(properties)

        world = cls(terrain, food, source)
        world.parse_issues = issues
        return world

    @classmethod
    def from_text(cls, text: str, source: str | None = None) -> WorldMap:
        return cls.from_lines(text.splitlines(), source)

    @classmethod
    def from_file(cls, path: str | Path) -> WorldMap:
        """Read a map file. OSError propagates to the caller."""
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            world = cls.from_lines(f, source=str(path))
        logger.debug(f"Loaded {world}")
        return world

    def copy(self) -> WorldMap:
        other = WorldMap(self._terrain.copy(), self._food.copy(), self.source)
        other.parse_issues = list(self.parse_issues)
        return other

    # -------------------------------------------------------------------------
    # Layers
    # -------------------------------------------------------------------------

    @property
    def terrain(self) -> TileGrid:
        return self._terrain

    @property
    def food(self) -> TileGrid:
        return self._food

    def layer(self, layer: LayerID) -> TileGrid:
        match layer:
            case LayerID.TERRAIN:
                return self._terrain
            case LayerID.FOOD:
                return self._food
        raise ValueError(f"Unknown layer {layer!r}")

    @property
    def num_rows(self) -> int:
        return self._terrain.num_rows

    @property
    def num_cols(self) -> int:
        return self._terrain.num_cols

    @property
    def has_parse_issues(self) -> bool:
        return bool(self.parse_issues)

    def out_of_bounds(self, tile: TilePos) -> bool:
        return self._terrain.tile_out_of_bounds(tile)

    def index(self, tile: TilePos) -> int:
        return self._terrain.index(tile)

    def tile(self, index: int) -> TilePos:
        return self._terrain.tile(index)

    def tiles(self) -> Iterator[TilePos]:
        return self._terrain.tiles()

    def tiles_with(self, layer: LayerID, code: TileCode) -> Iterator[TilePos]:
        return self.layer(layer).tiles_with(code)

    def content(self, layer: LayerID, row: int, col: int) -> TileCode:
        return self.layer(layer).get(row, col)

    def content_at(self, layer: LayerID, tile: TilePos) -> TileCode:
        return self.layer(layer).get_tile(tile)

    def set_content(self, layer: LayerID, row: int, col: int, code: TileCode) -> None:
        self.layer(layer).set(row, col, code)
        if layer is LayerID.TERRAIN:
            self._obstacles = None

    def set_content_at(self, layer: LayerID, tile: TilePos, code: TileCode) -> None:
        self.set_content(layer, tile[1], tile[0], code)

    def set_block(
        self, layer: LayerID, origin: TilePos, block: Iterable[Iterable[TileCode]]
    ) -> None:
        """Write a block of codes row by row starting at origin.

        Cells of the block that fall outside the map are skipped. A code above
        the layer limit raises ValueError and leaves the cells before it written.
        """
        grid = self.layer(layer)
        ox, oy = origin
        try:
            for dy, row in enumerate(block):
                for dx, code in enumerate(row):
                    if not grid.out_of_bounds(oy + dy, ox + dx):
                        grid.set(oy + dy, ox + dx, code)
        finally:
            if layer is LayerID.TERRAIN:
                self._obstacles = None

    def mirror_position(self, tile: TilePos) -> TilePos:
        """The tile at the mirrored position with respect to the vertical axis."""
        if self.out_of_bounds(tile):
            raise TileOutOfBoundsError(tile[1], tile[0], self.num_rows, self.num_cols)
        return (self.num_cols - 1 - tile[0], tile[1])

    # -------------------------------------------------------------------------
    # Named tiles
    # -------------------------------------------------------------------------

    def get_tile_property(
        self, key: str, default: TilePos | None = None
    ) -> TilePos | None:
        return self._terrain.get_tile_property(key, default)

    def set_tile_property(self, key: str, tile: TilePos) -> None:
        self._terrain.set_tile_property(key, tile)
        if key == config.PROPERTY_POS_HOUSE_MIN_TILE:
            self._obstacles = None

    def pac_tile(self, default: TilePos | None = config.DEFAULT_PAC_TILE) -> TilePos | None:
        return self.get_tile_property(config.PROPERTY_POS_PAC, default)

    def bonus_tile(
        self, default: TilePos | None = config.DEFAULT_BONUS_TILE
    ) -> TilePos | None:
        return self.get_tile_property(config.PROPERTY_POS_BONUS, default)

    def house_min_tile(
        self, default: TilePos | None = config.DEFAULT_HOUSE_MIN_TILE
    ) -> TilePos | None:
        return self.get_tile_property(config.PROPERTY_POS_HOUSE_MIN_TILE, default)

    def house_max_tile(
        self, default: TilePos | None = config.DEFAULT_HOUSE_MAX_TILE
    ) -> TilePos | None:
        return self.get_tile_property(config.PROPERTY_POS_HOUSE_MAX_TILE, default)

    def ghost_home_tile(
        self, ghost: int, default: TilePos | None = None
    ) -> TilePos | None:
        """Home tile of ghost 0 (red) to 3 (orange)."""
        return self.get_tile_property(_GHOST_HOME_KEYS[ghost], default)

    def ghost_scatter_tile(
        self, ghost: int, default: TilePos | None = None
    ) -> TilePos | None:
        """Scatter target tile of ghost 0 (red) to 3 (orange)."""
        return self.get_tile_property(_GHOST_SCATTER_KEYS[ghost], default)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def insert_row_before(self, index: int) -> WorldMap:
        """New map with an empty row inserted before the given row index.

        Vertical walls on the left and right border continue through the new row.
        """
        if not 0 <= index <= self.num_rows:
            raise ValueError(f"Illegal row index for inserting row: {index}")
        new_map = self._with_layers(
            np.insert(self._terrain.to_array(), index, EMPTY, axis=0),
            np.insert(self._food.to_array(), index, EMPTY, axis=0),
        )
        if index < self.num_rows:
            for col in (0, self.num_cols - 1):
                if self._terrain.get(index, col) == TerrainTile.WALL_V:
                    new_map._terrain.set(index, col, TerrainTile.WALL_V)
        return new_map

    def delete_row_at(self, index: int) -> WorldMap:
        """New map without the given row."""
        if not 0 <= index < self.num_rows:
            raise ValueError(f"Illegal row index for deleting row: {index}")
        return self._with_layers(
            np.delete(self._terrain.to_array(), index, axis=0),
            np.delete(self._food.to_array(), index, axis=0),
        )

    def _with_layers(self, terrain: np.ndarray, food: np.ndarray) -> WorldMap:
        new_terrain = TileGrid.from_array(terrain, TERRAIN_VALUE_LIMIT)
        new_terrain.replace_properties(self._terrain.properties)
        new_food = TileGrid.from_array(food, FOOD_VALUE_LIMIT)
        new_food.replace_properties(self._food.properties)
        return WorldMap(new_terrain, new_food, self.source)

    # -------------------------------------------------------------------------
    # Obstacles
    # -------------------------------------------------------------------------

    def obstacles(self) -> list[Obstacle]:
        """Traced obstacles of the terrain layer, without the house placeholder.

        The list is computed on first use and recomputed after terrain edits made
        through this map.
        """
        if self._obstacles is None:
            self._update_obstacles()
        return list(self._obstacles)

    @property
    def tiles_with_errors(self) -> list[TilePos]:
        if self._obstacles is None:
            self._update_obstacles()
        return list(self._tiles_with_errors)

    def invalidate_obstacles(self) -> None:
        """Forget cached obstacles after editing the terrain grid directly."""
        self._obstacles = None

    def _update_obstacles(self) -> None:
        # Imported here: the tracer package depends on tilemap
        from tilemaze.obstacles.tracer import ObstaclePathTracer

        result = ObstaclePathTracer().trace(self._terrain)
        obstacles = result.wall_paths + result.dwall_paths
        house_min = self.get_tile_property(config.PROPERTY_POS_HOUSE_MIN_TILE)
        if house_min is None:
            logger.info(
                "Could not remove house placeholder obstacle, no min tile property exists"
            )
        else:
            start = (
                house_min[0] * config.TILE_SIZE + config.TILE_SIZE,
                house_min[1] * config.TILE_SIZE + config.HALF_TILE_SIZE,
            )
            for obstacle in obstacles:
                if obstacle.start_point == start:
                    logger.debug(
                        f"Removing house placeholder obstacle at tile {house_min}, "
                        f"point {start}"
                    )
                    obstacles.remove(obstacle)
                    break
        self._obstacles = obstacles
        self._tiles_with_errors = list(result.tiles_with_errors)
        logger.info(f"Obstacle list updated for {self}: {len(obstacles)} obstacles")

    # -------------------------------------------------------------------------
    # Reachability
    # -------------------------------------------------------------------------

    def passable_mask(self) -> np.ndarray:
        """Boolean (num_rows, num_cols) mask, True where the terrain is walkable."""
        blocked = [int(code) for code in TerrainTile if is_blocked(code)]
        return ~self._terrain.mask_of(blocked)

    def reachable_tiles(self, start: TilePos) -> set[TilePos]:
        mask = pathfinding.reachable_mask(self.passable_mask(), start)
        rows, cols = np.nonzero(mask)
        return {(int(x), int(y)) for y, x in zip(rows, cols)}

    def find_path(self, start: TilePos, goal: TilePos) -> list[TilePos]:
        return pathfinding.find_path(self.passable_mask(), start, goal)

    # -------------------------------------------------------------------------
    # Printing
    # -------------------------------------------------------------------------

    def source_text(self) -> str:
        lines = [config.MARKER_TERRAIN_SECTION]
        lines.extend(self._terrain.text_lines())
        lines.append(config.MARKER_FOOD_SECTION)
        lines.extend(self._food.text_lines())
        return "\n".join(lines) + "\n"

    def source_text_with_line_numbers(self) -> str:
        return "".join(
            f"{number:5d}: {line}\n"
            for number, line in enumerate(self.source_text().splitlines(), start=1)
        )

    def save(self, path: str | Path) -> bool:
        """Write the map file. Returns False and logs if writing fails."""
        try:
            Path(path).write_text(self.source_text(), encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not save map to {path}: {e}")
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldMap):
            return NotImplemented
        return self._terrain == other._terrain and self._food == other._food

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"WorldMap(rows={self.num_rows}, cols={self.num_cols}, "
            f"source={self.source!r})"
        )


_GHOST_HOME_KEYS = (
    config.PROPERTY_POS_RED_GHOST,
    config.PROPERTY_POS_PINK_GHOST,
    config.PROPERTY_POS_CYAN_GHOST,
    config.PROPERTY_POS_ORANGE_GHOST,
)
_GHOST_SCATTER_KEYS = (
    config.PROPERTY_POS_SCATTER_RED_GHOST,
    config.PROPERTY_POS_SCATTER_PINK_GHOST,
    config.PROPERTY_POS_SCATTER_CYAN_GHOST,
    config.PROPERTY_POS_SCATTER_ORANGE_GHOST,
)

"""
A rectangular grid of small integer tile codes with a property map.

TileGrid is the storage type of both WorldMap layers. Cells live in an owned
numpy array of shape (num_rows, num_cols); accessors take (row, col) or an
(x, y) tile position and always bounds-check. The backing array is never
handed out: `to_array()` returns a copy.

Text format (one layer):

    key=value            property section, see tilemap.properties
    ...
    !data
     0, 1, 2             one comma-separated row per line
     3, 4, 5

Parsing is forgiving. Bad cell values become EMPTY and inconsistent row
widths fall back to the width of the first data row; every such anomaly is
logged and recorded in `parse_issues` so callers can report a corrupt map
while still working with a best-effort grid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TextIO

import numpy as np

from tilemaze import config
from tilemaze.tilemap.properties import (
    check_property,
    format_properties,
    parse_properties,
)
from tilemaze.tilemap.tiles import EMPTY
from tilemaze.types import TileCode, TilePos
from tilemaze.util.coordinates import format_tile, parse_tile

logger = logging.getLogger(__name__)

# uint8 storage caps every vocabulary at 256 codes
MAX_VALUE_LIMIT = 256


class TileOutOfBoundsError(IndexError):
    """Raised when a grid coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, num_rows: int, num_cols: int) -> None:
        super().__init__(
            f"Illegal map coordinate row={row} col={col} "
            f"(grid has {num_rows} rows, {num_cols} cols)"
        )
        self.row = row
        self.col = col


@dataclass(frozen=True)
class ParseIssue:
    """One anomaly found while parsing map text.

    Attributes:
        line: Zero-based index of the offending line within the parsed lines.
        text: The offending entry or line.
        message: Human-readable description.
        row: Data row of the entry, if the issue concerns a cell.
        col: Data column of the entry, if the issue concerns a cell.
    """

    line: int
    text: str
    message: str
    row: int | None = None
    col: int | None = None


def _decode_entry(entry: str) -> int:
    """Decode a cell entry. Accepts decimal ("12") and hex ("#0C", "0x0C")."""
    if entry.startswith("#"):
        return int(entry[1:], 16)
    if entry[:2].lower() == "0x":
        return int(entry[2:], 16)
    return int(entry, 10)


class TileGrid:
    """A rectangular grid of tile codes below a fixed value limit."""

    def __init__(
        self, num_rows: int, num_cols: int, value_limit: int = MAX_VALUE_LIMIT
    ) -> None:
        if num_rows < 0 or num_cols < 0:
            raise ValueError(f"Grid size must be non-negative, got {num_rows}x{num_cols}")
        if not 0 < value_limit <= MAX_VALUE_LIMIT:
            raise ValueError(f"Value limit must be in 1..{MAX_VALUE_LIMIT}, got {value_limit}")
        self._cells = np.full((num_rows, num_cols), EMPTY, dtype=np.uint8)
        self._properties: dict[str, str] = {}
        self.value_limit = value_limit
        self.parse_issues: list[ParseIssue] = []

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def parse(
        cls, lines: Iterable[str], value_limit: int = MAX_VALUE_LIMIT
    ) -> TileGrid:
        """Parse a layer from its text lines.

        The data section is measured before storage is allocated: the number of
        non-blank lines after the data marker gives the row count and the first
        of them gives the column count.
        """
        lines = [line.rstrip("\r\n") for line in lines]
        issues: list[ParseIssue] = []

        # First pass: split off the property section, measure the data section
        data_start = -1
        property_lines: list[str] = []
        data_lines: list[tuple[int, str]] = []
        for index, line in enumerate(lines):
            if data_start == -1:
                if line.strip() == config.MARKER_DATA_SECTION:
                    data_start = index + 1
                else:
                    property_lines.append(line)
            elif line.strip():
                data_lines.append((index, line))

        num_rows = len(data_lines)
        num_cols = len(data_lines[0][1].split(",")) if data_lines else 0
        if num_rows == 0:
            logger.error("Inconsistent tile map data: no data section")
            issues.append(
                ParseIssue(max(data_start, 0), "", "Inconsistent tile map data: no data")
            )
        for index, line in data_lines[1:]:
            width = len(line.split(","))
            if width != num_cols:
                logger.warning(
                    f"Inconsistent tile map data: {width} columns in line {index}, "
                    f"expected {num_cols}"
                )
                issues.append(
                    ParseIssue(
                        index, line, f"{width} columns, expected {num_cols}"
                    )
                )

        # Second pass: fill the grid
        grid = cls(num_rows, num_cols, value_limit)
        properties, property_errors = parse_properties(property_lines)
        grid._properties.update(properties)
        for error in property_errors:
            logger.warning(f"Invalid line inside property section: '{error.text}'")
            issues.append(
                ParseIssue(error.line_index, error.text, "Invalid property line")
            )

        for row, (index, line) in enumerate(data_lines):
            for col, raw in enumerate(line.split(",")[:num_cols]):
                entry = raw.strip()
                try:
                    value = _decode_entry(entry)
                except ValueError:
                    logger.error(f"Invalid tile map entry '{entry}' at row {row}, col {col}")
                    issues.append(
                        ParseIssue(index, entry, "Not an integer", row, col)
                    )
                    continue
                if 0 <= value < value_limit:
                    grid._cells[row, col] = value
                else:
                    logger.error(f"Invalid tile map value {value} at row {row}, col {col}")
                    issues.append(
                        ParseIssue(
                            index, entry, f"Value outside 0..{value_limit - 1}", row, col
                        )
                    )

        grid.parse_issues = issues
        return grid

    @classmethod
    def from_text(cls, text: str, value_limit: int = MAX_VALUE_LIMIT) -> TileGrid:
        return cls.parse(text.splitlines(), value_limit)

    @classmethod
    def from_array(
        cls, cells: np.ndarray, value_limit: int = MAX_VALUE_LIMIT
    ) -> TileGrid:
        """Grid holding a copy of a 2D array of codes."""
        cells = np.asarray(cells)
        if cells.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {cells.shape}")
        if cells.size and (cells.min() < 0 or cells.max() >= value_limit):
            raise ValueError(f"Array holds codes outside 0..{value_limit - 1}")
        grid = cls(cells.shape[0], cells.shape[1], value_limit)
        grid._cells[:] = cells
        return grid

    def copy(self) -> TileGrid:
        """Independent copy: cells and properties are duplicated, never shared."""
        other = TileGrid(self.num_rows, self.num_cols, self.value_limit)
        other._cells[:] = self._cells
        other._properties = dict(self._properties)
        return other

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    @property
    def num_rows(self) -> int:
        return self._cells.shape[0]

    @property
    def num_cols(self) -> int:
        return self._cells.shape[1]

    @property
    def has_parse_issues(self) -> bool:
        return bool(self.parse_issues)

    def out_of_bounds(self, row: int, col: int) -> bool:
        return row < 0 or row >= self.num_rows or col < 0 or col >= self.num_cols

    def tile_out_of_bounds(self, tile: TilePos) -> bool:
        return self.out_of_bounds(tile[1], tile[0])

    def _check_bounds(self, row: int, col: int) -> None:
        if self.out_of_bounds(row, col):
            raise TileOutOfBoundsError(row, col, self.num_rows, self.num_cols)

    def index(self, tile: TilePos) -> int:
        """Row-major index of a tile inside the grid."""
        x, y = tile
        self._check_bounds(y, x)
        return y * self.num_cols + x

    def tile(self, index: int) -> TilePos:
        """Tile with the given row-major index."""
        if not 0 <= index < self.num_rows * self.num_cols:
            raise TileOutOfBoundsError(
                index // max(self.num_cols, 1),
                index % max(self.num_cols, 1),
                self.num_rows,
                self.num_cols,
            )
        return (index % self.num_cols, index // self.num_cols)

    def tiles(self) -> Iterator[TilePos]:
        """All tiles in row-major order. Each call starts a fresh iteration."""
        for y in range(self.num_rows):
            for x in range(self.num_cols):
                yield (x, y)

    def tiles_with(self, code: TileCode) -> Iterator[TilePos]:
        """Tiles holding the given code, in row-major order."""
        return (tile for tile in self.tiles() if self._cells[tile[1], tile[0]] == code)

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def get(self, row: int, col: int) -> TileCode:
        self._check_bounds(row, col)
        return int(self._cells[row, col])

    def set(self, row: int, col: int, code: TileCode) -> None:
        self._check_bounds(row, col)
        if not 0 <= code < self.value_limit:
            raise ValueError(f"Tile code {code} outside 0..{self.value_limit - 1}")
        self._cells[row, col] = code

    def get_tile(self, tile: TilePos) -> TileCode:
        return self.get(tile[1], tile[0])

    def set_tile(self, tile: TilePos, code: TileCode) -> None:
        self.set(tile[1], tile[0], code)

    def fill(self, code: TileCode) -> None:
        if not 0 <= code < self.value_limit:
            raise ValueError(f"Tile code {code} outside 0..{self.value_limit - 1}")
        self._cells.fill(code)

    def clear(self) -> None:
        """Set every cell to EMPTY."""
        self._cells.fill(EMPTY)

    def to_array(self) -> np.ndarray:
        """Copy of the cells as a (num_rows, num_cols) uint8 array."""
        return self._cells.copy()

    def mask_of(self, codes: Iterable[TileCode]) -> np.ndarray:
        """Boolean (num_rows, num_cols) mask of cells holding any of the codes."""
        return np.isin(self._cells, [int(code) for code in codes])

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def properties(self) -> dict[str, str]:
        """Copy of the property map."""
        return dict(self._properties)

    def property_names(self) -> list[str]:
        return sorted(self._properties)

    def has_property(self, key: str) -> bool:
        return key in self._properties

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self._properties.get(key, default)

    def set_property(self, key: str, value: str) -> None:
        value = str(value)
        check_property(key, value)
        self._properties[key] = value

    def remove_property(self, key: str) -> None:
        self._properties.pop(key, None)

    def replace_properties(self, properties: dict[str, str]) -> None:
        for key, value in properties.items():
            check_property(key, value)
        self._properties = dict(properties)

    def get_tile_property(
        self, key: str, default: TilePos | None = None
    ) -> TilePos | None:
        """Tile stored as "(x,y)" under key, or default if absent or unparsable."""
        text = self._properties.get(key)
        if text is None:
            return default
        tile = parse_tile(text)
        return tile if tile is not None else default

    def set_tile_property(self, key: str, tile: TilePos) -> None:
        self.set_property(key, format_tile(tile))

    # -------------------------------------------------------------------------
    # Printing
    # -------------------------------------------------------------------------

    def text_lines(self) -> list[str]:
        """Inverse of parse: property lines, data marker, one line per row."""
        lines = format_properties(self._properties)
        lines.append(config.MARKER_DATA_SECTION)
        width = config.PRINT_CELL_WIDTH
        for row in self._cells:
            lines.append(",".join(f"{int(value):{width}d}" for value in row))
        return lines

    def to_text(self) -> str:
        return "\n".join(self.text_lines()) + "\n"

    def print(self, out: TextIO) -> None:
        out.write(self.to_text())

    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return (
            self._cells.shape == other._cells.shape
            and bool(np.array_equal(self._cells, other._cells))
            and self._properties == other._properties
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"TileGrid(rows={self.num_rows}, cols={self.num_cols}, "
            f"value_limit={self.value_limit})"
        )

"""Value types and helpers for tile and tile-space coordinates."""

from __future__ import annotations

import re

from tilemaze.types import Point, TileCoord, TilePos, Vector

_TILE_PATTERN = re.compile(r"\((\d+),(\d+)\)")


class Rect:
    """Axis-aligned rectangle given by its top-left corner and size.

    Used both for tile-space areas (rectangle covers of obstacle interiors) and
    for tile regions. Width and height are non-negative.
    """

    __slots__ = ("x1", "x2", "y1", "y2")

    def __init__(self, x: int, y: int, w: int, h: int) -> None:
        if w < 0 or h < 0:
            raise ValueError(f"Rect size must be non-negative, got {w}x{h}")
        self.x1: int = x
        self.y1: int = y
        self.x2: int = x + w
        self.y2: int = y + h

    @classmethod
    def from_bounds(cls, x1: int, y1: int, x2: int, y2: int) -> Rect:
        """Create a Rect from corner coordinates (x1, y1, x2, y2)."""
        return cls(x1, y1, x2 - x1, y2 - y1)

    @property
    def x(self) -> int:
        return self.x1

    @property
    def y(self) -> int:
        return self.y1

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, point: Point) -> bool:
        """Half-open containment: left/top edges inside, right/bottom outside."""
        px, py = point
        return self.x1 <= px < self.x2 and self.y1 <= py < self.y2

    def overlaps(self, other: Rect) -> bool:
        """True if the interiors intersect. Rects sharing only an edge do not overlap."""
        return (
            self.x1 < other.x2
            and other.x1 < self.x2
            and self.y1 < other.y2
            and other.y1 < self.y2
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x1, self.y1, self.width, self.height)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Rect(x={self.x1}, y={self.y1}, w={self.width}, h={self.height})"


# =============================================================================
# BOUNDS CHECKING HELPERS
# =============================================================================


def is_valid_tile_pos(pos: TilePos, num_cols: TileCoord, num_rows: TileCoord) -> bool:
    """Check if a tile position is within grid bounds."""
    x, y = pos
    return 0 <= x < num_cols and 0 <= y < num_rows


# =============================================================================
# VECTOR HELPERS
# =============================================================================


def add(p: Point, v: Vector) -> Point:
    return (p[0] + v[0], p[1] + v[1])


def scale(v: Vector, factor: int) -> Vector:
    return (v[0] * factor, v[1] * factor)


def inverse(v: Vector) -> Vector:
    return (-v[0], -v[1])


def tile_origin(tile: TilePos, tile_size: int) -> Point:
    """Top-left tile-space point of a tile."""
    return (tile[0] * tile_size, tile[1] * tile_size)


# =============================================================================
# TEXT FORMAT
# =============================================================================


def parse_tile(text: str) -> TilePos | None:
    """Parse a "(x,y)" string into a tile position.

    Returns:
        The parsed position, or None if the text does not match the format.
    """
    m = _TILE_PATTERN.fullmatch(text.strip())
    if m is None:
        return None
    return (int(m.group(1)), int(m.group(2)))


def format_tile(tile: TilePos) -> str:
    """Format a tile position as "(x,y)"."""
    return f"({tile[0]},{tile[1]})"

"""
Segments: the pieces of a traced wall boundary.

A segment is either a straight run or a quarter-turn corner:

- StraightSegment: horizontal or vertical run, any multiple of the tile size
- CornerSegment: one corner tile, identified by its compass corner, whether it
  is drawn rounded or angular, and the winding of the boundary through it

Corner displacement is derived from corner and winding, never stored. A
corner always moves by half a tile in each axis, from the middle of one tile
edge to the middle of the adjacent edge:

    corner  counter-clockwise   clockwise
    NW      (-h, +h)            (+h, -h)
    NE      (-h, -h)            (+h, +h)
    SE      (+h, -h)            (-h, +h)
    SW      (+h, +h)            (-h, -h)

where h is HALF_TILE_SIZE. Tile space has y pointing down.
"""

from __future__ import annotations

from dataclasses import dataclass

from tilemaze import config
from tilemaze.tilemap.tiles import Corner
from tilemaze.types import Point, TileCode, Vector
from tilemaze.util.coordinates import add, inverse

_H = config.HALF_TILE_SIZE

# Counter-clockwise displacement per corner. Clockwise runs the same quarter
# turn backwards.
_CCW_VECTORS: dict[Corner, Vector] = {
    Corner.NW: (-_H, _H),
    Corner.NE: (-_H, -_H),
    Corner.SE: (_H, -_H),
    Corner.SW: (_H, _H),
}

# Screen-space start angle (degrees, y up) of the quarter circle drawn for a
# rounded corner. Every arc spans 90 degrees from its start angle.
_ARC_START_ANGLES: dict[Corner, int] = {
    Corner.NE: 0,
    Corner.NW: 90,
    Corner.SW: 180,
    Corner.SE: 270,
}


@dataclass(frozen=True)
class StraightSegment:
    """Horizontal or vertical run. `vector` has exactly one non-zero component."""

    vector: Vector
    code: TileCode

    def __post_init__(self) -> None:
        dx, dy = self.vector
        if (dx == 0) == (dy == 0):
            raise ValueError(f"Straight segment must be axis-aligned, got {self.vector}")

    @property
    def is_horizontal(self) -> bool:
        return self.vector[1] == 0

    @property
    def is_vertical(self) -> bool:
        return self.vector[0] == 0

    @property
    def length(self) -> int:
        return abs(self.vector[0]) + abs(self.vector[1])


@dataclass(frozen=True)
class CornerSegment:
    corner: Corner
    ccw: bool
    code: TileCode
    angular: bool = False

    @property
    def vector(self) -> Vector:
        vector = _CCW_VECTORS[self.corner]
        return vector if self.ccw else inverse(vector)


type Segment = StraightSegment | CornerSegment


@dataclass(frozen=True)
class ArcParameters:
    """Quarter circle drawn for a rounded corner.

    Angles are in degrees, counter-clockwise on screen, 0 pointing right.
    """

    center: Point
    radius: int
    start_angle: int
    extent: int = 90


def is_straight(segment: Segment) -> bool:
    return isinstance(segment, StraightSegment)


def end_point(segment: Segment, start: Point) -> Point:
    return add(start, segment.vector)


def arc_parameters(segment: Segment, start: Point) -> ArcParameters | None:
    """Arc for a rounded corner starting at `start`, None for other segments.

    The arc centre is the tile corner on the obstacle side of the turn, which
    is the bounding-box corner of the segment opposite to its compass corner.
    """
    match segment:
        case CornerSegment(angular=False, corner=corner):
            end = end_point(segment, start)
            xs = (start[0], end[0])
            ys = (start[1], end[1])
            match corner:
                case Corner.NW:
                    center = (max(xs), max(ys))
                case Corner.NE:
                    center = (min(xs), max(ys))
                case Corner.SE:
                    center = (min(xs), min(ys))
                case Corner.SW:
                    center = (max(xs), min(ys))
            return ArcParameters(center, _H, _ARC_START_ANGLES[corner])
        case _:
            return None


def polygon_vertex(segment: CornerSegment, start: Point) -> Point:
    """Centre of the corner tile a corner segment crosses.

    A corner starting on a vertical tile edge first closes the horizontal gap
    to the centre, otherwise the vertical gap.
    """
    dx, dy = segment.vector
    if start[0] % config.TILE_SIZE == 0:
        return (start[0] + dx, start[1])
    return (start[0], start[1] + dy)

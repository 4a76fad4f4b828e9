"""Obstacle: one traced wall boundary as a start point plus ordered segments."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from tilemaze.geometry.rectangles import decompose
from tilemaze.obstacles.segment import (
    CornerSegment,
    Segment,
    StraightSegment,
    end_point,
    polygon_vertex,
)
from tilemaze.types import Point
from tilemaze.util.coordinates import Rect, add


@dataclass
class Obstacle:
    """A contiguous wall boundary.

    Attributes:
        start_point: Tile-space point where the boundary starts.
        segments: Boundary pieces in traversal order. Adding the segment
            vectors to the start point one by one walks the boundary.
        border_obstacle: True for boundaries that touch the map border.
        double_walls: True if traced from double-wall tiles.
    """

    start_point: Point
    segments: list[Segment] = field(default_factory=list)
    border_obstacle: bool = False
    double_walls: bool = False

    def add_segment(self, segment: Segment) -> None:
        self.segments.append(segment)

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    def segment(self, index: int) -> Segment:
        return self.segments[index]

    def walk(self) -> Iterator[tuple[Point, Segment]]:
        """Yields (start point, segment) for every segment in order."""
        point = self.start_point
        for segment in self.segments:
            yield point, segment
            point = add(point, segment.vector)

    def points(self) -> list[Point]:
        """End points of all segments in order."""
        return [end_point(segment, start) for start, segment in self.walk()]

    @property
    def end_point(self) -> Point:
        point = self.start_point
        for segment in self.segments:
            point = add(point, segment.vector)
        return point

    @property
    def is_closed(self) -> bool:
        return bool(self.segments) and self.end_point == self.start_point

    def optimized(self) -> Obstacle:
        """Copy with runs of straight segments of the same tile code merged."""
        merged: list[Segment] = []
        for segment in self.segments:
            previous = merged[-1] if merged else None
            if (
                isinstance(segment, StraightSegment)
                and isinstance(previous, StraightSegment)
                and previous.code == segment.code
            ):
                merged[-1] = StraightSegment(
                    add(previous.vector, segment.vector), previous.code
                )
            else:
                merged.append(segment)
        return Obstacle(self.start_point, merged, self.border_obstacle, self.double_walls)

    def corner_polygon(self) -> list[Point]:
        """Distinct polygon vertices (corner tile centres) in traversal order."""
        vertices: list[Point] = []
        for start, segment in self.walk():
            if isinstance(segment, CornerSegment):
                vertex = polygon_vertex(segment, start)
                if vertex not in vertices:
                    vertices.append(vertex)
        return vertices

    def inner_area_rectangles(self) -> list[Rect]:
        """Rectangles exactly covering the area enclosed by the corner polygon.

        Only meaningful for closed obstacles.
        """
        if not self.is_closed:
            raise ValueError("Inner area is only defined for closed obstacles")
        return decompose(self.corner_polygon())

    def __str__(self) -> str:
        kind = "closed" if self.is_closed else "open"
        return (
            f"Obstacle({kind}, start={self.start_point}, "
            f"segments={self.num_segments}, border={self.border_obstacle})"
        )

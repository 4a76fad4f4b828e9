"""
Rectangle covers of orthogonal polygons.

Implements the decomposition of Gourley and Green ("A Polygon-to-Rectangle
Conversion Algorithm", IEEE CG&A 1983). The input is the set of corner points
of a simple orthogonal polygon. Each step cuts the top-left rectangle off the
remaining polygon:

1. p_k: the remaining point with the smallest y, then the smallest x
2. p_l: the next such point after p_k (the other end of the top edge)
3. p_m: among the points with p_k.x <= x <= p_l.x and y > p_k.y, the one
   with the smallest y, then the smallest x
4. emit the rectangle spanned by p_k, p_l and p_m
5. remove p_k and p_l. Toggle (p_k.x, p_m.y) and (p_l.x, p_m.y): remove
   each if present, add it otherwise

until no points remain.

The x test in step 3 is inclusive on both ends. The published condition
p_k.x < x excludes points directly below p_k and cuts rectangles that reach
outside the polygon.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from tilemaze.types import Point
from tilemaze.util.coordinates import Rect

type RectFactory[R] = Callable[[int, int, int, int], R]


def _order(point: Point) -> tuple[int, int]:
    return (point[1], point[0])


def _toggle(points: set[Point], point: Point) -> None:
    if point in points:
        points.remove(point)
    else:
        points.add(point)


class PolygonRectangleDecomposer[R]:
    """Decomposes orthogonal polygons into rectangles built by a factory.

    The factory receives (x, y, width, height) of each rectangle, so callers can
    produce their own primitive type, e.g. a 3D wall block, from the same
    coordinates.
    """

    def __init__(self, make_rect: RectFactory[R]) -> None:
        if make_rect is None:
            raise TypeError("Rectangle factory must not be None")
        self.make_rect = make_rect

    def decompose(self, points: Iterable[Point]) -> list[R]:
        """Rectangles exactly covering the polygon with the given corner points.

        Raises:
            TypeError: If points is None.
            ValueError: If the points do not form an orthogonal polygon, or if
                the factory returns None.
        """
        if points is None:
            raise TypeError("Point collection must not be None")
        remaining: set[Point] = {(int(p[0]), int(p[1])) for p in points}
        rectangles: list[R] = []

        while remaining:
            p_k = min(remaining, key=_order)
            remaining.remove(p_k)
            if not remaining:
                raise ValueError(f"No edge partner for corner {p_k}")
            p_l = min(remaining, key=_order)
            remaining.remove(p_l)

            candidates = [
                p
                for p in remaining
                if p_k[0] <= p[0] <= p_l[0] and p[1] > p_k[1]
            ]
            if p_l[1] != p_k[1] or not candidates:
                raise ValueError(
                    f"Points do not form an orthogonal polygon near {p_k}, {p_l}"
                )
            p_m = min(candidates, key=_order)

            rect = self.make_rect(p_k[0], p_k[1], p_l[0] - p_k[0], p_m[1] - p_k[1])
            if rect is None:
                raise ValueError("Rectangle factory returned None")
            rectangles.append(rect)

            _toggle(remaining, (p_k[0], p_m[1]))
            _toggle(remaining, (p_l[0], p_m[1]))

        return rectangles


def decompose[R](
    points: Iterable[Point], make_rect: RectFactory[R] = Rect
) -> list[R]:
    """Shortcut for PolygonRectangleDecomposer(make_rect).decompose(points)."""
    return PolygonRectangleDecomposer(make_rect).decompose(points)


def shoelace_area(polygon: list[Point]) -> float:
    """Area of a simple polygon given by its vertices in traversal order."""
    twice_area = 0
    for i, (x1, y1) in enumerate(polygon):
        x2, y2 = polygon[(i + 1) % len(polygon)]
        twice_area += x1 * y2 - x2 * y1
    return abs(twice_area) / 2

"""Computational geometry on tile-space polygons."""

from .rectangles import PolygonRectangleDecomposer, decompose, shoelace_area

__all__ = ["PolygonRectangleDecomposer", "decompose", "shoelace_area"]

"""Maze generation.

- GridGraph: 4-connected vertex grid with switchable edges
- MazeGraphGenerator: uniform spanning trees via Wilson's algorithm,
  rasterized into terrain at 3x resolution
"""

from .base import BaseMazeGenerator
from .grid_graph import GridDirection, GridGraph
from .wilson import MazeGraphGenerator, generate_maze

__all__ = [
    "BaseMazeGenerator",
    "GridDirection",
    "GridGraph",
    "MazeGraphGenerator",
    "generate_maze",
]

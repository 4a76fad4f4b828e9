"""Wall boundaries traced from terrain grids.

- segment: straight and corner segments with their displacement vectors
- obstacle: a start point plus an ordered segment path
- tracer: ObstaclePathTracer, which finds every wall boundary of a grid
"""

from .obstacle import Obstacle
from .segment import ArcParameters, CornerSegment, Segment, StraightSegment, arc_parameters
from .tracer import ObstaclePathTracer, TraceResult

__all__ = [
    "ArcParameters",
    "CornerSegment",
    "Obstacle",
    "ObstaclePathTracer",
    "Segment",
    "StraightSegment",
    "TraceResult",
    "arc_parameters",
]

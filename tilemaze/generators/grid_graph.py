"""4-connected grid graph whose edges can be switched on and off.

Vertices are numbered row by row: vertex v sits at row v // num_cols,
column v % num_cols. Every vertex has one edge slot per compass direction;
connecting an edge sets the slot on both of its vertices.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from enum import IntEnum

import numpy as np


class GridDirection(IntEnum):
    N = 0
    E = 1
    S = 2
    W = 3

    @property
    def delta(self) -> tuple[int, int]:
        """(row delta, col delta)"""
        return _DELTAS[self]

    @property
    def opposite(self) -> GridDirection:
        return GridDirection((self + 2) % 4)


_DELTAS = {
    GridDirection.N: (-1, 0),
    GridDirection.E: (0, 1),
    GridDirection.S: (1, 0),
    GridDirection.W: (0, -1),
}


class GridGraph:
    def __init__(self, num_rows: int, num_cols: int) -> None:
        if num_rows < 1 or num_cols < 1:
            raise ValueError(f"Grid graph needs at least 1x1 vertices, got {num_rows}x{num_cols}")
        self.num_rows = num_rows
        self.num_cols = num_cols
        self._edges = np.zeros((num_rows * num_cols, 4), dtype=bool)

    @property
    def num_vertices(self) -> int:
        return self.num_rows * self.num_cols

    def vertex(self, row: int, col: int) -> int:
        if not (0 <= row < self.num_rows and 0 <= col < self.num_cols):
            raise ValueError(f"No vertex at row {row}, col {col}")
        return row * self.num_cols + col

    def row(self, v: int) -> int:
        return v // self.num_cols

    def col(self, v: int) -> int:
        return v % self.num_cols

    def neighbor(self, v: int, direction: GridDirection) -> int | None:
        """Vertex next to v in the given direction, None at the grid boundary."""
        dr, dc = direction.delta
        row, col = self.row(v) + dr, self.col(v) + dc
        if 0 <= row < self.num_rows and 0 <= col < self.num_cols:
            return row * self.num_cols + col
        return None

    def directions(self, v: int) -> list[GridDirection]:
        """Directions in which v has a neighbor."""
        return [d for d in GridDirection if self.neighbor(v, d) is not None]

    def connect(self, v: int, direction: GridDirection) -> None:
        w = self.neighbor(v, direction)
        if w is None:
            raise ValueError(f"Vertex {v} has no neighbor towards {direction.name}")
        self._edges[v, direction] = True
        self._edges[w, direction.opposite] = True

    def disconnect(self, v: int, direction: GridDirection) -> None:
        w = self.neighbor(v, direction)
        if w is None:
            return
        self._edges[v, direction] = False
        self._edges[w, direction.opposite] = False

    def connected(self, v: int, direction: GridDirection) -> bool:
        return bool(self._edges[v, direction])

    def num_connected_edges(self) -> int:
        return int(self._edges.sum()) // 2

    def edges(self) -> Iterator[tuple[int, int]]:
        """Connected edges as (v, w) with v < w."""
        for v in range(self.num_vertices):
            for direction in (GridDirection.E, GridDirection.S):
                if self._edges[v, direction]:
                    yield (v, self.neighbor(v, direction))

    def is_spanning_tree(self) -> bool:
        """True if the connected edges form a tree touching every vertex."""
        if self.num_connected_edges() != self.num_vertices - 1:
            return False
        seen = {0}
        queue = deque([0])
        while queue:
            v = queue.popleft()
            for direction in GridDirection:
                if self._edges[v, direction]:
                    w = self.neighbor(v, direction)
                    if w not in seen:
                        seen.add(w)
                        queue.append(w)
        return len(seen) == self.num_vertices

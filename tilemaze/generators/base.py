"""Base class for maze generators."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilemaze.tilemap.world_map import WorldMap


class BaseMazeGenerator(abc.ABC):
    """Abstract base class for maze generation algorithms."""

    @abc.abstractmethod
    def generate(self, num_rows: int, num_cols: int) -> WorldMap:
        """Generate a maze over a num_rows x num_cols vertex grid."""
        raise NotImplementedError

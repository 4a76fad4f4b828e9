from __future__ import annotations

from typing import Literal

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================

type TileCoord = int  # Always integer tile position

# Tile positions are (x, y) = (column, row), matching the row-major index
# index = y * num_cols + x.
type TilePos = tuple[TileCoord, TileCoord]  # Example: (5, 3) = column 5, row 3

# Directions - discrete grid steps
type UnitStep = Literal[-1, 0, 1]
type Direction = tuple[UnitStep, UnitStep]  # Example: (-1, 0) = westward step

# =============================================================================
# TILE-SPACE (SUB-TILE) COORDINATES
# =============================================================================

# Integer points in tile space, where one tile is config.TILE_SIZE units wide.
# Obstacle start points and segment vectors use these units so that half-tile
# steps stay integral.
type Point = tuple[int, int]  # Example: (12, 4) = middle of the east edge of tile (1, 0)
type Vector = tuple[int, int]  # Example: (-4, 4) = half tile left, half tile down

# =============================================================================
# MISC
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
type RandomSeed = int | str | None

# Value-limit predicate input: tile codes are small non-negative integers.
type TileCode = int

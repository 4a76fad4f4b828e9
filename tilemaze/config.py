"""
Configuration constants.

Centralizes the magic numbers used by the tile-map geometry code.
Organized by functional area. Everything here is a plain constant: functions
that need a fallback take it as a parameter whose default comes from here.
"""

from tilemaze.types import TilePos

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "burrito1"

# =============================================================================
# TILE SPACE
# =============================================================================

# Size of one tile in tile-space units. Obstacle points are expressed in these
# units, corners move by half a tile in each axis.
TILE_SIZE = 8
HALF_TILE_SIZE = TILE_SIZE // 2

# =============================================================================
# MAP FILE FORMAT
# =============================================================================

MARKER_TERRAIN_SECTION = "!terrain"
MARKER_FOOD_SECTION = "!food"
MARKER_DATA_SECTION = "!data"

# Width of one printed cell value ("%2d")
PRINT_CELL_WIDTH = 2

# =============================================================================
# NAMED TILE PROPERTIES (terrain layer)
# =============================================================================

PROPERTY_POS_PAC = "pos_pac"
PROPERTY_POS_BONUS = "pos_bonus"
PROPERTY_POS_RED_GHOST = "pos_ghost_1_red"
PROPERTY_POS_PINK_GHOST = "pos_ghost_2_pink"
PROPERTY_POS_CYAN_GHOST = "pos_ghost_3_cyan"
PROPERTY_POS_ORANGE_GHOST = "pos_ghost_4_orange"
PROPERTY_POS_SCATTER_RED_GHOST = "pos_scatter_ghost_1_red"
PROPERTY_POS_SCATTER_PINK_GHOST = "pos_scatter_ghost_2_pink"
PROPERTY_POS_SCATTER_CYAN_GHOST = "pos_scatter_ghost_3_cyan"
PROPERTY_POS_SCATTER_ORANGE_GHOST = "pos_scatter_ghost_4_orange"
PROPERTY_POS_HOUSE_MIN_TILE = "pos_house_min"
PROPERTY_POS_HOUSE_MAX_TILE = "pos_house_max"

# Set on generated mazes
PROPERTY_MAZE_ROWS = "maze_rows"
PROPERTY_MAZE_COLS = "maze_cols"

# Defaults for the arcade 28x36 layout. Passed explicitly as fallbacks.
DEFAULT_HOUSE_MIN_TILE: TilePos = (10, 15)
DEFAULT_HOUSE_MAX_TILE: TilePos = (17, 19)
DEFAULT_BONUS_TILE: TilePos = (13, 20)
DEFAULT_PAC_TILE: TilePos = (13, 26)

# =============================================================================
# OBSTACLE TRACING
# =============================================================================

# Upper bound on tiles visited by a single trace. Explored tiles already end
# a trace, so only grids larger than this many tiles can reach it.
TRACE_STEP_LIMIT = 100_000

# =============================================================================
# MAZE GENERATION
# =============================================================================

# Each graph vertex becomes a block of MAZE_BLOCK_SIZE x MAZE_BLOCK_SIZE tiles.
MAZE_BLOCK_SIZE = 3

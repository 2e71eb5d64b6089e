# src/blockfall/game/core/constants.py
from __future__ import annotations

# Board / cell encoding (locked cells store color_id + 1)
EMPTY_CELL: int = 0

# Reference board configuration
DEFAULT_WIDTH: int = 10
DEFAULT_HEIGHT: int = 20

# Classic tetromino set size and cells per piece
CLASSIC_NUM_PIECES: int = 7
CLASSIC_CELLS_PER_PIECE: int = 4

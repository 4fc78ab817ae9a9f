"""mini2048: a 4x4 tile-merging puzzle.

Expose the board engine as `BoardEngine` and the Gymnasium adapter as
`Game2048Env`.
"""

from .board import CELL_COUNT, WIDTH, BoardEngine, Direction, neighbor
from .envs.game2048 import Game2048Env

__all__ = ["BoardEngine", "Direction", "Game2048Env", "neighbor", "CELL_COUNT", "WIDTH"]

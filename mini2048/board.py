import enum
import logging
from typing import Iterable

import numpy as np

log = logging.getLogger(__name__)

WIDTH = 4
CELL_COUNT = WIDTH * WIDTH
SPAWN_VALUE = 2
# Spawning only 2s on 16 cells cannot build a tile above 2**17
MAX_TILE = 2 ** (CELL_COUNT + 1)


class Direction(enum.IntEnum):
    """Move directions, numbered like the environment's actions."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


def neighbor(cell: int, direction: Direction) -> int | None:
    """Index of the cell next to `cell` in `direction`, or None on the boundary."""
    direction = Direction(direction)
    if direction == Direction.LEFT:
        return cell - 1 if cell % WIDTH > 0 else None
    if direction == Direction.RIGHT:
        return cell + 1 if cell % WIDTH < WIDTH - 1 else None
    if direction == Direction.UP:
        return cell - WIDTH if cell >= WIDTH else None
    return cell + WIDTH if cell < CELL_COUNT - WIDTH else None


def _is_tile_value(value: int) -> bool:
    # 0 or a power of two in [2, MAX_TILE]
    return value == 0 or (2 <= value <= MAX_TILE and value & (value - 1) == 0)


class BoardEngine:
    """
    Owns a 4x4 board and mutates it through move/merge/spawn.

    - Board: flat row-major int32 array of 16 cells, 0 means empty
    - spawn_tile(): puts a 2 on a uniformly chosen empty cell
    - move(direction): slides and merges until nothing changes; the caller
      spawns a tile when it returns True
    """

    def __init__(self, seed: int | None = None, rng: np.random.Generator | None = None):
        self.np_random = rng if rng is not None else np.random.default_rng(seed)
        self.board = np.zeros(CELL_COUNT, dtype=np.int32)

    @property
    def cells(self) -> np.ndarray:
        return self.board.copy()

    def grid(self) -> np.ndarray:
        """Copy of the board shaped (WIDTH, WIDTH) for rendering."""
        return self.board.reshape(WIDTH, WIDTH).copy()

    def load(self, values: Iterable[int]) -> None:
        """Replace the board with `values` (16 cells, row-major)."""
        cells = [int(v) for v in values]
        if len(cells) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} cells, got {len(cells)}")
        bad = [v for v in cells if not _is_tile_value(v)]
        if bad:
            raise ValueError(f"Cell values must be 0 or a power of two in [2, {MAX_TILE}], got {bad}")
        self.board[:] = np.array(cells, dtype=np.int32)

    def reset(self) -> None:
        self.board[:] = 0

    def empty_cells(self) -> np.ndarray:
        return np.flatnonzero(self.board == 0)

    def spawn_tile(self) -> bool:
        """Put a 2 on a random empty cell. Returns False if the board is full."""
        empty = self.empty_cells()
        if empty.size == 0:
            log.debug("spawn skipped, board is full")
            return False
        idx = int(empty[self.np_random.integers(0, len(empty))])
        self.board[idx] = SPAWN_VALUE
        return True

    def move(self, direction: Direction) -> bool:
        """Shift every tile towards `direction`. Returns True if any cell changed."""
        direction = Direction(direction)
        board = self.board
        moved_any = False

        # Passes always scan cells 0..15 and read live state, so a value
        # can travel several cells and merged tiles can merge again.
        while True:
            changed = False
            for source in range(CELL_COUNT):
                target = neighbor(source, direction)
                if target is None:
                    continue
                if board[target] != 0 and board[target] == board[source]:
                    board[target] += board[source]
                    board[source] = 0
                    changed = True
                elif board[target] == 0 and board[source] != 0:
                    board[target] = board[source]
                    board[source] = 0
                    changed = True
            if not changed:
                break
            moved_any = True

        log.debug("move %s changed=%s", direction.name, moved_any)
        return moved_any

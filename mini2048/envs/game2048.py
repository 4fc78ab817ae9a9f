import numpy as np
import gymnasium as gym
from gymnasium import spaces

from mini2048.board import MAX_TILE, WIDTH, BoardEngine, Direction


class Game2048Env(gym.Env):
    """
    Gymnasium-compatible wrapper around `BoardEngine`.

    - Actions: 0=up, 1=down, 2=left, 3=right
    - Observation: (4, 4) int32 grid of tile values
    - reset(): clears the board and spawns one tile
    - step(): moves, then spawns a tile if the board changed
    - Reward: always 0.0, the game keeps no score
    - Terminated/Truncated: always False, there is no win or lose state
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, render_mode: str | None = None):
        super().__init__()
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(len(Direction))
        self.observation_space = spaces.Box(low=0, high=MAX_TILE, shape=(WIDTH, WIDTH), dtype=np.int32)

        self.engine = BoardEngine()

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        super().reset(seed=seed)
        # share gymnasium's seeded generator so reset(seed=...) is reproducible
        self.engine.np_random = self.np_random
        self.engine.reset()
        spawned = self.engine.spawn_tile()
        info = {
            "spawned": spawned,
            "empty_cells": int(self.engine.empty_cells().size),
        }
        return self.engine.grid(), info

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise gym.error.InvalidAction(f"Invalid action: {action}")

        moved = self.engine.move(Direction(int(action)))
        spawned = self.engine.spawn_tile() if moved else False

        info = {
            "moved": moved,
            "spawned": spawned,
            "empty_cells": int(self.engine.empty_cells().size),
        }
        return self.engine.grid(), 0.0, False, False, info

    def render(self):
        text = render_text(self.engine.grid())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human" or self.render_mode is None:
            print(text)
        return None


def render_text(grid: np.ndarray, cell_w: int = 6) -> str:
    """Boxed text drawing of `grid`; empty cells are blank."""
    horiz = "+" + ("-" * cell_w + "+") * grid.shape[1]
    lines = [horiz]
    for row in grid:
        line = "|".join(f"{int(v):^{cell_w}}" if v > 0 else " " * cell_w for v in row)
        lines.append("|" + line + "|")
        lines.append(horiz)
    return "\n".join(lines)

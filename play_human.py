import curses
import logging
from typing import Optional

import hydra
import numpy as np
from omegaconf import DictConfig, OmegaConf

from mini2048.board import Direction
from mini2048.envs.game2048 import Game2048Env

log = logging.getLogger(__name__)

HELP_TEXT = "Arrows to move, 'r' to restart, 'q' to quit"

KEY_TO_DIRECTION = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
}

# Foreground/background per tile value: index 1 is 2, index 2 is 4, ...
TILE_COLORS = [
    (curses.COLOR_BLACK, curses.COLOR_WHITE),
    (curses.COLOR_BLACK, curses.COLOR_YELLOW),
    (curses.COLOR_WHITE, curses.COLOR_RED),
    (curses.COLOR_WHITE, curses.COLOR_MAGENTA),
    (curses.COLOR_WHITE, curses.COLOR_BLUE),
    (curses.COLOR_BLACK, curses.COLOR_CYAN),
    (curses.COLOR_BLACK, curses.COLOR_GREEN),
]


def tile_style(value: int) -> int:
    """Colour pair number for a tile value; 0 (blank) has no style."""
    if value <= 0:
        return 0
    return min(int(value).bit_length() - 1, len(TILE_COLORS))


def init_styles():
    curses.start_color()
    for pair, (fg, bg) in enumerate(TILE_COLORS, start=1):
        curses.init_pair(pair, fg, bg)


def draw_board(stdscr, board: np.ndarray, use_color: bool = False):
    stdscr.clear()
    rows, cols = board.shape

    h, w = stdscr.getmaxyx()
    cell_w = max(4, len(str(int(board.max()))) + 2)

    board_width = 1 + cols * (cell_w + 1)
    need_w = max(board_width, len(HELP_TEXT))
    # grid lines, help line, and a spare row so the last addstr never hits the corner
    total_height = rows * 2 + 3

    if need_w > w or total_height > h:
        lines = ["Window too small for board", f"Resize to {need_w}x{total_height}"]
        for y, msg in enumerate(lines[:h]):
            stdscr.addstr(y, 0, msg[: max(0, w - 1)])
        stdscr.refresh()
        return

    top = max(0, (h - total_height) // 2)
    left = max(0, (w - need_w) // 2)

    horiz = "+" + ("-" * cell_w + "+") * cols
    for r in range(rows):
        stdscr.addstr(top + r * 2, left, horiz)
        y = top + r * 2 + 1
        stdscr.addstr(y, left, "|")
        for c in range(cols):
            v = int(board[r, c])
            x = left + 1 + c * (cell_w + 1)
            text = f"{v:^{cell_w}}" if v > 0 else " " * cell_w
            style = tile_style(v)
            if use_color and style:
                stdscr.addstr(y, x, text, curses.color_pair(style))
            else:
                stdscr.addstr(y, x, text)
            stdscr.addstr(y, x + cell_w, "|")

    stdscr.addstr(top + rows * 2, left, horiz)
    stdscr.addstr(top + rows * 2 + 1, left, HELP_TEXT)
    stdscr.refresh()


def handle_key(env: Game2048Env, ch: int, obs: np.ndarray) -> tuple[np.ndarray, bool]:
    """Apply one key press. Returns (board, redraw)."""
    if ch in (ord("r"), ord("R")):
        obs, _ = env.reset()
        return obs, True
    if ch not in KEY_TO_DIRECTION:
        return obs, False
    obs, _, _, _, info = env.step(KEY_TO_DIRECTION[ch])
    return obs, bool(info["moved"])


def play_loop(stdscr, env: Game2048Env, seed: Optional[int] = None, colors: bool = True):
    curses.curs_set(0)
    stdscr.nodelay(False)
    stdscr.keypad(True)
    use_color = bool(colors) and curses.has_colors()
    if use_color:
        init_styles()

    obs, info = env.reset(seed=seed)
    draw_board(stdscr, obs, use_color)

    while True:
        ch = stdscr.getch()
        # Redraw on resize to adapt layout
        if ch == curses.KEY_RESIZE:
            draw_board(stdscr, obs, use_color)
            continue
        if ch in (ord("q"), ord("Q")):
            break
        obs, redraw = handle_key(env, ch, obs)
        if redraw:
            draw_board(stdscr, obs, use_color)


@hydra.main(config_path="conf", config_name="play", version_base=None)
def main(cfg: DictConfig):
    log.info("Config:\n%s", OmegaConf.to_yaml(cfg))
    env = Game2048Env(render_mode=str(cfg.render_mode))
    seed = cfg.get("seed")
    curses.wrapper(play_loop, env=env, seed=seed, colors=bool(cfg.get("colors", True)))
    env.render()


if __name__ == "__main__":
    main()

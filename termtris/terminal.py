"""
Curses frontend for termtris.
Translates keys into commands, feeds the engine a millisecond clock and draws snapshots.
"""

import curses
import logging
import time
from typing import List, Optional

from .tetris_engine import TetrisEngine, GameSnapshot, Command

logger = logging.getLogger(__name__)

FRAME_SLEEP = 0.02  # Seconds between frames
CELL_WIDTH = 2  # Screen columns per board cell

KEY_COMMANDS = {
    curses.KEY_LEFT: Command.LEFT,
    curses.KEY_RIGHT: Command.RIGHT,
    curses.KEY_UP: Command.ROTATE_CW,
    curses.KEY_DOWN: Command.SOFT_DROP,
    ord(' '): Command.HARD_DROP,
    ord('q'): Command.QUIT,
    ord('Q'): Command.QUIT,
}
RESTART_KEYS = (ord('r'), ord('R'))

CONTROLS_HELP = [
    "Controls:",
    "Arrows: move/rot",
    "Space: hard drop",
    "r: restart",
    "q: quit",
]


def key_to_command(key: int) -> Command:
    """Map a curses key code to a command. Unbound keys (and no key, -1) map to NONE."""
    return KEY_COMMANDS.get(key, Command.NONE)


def status_lines(snapshot: GameSnapshot) -> List[str]:
    """Text for the side panel, one entry per screen row (blank entries skip a row)."""
    return [
        f"Score: {snapshot.score}",
        f"Level: {snapshot.level}",
        "",
        f"Lines: {snapshot.lines_cleared}",
        "",
    ] + CONTROLS_HELP


def time_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class TerminalRenderer:
    """Draws a GameSnapshot into a curses window with a border."""

    def __init__(self, window):
        self.window = window

    def _put(self, y: int, x: int, text, attr: int = 0):
        try:
            if isinstance(text, int):
                self.window.addch(y, x, text, attr)
            else:
                self.window.addstr(y, x, text, attr)
        except curses.error:
            # Terminal smaller than the board
            pass

    def _block(self, y: int, x: int, attr: int = 0):
        for i in range(CELL_WIDTH):
            self._put(1 + y, 1 + x * CELL_WIDTH + i, curses.ACS_CKBOARD, attr)

    def draw(self, snapshot: GameSnapshot):
        self.window.erase()
        self.window.box()

        for y in range(snapshot.height):
            for x in range(snapshot.width):
                if snapshot.board[y, x]:
                    self._block(y, x, curses.color_pair(int(snapshot.board[y, x])))

        piece = snapshot.current_piece
        if piece is not None:
            attr = curses.color_pair(piece.shape + 1) | curses.A_BOLD
            for x, y in piece.get_occupied_cells():
                if 0 <= y < snapshot.height and 0 <= x < snapshot.width:
                    self._block(y, x, attr)

        panel_x = snapshot.width * CELL_WIDTH + 3
        for row, line in enumerate(status_lines(snapshot)):
            if line:
                self._put(1 + row, panel_x, line)

        if snapshot.game_over:
            mid = snapshot.height // 2
            self._put(mid, snapshot.width - 4, "GAME OVER", curses.A_BOLD)
            self._put(mid + 1, snapshot.width - 8, "Press q to exit")

        self.window.refresh()


def init_colors():
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    # pairs 1..7 follow the stored cell values
    for i in range(1, 8):
        curses.init_pair(i, i, -1)


def run(stdscr, engine: TetrisEngine, max_frames: Optional[int] = None):
    """Drive the engine until the player quits. Intended for curses.wrapper."""
    curses.curs_set(0)
    stdscr.nodelay(True)
    stdscr.keypad(True)
    init_colors()

    width = engine.board.width * CELL_WIDTH + 2 + 20
    height = engine.board.height + 2
    window = curses.newwin(height, width, 1, 1)
    renderer = TerminalRenderer(window)

    last = time_ms()
    frames = 0
    while max_frames is None or frames < max_frames:
        frames += 1
        key = stdscr.getch()
        command = key_to_command(key)
        if command == Command.QUIT:
            logger.info("Quit requested")
            break
        if key in RESTART_KEYS:
            engine.reset()
            last = time_ms()
            command = Command.NONE

        now = time_ms()
        engine.tick(now - last, command)
        last = now

        renderer.draw(engine.get_snapshot())
        time.sleep(FRAME_SLEEP)

    return engine.get_stats()


def play(engine: TetrisEngine):
    """Run a full curses session and return the final statistics."""
    return curses.wrapper(run, engine)

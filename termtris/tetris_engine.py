"""
Main Tetris engine for termtris.
Owns the game state and advances it one tick at a time from commands and elapsed time.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Any, Optional
import numpy as np
from dataclasses import dataclass

from .board import Board
from .pieces import ActivePiece
from .randomizer import UniformRandomizer
from .scoring import apply_clear, level_for_lines, gravity_interval_ms
from .exceptions import ConfigError, InvalidCommandException

logger = logging.getLogger(__name__)


class Command(Enum):
    """Player inputs accepted by TetrisEngine.tick. QUIT belongs to the driver loop."""
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    QUIT = 6


@dataclass
class GameConfig:
    """Configuration for the Tetris game."""
    width: int = Board.BOARD_WIDTH
    height: int = Board.BOARD_HEIGHT
    base_gravity_ms: int = 1000  # Gravity interval at level 1
    gravity_step_ms: int = 80  # Speed-up per level
    min_gravity_ms: int = 100  # Fastest gravity
    lines_per_level: int = 10
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width < 4 or self.height < 4:
            raise ConfigError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.min_gravity_ms <= 0 or self.base_gravity_ms < self.min_gravity_ms:
            raise ConfigError("gravity intervals must be positive with base >= min")
        if self.gravity_step_ms < 0:
            raise ConfigError("gravity_step_ms must not be negative")
        if self.lines_per_level <= 0:
            raise ConfigError("lines_per_level must be positive")


@dataclass
class GameState:
    """Current state of the Tetris game. Only the engine mutates it."""
    board: Board
    current_piece: Optional[ActivePiece]
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    game_over: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the game handed to renderers."""
    board: np.ndarray
    current_piece: Optional[ActivePiece]
    score: int
    level: int
    lines_cleared: int
    game_over: bool
    gravity_interval: int

    @property
    def width(self) -> int:
        return self.board.shape[1]

    @property
    def height(self) -> int:
        return self.board.shape[0]


class TetrisEngine:
    """Main Tetris game engine."""

    def __init__(self, config: Optional[GameConfig] = None, randomizer=None):
        self.config = config or GameConfig()
        self.randomizer = randomizer or UniformRandomizer(self.config.seed)
        self.state = GameState(board=Board(self.config.width, self.config.height), current_piece=None)

        # Milliseconds accumulated since the last gravity step
        self.gravity_elapsed = 0

        # Callbacks
        self.on_piece_locked: Optional[Callable[[ActivePiece, int], None]] = None
        self.on_line_cleared: Optional[Callable[[int, int], None]] = None
        self.on_level_up: Optional[Callable[[int], None]] = None
        self.on_game_over: Optional[Callable[[], None]] = None

        self._initialize_game()

    def _initialize_game(self):
        """Initialize the game state."""
        self.state.board.reset()
        self.state.current_piece = None
        self.state.score = 0
        self.state.level = 1
        self.state.lines_cleared = 0
        self.state.game_over = False
        self.gravity_elapsed = 0
        self._spawn_piece()

    def reset(self, seed: Optional[int] = None):
        """Start a new game. Passing a seed makes the piece sequence reproducible."""
        if seed is not None:
            self.randomizer.seed(seed)
        logger.info("New game (seed=%s)", seed)
        self._initialize_game()

    # Convenience accessors
    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_piece(self) -> Optional[ActivePiece]:
        return self.state.current_piece

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def lines_cleared(self) -> int:
        return self.state.lines_cleared

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def gravity_interval(self) -> int:
        """Get the current gravity delay in milliseconds based on level."""
        return gravity_interval_ms(self.state.level,
                                   self.config.base_gravity_ms,
                                   self.config.gravity_step_ms,
                                   self.config.min_gravity_ms)

    def tick(self, elapsed_ms: int = 0, command: Optional[Command] = Command.NONE) -> bool:
        """Advance the game by one step.

        Applies command, then gravity if at least one interval has accumulated.
        Returns True if a piece locked during this tick. At most one piece
        locks per tick because every lock restarts the gravity clock.
        """
        if command is None:
            command = Command.NONE
        if not isinstance(command, Command):
            raise InvalidCommandException(f"expected a Command, got {command!r}")
        if self.state.game_over:
            return False

        self.gravity_elapsed += elapsed_ms
        locked = self._handle_command(command)
        if self.state.game_over:
            return locked

        if self.gravity_elapsed >= self.gravity_interval():
            if not self.move(0, 1):
                self._lock_current()
                locked = True
            self.gravity_elapsed = 0
        return locked

    def _handle_command(self, command: Command) -> bool:
        """Apply one player command. Returns True if it locked the piece."""
        if command == Command.LEFT:
            self.move(-1, 0)
        elif command == Command.RIGHT:
            self.move(1, 0)
        elif command == Command.ROTATE_CW:
            self.rotate(1)
        elif command == Command.SOFT_DROP:
            return self.soft_drop()
        elif command == Command.HARD_DROP:
            self.hard_drop()
            return True
        return False

    def move(self, dx: int, dy: int) -> bool:
        """Move the current piece by the given offset. Returns False (and changes nothing) if blocked."""
        piece = self.state.current_piece
        if self.state.game_over or piece is None:
            return False
        if self.board.would_collide(piece.shape, piece.rotation, piece.x + dx, piece.y + dy):
            return False
        self.state.current_piece = piece.translate(dx, dy)
        return True

    def rotate(self, direction: int = 1) -> bool:
        """Rotate the current piece in place. There are no wall kicks: a blocked rotation fails."""
        piece = self.state.current_piece
        if self.state.game_over or piece is None:
            return False
        if self.board.would_collide(piece.shape, piece.rotation + direction, piece.x, piece.y):
            return False
        self.state.current_piece = piece.rotate(direction)
        return True

    def soft_drop(self) -> bool:
        """Step down one row, locking if blocked. Returns True if the piece locked."""
        if self.state.game_over:
            return False
        locked = False
        if not self.move(0, 1):
            self._lock_current()
            locked = True
        self.gravity_elapsed = 0
        return locked

    def hard_drop(self) -> int:
        """Drop the current piece as far as it goes and lock it. Returns rows fallen."""
        if self.state.game_over:
            return 0
        rows = 0
        while self.move(0, 1):
            rows += 1
        self._lock_current()
        return rows

    def get_drop_position(self, piece: Optional[ActivePiece] = None) -> Optional[ActivePiece]:
        """Get the pose where a piece would land if hard-dropped."""
        piece = piece or self.state.current_piece
        if piece is None:
            return None
        while not self.board.would_collide(piece.shape, piece.rotation, piece.x, piece.y + 1):
            piece = piece.translate(0, 1)
        return piece

    def _lock_current(self):
        """Lock the current piece, clear rows, score them and spawn the next piece."""
        piece = self.state.current_piece
        self.board.lock_piece(piece)
        cleared = self.board.clear_full_rows()
        logger.debug("Locked %r, cleared %d", piece, cleared)
        if cleared:
            self._score_clear(cleared)

        if self.on_piece_locked:
            self.on_piece_locked(piece, cleared)

        self.gravity_elapsed = 0
        self._spawn_piece()

    def _score_clear(self, cleared: int):
        delta = apply_clear(cleared, self.state.level)
        self.state.score += delta
        self.state.lines_cleared += cleared
        logger.info("Cleared %d line(s) for %d points (total lines %d)",
                    cleared, delta, self.state.lines_cleared)
        if self.on_line_cleared:
            self.on_line_cleared(cleared, delta)

        new_level = level_for_lines(self.state.lines_cleared, self.config.lines_per_level)
        if new_level > self.state.level:
            self.state.level = new_level
            logger.info("Level up: %d (gravity %d ms)", new_level, self.gravity_interval())
            if self.on_level_up:
                self.on_level_up(new_level)

    def _spawn_piece(self):
        """Spawn a new piece. A blocked spawn pose ends the game."""
        shape = self.randomizer.next_shape()
        piece = ActivePiece.spawn(shape, self.board.width)
        self.state.current_piece = piece
        logger.debug("Spawned %r", piece)

        if self.board.would_collide(piece.shape, piece.rotation, piece.x, piece.y):
            self.state.game_over = True
            logger.info("Game over: score=%d level=%d lines=%d",
                        self.state.score, self.state.level, self.state.lines_cleared)
            if self.on_game_over:
                self.on_game_over()

    def get_snapshot(self) -> GameSnapshot:
        """Get a read-only copy of the current game state."""
        grid = self.board.get_grid()
        grid.setflags(write=False)
        return GameSnapshot(
            board=grid,
            current_piece=None if self.state.game_over else self.state.current_piece,
            score=self.state.score,
            level=self.state.level,
            lines_cleared=self.state.lines_cleared,
            game_over=self.state.game_over,
            gravity_interval=self.gravity_interval(),
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get current game statistics."""
        return {
            'level': self.state.level,
            'lines_cleared': self.state.lines_cleared,
            'score': self.state.score,
            'game_over': self.state.game_over,
            'gravity_interval': self.gravity_interval(),
        }

    def __str__(self):
        """String representation of the game state."""
        rows = str(self.board).split("\n")
        piece = self.state.current_piece
        if piece and not self.state.game_over:
            for x, y in piece.get_occupied_cells():
                if 0 <= x < self.board.width and 0 <= y < self.board.height:
                    rows[y] = rows[y][:x] + "○" + rows[y][x + 1:]

        result = []
        result.append(f"Level: {self.state.level}")
        result.append(f"Lines: {self.state.lines_cleared}")
        result.append(f"Score: {self.state.score}")
        result.append("")
        result.extend(rows)
        return "\n".join(result)

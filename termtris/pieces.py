"""
Tetromino definitions and the falling piece for termtris.
Each shape is stored once in its spawn orientation; the other three
orientations are computed on demand by remapping coordinates.
"""

import operator
from enum import Enum
from typing import Iterator, List, Tuple
import numpy as np
from dataclasses import dataclass

from .exceptions import InvalidShapeException

SIZE = 4


class PieceType(Enum):
    """The 7 standard Tetris pieces, numbered as stored in the shape table."""
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


# [shape][row][col] where 1 = filled, 0 = empty
SHAPES = np.array([
    # I
    [[0, 0, 0, 0],
     [1, 1, 1, 1],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
    # O
    [[0, 1, 1, 0],
     [0, 1, 1, 0],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
    # T
    [[0, 1, 0, 0],
     [1, 1, 1, 0],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
    # S
    [[0, 1, 1, 0],
     [1, 1, 0, 0],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
    # Z
    [[1, 1, 0, 0],
     [0, 1, 1, 0],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
    # J
    [[1, 0, 0, 0],
     [1, 1, 1, 0],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
    # L
    [[0, 0, 1, 0],
     [1, 1, 1, 0],
     [0, 0, 0, 0],
     [0, 0, 0, 0]],
], dtype=np.int8)
SHAPES.setflags(write=False)

NUM_SHAPES = len(SHAPES)


def check_shape(shape: int) -> int:
    """Return shape as a plain int table index, raising if it is not one."""
    if isinstance(shape, PieceType):
        return shape.value
    try:
        shape = operator.index(shape)
    except TypeError:
        raise InvalidShapeException(f"shape id {shape!r} is not an integer") from None
    if not 0 <= shape < NUM_SHAPES:
        raise InvalidShapeException(f"shape id {shape} outside [0, {NUM_SHAPES})")
    return shape


def occupied(shape: int, rotation: int, row: int, col: int) -> bool:
    """Return True if (row, col) of the 4x4 box is filled for shape at rotation.

    rotation may be any integer; only rotation % 4 matters.
    """
    grid = SHAPES[check_shape(shape)]
    rot = rotation & 3
    if rot == 0:
        value = grid[row][col]
    elif rot == 1:
        value = grid[SIZE - 1 - col][row]
    elif rot == 2:
        value = grid[SIZE - 1 - row][SIZE - 1 - col]
    else:
        value = grid[col][SIZE - 1 - row]
    return bool(value)


def occupied_cells(shape: int, rotation: int) -> Iterator[Tuple[int, int]]:
    """Yield (row, col) of every filled cell of the box, row-major."""
    for r in range(SIZE):
        for c in range(SIZE):
            if occupied(shape, rotation, r, c):
                yield r, c


def rotated_grid(shape: int, rotation: int) -> np.ndarray:
    """Build the 4x4 occupancy grid of shape at rotation."""
    grid = np.zeros((SIZE, SIZE), dtype=np.int8)
    for r, c in occupied_cells(shape, rotation):
        grid[r, c] = 1
    return grid


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece: shape id, rotation index and top-left of its 4x4 box.

    Instances are immutable; moves produce new pieces so a rejected move
    never touches the current one.
    """
    shape: int
    rotation: int
    x: int
    y: int

    def __post_init__(self):
        object.__setattr__(self, "shape", check_shape(self.shape))
        object.__setattr__(self, "rotation", self.rotation % 4)

    @classmethod
    def spawn(cls, shape: int, board_width: int) -> 'ActivePiece':
        """Place shape at rotation 0, horizontally centered, one row above the board."""
        return cls(check_shape(shape), 0, board_width // 2 - 2, -1)

    @property
    def piece_type(self) -> PieceType:
        return PieceType(self.shape)

    def translate(self, dx: int, dy: int) -> 'ActivePiece':
        """Move the piece by the given offsets."""
        return ActivePiece(self.shape, self.rotation, self.x + dx, self.y + dy)

    def rotate(self, direction: int = 1) -> 'ActivePiece':
        """Return a copy rotated by direction quarter turns."""
        return ActivePiece(self.shape, (self.rotation + direction) % 4, self.x, self.y)

    def get_occupied_cells(self) -> List[Tuple[int, int]]:
        """Get the board coordinates (x, y) covered by this piece."""
        return [(self.x + c, self.y + r) for r, c in occupied_cells(self.shape, self.rotation)]

    def __repr__(self):
        return f"ActivePiece({self.piece_type.name}, x={self.x}, y={self.y}, r={self.rotation})"

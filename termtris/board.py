"""
Board state management for termtris.
Holds the locked cells, answers collision queries and removes full rows.
"""

from typing import List
import numpy as np

from .pieces import ActivePiece, occupied_cells
from .exceptions import InvalidCellException


class Board:
    """Fixed-size grid of locked cells.

    Cells hold 0 when empty, otherwise the id + 1 of the shape that locked
    there. Rows above the top edge (negative y) are open space: they can be
    occupied by a falling piece but are never stored.
    """

    BOARD_WIDTH = 10
    BOARD_HEIGHT = 20

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self):
        """Clear every cell."""
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        """Check horizontal bounds and the floor. Any negative y is inside."""
        return 0 <= x < self.width and y < self.height

    def is_locked(self, x: int, y: int) -> bool:
        """Check whether (x, y) holds a locked cell. Space above the board never does."""
        if y < 0:
            return False
        return bool(self.cell(x, y))

    def cell(self, x: int, y: int) -> int:
        """Read one cell of the visible grid."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidCellException(f"cell ({x}, {y}) outside {self.width}x{self.height} board")
        return int(self.grid[y, x])

    def would_collide(self, shape: int, rotation: int, x: int, y: int) -> bool:
        """Check whether shape at rotation, boxed at (x, y), hits a wall, the floor or a locked cell.

        Every movement, rotation and spawn check goes through here.
        """
        for r, c in occupied_cells(shape, rotation):
            bx, by = x + c, y + r
            if not self.is_inside(bx, by):
                return True
            if by >= 0 and self.grid[by, bx]:
                return True
        return False

    def is_valid_position(self, piece: ActivePiece) -> bool:
        return not self.would_collide(piece.shape, piece.rotation, piece.x, piece.y)

    def lock_piece(self, piece: ActivePiece):
        """Write the piece into the grid. Cells above the board are dropped."""
        value = piece.shape + 1
        for bx, by in piece.get_occupied_cells():
            if 0 <= by < self.height and 0 <= bx < self.width:
                self.grid[by, bx] = value

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def full_rows(self) -> List[int]:
        """Indices of full rows, top to bottom."""
        return [y for y in range(self.height) if self.is_row_full(y)]

    def clear_full_rows(self) -> int:
        """Remove full rows and return how many were removed.

        Scans bottom to top. A full row is dropped, everything above it moves
        down one row and an empty row enters at the top; the same index is
        then checked again because it now holds the row from above.
        """
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                cleared += 1
                self.grid[1:y + 1] = self.grid[0:y].copy()
                self.grid[0] = 0
            else:
                y -= 1
        return cleared

    def get_grid(self) -> np.ndarray:
        """Return a copy of the cell grid."""
        return self.grid.copy()

    def __str__(self):
        """String representation of the board."""
        result = []
        for y in range(self.height):
            row = ""
            for x in range(self.width):
                if self.grid[y, x]:
                    row += "█"
                else:
                    row += "·"
            result.append(row)
        return "\n".join(result)

    def __repr__(self):
        return f"Board(width={self.width}, height={self.height}, filled={int(np.count_nonzero(self.grid))})"

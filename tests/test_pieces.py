"""
Tests for the tetromino table and the falling piece.
"""

import unittest
import numpy as np
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from termtris.pieces import (ActivePiece, PieceType, SHAPES, NUM_SHAPES,
                             occupied, occupied_cells, rotated_grid)
from termtris.exceptions import InvalidShapeException
from termtris.board import Board


class TestShapeTable(unittest.TestCase):
    """Test the shape table and the rotation transform."""

    def test_canonical_shapes(self):
        """Rotation 0 reproduces the stored patterns."""
        self.assertEqual(NUM_SHAPES, 7)
        expected = {
            PieceType.I: [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
            PieceType.O: [[0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
            PieceType.T: [[0, 1, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
            PieceType.S: [[0, 1, 1, 0], [1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
            PieceType.Z: [[1, 1, 0, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
            PieceType.J: [[1, 0, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
            PieceType.L: [[0, 0, 1, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
        }
        for piece_type, grid in expected.items():
            np.testing.assert_array_equal(rotated_grid(piece_type.value, 0), np.array(grid))

    def test_four_rotations_is_identity(self):
        for shape in range(NUM_SHAPES):
            for rotation in range(4):
                np.testing.assert_array_equal(rotated_grid(shape, rotation),
                                              rotated_grid(shape, rotation + 4))
            np.testing.assert_array_equal(rotated_grid(shape, 4), SHAPES[shape])

    def test_negative_rotation_wraps(self):
        for shape in range(NUM_SHAPES):
            np.testing.assert_array_equal(rotated_grid(shape, -1), rotated_grid(shape, 3))

    def test_every_rotation_has_four_cells(self):
        for shape in range(NUM_SHAPES):
            for rotation in range(4):
                self.assertEqual(len(list(occupied_cells(shape, rotation))), 4)

    def test_rotation_one_transform(self):
        """Rotation 1 reads grid[3-c][r]: the flat I becomes column 2."""
        grid = rotated_grid(PieceType.I.value, 1)
        np.testing.assert_array_equal(grid[:, 2], [1, 1, 1, 1])
        self.assertEqual(int(grid.sum()), 4)

    def test_rotation_two_transform(self):
        """Rotation 2 reads grid[3-r][3-c]."""
        expected = [[0, 0, 0, 0],
                    [0, 0, 0, 0],
                    [0, 1, 1, 1],
                    [0, 0, 1, 0]]
        np.testing.assert_array_equal(rotated_grid(PieceType.T.value, 2), np.array(expected))

    def test_rotation_three_transform(self):
        """Rotation 3 reads grid[c][3-r]."""
        for r in range(4):
            for c in range(4):
                self.assertEqual(occupied(PieceType.L.value, 3, r, c),
                                 bool(SHAPES[PieceType.L.value][c][3 - r]))

    def test_invalid_shape(self):
        with self.assertRaises(InvalidShapeException):
            occupied(7, 0, 0, 0)
        with self.assertRaises(InvalidShapeException):
            occupied(-1, 0, 0, 0)

    def test_non_integer_shape(self):
        for bad in (1.5, "1", None):
            with self.assertRaises(InvalidShapeException):
                occupied(bad, 0, 0, 0)
        self.assertTrue(occupied(np.int64(1), 0, 0, 1))

    def test_shape_table_is_read_only(self):
        with self.assertRaises(ValueError):
            SHAPES[0, 0, 0] = 1


class TestActivePiece(unittest.TestCase):
    """Test the falling piece value object."""

    def test_spawn_position(self):
        piece = ActivePiece.spawn(PieceType.T.value, 10)
        self.assertEqual((piece.shape, piece.rotation, piece.x, piece.y), (2, 0, 3, -1))
        self.assertEqual(piece.piece_type, PieceType.T)

    def test_spawn_accepts_piece_type(self):
        piece = ActivePiece.spawn(PieceType.L, 8)
        self.assertEqual(piece.shape, 6)
        self.assertEqual(piece.x, 2)

    def test_translate_and_rotate_return_new_pieces(self):
        piece = ActivePiece(PieceType.T.value, 0, 3, 0)
        moved = piece.translate(2, 1)
        turned = piece.rotate(1)

        self.assertEqual((moved.x, moved.y, moved.rotation), (5, 1, 0))
        self.assertEqual((turned.x, turned.y, turned.rotation), (3, 0, 1))
        self.assertEqual((piece.x, piece.y, piece.rotation), (3, 0, 0))
        self.assertEqual(piece.rotate(4), piece)

    def test_occupied_cells(self):
        piece = ActivePiece(PieceType.I.value, 0, 3, -1)
        self.assertEqual(piece.get_occupied_cells(), [(3, 0), (4, 0), (5, 0), (6, 0)])

    def test_invalid_shape(self):
        with self.assertRaises(InvalidShapeException):
            ActivePiece(9, 0, 0, 0)
        with self.assertRaises(InvalidShapeException):
            ActivePiece(2.5, 0, 0, 0)

    def test_piece_type_is_stored_as_int(self):
        piece = ActivePiece(PieceType.T, 0, 3, 10)
        self.assertIs(type(piece.shape), int)
        self.assertEqual(piece, ActivePiece(PieceType.T.value, 0, 3, 10))

        board = Board()
        board.lock_piece(piece)
        self.assertEqual(int(board.grid[10, 4]), 3)
        self.assertEqual(int(np.count_nonzero(board.grid == 3)), 4)

    def test_rotation_is_normalized(self):
        self.assertEqual(ActivePiece(0, 5, 0, 0).rotation, 1)
        self.assertEqual(ActivePiece(0, -1, 0, 0).rotation, 3)
        self.assertEqual(ActivePiece(0, 4, 0, 0), ActivePiece(0, 0, 0, 0))
        self.assertEqual(ActivePiece(0, 0, 0, 0).rotate(-1).rotation, 3)


if __name__ == '__main__':
    unittest.main()

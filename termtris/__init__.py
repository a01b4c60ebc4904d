"""
termtris: a falling-block puzzle engine with a curses frontend.
Contains the game engine, board management, and piece operations.
"""

from .tetris_engine import TetrisEngine, GameConfig, GameState, GameSnapshot, Command
from .board import Board
from .pieces import ActivePiece, PieceType, occupied
from .randomizer import UniformRandomizer, SequenceRandomizer
from .exceptions import (TetrisError, InvalidShapeException, InvalidCellException,
                         InvalidCommandException, ConfigError)

__all__ = ['TetrisEngine', 'GameConfig', 'GameState', 'GameSnapshot', 'Command',
           'Board', 'ActivePiece', 'PieceType', 'occupied',
           'UniformRandomizer', 'SequenceRandomizer',
           'TetrisError', 'InvalidShapeException', 'InvalidCellException',
           'InvalidCommandException', 'ConfigError']

# termtris - Falling-block puzzle engine
# exceptions.py - Custom exceptions for the Tetris game engine

class TetrisError(Exception):
    """Base class for engine errors. These signal caller bugs, not game events."""
    pass

class InvalidShapeException(TetrisError):
    """Custom exception for shape ids outside the tetromino table."""
    pass

class InvalidCellException(TetrisError):
    """Custom exception for cell reads or writes outside the board grid."""
    pass

class InvalidCommandException(TetrisError):
    """Custom exception for tick inputs that are not a Command."""
    pass

class ConfigError(TetrisError):
    """Custom exception for unusable game configuration values."""
    pass

"""
Scoring and level progression for termtris.
"""

# Points per simultaneous line clear, multiplied by the current level
LINE_CLEAR_POINTS = {1: 40, 2: 100, 3: 300, 4: 1200}
LINES_PER_LEVEL = 10

BASE_GRAVITY_MS = 1000
GRAVITY_STEP_MS = 80
MIN_GRAVITY_MS = 100


def apply_clear(cleared: int, level: int) -> int:
    """Score for clearing `cleared` rows at once on `level`.

    A single piece spans at most four rows, so other counts score nothing.
    """
    return LINE_CLEAR_POINTS.get(cleared, 0) * level


def level_for_lines(total_lines: int, lines_per_level: int = LINES_PER_LEVEL) -> int:
    return 1 + total_lines // lines_per_level


def gravity_interval_ms(level: int,
                        base_ms: int = BASE_GRAVITY_MS,
                        step_ms: int = GRAVITY_STEP_MS,
                        min_ms: int = MIN_GRAVITY_MS) -> int:
    """Milliseconds between forced downward steps at `level`."""
    return max(min_ms, base_ms - (level - 1) * step_ms)

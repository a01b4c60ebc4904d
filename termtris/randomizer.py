"""Piece randomizers. The engine only needs next_shape() and seed()."""

from typing import Iterable, Optional
import numpy as np

from .pieces import NUM_SHAPES, check_shape


class UniformRandomizer:
    """Independent uniform draws over the 7 shapes, backed by a numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self.seed(seed)

    def seed(self, seed: Optional[int]):
        # None draws fresh OS entropy, like seeding from the clock
        self.rng = np.random.default_rng(seed)

    def next_shape(self) -> int:
        return int(self.rng.integers(0, NUM_SHAPES))


class SequenceRandomizer:
    """
    Replays a fixed list of shape ids, wrapping around at the end.

    Used for reproducible tests and scripted demos. Seeding rewinds to the
    start of the list; the seed value itself is ignored.
    """

    def __init__(self, shapes: Iterable[int]):
        self.shapes = [check_shape(s) for s in shapes]
        if not self.shapes:
            raise ValueError("SequenceRandomizer needs at least one shape")
        self.index = 0

    def seed(self, seed: Optional[int]):
        self.index = 0

    def next_shape(self) -> int:
        shape = self.shapes[self.index % len(self.shapes)]
        self.index += 1
        return shape

# reel_engine/infrastructure/rng/strategies/numpy_rng.py
import numpy as np
from typing import List, Optional, Sequence


class NumpyRNG:
    """
    Random number generator backed by NumPy's ``Generator``.
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible outcomes
        """
        self.rng = np.random.default_rng(seed_value)

    def draw_stops(self, strip_lengths: Sequence[int]) -> List[int]:
        """
        Draw one stop per reel in a single vectorized call.

        Args:
            strip_lengths: Length of each reel's strip

        Returns:
            List of stop indices in ``[0, length)``
        """
        highs = np.asarray(strip_lengths, dtype=np.int64)
        return self.rng.integers(0, highs).tolist()

    def seed(self, seed_value: int) -> None:
        self.rng = np.random.default_rng(seed_value)

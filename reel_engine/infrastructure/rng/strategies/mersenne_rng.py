# reel_engine/infrastructure/rng/strategies/mersenne_rng.py
import random
from typing import List, Optional, Sequence


class MersenneTwisterRNG:
    """
    Random number generator using the Mersenne Twister algorithm (Python's default).
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible outcomes
        """
        # Dedicated instance, independent of the module-level generator
        self._random = random.Random()

        if seed_value is not None:
            self.seed(seed_value)

    def draw_stops(self, strip_lengths: Sequence[int]) -> List[int]:
        """
        Draw one stop per reel.

        Args:
            strip_lengths: Length of each reel's strip

        Returns:
            List of stop indices in ``[0, length)``
        """
        return [self._random.randrange(length) for length in strip_lengths]

    def seed(self, seed_value: int) -> None:
        self._random.seed(seed_value)

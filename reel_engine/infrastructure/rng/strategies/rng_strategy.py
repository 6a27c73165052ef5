# reel_engine/infrastructure/rng/strategies/rng_strategy.py
from typing import List, Protocol, Sequence


class RNGStrategy(Protocol):
    """Protocol defining the interface for random number generators."""

    def draw_stops(self, strip_lengths: Sequence[int]) -> List[int]:
        """
        Draw one stop per reel, uniform over ``[0, length)``.

        Args:
            strip_lengths: Length of each reel's strip

        Returns:
            List of stop indices, one per reel
        """
        ...

    def seed(self, seed_value: int) -> None:
        """
        Set the seed for the RNG.

        Args:
            seed_value: Seed value to use
        """
        ...

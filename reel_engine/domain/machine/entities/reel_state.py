# reel_engine/domain/machine/entities/reel_state.py
import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..errors import InvalidStateError


@dataclass
class ReelSlot:
    """
    Mutable state of one reel.

    ``current_stop`` is the settled strip index. ``position`` is the visual
    scalar the spin animation drives; it always lands on a value congruent
    to ``current_stop`` modulo the strip length.
    """
    strip_length: int
    current_stop: int = 0
    target_stop: int = 0
    busy: bool = False
    position: float = 0.0


class ReelState:
    """
    Current and target stops for the whole set of reels, gated by the busy flags.
    """
    def __init__(self, strip_lengths: Sequence[int], initial_stops: Sequence[int] = None):
        """
        Initialize state for a set of reels.

        Args:
            strip_lengths: Length of each reel's strip
            initial_stops: Optional starting stop per reel (default: all 0)
        """
        self.logger = logging.getLogger("domain.machine.reel_state")

        if initial_stops is None:
            initial_stops = [0] * len(strip_lengths)
        self._check_stops(strip_lengths, initial_stops)

        self.reels: List[ReelSlot] = [
            ReelSlot(strip_length=length, current_stop=stop, target_stop=stop, position=float(stop))
            for length, stop in zip(strip_lengths, initial_stops)
        ]

    @staticmethod
    def _check_stops(strip_lengths: Sequence[int], stops: Sequence[int]):
        if len(stops) != len(strip_lengths):
            raise ValueError(f"Expected {len(strip_lengths)} stops, got {len(stops)}")
        for i, (length, stop) in enumerate(zip(strip_lengths, stops)):
            if not 0 <= stop < length:
                raise ValueError(f"Stop {stop} out of range for reel {i} with length {length}")

    def validate_targets(self, targets: Sequence[int]):
        """
        Check that there is one in-range target per reel.

        Raises:
            ValueError: If the targets do not fit the reels
        """
        self._check_stops([reel.strip_length for reel in self.reels], targets)

    @property
    def num_reels(self) -> int:
        return len(self.reels)

    @property
    def current_stops(self) -> List[int]:
        return [reel.current_stop for reel in self.reels]

    @property
    def target_stops(self) -> List[int]:
        return [reel.target_stop for reel in self.reels]

    @property
    def busy_count(self) -> int:
        return sum(1 for reel in self.reels if reel.busy)

    def is_any_spin_in_progress(self) -> bool:
        return any(reel.busy for reel in self.reels)

    def begin_spin(self, targets: Sequence[int]):
        """
        Mark every reel busy and record its target stop.

        Args:
            targets: One target stop per reel

        Raises:
            InvalidStateError: If a spin is already in progress
            ValueError: If targets do not match the reels
        """
        if self.is_any_spin_in_progress():
            raise InvalidStateError(f"Spin already in progress ({self.busy_count} reels busy)")

        self.validate_targets(targets)

        for reel, target in zip(self.reels, targets):
            reel.target_stop = target
            reel.busy = True

        self.logger.debug(f"Spin started: {self.current_stops} -> {list(targets)}")

    def complete_reel(self, reel_index: int) -> bool:
        """
        Settle one reel on its target stop.

        Args:
            reel_index: Index of the reel that finished animating

        Returns:
            True when this was the last busy reel, False otherwise

        Raises:
            InvalidStateError: If the reel is not spinning
        """
        reel = self.reels[reel_index]
        if not reel.busy:
            raise InvalidStateError(f"Reel {reel_index} is not spinning")

        reel.current_stop = reel.target_stop
        reel.busy = False
        self.logger.debug(f"Reel {reel_index} settled on stop {reel.current_stop}")

        return not self.is_any_spin_in_progress()

    def __repr__(self) -> str:
        return f"ReelState(stops={self.current_stops}, busy={self.busy_count})"

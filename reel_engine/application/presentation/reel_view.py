# reel_engine/application/presentation/reel_view.py
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from reel_engine.domain.machine.entities.reel import Reel
from reel_engine.domain.machine.entities.reel_state import ReelState


@dataclass(frozen=True)
class ReelFrame:
    """
    Render hints for one reel in one frame.

    Offsets are in logical units (multiples of the symbol size); the
    renderer maps them to pixels.
    """
    reel_index: int
    blur: float
    symbol_offsets: Tuple[float, ...]
    visible: Tuple[bool, ...]
    symbol_codes: Tuple[str, ...]


class ReelView:
    """
    Derives per-frame sprite offsets and motion blur from reel positions.

    The renderer is free to ignore or reinterpret these hints.
    """
    def __init__(self, reels: Sequence[Reel], symbol_size: float, visible_rows: int = 3,
                 sprites_per_reel: Optional[int] = None, blur_factor: float = 8):
        """
        Args:
            reels: Reel strips, left to right
            symbol_size: Height of one symbol slot in logical units
            visible_rows: Number of rows inside the reel window
            sprites_per_reel: Sprites cycled per reel (default: visible_rows + 2)
            blur_factor: Blur per slot of movement between frames
        """
        self.reels = list(reels)
        self.symbol_size = symbol_size
        self.visible_rows = visible_rows
        self.sprites_per_reel = sprites_per_reel or visible_rows + 2
        self.blur_factor = blur_factor
        # Position seen on the previous frame, per reel; None until first seen
        self._previous_positions: List[Optional[float]] = [None] * len(self.reels)

    def frame(self, reel_state: ReelState) -> List[ReelFrame]:
        """
        Compute render hints for the current positions.

        Blur comes from the distance a spinning reel moved since the last
        frame this view rendered; a reel at rest has none. The reel state
        is only read.
        """
        frames = []
        window_height = self.visible_rows * self.symbol_size

        for i, (reel, slot) in enumerate(zip(self.reels, reel_state.reels)):
            previous = self._previous_positions[i]
            if previous is None:
                previous = float(slot.current_stop)
            blur = (slot.position - previous) * self.blur_factor if slot.busy else 0.0
            self._previous_positions[i] = slot.position

            offsets = tuple(
                ((slot.position + j) % self.sprites_per_reel) * self.symbol_size - self.symbol_size
                for j in range(self.sprites_per_reel)
            )
            base = int(slot.position)
            frames.append(ReelFrame(
                reel_index=i,
                blur=blur,
                symbol_offsets=offsets,
                visible=tuple(0 <= y < window_height for y in offsets),
                symbol_codes=tuple(reel.symbol_at(base + j) for j in range(self.sprites_per_reel)),
            ))
        return frames

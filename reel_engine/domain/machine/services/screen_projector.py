# reel_engine/domain/machine/services/screen_projector.py
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..entities.reel import Reel
from ..entities.reel_state import ReelState
from ..entities.symbol_catalog import SymbolKind


@dataclass(frozen=True)
class ScreenGrid:
    """
    Read-only snapshot of the visible symbols, indexed ``cells[row][col]``.
    """
    cells: Tuple[Tuple[SymbolKind, ...], ...]

    @property
    def num_rows(self) -> int:
        return len(self.cells)

    @property
    def num_cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def symbol_at(self, row: int, col: int) -> SymbolKind:
        return self.cells[row][col]

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.num_rows and 0 <= col < self.num_cols

    def row(self, index: int) -> List[SymbolKind]:
        return list(self.cells[index])

    def column(self, index: int) -> List[SymbolKind]:
        return [r[index] for r in self.cells]

    def flatten(self) -> List[SymbolKind]:
        """Row-major list of all cells."""
        return [symbol for r in self.cells for symbol in r]

    def __bool__(self) -> bool:
        return self.num_rows > 0 and self.num_cols > 0

    def __str__(self) -> str:
        return "\n".join(" ".join(r) for r in self.cells)


class ScreenProjector:
    """Derives the visible grid from settled reel stops."""

    @staticmethod
    def project(reel_state: ReelState, reels: Sequence[Reel], visible_rows: int) -> ScreenGrid:
        """
        Build the screen grid for the current stops.

        Args:
            reel_state: State holding each reel's current stop
            reels: Reel strips, one per column
            visible_rows: Number of visible symbols per reel

        Returns:
            ScreenGrid with ``visible_rows`` rows and one column per reel
        """
        if len(reels) != reel_state.num_reels:
            raise ValueError(f"Got {len(reels)} reels for a state of {reel_state.num_reels}")

        columns = [
            reel.get_symbols_at_position(slot.current_stop, visible_rows)
            for reel, slot in zip(reels, reel_state.reels)
        ]
        cells = tuple(
            tuple(column[row] for column in columns)
            for row in range(visible_rows)
        )
        return ScreenGrid(cells)

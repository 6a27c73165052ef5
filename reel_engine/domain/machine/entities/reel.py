# reel_engine/domain/machine/entities/reel.py
from typing import List, Sequence, Tuple

from .symbol_catalog import SymbolKind


class Reel:
    """
    Fixed symbol strip assigned to one reel.
    Positions wrap around the strip.
    """
    def __init__(self, symbols: Sequence[SymbolKind], reel_id: str = ""):
        """
        Initialize a reel with its strip.

        Args:
            symbols: Symbol codes in strip order
            reel_id: Optional identifier for the reel

        Raises:
            ValueError: If the strip is empty
        """
        if not symbols:
            raise ValueError(f"Reel {reel_id!r} needs at least one symbol")

        self.id = reel_id
        self._symbols: Tuple[SymbolKind, ...] = tuple(symbols)
        self.length = len(self._symbols)

    @property
    def symbols(self) -> Tuple[SymbolKind, ...]:
        return self._symbols

    def symbol_at(self, position: int) -> SymbolKind:
        """Return the symbol at ``position`` modulo the strip length."""
        return self._symbols[position % self.length]

    def get_symbols_at_position(self, position: int, window_size: int = 3) -> List[SymbolKind]:
        """
        Get the symbols visible in the window starting at the given position.

        Args:
            position: Stop index on the strip
            window_size: Number of symbols to return (default: 3)

        Returns:
            List of visible symbols, top to bottom
        """
        return [self._symbols[(position + i) % self.length] for i in range(window_size)]

    def forward_distance(self, current: int, target: int) -> int:
        """Number of slots to move forward from ``current`` to land on ``target``."""
        return (target - current + self.length) % self.length

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Reel(id={self.id}, length={self.length})"

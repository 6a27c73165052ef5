# reel_engine/domain/machine/entities/win_result.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .payline import Coordinate
from .symbol_catalog import SymbolKind


@dataclass(frozen=True)
class WinResult:
    """Outcome of evaluating one payline."""
    payline_id: int
    is_win: bool = False
    matched_symbol: Optional[SymbolKind] = None
    run_length: int = 0
    payout: float = 0
    coordinates: Tuple[Coordinate, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "payline_id": self.payline_id,
            "is_win": self.is_win,
            "matched_symbol": self.matched_symbol,
            "run_length": self.run_length,
            "payout": self.payout,
            "coordinates": [list(c) for c in self.coordinates],
        }


@dataclass(frozen=True)
class CombinedWinResult:
    """
    All winning paylines of one spin merged into a single result.

    Coordinates are concatenated line by line, so a cell shared by two
    winning lines appears twice.
    """
    is_win: bool = False
    symbols: Tuple[SymbolKind, ...] = ()
    payout: float = 0
    payline_ids: Tuple[int, ...] = ()
    coordinates: Tuple[Coordinate, ...] = ()
    line_wins: Tuple[WinResult, ...] = field(default=(), compare=False)

    @classmethod
    def combine(cls, line_wins: List[WinResult]) -> 'CombinedWinResult':
        winners = [w for w in line_wins if w.is_win]
        if not winners:
            return cls()

        coordinates: List[Coordinate] = []
        for w in winners:
            coordinates.extend(w.coordinates)

        return cls(
            is_win=True,
            symbols=tuple(w.matched_symbol for w in winners),
            payout=sum(w.payout for w in winners),
            payline_ids=tuple(w.payline_id for w in winners),
            coordinates=tuple(coordinates),
            line_wins=tuple(winners),
        )

    @property
    def symbols_label(self) -> str:
        return " & ".join(self.symbols)

    @property
    def paylines_label(self) -> str:
        return ", ".join(str(i) for i in self.payline_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_win": self.is_win,
            "symbols": list(self.symbols),
            "payout": self.payout,
            "payline_ids": list(self.payline_ids),
            "coordinates": [list(c) for c in self.coordinates],
            "line_wins": [w.to_dict() for w in self.line_wins],
        }

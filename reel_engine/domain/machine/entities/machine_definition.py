# reel_engine/domain/machine/entities/machine_definition.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .payline import Payline
from .reel import Reel
from .symbol_catalog import SymbolCatalog


@dataclass(frozen=True)
class MachineDefinition:
    """
    Everything loaded once at startup to build a machine.
    Never mutated after construction.
    """
    machine_id: str
    reels: Tuple[Reel, ...]
    catalog: SymbolCatalog
    paylines: Tuple[Payline, ...]
    visible_rows: int = 3
    symbol_size: float = 150
    spin_settings: Dict[str, object] = field(default_factory=dict)
    scripted_outcomes: Dict[str, List[int]] = field(default_factory=dict)
    initial_stops: Optional[List[int]] = None

    @property
    def num_reels(self) -> int:
        return len(self.reels)

    @property
    def strip_lengths(self) -> List[int]:
        return [len(reel) for reel in self.reels]

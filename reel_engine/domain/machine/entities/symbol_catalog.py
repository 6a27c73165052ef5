# reel_engine/domain/machine/entities/symbol_catalog.py
import logging
from dataclasses import dataclass
from typing import Dict, List, Any, Iterable, Optional, Union

# Symbols are plain string tags such as "hv1" or "lv3".
SymbolKind = str

HIGH_TIER = "high"
LOW_TIER = "low"

MIN_RUN_LENGTH = 3


@dataclass(frozen=True)
class SymbolInfo:
    """One visual/payout class of symbol."""
    code: SymbolKind
    tier: str = LOW_TIER


class PayoutTable:
    """
    Maps a symbol and a run length to a payout.

    Run lengths the table does not define pay 0.
    """
    def __init__(self, entries: Optional[Dict[SymbolKind, Dict[int, float]]] = None):
        """
        Initialize the payout table.

        Args:
            entries: Mapping of symbol -> {run_length -> payout}
        """
        self._entries: Dict[SymbolKind, Dict[int, float]] = {}
        for symbol, pays in (entries or {}).items():
            self._entries[str(symbol)] = {int(length): pays[length] for length in pays}

        for symbol, pays in self._entries.items():
            for length, amount in pays.items():
                if length < MIN_RUN_LENGTH:
                    raise ValueError(f"Run length {length} for symbol {symbol} is below {MIN_RUN_LENGTH}")
                if amount < 0:
                    raise ValueError(f"Negative payout {amount} for symbol {symbol} x{length}")

    @classmethod
    def from_config(cls, pay_table_config: Union[List[Dict[str, Any]], Dict[str, Any]]) -> 'PayoutTable':
        """
        Build a payout table from configuration.

        Accepts the list form ``[{symbol: "hv2", payouts: [25, 50, 100]}]``, where
        ``payouts[i]`` pays a run of ``3 + i``, or a mapping ``{"hv2": {3: 25, 4: 50}}``.
        """
        entries = {}
        if isinstance(pay_table_config, dict):
            items = [{"symbol": k, "payouts": v} for k, v in pay_table_config.items()]
        else:
            items = list(pay_table_config or [])

        for entry in items:
            symbol = str(entry["symbol"])
            payouts = entry["payouts"]
            if isinstance(payouts, dict):
                entries[symbol] = {int(k): v for k, v in payouts.items()}
            else:
                entries[symbol] = {MIN_RUN_LENGTH + i: amount for i, amount in enumerate(payouts)}
        return cls(entries)

    def lookup(self, symbol: SymbolKind, run_length: int) -> float:
        """Return the payout for a run, or 0 when the table has no entry."""
        return self._entries.get(symbol, {}).get(run_length, 0)

    def has_symbol(self, symbol: SymbolKind) -> bool:
        return symbol in self._entries

    def has_entry(self, symbol: SymbolKind, run_length: int) -> bool:
        return run_length in self._entries.get(symbol, {})

    def max_run_length(self, symbol: SymbolKind) -> int:
        pays = self._entries.get(symbol)
        return max(pays) if pays else 0

    @property
    def symbols(self) -> List[SymbolKind]:
        return list(self._entries.keys())

    def to_dict(self) -> Dict[SymbolKind, Dict[int, float]]:
        return {symbol: dict(pays) for symbol, pays in self._entries.items()}

    def __contains__(self, symbol: SymbolKind) -> bool:
        return symbol in self._entries

    def __repr__(self) -> str:
        return f"PayoutTable(symbols={self.symbols})"


class SymbolCatalog:
    """
    Static definition of the symbol kinds a machine uses and what they pay.
    """
    def __init__(self, symbols: Iterable[SymbolInfo], payout_table: PayoutTable):
        self.logger = logging.getLogger("domain.machine.symbol_catalog")
        self.symbols: Dict[SymbolKind, SymbolInfo] = {info.code: info for info in symbols}
        self.payout_table = payout_table

    @classmethod
    def from_config(cls, symbols_config: Optional[Dict[str, List[str]]],
                    pay_table_config: Union[List[Dict[str, Any]], Dict[str, Any]]) -> 'SymbolCatalog':
        """
        Build a catalog from the ``symbols`` and ``pay_table`` config sections.

        Symbols listed only in the pay table are added to the low tier.
        """
        payout_table = PayoutTable.from_config(pay_table_config)

        infos = []
        for tier, codes in (symbols_config or {}).items():
            for code in codes:
                infos.append(SymbolInfo(str(code), tier))

        known = {info.code for info in infos}
        for code in payout_table.symbols:
            if code not in known:
                infos.append(SymbolInfo(code, LOW_TIER))

        return cls(infos, payout_table)

    def missing_payouts(self, strips: Iterable[Iterable[SymbolKind]]) -> List[SymbolKind]:
        """
        Return the symbols that appear on a strip but have no pay table entry.

        Args:
            strips: Reel strips to check

        Returns:
            Sorted list of symbol codes without payouts
        """
        missing = set()
        for strip in strips:
            for symbol in strip:
                if not self.payout_table.has_symbol(symbol):
                    missing.add(symbol)
        return sorted(missing)

    def tier_of(self, symbol: SymbolKind) -> Optional[str]:
        info = self.symbols.get(symbol)
        return info.tier if info else None

    def __contains__(self, symbol: SymbolKind) -> bool:
        return symbol in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)

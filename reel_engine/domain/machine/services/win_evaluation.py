# reel_engine/domain/machine/services/win_evaluation.py
import logging
from typing import List, Optional, Sequence

from ..entities.payline import Payline, DEFAULT_PAYLINES
from ..entities.symbol_catalog import PayoutTable, MIN_RUN_LENGTH
from ..entities.win_result import WinResult, CombinedWinResult
from .screen_projector import ScreenGrid


class PaylineEvaluator:
    """
    Service for evaluating payline wins on a settled screen grid.
    """

    def __init__(self, payout_table: PayoutTable, paylines: Optional[Sequence[Payline]] = None,
                 min_run_length: int = MIN_RUN_LENGTH):
        self._payout_table = payout_table
        self._paylines = list(paylines) if paylines is not None else list(DEFAULT_PAYLINES)
        self._min_run_length = min_run_length

        self.logger = logging.getLogger("domain.machine.win_evaluator")

    @property
    def paylines(self) -> List[Payline]:
        return list(self._paylines)

    @property
    def payout_table(self) -> PayoutTable:
        return self._payout_table

    def evaluate_all(self, grid: ScreenGrid, paylines: Optional[Sequence[Payline]] = None,
                     payout_table: Optional[PayoutTable] = None) -> CombinedWinResult:
        """
        Evaluate every payline and combine the winners.

        Args:
            grid: Settled screen grid
            paylines: Paylines to check (default: the evaluator's own)
            payout_table: Payout table to use (default: the evaluator's own)

        Returns:
            CombinedWinResult over all winning lines

        Raises:
            ValueError: If the grid is empty or a payline leaves the grid
        """
        if not grid:
            error_msg = f"Invalid input values! grid: {grid!r}"
            self.logger.error(error_msg)
            raise ValueError(error_msg)

        if paylines is None:
            paylines = self._paylines
        if payout_table is None:
            payout_table = self._payout_table

        line_results = [self.evaluate_line(grid, payline, payout_table) for payline in paylines]
        combined = CombinedWinResult.combine(line_results)

        if combined.is_win:
            self.logger.debug(
                f"Winning lines {list(combined.payline_ids)} symbols {list(combined.symbols)} "
                f"payout {combined.payout}"
            )
        return combined

    def evaluate_line(self, grid: ScreenGrid, payline: Payline,
                      payout_table: Optional[PayoutTable] = None) -> WinResult:
        """
        Evaluate a single payline.

        The run is anchored at the line's first coordinate and stops at the
        first symbol that differs from it.
        """
        if payout_table is None:
            payout_table = self._payout_table

        for row, col in payline.coordinates:
            if not grid.contains(row, col):
                error_msg = f"Payline {payline.id} coordinate ({row}, {col}) is outside a " \
                            f"{grid.num_rows}x{grid.num_cols} grid"
                self.logger.error(error_msg)
                raise ValueError(error_msg)

        symbols = [grid.symbol_at(row, col) for row, col in payline.coordinates]
        first_symbol = symbols[0]

        run_length = 1
        for symbol in symbols[1:]:
            if symbol != first_symbol:
                break
            run_length += 1

        if run_length < self._min_run_length:
            return WinResult(payline_id=payline.id)

        if not payout_table.has_entry(first_symbol, run_length):
            self.logger.debug(f"No payout entry for {first_symbol} x{run_length} on line {payline.id}, paying 0")

        return WinResult(
            payline_id=payline.id,
            is_win=True,
            matched_symbol=first_symbol,
            run_length=run_length,
            payout=payout_table.lookup(first_symbol, run_length),
            coordinates=tuple(payline.coordinates[:run_length]),
        )

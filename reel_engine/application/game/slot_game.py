# reel_engine/application/game/slot_game.py
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from reel_engine.application.game.credit_ledger import CreditLedger
from reel_engine.application.presentation.reel_view import ReelFrame, ReelView
from reel_engine.application.presentation.win_presenter import WinPresenter
from reel_engine.domain.machine.entities.win_result import CombinedWinResult
from reel_engine.domain.machine.services.spin_engine import SpinEngine


class SlotGame:
    """
    Connects the spin engine to the player's credits and the win display.

    A spin costs ``bet`` up front; a winning spin credits its payout and is
    handed to the presenter before the caller's completion callback runs.
    """
    def __init__(self, engine: SpinEngine, ledger: CreditLedger, presenter: WinPresenter,
                 bet: float = 10, reel_view: Optional[ReelView] = None,
                 scripted_outcomes: Optional[Dict[str, List[int]]] = None):
        self.logger = logging.getLogger("application.game")
        self.engine = engine
        self.ledger = ledger
        self.presenter = presenter
        self.bet = bet
        self.reel_view = reel_view
        self.scripted_outcomes = dict(scripted_outcomes or {})
        self.history: List[Dict[str, Any]] = []

    @property
    def spinning(self) -> bool:
        return self.engine.is_any_spin_in_progress()

    def spin(self, outcome: Optional[Sequence[int]] = None,
             on_complete: Optional[Callable[[CombinedWinResult], None]] = None) -> bool:
        """
        Pay for and start a spin.

        Args:
            outcome: Optional target stop per reel; drawn from the engine's RNG when omitted
            on_complete: Called with the combined result once the reels settle

        Returns:
            True if the spin started

        Raises:
            ValueError: If the outcome does not fit the reels or no RNG is set to draw one
        """
        if self.spinning:
            self.logger.warning("Spin requested while reels are spinning, ignoring")
            return False

        if not self.ledger.can_afford(self.bet):
            self.logger.warning(f"Balance {self.ledger.balance} too low for bet {self.bet}")
            return False

        # Targets must be known before the bet is taken
        targets = list(outcome) if outcome is not None else self.engine.random_outcome()
        self.engine.state.validate_targets(targets)

        self.ledger.deduct(self.bet)
        self.presenter.clear()

        def handle_complete(result: CombinedWinResult):
            self.history.append({
                "spin_number": self.engine.spin_count,
                "stops": self.engine.state.current_stops,
                "bet": self.bet,
                "payout": result.payout,
                "payline_ids": list(result.payline_ids),
                "balance": self.ledger.balance,
            })
            if on_complete:
                on_complete(result)

        return self.engine.spin(targets, on_complete=handle_complete, on_win=self._handle_win)

    def spin_scripted(self, name: str,
                      on_complete: Optional[Callable[[CombinedWinResult], None]] = None) -> bool:
        """
        Spin to one of the machine's named outcomes.

        Raises:
            KeyError: If no outcome has that name
        """
        if name not in self.scripted_outcomes:
            raise KeyError(f"Unknown scripted outcome: {name}. Available: {sorted(self.scripted_outcomes)}")
        return self.spin(self.scripted_outcomes[name], on_complete)

    def update(self) -> List[ReelFrame]:
        """
        Run one frame: advance the animations and return render hints.
        """
        self.engine.animator.tick()
        if self.reel_view is None:
            return []
        return self.reel_view.frame(self.engine.state)

    def _handle_win(self, result: CombinedWinResult):
        self.ledger.credit(result.payout)
        self.presenter.present(result)

# reel_engine/application/game/credit_ledger.py
import logging
from typing import Dict

from reel_engine.domain.machine.errors import InsufficientFundsError


class CreditLedger:
    """
    Player balance and accumulated winnings.
    """
    def __init__(self, balance: float = 1000, winnings: float = 0):
        if balance < 0:
            raise ValueError(f"Starting balance cannot be negative: {balance}")
        self.logger = logging.getLogger("application.game.ledger")
        self.balance = balance
        self.winnings = winnings

    def can_afford(self, bet: float) -> bool:
        return 0 <= bet <= self.balance

    def deduct(self, bet: float):
        """
        Take a bet from the balance.

        Raises:
            ValueError: If the bet is negative
            InsufficientFundsError: If the balance is too low
        """
        if bet < 0:
            raise ValueError(f"Bet cannot be negative: {bet}")
        if bet > self.balance:
            raise InsufficientFundsError(self.balance, bet)
        self.balance -= bet
        self.logger.debug(f"Deducted bet {bet}, balance {self.balance}")

    def credit(self, amount: float):
        """Add a payout to both the balance and the winnings total."""
        if amount < 0:
            raise ValueError(f"Credit cannot be negative: {amount}")
        self.balance += amount
        self.winnings += amount
        self.logger.debug(f"Credited {amount}, balance {self.balance}, winnings {self.winnings}")

    def snapshot(self) -> Dict[str, float]:
        return {"balance": self.balance, "winnings": self.winnings}

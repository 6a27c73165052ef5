# reel_engine/domain/machine/errors.py


class ReelEngineError(Exception):
    """Base class for errors raised by the reel engine."""
    pass


class InvalidStateError(ReelEngineError):
    """Raised when an operation is not allowed in the current reel state."""
    pass


class MachineConfigError(ReelEngineError):
    """Raised when a machine configuration cannot be turned into a working machine."""
    def __init__(self, machine_id, errors):
        self.machine_id = machine_id
        self.errors = errors if isinstance(errors, list) else [errors]
        error_msg = "\n  - ".join([""] + [str(e) for e in self.errors])
        self.message = f"Invalid machine configuration for {machine_id}:{error_msg}"
        super().__init__(self.message)


class InsufficientFundsError(ReelEngineError):
    """Raised when a bet exceeds the available balance."""
    def __init__(self, balance, bet):
        self.balance = balance
        self.bet = bet
        super().__init__(f"Insufficient balance {balance} for bet {bet}")

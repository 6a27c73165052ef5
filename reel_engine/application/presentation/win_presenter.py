# reel_engine/application/presentation/win_presenter.py
import logging
from typing import List, Optional, Protocol, Tuple

from reel_engine.domain.machine.entities.win_result import CombinedWinResult


class WinPresenter(Protocol):
    """Boundary to whatever shows wins to the player."""

    def present(self, result: CombinedWinResult) -> None:
        ...

    def clear(self) -> None:
        ...


def format_win_banner(result: CombinedWinResult) -> str:
    return (
        f"YOU WON {result.payout} CREDITS!\n"
        f"Winning Symbols: {result.symbols_label}\n"
        f"Payline(s): {result.paylines_label}"
    )


class LoggingWinPresenter:
    """
    Presenter that logs the win banner and keeps the cells to highlight.
    """
    def __init__(self, logger_name: str = "application.presentation.wins"):
        self.logger = logging.getLogger(logger_name)
        self.banner: Optional[str] = None
        self.highlighted: List[Tuple[int, int]] = []
        self.presented_count = 0

    def present(self, result: CombinedWinResult) -> None:
        if not result.is_win:
            return
        self.banner = format_win_banner(result)
        self.highlighted = list(result.coordinates)
        self.presented_count += 1
        self.logger.info(self.banner.replace("\n", " | "))
        self.logger.debug(f"Highlighting cells: {self.highlighted}")

    def clear(self) -> None:
        self.banner = None
        self.highlighted = []

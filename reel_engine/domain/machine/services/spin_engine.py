# reel_engine/domain/machine/services/spin_engine.py
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from reel_engine.domain.events.event_dispatcher import EventDispatcher
from reel_engine.domain.events.machine_events import MachineEvent, MachineEventType
from reel_engine.infrastructure.animation.animator import Animator, attribute
from reel_engine.infrastructure.animation.easing import get_easing

from ..entities.reel import Reel
from ..entities.reel_state import ReelState
from ..entities.win_result import CombinedWinResult
from .screen_projector import ScreenGrid, ScreenProjector
from .win_evaluation import PaylineEvaluator

SpinCallback = Callable[[CombinedWinResult], None]


@dataclass(frozen=True)
class SpinSettings:
    """
    Timing of the spin animation.

    Reel ``i`` makes ``base_rotations + i * rotation_step`` extra full turns
    and animates for ``base_duration_ms + i * duration_step_ms``.
    """
    base_rotations: int = 5
    rotation_step: int = 1
    base_duration_ms: float = 2000
    duration_step_ms: float = 500
    easing: str = "power3_in_out"

    def __post_init__(self):
        if self.base_rotations < 1:
            raise ValueError(f"base_rotations must be at least 1, got {self.base_rotations}")
        if self.rotation_step < 1:
            raise ValueError(f"rotation_step must be at least 1, got {self.rotation_step}")
        if self.base_duration_ms <= 0 or self.duration_step_ms < 0:
            raise ValueError("Spin durations must be positive")
        get_easing(self.easing)

    def extra_rotations(self, reel_index: int) -> int:
        return self.base_rotations + reel_index * self.rotation_step

    def duration_ms(self, reel_index: int) -> float:
        return self.base_duration_ms + reel_index * self.duration_step_ms


@dataclass(frozen=True)
class ReelSpinPlan:
    """How one reel travels from its current stop to its target."""
    reel_index: int
    current_stop: int
    target_stop: int
    start_position: float
    forward_distance: int
    extra_rotations: int
    total_distance: int
    final_position: float
    duration_ms: float


class SpinEngine:
    """
    Spins the reels to a predetermined outcome and scores the result.

    The engine owns the reel state. Each reel's visual position is handed to
    the animator; the logical stops only change when a reel's animation completes.
    """
    def __init__(self, reels: Sequence[Reel], evaluator: PaylineEvaluator, animator: Animator,
                 visible_rows: int = 3, settings: Optional[SpinSettings] = None,
                 rng_strategy=None, event_dispatcher: Optional[EventDispatcher] = None,
                 machine_id: str = "", initial_stops: Optional[Sequence[int]] = None):
        """
        Initialize the spin engine.

        Args:
            reels: Reel strips, left to right
            evaluator: Payline evaluator for settled grids
            animator: Animation collaborator driving reel positions
            visible_rows: Number of visible symbols per reel
            settings: Spin timing (default: SpinSettings())
            rng_strategy: RNG strategy used when no outcome is supplied
            event_dispatcher: Optional dispatcher for machine events
            machine_id: Identifier used in logs and events
            initial_stops: Starting stop per reel (default: all 0)
        """
        if not reels:
            raise ValueError("SpinEngine needs at least one reel")
        if visible_rows < 1:
            raise ValueError(f"visible_rows must be at least 1, got {visible_rows}")

        self.id = machine_id
        self.logger = logging.getLogger("domain.machine.spin_engine")

        self.reels = list(reels)
        self.evaluator = evaluator
        self.animator = animator
        self.visible_rows = visible_rows
        self.settings = settings or SpinSettings()
        self.rng = rng_strategy
        self.event_dispatcher = event_dispatcher

        self.state = ReelState([len(reel) for reel in self.reels], initial_stops)
        self._easing = get_easing(self.settings.easing)

        self._on_complete: Optional[SpinCallback] = None
        self._on_win: Optional[SpinCallback] = None
        self.spin_count = 0

        self.grid: ScreenGrid = ScreenProjector.project(self.state, self.reels, self.visible_rows)
        self.last_result: Optional[CombinedWinResult] = None

    @property
    def num_reels(self) -> int:
        return len(self.reels)

    def set_rng(self, rng_strategy):
        """
        Set or update the RNG strategy.

        Args:
            rng_strategy: RNG strategy instance
        """
        self.rng = rng_strategy
        self.logger.debug(f"Updated RNG strategy: {type(rng_strategy).__name__}")

    def is_any_spin_in_progress(self) -> bool:
        return self.state.is_any_spin_in_progress()

    def random_outcome(self) -> List[int]:
        """
        Draw one stop per reel, uniform over each strip.

        Raises:
            ValueError: If no RNG strategy is set
        """
        if self.rng is None:
            self.logger.error("No RNG strategy set, cannot pick an outcome")
            raise ValueError("No RNG strategy set for spin engine")
        return self.rng.draw_stops([len(reel) for reel in self.reels])

    def plan_spin(self, targets: Sequence[int]) -> List[ReelSpinPlan]:
        """
        Compute the forward-only travel of every reel for the given targets.

        Args:
            targets: One target stop per reel

        Returns:
            One plan per reel, left to right
        """
        if len(targets) != self.num_reels:
            raise ValueError(f"Expected {self.num_reels} targets, got {len(targets)}")

        plans = []
        for i, (reel, slot, target) in enumerate(zip(self.reels, self.state.reels, targets)):
            forward = reel.forward_distance(slot.current_stop, target)
            extra = self.settings.extra_rotations(i)
            total = forward + extra * reel.length
            plans.append(ReelSpinPlan(
                reel_index=i,
                current_stop=slot.current_stop,
                target_stop=target,
                start_position=slot.position,
                forward_distance=forward,
                extra_rotations=extra,
                total_distance=total,
                final_position=slot.position + total,
                duration_ms=self.settings.duration_ms(i),
            ))
        return plans

    def spin(self, outcome: Optional[Sequence[int]] = None,
             on_complete: Optional[SpinCallback] = None,
             on_win: Optional[SpinCallback] = None) -> bool:
        """
        Start a spin that lands on ``outcome``.

        Args:
            outcome: Target stop per reel; drawn at random when omitted
            on_complete: Called with the combined result once all reels settle
            on_win: Called with the combined result before ``on_complete`` when it is a win

        Returns:
            True if the spin started, False if a spin was already running
        """
        if self.is_any_spin_in_progress():
            self.logger.warning(f"Spin requested on {self.id or 'machine'} while reels are busy, ignoring")
            self._dispatch(MachineEventType.SPIN_REJECTED, {"busy_reels": self.state.busy_count})
            return False

        targets = list(outcome) if outcome is not None else self.random_outcome()
        plans = self.plan_spin(targets)
        self.state.begin_spin(targets)

        self._on_complete = on_complete
        self._on_win = on_win
        self.spin_count += 1

        self.logger.debug(f"Spin {self.spin_count} targets: {targets}")
        self._dispatch(MachineEventType.SPIN_STARTED, {
            "spin_number": self.spin_count,
            "targets": list(targets),
            "scripted": outcome is not None,
        })

        for plan in plans:
            slot = self.state.reels[plan.reel_index]
            self.animator.animate(
                slot, attribute("position"), plan.start_position, plan.final_position,
                plan.duration_ms, self._easing,
                on_complete=lambda tween, index=plan.reel_index: self._on_reel_complete(index),
            )
        return True

    def _on_reel_complete(self, reel_index: int):
        slot = self.state.reels[reel_index]
        settled = self.state.complete_reel(reel_index)

        # Rebase the visual position onto the stop so it does not grow without bound.
        slot.position = float(slot.current_stop)

        self._dispatch(MachineEventType.REEL_STOPPED, {"reel_index": reel_index, "stop": slot.current_stop})

        if settled:
            self._settle()

    def _settle(self):
        self.grid = ScreenProjector.project(self.state, self.reels, self.visible_rows)
        self.logger.debug(f"Current screen:\n{self.grid}")

        result = self.evaluator.evaluate_all(self.grid)
        self.last_result = result

        self._dispatch(MachineEventType.SPIN_COMPLETED, {
            "spin_number": self.spin_count,
            "stops": self.state.current_stops,
            "grid": [list(r) for r in self.grid.cells],
            "payout": result.payout,
        })
        if result.is_win:
            self._dispatch(MachineEventType.WIN, result.to_dict())

        on_win, on_complete = self._on_win, self._on_complete
        self._on_win = self._on_complete = None

        if result.is_win and on_win:
            on_win(result)
        if on_complete:
            on_complete(result)

    def _dispatch(self, event_type: MachineEventType, data: dict):
        if self.event_dispatcher:
            self.event_dispatcher.dispatch(MachineEvent(type=event_type, data=data, machine_id=self.id))

    def get_info(self):
        """
        Get information about this engine.

        Returns:
            Dictionary with engine information
        """
        return {
            "id": self.id,
            "num_reels": self.num_reels,
            "visible_rows": self.visible_rows,
            "reel_lengths": [len(reel) for reel in self.reels],
            "num_paylines": len(self.evaluator.paylines),
            "current_stops": self.state.current_stops,
            "spinning": self.is_any_spin_in_progress(),
            "spin_count": self.spin_count,
        }

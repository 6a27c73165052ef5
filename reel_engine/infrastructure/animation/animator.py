# reel_engine/infrastructure/animation/animator.py
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, NamedTuple, Optional

from .clock import Clock, MonotonicClock
from .easing import Easing, linear


class PropertyAccessor(NamedTuple):
    """Typed getter/setter pair for the scalar a tween animates."""
    getter: Callable[[Any], float]
    setter: Callable[[Any, float], None]


def attribute(name: str) -> PropertyAccessor:
    """Accessor for a plain attribute of the subject."""
    return PropertyAccessor(
        getter=lambda subject: getattr(subject, name),
        setter=lambda subject, value: setattr(subject, name, value),
    )


def lerp(a: float, b: float, t: float) -> float:
    return a * (1 - t) + b * t


@dataclass
class Tween:
    """Handle for one running animation."""
    subject: Any
    accessor: PropertyAccessor
    start_value: float
    end_value: float
    duration_ms: float
    easing: Easing
    started_at: float
    on_update: Optional[Callable[['Tween'], None]] = None
    on_complete: Optional[Callable[['Tween'], None]] = None
    cancelled: bool = False
    finished: bool = False
    phase: float = field(default=0.0)

    def cancel(self):
        """Stop the tween where it is. The completion callback will not run."""
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.finished)


class Animator:
    """
    Frame-driven tween runner.

    Call ``tick()`` once per frame; every active tween writes its eased value
    to its subject, and tweens that reach the end run their completion callback.
    """
    def __init__(self, clock: Optional[Clock] = None):
        self.logger = logging.getLogger("infrastructure.animation")
        self.clock = clock or MonotonicClock()
        self._tweens: List[Tween] = []

    def animate(self, subject: Any, accessor: PropertyAccessor, start: float, end: float,
                duration_ms: float, easing: Easing = linear,
                on_update: Optional[Callable[[Tween], None]] = None,
                on_complete: Optional[Callable[[Tween], None]] = None) -> Tween:
        """
        Animate a scalar on ``subject`` from ``start`` to ``end``.

        Args:
            subject: Object owning the animated value
            accessor: How to read and write the value
            start: Value at phase 0
            end: Value at phase 1
            duration_ms: Animation length in milliseconds
            easing: Easing curve applied to the phase
            on_update: Called after every frame update
            on_complete: Called once after the end value is written

        Returns:
            Tween handle that can be cancelled
        """
        if duration_ms < 0:
            raise ValueError(f"Negative duration: {duration_ms}")

        accessor.setter(subject, start)
        tween = Tween(
            subject=subject,
            accessor=accessor,
            start_value=start,
            end_value=end,
            duration_ms=duration_ms,
            easing=easing,
            started_at=self.clock.now(),
            on_update=on_update,
            on_complete=on_complete,
        )
        self._tweens.append(tween)
        self.logger.debug(f"Tween started: {start} -> {end} over {duration_ms} ms")
        return tween

    def tick(self) -> int:
        """
        Advance every active tween to the current clock time.

        Returns:
            Number of tweens still running after this frame
        """
        now = self.clock.now()
        finished = []

        # Snapshot so callbacks may start new tweens; those run from the next frame.
        for tween in list(self._tweens):
            if tween.cancelled:
                finished.append(tween)
                continue

            if tween.duration_ms == 0:
                phase = 1.0
            else:
                phase = min(1.0, (now - tween.started_at) / tween.duration_ms)
            tween.phase = phase

            tween.accessor.setter(tween.subject,
                                  lerp(tween.start_value, tween.end_value, tween.easing(phase)))
            if tween.on_update:
                tween.on_update(tween)

            if phase >= 1.0:
                tween.accessor.setter(tween.subject, tween.end_value)
                tween.finished = True
                finished.append(tween)

        for tween in finished:
            self._tweens.remove(tween)

        # A failing callback is logged and does not stop the others
        for tween in finished:
            if tween.finished and tween.on_complete:
                try:
                    tween.on_complete(tween)
                except Exception as e:
                    self.logger.error(f"Error in tween completion callback: {str(e)}")

        return len(self._tweens)

    @property
    def active_count(self) -> int:
        return sum(1 for t in self._tweens if t.active)

    def is_idle(self) -> bool:
        return self.active_count == 0

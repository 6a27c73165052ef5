# reel_engine/infrastructure/animation/easing.py
from typing import Callable, Dict

Easing = Callable[[float], float]


def linear(t: float) -> float:
    return t


def backout(amount: float) -> Easing:
    """Overshoot past the end and settle back; ``amount`` controls the overshoot."""
    def ease(t: float) -> float:
        t -= 1
        return t * t * ((amount + 1) * t + amount) + 1
    return ease


def power2_out(t: float) -> float:
    return 1 - (1 - t) ** 2


def power3_in_out(t: float) -> float:
    if t < 0.5:
        return 4 * t ** 3
    return 1 - (-2 * t + 2) ** 3 / 2


_EASINGS: Dict[str, Easing] = {
    "linear": linear,
    "backout": backout(0.5),
    "power2_out": power2_out,
    "power3_in_out": power3_in_out,
}


def get_easing(name: str) -> Easing:
    """
    Look up an easing function by its config name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return _EASINGS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown easing: {name}. Available: {sorted(_EASINGS)}") from None


def available_easings():
    return sorted(_EASINGS)

# reel_engine/domain/machine/entities/payline.py
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

Coordinate = Tuple[int, int]  # (row, col)


@dataclass(frozen=True)
class Payline:
    """A fixed path across the screen grid, one coordinate per column."""
    id: int
    coordinates: Tuple[Coordinate, ...]
    name: str = ""

    def __post_init__(self):
        if not self.coordinates:
            raise ValueError(f"Payline {self.id} has no coordinates")

    @classmethod
    def from_config(cls, index: int, entry: Dict[str, Any]) -> 'Payline':
        """
        Build a payline from a config entry.

        Args:
            index: Position in the config list, used when the entry has no id
            entry: Dict with ``coordinates`` as ``[[row, col], ...]`` and optional ``id``/``name``
        """
        coordinates = tuple((int(row), int(col)) for row, col in entry["coordinates"])
        return cls(id=int(entry.get("id", index)), coordinates=coordinates, name=entry.get("name", ""))

    @property
    def columns(self) -> List[int]:
        return [col for _, col in self.coordinates]

    def __len__(self) -> int:
        return len(self.coordinates)


def _row(row: int, num_reels: int = 5) -> Tuple[Coordinate, ...]:
    return tuple((row, col) for col in range(num_reels))


# Paylines for the 3x5 layout, in evaluation order
TOP_ROW = Payline(0, _row(0), "top")
MIDDLE_ROW = Payline(1, _row(1), "middle")
BOTTOM_ROW = Payline(2, _row(2), "bottom")
DOWN_DIAGONAL = Payline(3, ((0, 0), (0, 1), (1, 2), (2, 3), (2, 4)), "down-diagonal")
UP_DIAGONAL = Payline(4, ((2, 0), (2, 1), (1, 2), (0, 3), (0, 4)), "up-diagonal")
V_SHAPE = Payline(5, ((0, 0), (1, 1), (2, 2), (1, 3), (0, 4)), "v")
INVERTED_V_SHAPE = Payline(6, ((2, 0), (1, 1), (0, 2), (1, 3), (2, 4)), "inverted-v")

DEFAULT_PAYLINES: Tuple[Payline, ...] = (
    TOP_ROW,
    MIDDLE_ROW,
    BOTTOM_ROW,
    DOWN_DIAGONAL,
    UP_DIAGONAL,
    V_SHAPE,
    INVERTED_V_SHAPE,
)

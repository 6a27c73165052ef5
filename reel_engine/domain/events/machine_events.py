# reel_engine/domain/events/machine_events.py
from enum import Enum, auto
from dataclasses import dataclass

from .event_types import DomainEvent


class MachineEventType(Enum):
    """Event types emitted by the reel engine during a spin."""
    SPIN_STARTED = auto()
    SPIN_REJECTED = auto()
    REEL_STOPPED = auto()
    SPIN_COMPLETED = auto()
    WIN = auto()


@dataclass
class MachineEvent(DomainEvent):
    """Event representing something that happened on a machine."""
    machine_id: str = ""

    def __post_init__(self):
        """Initialize base class and add the machine id to the data."""
        super().__post_init__()
        self.data["machine_id"] = self.machine_id

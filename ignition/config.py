"""Runtime configuration of the engine."""

from dataclasses import dataclass, field
from enum import Enum


class ControlFlow(Enum):
    """How the event loop proceeds after handling events."""

    POLL = "poll"
    WAIT = "wait"
    EXIT = "exit"


@dataclass(frozen=True)
class PhysicalSize:
    """A size in physical pixels."""

    width: int
    height: int


@dataclass
class RuntimeConfiguration:
    """Settings that govern how the engine runs."""

    control_flow: ControlFlow = ControlFlow.POLL
    any_thread: bool = False
    size: PhysicalSize = field(default_factory=lambda: PhysicalSize(1920, 1080))
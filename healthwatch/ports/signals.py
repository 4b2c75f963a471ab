"""Control signal port definition (enum and interface)."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

__all__ = ["ControlSignal", "SignalSourcePort"]


class ControlSignal(Enum):
    """Lifecycle requests delivered to the core loop."""

    TERMINATE = "terminate"
    RELOAD = "reload"


class SignalSourcePort(Protocol):
    """Interface for a queue of control signals.

    ``asyncio.Queue[ControlSignal]`` satisfies it.
    """

    async def get(self) -> ControlSignal:
        """Wait for and return the next control signal."""
        ...

"""Boot code VM — data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MachineStatus(Enum):
    """Where the machine stands before its next step."""

    RUNNING = "running"
    TERMINATED = "terminated"
    FAULTED = "faulted"


@dataclass
class ExecutionState:
    accumulator: int = 0
    instruction_pointer: int = 0
    executed: set[int] = field(default_factory=set)

    def reset(self) -> None:
        self.accumulator = 0
        self.instruction_pointer = 0
        self.executed.clear()

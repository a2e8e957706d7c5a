"""Trace data types for step-by-step execution replay."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ir import Instruction
from .run_types import RunResult


@dataclass(frozen=True)
class TraceStep:
    """A single executed instruction.

    Records the pointer it ran at, the instruction itself, and the
    accumulator and pointer values left behind once it finished.
    """

    step_index: int
    instruction_pointer: int
    instruction: Instruction
    accumulator: int
    next_pointer: int

    def __str__(self) -> str:
        return (
            f"[step {self.step_index}] {self.instruction_pointer:>4}  "
            f"{self.instruction!s:<10} acc={self.accumulator} → {self.next_pointer}"
        )


@dataclass(frozen=True)
class ExecutionTrace:
    """Complete trace of a run: every executed step plus the final result."""

    steps: list[TraceStep] = field(default_factory=list)
    result: RunResult | None = None

    @property
    def pointers(self) -> list[int]:
        return [s.instruction_pointer for s in self.steps]

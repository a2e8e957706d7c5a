"""Instruction model — three operations over a single accumulator."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Operation(str, Enum):
    ACC = "acc"
    JMP = "jmp"
    NOP = "nop"


# JMP and NOP trade places; ACC maps to itself.
_SWAPS: dict[Operation, Operation] = {
    Operation.ACC: Operation.ACC,
    Operation.JMP: Operation.NOP,
    Operation.NOP: Operation.JMP,
}


class Instruction(BaseModel):
    model_config = ConfigDict(frozen=True)

    operation: Operation
    argument: int

    @property
    def is_swappable(self) -> bool:
        return _SWAPS[self.operation] is not self.operation

    def swapped(self) -> Instruction:
        """Return a copy with JMP and NOP exchanged; the argument is kept."""
        return Instruction(operation=_SWAPS[self.operation], argument=self.argument)

    def __str__(self) -> str:
        return f"{self.operation.value} {self.argument:+d}"

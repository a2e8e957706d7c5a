"""Boot code VM — execution engine with loop detection."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from .ir import Instruction, Operation
from .run_types import RunOutcome, RunResult, VMConfig
from .trace_types import ExecutionTrace, TraceStep
from .vm_types import ExecutionState, MachineStatus

logger = logging.getLogger(__name__)


class VMError(Exception):
    """Base class for faults raised by single-stepping the VM."""

    pass


class MachineHalted(VMError):
    """Raised when stepping a machine whose pointer already equals the program length."""

    pass


class InstructionPointerOutOfBounds(VMError):
    """Raised when the pointer lies outside [0, program length]."""

    def __init__(self, pointer: int, program_length: int):
        self.pointer = pointer
        self.program_length = program_length
        super().__init__(
            f"Instruction pointer {pointer} outside program of length {program_length}"
        )


class VirtualMachine:
    """Runs one program over an accumulator, tracking which pointers executed.

    The VM owns a private copy of the program so in-place swaps never leak
    into the caller's list.
    """

    def __init__(self, program: Sequence[Instruction], config: VMConfig = VMConfig()):
        self.program: list[Instruction] = list(program)
        self.config = config
        self.state = ExecutionState()

    def reset(self) -> None:
        self.state.reset()

    @property
    def status(self) -> MachineStatus:
        ip = self.state.instruction_pointer
        if ip == len(self.program):
            return MachineStatus.TERMINATED
        if ip in self.state.executed or not 0 <= ip < len(self.program):
            return MachineStatus.FAULTED
        return MachineStatus.RUNNING

    def step(self) -> None:
        """Execute the instruction at the current pointer.

        Raises:
            MachineHalted: If the pointer equals the program length.
            InstructionPointerOutOfBounds: If the pointer is outside the program.
        """
        state = self.state
        ip = state.instruction_pointer
        if ip == len(self.program):
            raise MachineHalted(f"Program of length {ip} has already terminated")
        if not 0 <= ip < len(self.program):
            raise InstructionPointerOutOfBounds(ip, len(self.program))

        instruction = self.program[ip]
        state.executed.add(ip)

        if instruction.operation == Operation.ACC:
            state.accumulator += instruction.argument
            state.instruction_pointer += 1
        elif instruction.operation == Operation.JMP:
            state.instruction_pointer += instruction.argument
        else:
            state.instruction_pointer += 1

    def run(self) -> RunResult:
        """Run from a clean state until termination or a fault.

        A revisited pointer, an out-of-bounds pointer and an exhausted step
        budget are all reported through the result's outcome, never raised.
        """
        return self._run(trace_steps=None)

    def run_traced(self) -> tuple[RunResult, ExecutionTrace]:
        """Identical to run() but also records every executed step."""
        trace_steps: list[TraceStep] = []
        result = self._run(trace_steps=trace_steps)
        return result, ExecutionTrace(steps=trace_steps, result=result)

    def swap_instruction(self, index: int) -> Instruction:
        """Swap JMP/NOP at *index* in place and return the instruction it replaced."""
        original = self.program[index]
        self.program[index] = original.swapped()
        return original

    def _run(self, trace_steps: list[TraceStep] | None) -> RunResult:
        self.reset()
        state = self.state
        length = len(self.program)
        max_steps = self.config.max_steps
        steps = 0

        while True:
            ip = state.instruction_pointer
            if ip == length:
                outcome = RunOutcome.TERMINATED
                break
            if ip in state.executed:
                outcome = RunOutcome.LOOP_DETECTED
                break
            if not 0 <= ip < length:
                outcome = RunOutcome.OUT_OF_BOUNDS
                break
            if max_steps is not None and steps >= max_steps:
                outcome = RunOutcome.STEP_LIMIT_REACHED
                break

            instruction = self.program[ip]
            self.step()

            if trace_steps is not None:
                trace_steps.append(
                    TraceStep(
                        step_index=steps,
                        instruction_pointer=ip,
                        instruction=instruction,
                        accumulator=state.accumulator,
                        next_pointer=state.instruction_pointer,
                    )
                )
            if self.config.verbose:
                print(
                    f"[step {steps}] {ip:>4}  {instruction}  "
                    f"acc={state.accumulator}",
                    file=sys.stderr,
                )
            steps += 1

        logger.debug(
            "Run ended: %s at ip=%d, acc=%d after %d steps",
            outcome.value,
            state.instruction_pointer,
            state.accumulator,
            steps,
        )
        return RunResult(
            outcome=outcome,
            accumulator=state.accumulator,
            instruction_pointer=state.instruction_pointer,
            steps=steps,
            executed=frozenset(state.executed),
        )

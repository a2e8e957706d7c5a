"""Repair search — find the single JMP/NOP swap that lets the program terminate."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .ir import Instruction
from .run_types import RunOutcome
from .vm import VirtualMachine

logger = logging.getLogger(__name__)


class RepairStatus(Enum):
    REPAIRED = "repaired"
    NO_SOLUTION_FOUND = "no_solution_found"


@dataclass(frozen=True)
class RepairAttempt:
    """One swapped instruction that failed to make the program terminate."""

    index: int
    instruction: Instruction  # the swapped form that was tried
    outcome: RunOutcome
    accumulator: int


@dataclass(frozen=True)
class RepairResult:
    """Outcome of the repair search.

    On success ``index``, ``original``, ``patched`` and ``accumulator``
    describe the winning swap; on failure they are None.
    """

    status: RepairStatus
    attempts: tuple[RepairAttempt, ...] = field(default_factory=tuple)
    index: int | None = None
    original: Instruction | None = None
    patched: Instruction | None = None
    accumulator: int | None = None
    steps: int = 0

    @property
    def found(self) -> bool:
        return self.status == RepairStatus.REPAIRED

    @property
    def attempt_count(self) -> int:
        """Runs performed, counting the successful one."""
        return len(self.attempts) + (1 if self.found else 0)

    @classmethod
    def repaired(
        cls,
        index: int,
        original: Instruction,
        patched: Instruction,
        accumulator: int,
        attempts: tuple[RepairAttempt, ...],
        steps: int,
    ) -> RepairResult:
        return cls(
            status=RepairStatus.REPAIRED,
            attempts=attempts,
            index=index,
            original=original,
            patched=patched,
            accumulator=accumulator,
            steps=steps,
        )

    @classmethod
    def no_solution(
        cls, attempts: tuple[RepairAttempt, ...], steps: int
    ) -> RepairResult:
        return cls(status=RepairStatus.NO_SOLUTION_FOUND, attempts=attempts, steps=steps)


def repair(vm: VirtualMachine) -> RepairResult:
    """Swap each JMP/NOP in turn and rerun until one variant terminates.

    Indices are tried in ascending order and the first terminating variant
    wins; its swap is left in ``vm.program``. Every failed swap is restored
    before the next index is tried, so a search that finds nothing leaves the
    program exactly as it was.

    Args:
        vm: The machine whose program is searched. Its state is reset by
            every attempt.

    Returns:
        A RepairResult with status REPAIRED or NO_SOLUTION_FOUND.
    """
    attempts: list[RepairAttempt] = []
    total_steps = 0

    for index, instruction in enumerate(vm.program):
        if not instruction.is_swappable:
            continue

        original = vm.swap_instruction(index)
        patched = vm.program[index]
        result = vm.run()
        total_steps += result.steps

        if result.terminated:
            logger.info(
                "Repaired: swapping %d (%s -> %s) terminates with acc=%d",
                index,
                original,
                patched,
                result.accumulator,
            )
            return RepairResult.repaired(
                index=index,
                original=original,
                patched=patched,
                accumulator=result.accumulator,
                attempts=tuple(attempts),
                steps=total_steps,
            )

        vm.program[index] = original
        logger.debug(
            "Swap at %d (%s) failed: %s, acc=%d",
            index,
            patched,
            result.outcome.value,
            result.accumulator,
        )
        attempts.append(
            RepairAttempt(
                index=index,
                instruction=patched,
                outcome=result.outcome,
                accumulator=result.accumulator,
            )
        )

    logger.info("No single swap terminates (%d attempts)", len(attempts))
    return RepairResult.no_solution(tuple(attempts), steps=total_steps)

"""Orchestrator — run() entry point."""

from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass, field

from .ir import Instruction
from .ir_stats import count_operations, repair_candidates
from .loader import load_program
from .repair import RepairResult, repair
from .run_types import PipelineStats, RunOutcome, RunResult, VMConfig
from .vm import VirtualMachine

logger = logging.getLogger(__name__)


@dataclass
class BootReport:
    """Everything one pipeline run produced."""

    program: list[Instruction]
    diagnostic: RunResult
    repair: RepairResult
    stats: PipelineStats = field(default_factory=PipelineStats)

    @property
    def loop_accumulator(self) -> int:
        """Accumulator of the unmodified program when its run stopped."""
        return self.diagnostic.accumulator

    @property
    def repair_accumulator(self) -> int | None:
        """Accumulator of the repaired program, or None when nothing worked."""
        return self.repair.accumulator


def run(source: str, config: VMConfig = VMConfig()) -> BootReport:
    """End-to-end: load → diagnose the unmodified program → repair search.

    Args:
        source: Raw program text, one instruction per line.
        config: Execution configuration (max_steps, verbose).

    Returns:
        A BootReport holding the diagnostic run, the repair result and
        per-stage statistics.

    Raises:
        LoadError: If any line of *source* is not a valid instruction.
    """
    pipeline_start = time.perf_counter()
    stats = PipelineStats(
        source_bytes=len(source.encode("utf-8")),
        source_lines=source.count("\n")
        + (1 if source and not source.endswith("\n") else 0),
    )

    # 1. Load
    t0 = time.perf_counter()
    program = load_program(source)
    stats.load_time = time.perf_counter() - t0
    stats.instruction_count = len(program)
    stats.operation_counts = count_operations(program)
    stats.repair_candidates = len(repair_candidates(program))

    if config.verbose:
        print("═══ Program ═══", file=sys.stderr)
        for i, inst in enumerate(program):
            print(f"  {i:>4}  {inst}", file=sys.stderr)
        print(file=sys.stderr)

    vm = VirtualMachine(program, config)

    # 2. Diagnose the unmodified program
    t0 = time.perf_counter()
    diagnostic = vm.run()
    stats.diagnose_time = time.perf_counter() - t0
    stats.diagnose_steps = diagnostic.steps
    if diagnostic.outcome != RunOutcome.LOOP_DETECTED:
        logger.warning(
            "Unmodified program did not loop (%s at ip=%d)",
            diagnostic.outcome.value,
            diagnostic.instruction_pointer,
        )
    else:
        logger.info(
            "Loop detected at ip=%d with acc=%d",
            diagnostic.instruction_pointer,
            diagnostic.accumulator,
        )

    # 3. Repair
    t0 = time.perf_counter()
    repair_result = repair(vm)
    stats.repair_time = time.perf_counter() - t0
    stats.repair_attempts = repair_result.attempt_count
    stats.repair_steps = repair_result.steps
    stats.total_time = time.perf_counter() - pipeline_start

    return BootReport(
        program=program,
        diagnostic=diagnostic,
        repair=repair_result,
        stats=stats,
    )


def run_file(
    path: str | os.PathLike[str], config: VMConfig = VMConfig()
) -> BootReport:
    """Read a UTF-8 program file (BOM tolerated) and pass its text to run()."""
    with open(path, encoding="utf-8-sig") as f:
        source = f.read()
    logger.info("Running %s", path)
    return run(source, config)

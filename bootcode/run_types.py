"""Run pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RunOutcome(Enum):
    """How a full run of the program ended."""

    TERMINATED = "terminated"
    LOOP_DETECTED = "loop_detected"
    OUT_OF_BOUNDS = "out_of_bounds"
    STEP_LIMIT_REACHED = "step_limit_reached"


@dataclass(frozen=True)
class VMConfig:
    """Groups VM execution configuration."""

    max_steps: int | None = None
    verbose: bool = False


@dataclass(frozen=True)
class RunResult:
    """Final state of one full run, from a clean reset to its terminal outcome."""

    outcome: RunOutcome
    accumulator: int
    instruction_pointer: int
    steps: int = 0
    executed: frozenset[int] = field(default_factory=frozenset)

    @property
    def terminated(self) -> bool:
        return self.outcome == RunOutcome.TERMINATED


@dataclass
class PipelineStats:
    """Timing and size statistics for each pipeline stage."""

    source_bytes: int = 0
    source_lines: int = 0

    # Stage timings (seconds)
    load_time: float = 0.0
    diagnose_time: float = 0.0
    repair_time: float = 0.0
    total_time: float = 0.0

    # Output sizes
    instruction_count: int = 0
    operation_counts: dict[str, int] = field(default_factory=dict)
    repair_candidates: int = 0

    # Execution stats
    diagnose_steps: int = 0
    repair_attempts: int = 0
    repair_steps: int = 0

    def report(self) -> str:
        counts = ", ".join(
            f"{count} {name}" for name, count in sorted(self.operation_counts.items())
        )
        lines = [
            "═══ Pipeline Statistics ═══",
            f"  Source: {self.source_lines} lines, {self.source_bytes} bytes",
            "",
            f"  {'Stage':<20} {'Time':>10}  {'Output':>30}",
            f"  {'─' * 20} {'─' * 10}  {'─' * 30}",
        ]

        stages = [
            ("Load", self.load_time, f"{self.instruction_count} instructions"),
            ("Diagnose", self.diagnose_time, f"{self.diagnose_steps} steps"),
            (
                "Repair",
                self.repair_time,
                f"{self.repair_attempts} attempts, {self.repair_steps} steps",
            ),
        ]
        for name, t, output in stages:
            time_str = f"{t * 1000:>8.1f}ms"
            lines.append(f"  {name:<20} {time_str:>10}  {output:>30}")

        lines.append(f"  {'─' * 20} {'─' * 10}  {'─' * 30}")
        lines.append(f"  {'Total':<20} {self.total_time * 1000:>8.1f}ms")
        lines.append("")
        lines.append(
            f"  Program: {counts or 'empty'};"
            f" {self.repair_candidates} repair candidates"
        )
        return "\n".join(lines)

"""Pure functions for computing statistics over instruction lists."""

from __future__ import annotations

from collections import Counter

from bootcode.ir import Instruction


def count_operations(instructions: list[Instruction]) -> dict[str, int]:
    """Return a frequency map of operation mnemonics in the given instruction list.

    Args:
        instructions: A list of instructions.

    Returns:
        A dict mapping mnemonic strings to their occurrence counts.
        Empty dict for an empty input list.
    """
    return dict(Counter(inst.operation.value for inst in instructions))


def repair_candidates(instructions: list[Instruction]) -> list[int]:
    """Indices of the instructions a single swap can change, in ascending order."""
    return [i for i, inst in enumerate(instructions) if inst.is_swappable]

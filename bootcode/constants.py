"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

ARGUMENT_PATTERN = r"[+-]?[0-9]+"

DEFAULT_PROGRAM_FILE = "input.txt"

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_NO_SOLUTION = 2

"""Program loader — text lines to a list of Instructions."""

from __future__ import annotations

import logging
import os
import re

from .ir import Instruction, Operation
from . import constants

logger = logging.getLogger(__name__)

_ARGUMENT_RE = re.compile(constants.ARGUMENT_PATTERN)


class LoadError(Exception):
    """Raised when program text cannot be turned into instructions."""

    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        self.line_number = line_number
        self.line = line
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InvalidOperation(LoadError):
    """The mnemonic is missing or is not one of acc, jmp, nop."""

    pass


class InvalidArgument(LoadError):
    """The argument is missing, not a signed integer, or followed by extra tokens."""

    pass


def parse_instruction(line: str, line_number: int = 0) -> Instruction:
    """Parse a single ``<op> <signed-int>`` line.

    Args:
        line: One line of program text; surrounding whitespace is ignored.
        line_number: 1-based position used in error messages (0 = unknown).

    Returns:
        The parsed Instruction.

    Raises:
        InvalidOperation: If the mnemonic is missing or unknown.
        InvalidArgument: If the argument is missing or malformed.
    """
    tokens = line.split()
    if not tokens:
        raise InvalidOperation("missing operation", line_number, line)

    mnemonic, *rest = tokens
    try:
        operation = Operation(mnemonic)
    except ValueError as exc:
        raise InvalidOperation(
            f"unknown operation {mnemonic!r}", line_number, line
        ) from exc

    if not rest:
        raise InvalidArgument(
            f"missing argument for {mnemonic!r}", line_number, line
        )
    argument, *extra = rest
    if extra:
        raise InvalidArgument(
            f"unexpected token {extra[0]!r} after argument", line_number, line
        )
    if not _ARGUMENT_RE.fullmatch(argument):
        raise InvalidArgument(
            f"argument {argument!r} is not a signed integer", line_number, line
        )

    return Instruction(operation=operation, argument=int(argument))


def load_program(source: str) -> list[Instruction]:
    """Parse program text, one instruction per line, preserving order.

    Blank lines at the end of the text are ignored. A blank line anywhere
    else would shift every jump target below it, so it raises
    InvalidOperation like any other line without a mnemonic.
    """
    lines = source.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    program = [
        parse_instruction(line, line_number)
        for line_number, line in enumerate(lines, start=1)
    ]
    logger.info("Loaded %d instructions", len(program))
    return program


def load_program_file(path: str | os.PathLike[str]) -> list[Instruction]:
    """Read a UTF-8 program file (BOM tolerated) and parse it with load_program."""
    with open(path, encoding="utf-8-sig") as f:
        source = f.read()
    logger.debug("Read %d bytes from %s", len(source), path)
    return load_program(source)

"""Command-line entry point: print the loop and repair accumulators."""

from __future__ import annotations

import argparse
import logging
import sys

from .loader import LoadError
from .run import run_file
from .run_types import VMConfig
from .vm import VirtualMachine
from . import constants


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Boot code VM: detect the infinite loop and repair it"
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=constants.DEFAULT_PROGRAM_FILE,
        help=f"Program file, one instruction per line (default: {constants.DEFAULT_PROGRAM_FILE})",
    )
    parser.add_argument(
        "--max-steps",
        "-n",
        type=int,
        default=None,
        help="Stop any single run after this many steps (default: no limit)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print the program and every executed step",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the trace of the unmodified run",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print pipeline statistics",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_steps is not None and args.max_steps < 1:
        parser.error(f"--max-steps must be at least 1, got {args.max_steps}")
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    config = VMConfig(max_steps=args.max_steps, verbose=args.verbose)

    try:
        report = run_file(args.file, config)
    except LoadError as exc:
        print(f"error: {args.file}: {exc}", file=sys.stderr)
        return constants.EXIT_LOAD_ERROR
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return constants.EXIT_LOAD_ERROR

    if args.trace:
        trace_config = VMConfig(max_steps=args.max_steps)
        _print_trace(VirtualMachine(report.program, trace_config))
    if args.stats:
        print(report.stats.report(), file=sys.stderr)

    print(report.loop_accumulator)

    if not report.repair.found:
        print(
            f"error: no single jmp/nop swap terminates "
            f"({report.repair.attempt_count} attempts)",
            file=sys.stderr,
        )
        return constants.EXIT_NO_SOLUTION

    print(report.repair_accumulator)
    return constants.EXIT_OK


def _print_trace(vm: VirtualMachine) -> None:
    result, trace = vm.run_traced()
    print("═══ Trace ═══", file=sys.stderr)
    for step in trace.steps:
        print(f"  {step}", file=sys.stderr)
    print(
        f"  {result.outcome.value} at ip={result.instruction_pointer}",
        file=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())

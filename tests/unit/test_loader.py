"""Tests for the program loader — parse_instruction, load_program, load_program_file."""

import pytest

from bootcode.ir import Instruction, Operation
from bootcode.loader import (
    LoadError,
    InvalidOperation,
    InvalidArgument,
    parse_instruction,
    load_program,
    load_program_file,
)

SAMPLE_SOURCE = """\
nop +0
acc +1
jmp +4
acc +3
jmp -3
acc -99
acc +1
jmp -4
acc +6
"""


class TestParseInstruction:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("acc +1", Instruction(operation=Operation.ACC, argument=1)),
            ("jmp -4", Instruction(operation=Operation.JMP, argument=-4)),
            ("nop +0", Instruction(operation=Operation.NOP, argument=0)),
            ("nop 12", Instruction(operation=Operation.NOP, argument=12)),
        ],
    )
    def test_valid_lines(self, line, expected):
        assert parse_instruction(line) == expected

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_instruction("  \tacc    -7  \r") == Instruction(
            operation=Operation.ACC, argument=-7
        )

    def test_unknown_mnemonic_is_invalid_operation(self):
        with pytest.raises(InvalidOperation):
            parse_instruction("xyz 5")

    def test_mnemonic_is_case_sensitive(self):
        with pytest.raises(InvalidOperation):
            parse_instruction("ACC +1")

    def test_empty_line_is_invalid_operation(self):
        with pytest.raises(InvalidOperation):
            parse_instruction("   ")

    def test_missing_argument(self):
        with pytest.raises(InvalidArgument, match="missing argument"):
            parse_instruction("jmp")

    @pytest.mark.parametrize("argument", ["+x", "1.5", "0x10", "1_000", "+-1", "--1"])
    def test_non_integer_argument(self, argument):
        with pytest.raises(InvalidArgument):
            parse_instruction(f"acc {argument}")

    def test_trailing_token_is_rejected(self):
        with pytest.raises(InvalidArgument, match="unexpected token"):
            parse_instruction("acc +1 +2")

    def test_errors_are_load_errors(self):
        with pytest.raises(LoadError):
            parse_instruction("xyz 5")
        with pytest.raises(LoadError):
            parse_instruction("acc five")

    def test_error_carries_line_number_and_text(self):
        with pytest.raises(InvalidOperation) as exc_info:
            parse_instruction("xyz 5", line_number=3)
        assert exc_info.value.line_number == 3
        assert exc_info.value.line == "xyz 5"
        assert str(exc_info.value).startswith("line 3:")


class TestLoadProgram:
    def test_preserves_line_order(self):
        program = load_program(SAMPLE_SOURCE)
        assert [str(inst) for inst in program] == [
            "nop +0",
            "acc +1",
            "jmp +4",
            "acc +3",
            "jmp -3",
            "acc -99",
            "acc +1",
            "jmp -4",
            "acc +6",
        ]

    def test_empty_source_gives_empty_program(self):
        assert load_program("") == []

    def test_trailing_blank_lines_are_ignored(self):
        program = load_program("acc +1\njmp -1\n\n   \n")
        assert len(program) == 2

    def test_interior_blank_line_is_rejected(self):
        with pytest.raises(InvalidOperation, match="missing operation") as exc_info:
            load_program("nop +0\n\njmp -1\n")
        assert exc_info.value.line_number == 2

    def test_interior_whitespace_line_is_rejected(self):
        with pytest.raises(LoadError):
            load_program("jmp +2\n   \nacc +1\n")

    def test_malformed_line_is_not_skipped(self):
        with pytest.raises(InvalidOperation) as exc_info:
            load_program("acc +1\nxyz 5\nnop +0\n")
        assert exc_info.value.line_number == 2

    def test_line_numbers_are_one_based(self):
        with pytest.raises(InvalidArgument) as exc_info:
            load_program("acc +1\nnop +0\njmp\n")
        assert exc_info.value.line_number == 3


class TestLoadProgramFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_text(SAMPLE_SOURCE, encoding="utf-8")
        assert load_program_file(path) == load_program(SAMPLE_SOURCE)

    def test_leading_byte_order_mark_is_dropped(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_bytes(b"\xef\xbb\xbf" + SAMPLE_SOURCE.encode("utf-8"))
        program = load_program_file(path)
        assert program == load_program(SAMPLE_SOURCE)
        assert str(program[0]) == "nop +0"

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_program_file(tmp_path / "absent.txt")

"""Boot code VM package."""

from .run import run, run_file  # noqa: F401
from .ir import Instruction, Operation  # noqa: F401
from .loader import (  # noqa: F401
    LoadError,
    InvalidOperation,
    InvalidArgument,
    load_program,
    load_program_file,
)
from .vm import VirtualMachine  # noqa: F401
from .repair import repair, RepairResult, RepairStatus  # noqa: F401

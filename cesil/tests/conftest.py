"""Shared fixtures and imports for cesil tests."""

import os
import sys

# Add parent directories to path for imports
_this_dir = os.path.dirname(os.path.abspath(__file__))
_repo_root = os.path.dirname(os.path.dirname(_this_dir))
sys.path.insert(0, _repo_root)

from cesil.lang import (
    Instruction,
    Labelled,
    Opcode,
    Val,
    Var,
    IN, OUT, LINE, HALT, PUSH, POP, SWAP, NOP,
    LOAD, STORE, ADD, SUBTRACT, MULTIPLY, DIVIDE, MODULO, PRINT,
    JUMP, JINEG, JIPOS, JIZERO,
)
from cesil.builder import ProgramBuilder
from cesil.pass_manager import PassConfig
from cesil import samples


def _cfg(name, **opts):
    """Helper to create PassConfig."""
    return PassConfig(name=name, enabled=True, options=opts)


def run_pass(p, program, **opts):
    """Run a pass with the given options. Returns (result, metrics)."""
    result = p.run(program, _cfg(p.name, **opts))
    return result, p.get_metrics()


def every_unlabelled_instruction() -> list[Instruction]:
    """One instruction of each opcode."""
    return [
        IN, OUT, LINE, HALT, PUSH, POP, SWAP, NOP,
        LOAD("x"), STORE("y"), ADD(1), SUBTRACT(2), MULTIPLY("z"),
        DIVIDE(3), MODULO(4), PRINT("hi"),
        JUMP("A"), JINEG("B"), JIPOS("C"), JIZERO("D"),
    ]

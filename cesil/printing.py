"""
Program Printing Utilities

Pretty-printing functions for CESIL+ programs and analysis reports.
"""

from typing import Sequence

from .lang import Instruction, Statement, Opcode, Val, Var, is_labelled, unwrap
from .analysis import ProgramDiagnostics

LABEL_WIDTH = 8
MNEMONIC_WIDTH = 10


def format_instruction(instr: Instruction) -> str:
    """Format an instruction as 'MNEMONIC  operand'."""
    if instr.operand is None:
        return instr.opcode.name
    if instr.opcode == Opcode.PRINT:
        operand = f'"{instr.operand}"'
    elif isinstance(instr.operand, Val):
        operand = str(instr.operand.value)
    elif isinstance(instr.operand, Var):
        operand = instr.operand.name
    else:
        operand = instr.operand
    return f"{instr.opcode.name:<{MNEMONIC_WIDTH}}{operand}"


def format_statement(stmt: Statement, label_width: int = LABEL_WIDTH) -> str:
    """Format a statement with its label (if any) in a fixed-width column."""
    label = stmt.label if is_labelled(stmt) else ""
    label_width = max(label_width, len(label) + 1)
    return f"{label:<{label_width}}{format_instruction(unwrap(stmt))}"


def _label_width(program: Sequence[Statement]) -> int:
    return max([LABEL_WIDTH] + [len(stmt.label) + 1 for stmt in program if is_labelled(stmt)])


def format_program(program: Sequence[Statement]) -> str:
    """Format a program as a listing, one statement per line."""
    width = _label_width(program)
    return "\n".join(format_statement(stmt, width) for stmt in program)


def print_program(program: Sequence[Statement], title: str = ""):
    """Pretty-print a program with statement positions."""
    header = f" {title}" if title else ""
    print(f"==={header} ({len(program)} statements) ===")
    width = _label_width(program)
    for i, stmt in enumerate(program):
        print(f"[{i:4d}] {format_statement(stmt, width)}")
    print()


def print_diagnostics(diag: ProgramDiagnostics, title: str = ""):
    """Pretty-print a label analysis report."""
    header = f" {title}" if title else ""
    status = "well-formed" if diag.is_well_formed else "MALFORMED"
    print(f"=== Diagnostics{header} ({diag.num_statements} statements, {status}) ===")
    print(f"Labels:          {', '.join(diag.labels) or '(none)'}")
    print(f"Label refs:      {', '.join(diag.label_refs) or '(none)'}")
    print(f"Redundant:       {', '.join(diag.redundant) or '(none)'}")
    print(f"Missing:         {', '.join(diag.missing) or '(none)'}")
    print(f"Duplicates:      {', '.join(diag.duplicates) or '(none)'}")
    print(f"Statement types: {', '.join(diag.statement_types)}")
    print()

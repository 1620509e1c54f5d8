"""
Program Builder - Fluent CESIL+ API

Provides a builder API for constructing CESIL+ programs statement by
statement, attaching labels to the next emitted statement.
"""

from typing import Optional

from .lang import (
    Label, Instruction, Labelled, Statement, Opcode,
    IN, OUT, LINE, HALT, PUSH, POP, SWAP, NOP,
    LOAD, STORE, ADD, SUBTRACT, MULTIPLY, DIVIDE, MODULO, PRINT,
    JUMP, JINEG, JIPOS, JIZERO,
)


class ProgramBuilder:
    """Builder for constructing CESIL+ programs."""

    def __init__(self):
        self._statements: list[Statement] = []
        self._pending_label: Optional[Label] = None

    def label(self, name: Label) -> "ProgramBuilder":
        """Attach a label to the next emitted statement."""
        if self._pending_label is not None:
            raise ValueError(
                f"Label '{self._pending_label}' has no statement before label '{name}'"
            )
        self._pending_label = name
        return self

    def emit(self, instr: Instruction) -> "ProgramBuilder":
        """Append an instruction, consuming any pending label."""
        if self._pending_label is not None:
            self._statements.append(Labelled(self._pending_label, instr))
            self._pending_label = None
        else:
            self._statements.append(instr)
        return self

    # === Operand-free ===

    def in_(self) -> "ProgramBuilder":
        return self.emit(IN)

    def out(self) -> "ProgramBuilder":
        return self.emit(OUT)

    def line(self) -> "ProgramBuilder":
        return self.emit(LINE)

    def halt(self) -> "ProgramBuilder":
        return self.emit(HALT)

    def push(self) -> "ProgramBuilder":
        return self.emit(PUSH)

    def pop(self) -> "ProgramBuilder":
        return self.emit(POP)

    def swap(self) -> "ProgramBuilder":
        return self.emit(SWAP)

    def nop(self) -> "ProgramBuilder":
        return self.emit(NOP)

    # === Data ===

    def load(self, ref) -> "ProgramBuilder":
        return self.emit(LOAD(ref))

    def store(self, ref) -> "ProgramBuilder":
        return self.emit(STORE(ref))

    def add(self, ref) -> "ProgramBuilder":
        return self.emit(ADD(ref))

    def subtract(self, ref) -> "ProgramBuilder":
        return self.emit(SUBTRACT(ref))

    def multiply(self, ref) -> "ProgramBuilder":
        return self.emit(MULTIPLY(ref))

    def divide(self, ref) -> "ProgramBuilder":
        return self.emit(DIVIDE(ref))

    def modulo(self, ref) -> "ProgramBuilder":
        return self.emit(MODULO(ref))

    def print_(self, text: str) -> "ProgramBuilder":
        return self.emit(PRINT(text))

    # === Flow ===

    def jump(self, target: Label) -> "ProgramBuilder":
        return self.emit(JUMP(target))

    def jineg(self, target: Label) -> "ProgramBuilder":
        """Jump if the accumulator is negative."""
        return self.emit(JINEG(target))

    def jipos(self, target: Label) -> "ProgramBuilder":
        """Jump if the accumulator is positive."""
        return self.emit(JIPOS(target))

    def jizero(self, target: Label) -> "ProgramBuilder":
        """Jump if the accumulator is zero."""
        return self.emit(JIZERO(target))

    def op(self, opcode: Opcode, operand=None) -> "ProgramBuilder":
        """Emit any opcode with an explicit operand."""
        return self.emit(Instruction(opcode, operand))

    def build(self) -> list[Statement]:
        """Return the built program."""
        if self._pending_label is not None:
            raise ValueError(f"Label '{self._pending_label}' does not decorate a statement")
        return list(self._statements)

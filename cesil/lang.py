"""
CESIL+ Instruction Model

A program is a flat list of statements executed in order. Each statement is
an Instruction (opcode plus optional operand), optionally wrapped in a
Labelled decorator that names its position as a jump target.

The opcode set is closed: every opcode belongs to exactly one of the three
families below, and the analysis and optimization code matches on them
exhaustively.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# A label names a position in the program, not a value.
Label = str

# Suffix carried by the tags of shared operand-free instructions.
REF_MARKER = "$"


class Opcode(Enum):
    """CESIL+ opcodes."""
    # Operand-free
    IN = "IN"
    OUT = "OUT"
    LINE = "LINE"
    HALT = "HALT"
    PUSH = "PUSH"
    POP = "POP"
    SWAP = "SWAP"
    NOP = "NOP"

    # Data operand
    LOAD = "LOAD"
    STORE = "STORE"
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"
    PRINT = "PRINT"

    # Flow (label operand)
    JUMP = "JUMP"
    JINEG = "JINEG"
    JIPOS = "JIPOS"
    JIZERO = "JIZERO"


ZERO_OPERAND_OPCODES = frozenset({
    Opcode.IN, Opcode.OUT, Opcode.LINE, Opcode.HALT,
    Opcode.PUSH, Opcode.POP, Opcode.SWAP, Opcode.NOP,
})

DATA_OPCODES = frozenset({
    Opcode.LOAD, Opcode.STORE, Opcode.ADD, Opcode.SUBTRACT,
    Opcode.MULTIPLY, Opcode.DIVIDE, Opcode.MODULO, Opcode.PRINT,
})

JUMP_OPCODES = frozenset({
    Opcode.JUMP, Opcode.JINEG, Opcode.JIPOS, Opcode.JIZERO,
})


@dataclass(frozen=True)
class Val:
    """An immediate integer operand."""
    value: int

    def __repr__(self):
        return f"#{self.value}"


@dataclass(frozen=True)
class Var:
    """A named memory location operand."""
    name: str

    def __repr__(self):
        return self.name


# PRINT takes a string literal; the other data opcodes take Val or Var.
Operand = Union[Val, Var, str]


@dataclass(frozen=True)
class Instruction:
    """A single unlabelled CESIL+ statement.

    operand is None for operand-free opcodes, a Label for jumps, a str
    literal for PRINT, and a Val or Var for the remaining data opcodes.
    """
    opcode: Opcode
    operand: Optional[Operand] = None

    def __post_init__(self):
        if not isinstance(self.opcode, Opcode):
            raise ValueError(f"Unknown opcode: {self.opcode!r}")
        if self.opcode in ZERO_OPERAND_OPCODES:
            if self.operand is not None:
                raise ValueError(f"{self.opcode.name} takes no operand, got {self.operand!r}")
        elif self.opcode in JUMP_OPCODES:
            if not isinstance(self.operand, str) or not self.operand:
                raise ValueError(f"{self.opcode.name} needs a label operand, got {self.operand!r}")
        elif self.opcode == Opcode.PRINT:
            if not isinstance(self.operand, str):
                raise ValueError(f"PRINT needs a string operand, got {self.operand!r}")
        elif not isinstance(self.operand, (Val, Var)):
            raise ValueError(f"{self.opcode.name} needs a Val or Var operand, got {self.operand!r}")

    @property
    def tag(self) -> str:
        """Internal kind tag; operand-free instructions carry REF_MARKER."""
        if self.opcode in ZERO_OPERAND_OPCODES:
            return self.opcode.name + REF_MARKER
        return self.opcode.name

    def __repr__(self):
        if self.operand is None:
            return self.opcode.name
        if self.opcode == Opcode.PRINT:
            return f'PRINT("{self.operand}")'
        return f"{self.opcode.name}({self.operand!r})"


@dataclass(frozen=True)
class Labelled:
    """An instruction decorated with the label of its position."""
    label: Label
    statement: Instruction

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label:
            raise ValueError(f"Label must be a non-empty string, got {self.label!r}")
        if isinstance(self.statement, Labelled):
            raise TypeError(
                f"Statement already carries label '{self.statement.label}', "
                f"cannot add '{self.label}'"
            )
        if not isinstance(self.statement, Instruction):
            raise TypeError(f"Only instructions can be labelled, got {self.statement!r}")

    @property
    def tag(self) -> str:
        return self.statement.tag

    def __repr__(self):
        return f"{self.label}: {self.statement!r}"


# Statement type alias
Statement = Union[Instruction, Labelled]

# A program is an ordered list of statements (position = list index).
Program = list[Statement]


def is_labelled(stmt: Statement) -> bool:
    """Return True for a Labelled statement, False for a bare Instruction."""
    if isinstance(stmt, Labelled):
        return True
    if isinstance(stmt, Instruction):
        return False
    raise ValueError(f"Unknown statement type: {stmt!r}")


def unwrap(stmt: Statement) -> Instruction:
    """Return the instruction underneath any label."""
    if is_labelled(stmt):
        return stmt.statement
    return stmt


def label_of(stmt: Statement) -> Optional[Label]:
    """Return the statement's label, or None if it is unlabelled."""
    if is_labelled(stmt):
        return stmt.label
    return None


def is_jump(stmt: Statement) -> bool:
    """Check if the statement (labelled or not) is a jump."""
    return unwrap(stmt).opcode in JUMP_OPCODES


def jump_target(stmt: Statement) -> Optional[Label]:
    """Return the label a jump refers to, or None for non-jumps."""
    instr = unwrap(stmt)
    if instr.opcode in JUMP_OPCODES:
        return instr.operand
    return None


# === Mnemonic constructors ===
# Named after the CESIL+ mnemonics so programs read like listings.

IN = Instruction(Opcode.IN)
OUT = Instruction(Opcode.OUT)
LINE = Instruction(Opcode.LINE)
HALT = Instruction(Opcode.HALT)
PUSH = Instruction(Opcode.PUSH)
POP = Instruction(Opcode.POP)
SWAP = Instruction(Opcode.SWAP)
NOP = Instruction(Opcode.NOP)


def _data_operand(ref) -> Union[Val, Var]:
    """Accept ints and names as shorthand for Val and Var."""
    if isinstance(ref, (Val, Var)):
        return ref
    if isinstance(ref, bool):
        raise ValueError(f"Not a data operand: {ref!r}")
    if isinstance(ref, int):
        return Val(ref)
    if isinstance(ref, str):
        return Var(ref)
    raise ValueError(f"Not a data operand: {ref!r}")


def LOAD(ref) -> Instruction:
    return Instruction(Opcode.LOAD, _data_operand(ref))


def STORE(ref) -> Instruction:
    return Instruction(Opcode.STORE, _data_operand(ref))


def ADD(ref) -> Instruction:
    return Instruction(Opcode.ADD, _data_operand(ref))


def SUBTRACT(ref) -> Instruction:
    return Instruction(Opcode.SUBTRACT, _data_operand(ref))


def MULTIPLY(ref) -> Instruction:
    return Instruction(Opcode.MULTIPLY, _data_operand(ref))


def DIVIDE(ref) -> Instruction:
    return Instruction(Opcode.DIVIDE, _data_operand(ref))


def MODULO(ref) -> Instruction:
    return Instruction(Opcode.MODULO, _data_operand(ref))


def PRINT(text: str) -> Instruction:
    return Instruction(Opcode.PRINT, text)


def JUMP(label: Label) -> Instruction:
    return Instruction(Opcode.JUMP, label)


def JINEG(label: Label) -> Instruction:
    return Instruction(Opcode.JINEG, label)


def JIPOS(label: Label) -> Instruction:
    return Instruction(Opcode.JIPOS, label)


def JIZERO(label: Label) -> Instruction:
    return Instruction(Opcode.JIZERO, label)

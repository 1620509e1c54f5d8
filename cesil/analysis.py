"""
Label and Reference Analysis

Queries over a CESIL+ program:
1. Which labels are defined, and which are referenced by jumps
2. Redundant labels (defined, never referenced) and missing labels
   (referenced, never defined)
3. Position indexing for an execution engine (label -> program counter)
4. Which statement kinds a program uses

Every function is pure. Malformed programs (duplicate or missing labels) are
reported on, never rejected.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from .lang import (
    REF_MARKER, Label, Instruction, Labelled, Statement,
    is_labelled, unwrap, jump_target,
)


def filter_labelled(program: Sequence[Statement]) -> list[Labelled]:
    """Select the labelled statements, in program order."""
    return [stmt for stmt in program if is_labelled(stmt)]


def filter_unlabelled(program: Sequence[Statement]) -> list[Instruction]:
    """Select the unlabelled statements, in program order."""
    return [stmt for stmt in program if not is_labelled(stmt)]


def strip_labels(program: Sequence[Statement]) -> list[Instruction]:
    """Return every statement without its label, in program order.

    The result is not a runnable program (jump targets no longer resolve);
    it feeds analyses that only care about statement order.
    """
    return [unwrap(stmt) for stmt in program]


def get_labels(program: Sequence[Statement]) -> list[Label]:
    """Return the defined labels in sorted order.

    A label that (wrongly) decorates several statements appears once per
    definition.
    """
    return sorted(stmt.label for stmt in filter_labelled(program))


def get_label_refs(program: Sequence[Statement]) -> list[Label]:
    """Return the labels referenced by jumps, sorted and without duplicates.

    References to labels the program never defines are included.
    """
    refs = {jump_target(stmt) for stmt in program}
    refs.discard(None)
    return sorted(refs)


def redundant_labels(program: Sequence[Statement]) -> list[Label]:
    """Return the defined labels that no jump references, in sorted order."""
    refs = set(get_label_refs(program))
    return [label for label in get_labels(program) if label not in refs]


def missing_labels(program: Sequence[Statement]) -> list[Label]:
    """Return the referenced labels that no statement defines, in sorted order."""
    defined = set(get_labels(program))
    return [label for label in get_label_refs(program) if label not in defined]


def duplicate_labels(program: Sequence[Statement]) -> list[Label]:
    """Return the labels defined more than once, each listed once."""
    counts = Counter(get_labels(program))
    return sorted(label for label, n in counts.items() if n > 1)


def index_program(program: Sequence[Statement]) -> list[tuple[int, Statement]]:
    """Attach 0-based positions to the statements of a program."""
    return list(enumerate(program))


def make_label_index_map(program: Sequence[Statement]) -> dict[Label, int]:
    """Map each label to the position of the statement it decorates.

    If a label is defined more than once the last definition wins.
    """
    return {
        stmt.label: index
        for index, stmt in index_program(program)
        if is_labelled(stmt)
    }


def strip_ref_marker(name: str) -> str:
    """Drop a trailing REF_MARKER from an internal kind tag."""
    if name.endswith(REF_MARKER):
        return name[:-len(REF_MARKER)]
    return name


def kind_name(stmt: Statement) -> str:
    """Human-facing kind name of a statement, looking through its label."""
    return strip_ref_marker(unwrap(stmt).tag)


def list_statement_types_used(program: Sequence[Statement]) -> list[str]:
    """Return the statement kind names a program uses, sorted and unique."""
    return sorted({kind_name(stmt) for stmt in program})


@dataclass
class ProgramDiagnostics:
    """Label and statement-kind report for one program."""
    num_statements: int
    labels: list[Label] = field(default_factory=list)
    label_refs: list[Label] = field(default_factory=list)
    redundant: list[Label] = field(default_factory=list)
    missing: list[Label] = field(default_factory=list)
    duplicates: list[Label] = field(default_factory=list)
    statement_types: list[str] = field(default_factory=list)

    @property
    def is_well_formed(self) -> bool:
        """No missing labels and no label defined twice."""
        return not self.missing and not self.duplicates


def diagnose(program: Sequence[Statement]) -> ProgramDiagnostics:
    """Run every label analysis over a program."""
    return ProgramDiagnostics(
        num_statements=len(program),
        labels=get_labels(program),
        label_refs=get_label_refs(program),
        redundant=redundant_labels(program),
        missing=missing_labels(program),
        duplicates=duplicate_labels(program),
        statement_types=list_statement_types_used(program),
    )

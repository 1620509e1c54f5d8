"""
NOP Elimination Pass

Removes NOP statements in two steps:
1. Unlabelled NOPs are dropped outright.
2. A labelled NOP followed by an unlabelled statement hands its label to
   that statement and disappears. Jumps keep working because they refer to
   the label by name.

A labelled NOP stays when the next statement already has a label, or when
it is the last statement (there is nothing to take over its label). Runs of
labelled NOPs are handled by LabelChainPass.
"""

from typing import Sequence

from ..lang import Labelled, Statement, Opcode, is_labelled
from ..pass_manager import ProgramPass, PassConfig


def _is_unlabelled_nop(stmt: Statement) -> bool:
    return not is_labelled(stmt) and stmt.opcode == Opcode.NOP


def _is_labelled_nop(stmt: Statement) -> bool:
    return is_labelled(stmt) and stmt.statement.opcode == Opcode.NOP


def strip_unlabelled_nops(program: Sequence[Statement]) -> list[Statement]:
    """Remove every NOP that carries no label."""
    return [stmt for stmt in program if not _is_unlabelled_nop(stmt)]


def strip_labelled_nops(program: Sequence[Statement]) -> list[Statement]:
    """Move each labelled NOP's label onto an unlabelled successor.

    Scanning resumes after the statement that took the label, so only one
    hop is made per NOP.
    """
    result: list[Statement] = []
    i = 0
    n = len(program)
    while i < n:
        stmt = program[i]
        if i + 1 < n and _is_labelled_nop(stmt) and not is_labelled(program[i + 1]):
            result.append(Labelled(stmt.label, program[i + 1]))
            i += 2
            continue
        result.append(stmt)
        i += 1
    return result


def strip_nops(program: Sequence[Statement]) -> list[Statement]:
    """Remove unlabelled NOPs, then migrate the labels of labelled ones."""
    return strip_labelled_nops(strip_unlabelled_nops(program))


class NOPEliminationPass(ProgramPass):
    """
    NOP elimination with label migration.

    Options:
        unlabelled: Drop unlabelled NOPs (default True).
        labelled:   Migrate labels off labelled NOPs (default True).
    """

    @property
    def name(self) -> str:
        return "nop-elim"

    def run(self, program: Sequence[Statement], config: PassConfig) -> list[Statement]:
        self._init_metrics(program)

        result = list(program)
        unlabelled_removed = 0
        labels_migrated = 0

        if config.options.get("unlabelled", True):
            before = len(result)
            result = strip_unlabelled_nops(result)
            unlabelled_removed = before - len(result)

        if config.options.get("labelled", True):
            before = len(result)
            result = strip_labelled_nops(result)
            labels_migrated = before - len(result)

        stranded = [stmt.label for stmt in result if _is_labelled_nop(stmt)]

        if self._metrics:
            self._metrics.custom = {
                "unlabelled_removed": unlabelled_removed,
                "labels_migrated": labels_migrated,
                "labelled_nops_kept": len(stranded),
            }
        for label in stranded:
            self._add_metric_message(f"Labelled NOP '{label}' kept (no unlabelled successor)")
        self._finish_metrics(result)

        return result

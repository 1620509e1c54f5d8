"""
Label Chain Collapsing Pass

Removes runs of labelled NOPs that NOPEliminationPass has to leave alone
because the statement after them is already labelled:

    JINEG L4              JINEG L3
    JIZERO L2             JIZERO L3
    L4: NOP       ==>     L3: LOAD #2
    L2: NOP
    L3: LOAD #2

Each run collapses onto one surviving label: the label of the live statement
ending the run, or the last NOP label when that statement is unlabelled. Every
jump to a label of the run is rewritten to the survivor. A run at the end of
the program keeps its last labelled NOP as the survivor.

Labels defined more than once are left untouched, since renaming them would
also move jumps aimed at their other definitions.
"""

from typing import Sequence

from ..lang import (
    Label, Instruction, Labelled, Statement, Opcode, NOP, JUMP_OPCODES, is_labelled, unwrap,
)
from ..analysis import duplicate_labels
from ..pass_manager import ProgramPass, PassConfig


def _retarget(stmt: Statement, renames: dict[Label, Label]) -> Statement:
    """Rewrite a jump's label operand through renames."""
    instr = unwrap(stmt)
    if instr.opcode not in JUMP_OPCODES:
        return stmt
    if instr.operand not in renames:
        return stmt
    new_instr = Instruction(instr.opcode, renames[instr.operand])
    if is_labelled(stmt):
        return Labelled(stmt.label, new_instr)
    return new_instr


def _collapse(program: Sequence[Statement]) -> tuple[list[Statement], dict[Label, Label]]:
    """Collapse labelled NOP runs. Returns (program, renames)."""
    pinned = set(duplicate_labels(program))
    renames: dict[Label, Label] = {}
    collapsed: list[Statement] = []
    run: list[Label] = []

    def close_run(survivor: Label):
        for label in run:
            if label != survivor:
                renames[label] = survivor
        run.clear()

    for stmt in program:
        instr = unwrap(stmt)
        if instr.opcode == Opcode.NOP and not (is_labelled(stmt) and stmt.label in pinned):
            if is_labelled(stmt):
                run.append(stmt.label)
                continue
            if run:
                # Unlabelled NOP inside a run
                continue
            collapsed.append(stmt)
            continue

        if not run:
            collapsed.append(stmt)
        elif not is_labelled(stmt):
            survivor = run[-1]
            close_run(survivor)
            collapsed.append(Labelled(survivor, stmt))
        elif stmt.label in pinned:
            # Jumps must not be sent to an ambiguous label; keep the run's last NOP.
            survivor = run[-1]
            close_run(survivor)
            collapsed.append(Labelled(survivor, NOP))
            collapsed.append(stmt)
        else:
            close_run(stmt.label)
            collapsed.append(stmt)

    if run:
        survivor = run[-1]
        close_run(survivor)
        collapsed.append(Labelled(survivor, NOP))

    return [_retarget(stmt, renames) for stmt in collapsed], renames


def collapse_label_chains(program: Sequence[Statement]) -> list[Statement]:
    """Remove runs of labelled NOPs, redirecting jumps to the surviving label."""
    return _collapse(program)[0]


class LabelChainPass(ProgramPass):
    """Collapse labelled NOP runs with global jump retargeting."""

    @property
    def name(self) -> str:
        return "label-chains"

    def run(self, program: Sequence[Statement], config: PassConfig) -> list[Statement]:
        self._init_metrics(program)

        result, renames = _collapse(program)

        if self._metrics:
            self._metrics.custom = {
                "labels_renamed": len(renames),
            }
        for old, new in sorted(renames.items()):
            self._add_metric_message(f"{old} -> {new}")
        self._finish_metrics(result)

        return result

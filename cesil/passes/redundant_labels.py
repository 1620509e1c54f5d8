"""
Redundant Label Removal Pass

Drops labels that no jump references. The decorated statements stay in
place, unlabelled, which lets NOPEliminationPass remove NOPs that were only
kept alive by a dead label.
"""

from typing import Sequence

from ..lang import Statement, is_labelled
from ..analysis import get_label_refs, redundant_labels
from ..pass_manager import ProgramPass, PassConfig


def strip_redundant_labels(program: Sequence[Statement]) -> list[Statement]:
    """Remove every label that is never the target of a jump."""
    refs = set(get_label_refs(program))
    return [
        stmt.statement if is_labelled(stmt) and stmt.label not in refs else stmt
        for stmt in program
    ]


class RedundantLabelPass(ProgramPass):
    """Remove unreferenced labels."""

    @property
    def name(self) -> str:
        return "redundant-labels"

    def run(self, program: Sequence[Statement], config: PassConfig) -> list[Statement]:
        self._init_metrics(program)

        dropped = redundant_labels(program)
        result = strip_redundant_labels(program)

        if self._metrics:
            self._metrics.custom = {
                "labels_removed": len(dropped),
            }
        if dropped:
            self._add_metric_message(f"Removed labels: {', '.join(dropped)}")
        self._finish_metrics(result)

        return result

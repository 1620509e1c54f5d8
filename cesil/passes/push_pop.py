"""
Push/Pop Elimination Pass

Removes PUSH immediately followed by POP. The pair leaves the machine state
unchanged, but its positions may be jump targets:

- PUSH, POP           -> (removed)
- L: PUSH, POP        -> L: NOP   (the jump target survives)
- <any>, L: POP       -> unchanged (something may jump straight to the POP)

Three reduction modes:
- single:      one left-to-right scan, never looking back
- cascade:     one scan with a one-statement lookbehind, so the statement
               before a removed pair is matched again against what follows
- fixed-point: cascade repeated until the program stops changing
"""

from collections import deque
from typing import Optional, Sequence

from ..lang import Labelled, Statement, Opcode, NOP, POP, PUSH, is_labelled
from ..pass_manager import ProgramPass, PassConfig


MODES = ("single", "cascade", "fixed-point")


def _reduce_pair(first: Statement, second: Statement) -> Optional[list[Statement]]:
    """Return the replacement for an adjacent pair, or None to keep it."""
    # A labelled POP is a jump target and pins the pair.
    if is_labelled(second) or second != POP:
        return None
    if is_labelled(first):
        if first.statement == PUSH:
            return [Labelled(first.label, NOP)]
        return None
    if first == PUSH:
        return []
    return None


def strip_push_pop_pairs(program: Sequence[Statement]) -> list[Statement]:
    """Remove PUSH/POP pairs in a single left-to-right scan.

    After a pair is reduced, scanning resumes at the statement following it.
    A pair formed by the removal (PUSH, [PUSH, POP], POP) is left in place.
    """
    result: list[Statement] = []
    i = 0
    n = len(program)
    while i < n:
        if i + 1 < n:
            replacement = _reduce_pair(program[i], program[i + 1])
            if replacement is not None:
                result.extend(replacement)
                i += 2
                continue
        result.append(program[i])
        i += 1
    return result


def strip_all_push_pop_pairs(program: Sequence[Statement]) -> list[Statement]:
    """Remove PUSH/POP pairs, re-checking the statement before each removed pair.

    The scan keeps one statement of lookbehind: if the pair right after the
    head statement reduces, the head is matched again against its new
    neighbour. Statements already emitted are never revisited, so one call
    resolves only one extra level of nesting:

        PUSH PUSH POP POP           -> (empty)
        PUSH PUSH PUSH POP POP POP  -> PUSH POP

    Use strip_push_pop_pairs_to_fixed_point for arbitrary nesting.
    """
    work = deque(program)
    result: list[Statement] = []
    while len(work) >= 2:
        if len(work) >= 3:
            replacement = _reduce_pair(work[1], work[2])
            if replacement is not None:
                head = work.popleft()
                work.popleft()
                work.popleft()
                # Rewind: head is examined again with the replacement after it.
                work.extendleft(reversed([head] + replacement))
                continue
        replacement = _reduce_pair(work[0], work[1])
        if replacement is not None:
            work.popleft()
            work.popleft()
            result.extend(replacement)
            continue
        result.append(work.popleft())
    result.extend(work)
    return result


def _reduce_to_fixed_point(program: Sequence[Statement]) -> tuple[list[Statement], int]:
    """Repeat the cascading scan until nothing changes. Returns (program, scans)."""
    current = list(program)
    scans = 0
    while True:
        scans += 1
        reduced = strip_all_push_pop_pairs(current)
        # Every reduction shortens the program, so equal length means no change.
        if len(reduced) == len(current):
            return reduced, scans
        current = reduced


def strip_push_pop_pairs_to_fixed_point(program: Sequence[Statement]) -> list[Statement]:
    """Remove PUSH/POP pairs at any nesting depth."""
    return _reduce_to_fixed_point(program)[0]


def _count_labelled_nops(program: Sequence[Statement]) -> int:
    return sum(1 for stmt in program if is_labelled(stmt) and stmt.statement.opcode == Opcode.NOP)


class PushPopEliminationPass(ProgramPass):
    """
    Push/pop pair elimination.

    Options:
        mode: "single", "cascade" (default) or "fixed-point".
    """

    @property
    def name(self) -> str:
        return "push-pop"

    def run(self, program: Sequence[Statement], config: PassConfig) -> list[Statement]:
        self._init_metrics(program)

        mode = config.options.get("mode", "cascade")
        scans = 1
        if mode == "single":
            result = strip_push_pop_pairs(program)
        elif mode == "cascade":
            result = strip_all_push_pop_pairs(program)
        elif mode == "fixed-point":
            result, scans = _reduce_to_fixed_point(program)
        else:
            raise ValueError(f"Unknown push-pop mode '{mode}', expected one of {MODES}")

        # Each merge leaves one labelled NOP behind; each removal drops two statements.
        merged = _count_labelled_nops(result) - _count_labelled_nops(program)
        removed = (len(program) - len(result) - merged) // 2

        if self._metrics:
            self._metrics.custom = {
                "mode": mode,
                "pairs_removed": removed,
                "labelled_pairs_merged": merged,
                "scans": scans,
            }
        if merged:
            self._add_metric_message(f"{merged} labelled PUSH/POP pair(s) replaced by labelled NOP")
        self._finish_metrics(result)

        return result

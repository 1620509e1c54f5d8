"""
Sample CESIL+ Programs

Small programs used by the demo driver and the tests.
"""

from typing import Callable

from .builder import ProgramBuilder
from .lang import (
    Labelled, Statement, label_of, unwrap,
    IN, OUT, HALT, PUSH, POP, NOP,
    LOAD, STORE, SUBTRACT, JUMP, JINEG, JIPOS,
)


def countdown() -> list[Statement]:
    """Read n, print n..1 one per line, then "Done"."""
    b = ProgramBuilder()
    b.in_()
    b.jineg("L2")
    b.label("L1").out()
    b.line()
    b.jizero("L2")
    b.subtract(1)
    b.jump("L1")
    b.label("L2").print_("Done")
    b.halt()
    return b.build()


def countdown_with_start() -> list[Statement]:
    """countdown with an unreferenced START label on the first statement."""
    program = countdown()
    return [Labelled("START", program[0])] + program[1:]


def countdown_missing_label() -> list[Statement]:
    """countdown_with_start with the L1 label lost."""
    return [unwrap(stmt) if label_of(stmt) == "L1" else stmt
            for stmt in countdown_with_start()]


def push_pop_fragment() -> list[Statement]:
    return [
        Labelled("#30", NOP),
        LOAD("x"),
        PUSH,
        POP,
        STORE("y"),
        LOAD("n"),
        SUBTRACT("y"),
    ]


def labelled_push_fragment() -> list[Statement]:
    return [
        Labelled("#30", NOP),
        LOAD("x"),
        Labelled("#42", PUSH),
        POP,
        STORE("y"),
        LOAD("n"),
        SUBTRACT("y"),
    ]


def nop_chain() -> list[Statement]:
    """Two labelled NOPs in front of a labelled LOAD."""
    b = ProgramBuilder()
    b.in_()
    b.jineg("L4")
    b.label("L1").out()
    b.line()
    b.jizero("L2")
    b.subtract(1)
    b.jump("L1")
    b.label("L4").nop()
    b.label("L2").nop()
    b.label("L3").load(2)
    return b.build()


def nested_pairs() -> list[Statement]:
    return [PUSH, PUSH, POP, POP]


def deep_pairs() -> list[Statement]:
    return [PUSH, PUSH, PUSH, POP, POP, POP]


def three_redundant_labels() -> list[Statement]:
    return [
        Labelled("start", IN),
        Labelled("one", PUSH),
        Labelled("two", IN),
        PUSH,
        Labelled("three", IN),
        Labelled("four", JINEG("start")),
        POP,
        JUMP("three"),
        OUT,
        HALT,
    ]


def two_missing_labels() -> list[Statement]:
    return [Labelled("three", IN), JINEG("one"), JIPOS("two"), JUMP("three")]


SAMPLES: dict[str, Callable[[], list[Statement]]] = {
    "countdown": countdown,
    "countdown-start": countdown_with_start,
    "countdown-missing": countdown_missing_label,
    "push-pop": push_pop_fragment,
    "labelled-push": labelled_push_fragment,
    "nop-chain": nop_chain,
    "nested-pairs": nested_pairs,
    "deep-pairs": deep_pairs,
    "redundant-labels": three_redundant_labels,
    "missing-labels": two_missing_labels,
}

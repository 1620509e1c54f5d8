"""Tests for ProgramBuilder."""

import unittest

from cesil.tests.conftest import (
    ProgramBuilder,
    Instruction,
    Labelled,
    Opcode,
    Val,
    IN, OUT, LINE, HALT, NOP, SUBTRACT, PRINT, JUMP, JINEG, JIZERO,
)


class TestProgramBuilder(unittest.TestCase):
    def test_builds_countdown(self):
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

        self.assertEqual(b.build(), [
            IN,
            JINEG("L2"),
            Labelled("L1", OUT),
            LINE,
            JIZERO("L2"),
            SUBTRACT(Val(1)),
            JUMP("L1"),
            Labelled("L2", PRINT("Done")),
            HALT,
        ])

    def test_chaining(self):
        program = ProgramBuilder().push().pop().label("X").nop().build()
        self.assertEqual(len(program), 3)
        self.assertEqual(program[2], Labelled("X", NOP))

    def test_generic_op(self):
        program = ProgramBuilder().op(Opcode.MODULO, Val(3)).build()
        self.assertEqual(program, [Instruction(Opcode.MODULO, Val(3))])

    def test_duplicate_labels_allowed(self):
        """Malformed programs are representable."""
        program = ProgramBuilder().label("X").in_().label("X").out().build()
        self.assertEqual([s.label for s in program], ["X", "X"])

    def test_two_pending_labels_rejected(self):
        b = ProgramBuilder().label("A")
        with self.assertRaises(ValueError):
            b.label("B")

    def test_trailing_label_rejected(self):
        b = ProgramBuilder().halt().label("END")
        with self.assertRaises(ValueError):
            b.build()

    def test_build_returns_copy(self):
        b = ProgramBuilder().halt()
        first = b.build()
        first.append(NOP)
        self.assertEqual(b.build(), [HALT])


if __name__ == "__main__":
    unittest.main()

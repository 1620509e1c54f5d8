"""Tests for push/pop elimination."""

import unittest

from cesil.tests.conftest import (
    Labelled,
    IN, OUT, HALT, PUSH, POP, SWAP, NOP, LOAD, STORE, SUBTRACT,
    samples,
    run_pass,
)
from cesil import (
    PushPopEliminationPass,
    strip_push_pop_pairs,
    strip_all_push_pop_pairs,
    strip_push_pop_pairs_to_fixed_point,
    kind_name,
)


def _reducers():
    return [
        ("single", strip_push_pop_pairs),
        ("cascade", strip_all_push_pop_pairs),
        ("fixed-point", strip_push_pop_pairs_to_fixed_point),
    ]


class TestPairRules(unittest.TestCase):
    """Rules shared by every reduction mode."""

    def test_empty_and_single(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                self.assertEqual(reduce([]), [])
                self.assertEqual(reduce([PUSH]), [PUSH])
                self.assertEqual(reduce([POP]), [POP])

    def test_unlabelled_pair_removed(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                self.assertEqual(reduce([PUSH, POP]), [])

    def test_labelled_push_becomes_labelled_nop(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                self.assertEqual(reduce([Labelled("L", PUSH), POP]), [Labelled("L", NOP)])

    def test_labelled_pop_blocks_reduction(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                program = [PUSH, Labelled("L", POP)]
                self.assertEqual(reduce(program), program)
                program = [Labelled("K", PUSH), Labelled("L", POP)]
                self.assertEqual(reduce(program), program)

    def test_other_pairs_untouched(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                program = [POP, PUSH, SWAP, PUSH, NOP, POP, IN]
                self.assertEqual(reduce(program), program)

    def test_fragment(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                self.assertEqual(reduce(samples.push_pop_fragment()), [
                    Labelled("#30", NOP),
                    LOAD("x"),
                    STORE("y"),
                    LOAD("n"),
                    SUBTRACT("y"),
                ])

    def test_labelled_fragment(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                self.assertEqual(reduce(samples.labelled_push_fragment()), [
                    Labelled("#30", NOP),
                    LOAD("x"),
                    Labelled("#42", NOP),
                    STORE("y"),
                    LOAD("n"),
                    SUBTRACT("y"),
                ])

    def test_input_not_mutated(self):
        for mode, reduce in _reducers():
            with self.subTest(mode):
                program = [IN, PUSH, POP, OUT]
                reduce(program)
                self.assertEqual(program, [IN, PUSH, POP, OUT])

    def test_never_reorders(self):
        """Surviving statements keep their relative order."""
        program = [IN, PUSH, LOAD(1), PUSH, POP, POP, OUT, Labelled("A", PUSH), POP, HALT]
        for mode, reduce in _reducers():
            with self.subTest(mode):
                result = reduce(program)
                kinds = [kind_name(s) for s in result if kind_name(s) not in ("PUSH", "POP", "NOP")]
                self.assertEqual(kinds, ["IN", "LOAD", "OUT", "HALT"])


class TestSingleWindow(unittest.TestCase):
    def test_nested_pairs_only_inner_removed(self):
        self.assertEqual(strip_push_pop_pairs(samples.nested_pairs()), [PUSH, POP])

    def test_consecutive_pairs(self):
        self.assertEqual(strip_push_pop_pairs([PUSH, POP, PUSH, POP, IN]), [IN])

    def test_resumes_after_pair(self):
        """A labelled NOP produced by a merge is not re-examined."""
        program = [Labelled("L", PUSH), POP, POP]
        self.assertEqual(strip_push_pop_pairs(program), [Labelled("L", NOP), POP])

    def test_repeated_application_reaches_empty(self):
        once = strip_push_pop_pairs(samples.deep_pairs())
        self.assertEqual(once, [PUSH, PUSH, POP, POP])
        twice = strip_push_pop_pairs(once)
        self.assertEqual(strip_push_pop_pairs(twice), [])


class TestCascading(unittest.TestCase):
    def test_nested_pairs_fully_removed(self):
        self.assertEqual(strip_all_push_pop_pairs(samples.nested_pairs()), [])

    def test_three_deep_golden(self):
        """One extra level of nesting per call; the outer pair survives."""
        once = strip_all_push_pop_pairs(samples.deep_pairs())
        self.assertEqual(once, [PUSH, POP])
        self.assertEqual(strip_all_push_pop_pairs(once), [])

    def test_lookbehind_over_labelled_push(self):
        """A labelled PUSH/POP inside a pair turns into a labelled NOP and pins the pair."""
        program = [PUSH, Labelled("L", PUSH), POP, POP]
        self.assertEqual(strip_all_push_pop_pairs(program), [PUSH, Labelled("L", NOP), POP])

    def test_lookbehind_with_preceding_statement(self):
        program = [IN, PUSH, PUSH, POP, POP, OUT]
        self.assertEqual(strip_all_push_pop_pairs(program), [IN, OUT])

    def test_labelled_outer_push(self):
        program = [Labelled("A", PUSH), PUSH, POP, POP]
        self.assertEqual(strip_all_push_pop_pairs(program), [Labelled("A", NOP)])

    def test_labelled_pop_in_nest(self):
        program = [PUSH, PUSH, POP, Labelled("B", POP)]
        self.assertEqual(strip_all_push_pop_pairs(program), [PUSH, Labelled("B", POP)])


class TestFixedPoint(unittest.TestCase):
    def test_deep_nesting(self):
        program = [PUSH] * 6 + [POP] * 6
        self.assertEqual(strip_push_pop_pairs_to_fixed_point(program), [])

    def test_idempotent(self):
        program = [IN, PUSH, PUSH, Labelled("X", PUSH), POP, POP, POP, OUT]
        once = strip_push_pop_pairs_to_fixed_point(program)
        self.assertEqual(strip_push_pop_pairs_to_fixed_point(once), once)


class TestPushPopEliminationPass(unittest.TestCase):
    def test_default_mode_is_cascade(self):
        result, metrics = run_pass(PushPopEliminationPass(), samples.nested_pairs())
        self.assertEqual(result, [])
        self.assertEqual(metrics.custom["mode"], "cascade")
        self.assertEqual(metrics.custom["pairs_removed"], 2)
        self.assertEqual(metrics.ir_size_before, 4)
        self.assertEqual(metrics.ir_size_after, 0)

    def test_single_mode(self):
        result, metrics = run_pass(PushPopEliminationPass(), samples.nested_pairs(), mode="single")
        self.assertEqual(result, [PUSH, POP])
        self.assertEqual(metrics.custom["pairs_removed"], 1)

    def test_fixed_point_mode(self):
        result, metrics = run_pass(PushPopEliminationPass(), samples.deep_pairs(), mode="fixed-point")
        self.assertEqual(result, [])
        self.assertEqual(metrics.custom["pairs_removed"], 3)
        self.assertEqual(metrics.custom["scans"], 3)

    def test_merge_metrics(self):
        result, metrics = run_pass(PushPopEliminationPass(), samples.labelled_push_fragment())
        self.assertEqual(metrics.custom["labelled_pairs_merged"], 1)
        self.assertEqual(metrics.custom["pairs_removed"], 0)
        self.assertEqual(len(metrics.messages), 1)

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            run_pass(PushPopEliminationPass(), [PUSH, POP], mode="aggressive")


if __name__ == "__main__":
    unittest.main()

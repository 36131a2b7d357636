"""
Tests for the four sorting generators and the registry.
"""

import unittest
from collections import Counter

from algorithms import REGISTRY, get_algorithm, list_algorithms, resolve_algorithm
from algorithms.step import StepKind
from errors import InvalidConfiguration, InvalidInput
from sequence import generate_array


def run(key, values):
    return list(REGISTRY[key].fn(values))


class TestAllAlgorithms(unittest.TestCase):

    def setUp(self):
        self.inputs = [generate_array(size, seed=seed)
                       for seed, size in enumerate([3, 4, 5, 7, 10, 15, 16, 31, 50] * 3)]
        self.inputs += [
            [5, 3, 8, 1],
            [1, 2, 3, 4, 5],
            [5, 4, 3, 2, 1],
            [7, 7, 1, 7, 1],
            [100, 1, 100, 1],
        ]

    def test_final_snapshot_is_sorted_permutation(self):
        for algo in list_algorithms():
            for values in self.inputs:
                with self.subTest(algo=algo.key, values=values):
                    steps = run(algo.key, values)
                    self.assertEqual(list(steps[-1].snapshot), sorted(values))

    def test_exactly_one_complete_step_at_the_end(self):
        for algo in list_algorithms():
            for values in self.inputs:
                steps = run(algo.key, values)
                kinds = [s.kind for s in steps]
                self.assertEqual(kinds.count(StepKind.COMPLETE), 1)
                self.assertIs(kinds[-1], StepKind.COMPLETE)
                self.assertTrue(steps[-1].is_final)

    def test_input_list_is_not_mutated(self):
        for algo in list_algorithms():
            values = [9, 4, 7, 1, 3]
            run(algo.key, values)
            self.assertEqual(values, [9, 4, 7, 1, 3])

    def test_indices_always_in_range(self):
        for algo in list_algorithms():
            for values in self.inputs:
                for s in run(algo.key, values):
                    for idx in s.indices:
                        self.assertTrue(0 <= idx < len(values))
                    self.assertEqual(len(s.snapshot), len(values))

    def test_only_mutating_steps_change_the_snapshot(self):
        for algo in list_algorithms():
            for values in self.inputs:
                previous = tuple(values)
                for s in run(algo.key, values):
                    if not s.mutates:
                        self.assertEqual(s.snapshot, previous)
                    previous = s.snapshot

    def test_trace_is_deterministic(self):
        for algo in list_algorithms():
            values = generate_array(25, seed=99)
            self.assertEqual(run(algo.key, values), run(algo.key, list(values)))

    def test_step_numbers_are_consecutive(self):
        for algo in list_algorithms():
            steps = run(algo.key, [4, 1, 3, 2])
            self.assertEqual([s.step_number for s in steps], list(range(len(steps))))

    def test_tiny_inputs_only_complete(self):
        for algo in list_algorithms():
            for values in ([], [42]):
                steps = run(algo.key, values)
                self.assertEqual(len(steps), 1)
                self.assertIs(steps[0].kind, StepKind.COMPLETE)
                self.assertEqual(list(steps[0].snapshot), values)

    def test_all_equal_values_stay_unchanged(self):
        for algo in list_algorithms():
            steps = run(algo.key, [2, 2, 2])
            for s in steps:
                self.assertEqual(s.snapshot, (2, 2, 2))
            self.assertIs(steps[-1].kind, StepKind.COMPLETE)

    def test_invalid_input_raises_immediately(self):
        for algo in list_algorithms():
            for bad in [None, "3,1,2", [3, "1"], list(range(60))]:
                with self.assertRaises(InvalidInput):
                    algo.fn(bad)

    def test_step_kinds_per_algorithm(self):
        values = generate_array(20, seed=3)
        kinds = {key: {s.kind for s in run(key, values)} for key in REGISTRY}
        self.assertNotIn(StepKind.OVERWRITE, kinds["heap"])
        self.assertNotIn(StepKind.SWAP, kinds["insertion"])
        self.assertNotIn(StepKind.SWAP, kinds["merge"])
        self.assertNotIn(StepKind.SWAP, kinds["quick"])


class TestInsertionSort(unittest.TestCase):

    def test_reference_trace(self):
        steps = run("insertion", [5, 3, 8, 1])
        C, O, D = StepKind.COMPARE, StepKind.OVERWRITE, StepKind.COMPLETE
        self.assertEqual(
            [s.kind for s in steps],
            [C, O, O, C, O, C, O, C, O, C, O, O, D],
        )
        self.assertEqual(steps[2].snapshot, (3, 5, 8, 1))
        self.assertEqual(steps[-1].snapshot, (1, 3, 5, 8))

    def test_every_key_gets_a_placement_write(self):
        steps = run("insertion", [5, 3, 8, 1])
        writes = [(s.indices, s.value) for s in steps if s.kind is StepKind.OVERWRITE]
        self.assertEqual(
            writes,
            [((1,), 5), ((0,), 3), ((2,), 8), ((3,), 8), ((2,), 5), ((1,), 3), ((0,), 1)],
        )
        placements = [s for s in steps if s.kind is StepKind.OVERWRITE and s.pseudocode_line == 7]
        self.assertEqual(len(placements), 3)

    def test_sorted_input_writes_each_key_in_place(self):
        steps = run("insertion", [1, 2, 3, 4])
        C, O = StepKind.COMPARE, StepKind.OVERWRITE
        self.assertEqual([s.kind for s in steps[:-1]], [C, O] * 3)
        self.assertEqual([s.indices for s in steps if s.kind is O], [(1,), (2,), (3,)])
        for s in steps:
            self.assertEqual(s.snapshot, (1, 2, 3, 4))


class TestHeapSort(unittest.TestCase):

    def test_reference_trace(self):
        steps = run("heap", [1, 2, 3])
        C, S, D = StepKind.COMPARE, StepKind.SWAP, StepKind.COMPLETE
        self.assertEqual([s.kind for s in steps], [C, C, S, S, C, S, S, D])
        self.assertEqual(steps[2].snapshot, (3, 2, 1))
        self.assertEqual(steps[2].indices, (0, 2))
        self.assertEqual(steps[-1].snapshot, (1, 2, 3))


class TestCopyBackPhases(unittest.TestCase):
    """Merge and quick sort must not lose or duplicate elements when copying back."""

    def check(self, key, values):
        steps = run(key, values)
        expected = Counter(values)
        phases = 0
        for s in steps:
            if s.kind is not StepKind.OVERWRITE:
                continue
            lo, hi = s.overlay["range"]
            buffer = s.overlay["buffer"]
            self.assertEqual(len(buffer), hi - lo)
            if s.indices[0] == hi - 1:
                # last write of a phase: whole Sequence is again a permutation of the input
                self.assertEqual(Counter(s.snapshot), expected)
                self.assertEqual(tuple(s.snapshot[lo:hi]), buffer)
                phases += 1
        return phases

    def test_merge_sort(self):
        for seed in range(10):
            values = generate_array(10 + seed * 4, seed=seed)
            self.assertGreater(self.check("merge", values), 0)

    def test_quick_sort(self):
        for seed in range(10):
            values = generate_array(10 + seed * 4, seed=seed)
            self.assertGreater(self.check("quick", values), 0)

    def test_quick_sort_ties_go_high(self):
        steps = run("quick", [3, 1, 3])
        first_write = next(s for s in steps if s.kind is StepKind.OVERWRITE)
        self.assertEqual(first_write.overlay["buffer"], (1, 3, 3))
        self.assertEqual(first_write.overlay["range"], (0, 3))

    def test_quick_sort_copies_sorted_run_back_last(self):
        steps = run("quick", [4, 3, 2, 1])
        writes = [s for s in steps if s.kind is StepKind.OVERWRITE]
        last = writes[-4:]
        self.assertEqual([s.value for s in last], [1, 2, 3, 4])
        self.assertEqual([s.indices for s in last], [(0,), (1,), (2,), (3,)])
        for s in last:
            self.assertEqual(s.overlay["range"], (0, 4))
            self.assertEqual(s.overlay["buffer"], (1, 2, 3, 4))
        self.assertIs(steps[-1].kind, StepKind.COMPLETE)

    def test_quick_sort_copy_back_follows_recursion(self):
        for seed in range(5):
            values = generate_array(12, seed=seed)
            steps = run("quick", values)
            top = [s for s in steps
                   if s.kind is StepKind.OVERWRITE and s.overlay["range"] == (0, len(values))]
            # partition layout first, sorted copy-back last
            self.assertEqual(len(top), 2 * len(values))
            self.assertEqual(list(top[-1].overlay["buffer"]), sorted(values))
            self.assertEqual(steps.index(top[-1]), len(steps) - 2)

    def test_quick_sort_compares_against_last_element(self):
        steps = run("quick", [4, 9, 2, 5])
        compares = [s.indices for s in steps if s.kind is StepKind.COMPARE][:3]
        self.assertEqual(compares, [(0, 3), (1, 3), (2, 3)])

    def test_merge_sort_compares_buffer_positions(self):
        steps = run("merge", [2, 1])
        self.assertEqual(steps[0].kind, StepKind.COMPARE)
        self.assertEqual(steps[0].indices, (0, 1))
        self.assertEqual([s.value for s in steps[1:3]], [1, 2])


class TestRegistry(unittest.TestCase):

    def test_lookup_accepts_labels_and_keys(self):
        for name in ["Heap", "heap", "Heap Sort", "heap_sort", " HEAP-SORT "]:
            self.assertIs(get_algorithm(name), REGISTRY["heap"])
        self.assertIs(get_algorithm("Quick"), REGISTRY["quick"])

    def test_unknown_algorithm(self):
        self.assertIsNone(get_algorithm("bogo"))
        self.assertIsNone(get_algorithm(None))
        with self.assertRaises(InvalidConfiguration):
            resolve_algorithm("bogo")

    def test_in_place_flags(self):
        self.assertEqual(
            {a.key: a.in_place for a in list_algorithms()},
            {"heap": True, "insertion": True, "merge": False, "quick": False},
        )

    def test_registry_order(self):
        self.assertEqual([a.key for a in list_algorithms()], ["heap", "insertion", "merge", "quick"])

    def test_pseudocode_lines_exist(self):
        for algo in list_algorithms():
            for s in run(algo.key, generate_array(12, seed=5)):
                self.assertTrue(0 <= s.pseudocode_line < len(algo.pseudocode))


if __name__ == "__main__":
    unittest.main()

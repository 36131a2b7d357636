"""
Tests for the run recorder and its metrics.
"""

import unittest

from algorithms import list_algorithms
from engine import Recorder
from errors import InvalidConfiguration
from sequence import generate_array


class TestRecorder(unittest.TestCase):

    def test_insertion_metrics(self):
        rec = Recorder()
        rec.start("Insertion", [5, 3, 8, 1])
        m = rec.run_to_completion()
        self.assertEqual(m.algo_key, "insertion")
        self.assertEqual(m.algo_label, "Insertion Sort")
        self.assertEqual(m.size, 4)
        self.assertEqual(m.comparisons, 5)
        self.assertEqual(m.overwrites, 7)
        self.assertEqual(m.swaps, 0)
        self.assertEqual(m.total_steps, 13)
        self.assertTrue(m.sorted_ok)
        self.assertEqual(rec.final_snapshot, [1, 3, 5, 8])

    def test_every_algorithm_sorts(self):
        values = generate_array(40, seed=21)
        for algo in list_algorithms():
            rec = Recorder()
            rec.start(algo.key, values)
            m = rec.run_to_completion()
            self.assertTrue(m.sorted_ok, algo.key)
            self.assertEqual(m.total_steps, len(rec.steps))
            self.assertEqual(m.comparisons + m.swaps + m.overwrites + 1, m.total_steps)

    def test_export(self):
        rec = Recorder()
        rec.start("heap", [1, 2, 3])
        rec.run_to_completion()
        data = rec.export()
        self.assertEqual(data["algo_key"], "heap")
        self.assertEqual(data["input"], [1, 2, 3])
        self.assertEqual(len(data["steps"]), 8)
        self.assertEqual(data["steps"][-1]["kind"], "complete")
        self.assertTrue(data["steps"][-1]["is_final"])
        self.assertEqual(data["metrics"]["swaps"], 4)

    def test_requires_start(self):
        with self.assertRaises(RuntimeError):
            Recorder().run_to_completion()

    def test_unknown_algorithm(self):
        with self.assertRaises(InvalidConfiguration):
            Recorder().start("bubble", [3, 2, 1])


if __name__ == "__main__":
    unittest.main()

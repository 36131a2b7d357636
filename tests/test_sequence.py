"""
Tests for the array generator and the text parser.
"""

import random
import unittest

from errors import InvalidConfiguration
from sequence import (
    generate_array, parse_array, clamp_size,
    MIN_SIZE, MAX_SIZE, MIN_VALUE, MAX_VALUE,
)


class TestGenerateArray(unittest.TestCase):

    def test_every_valid_size_has_exact_length_and_range(self):
        for size in range(MIN_SIZE, MAX_SIZE + 1):
            values = generate_array(size, seed=size)
            self.assertEqual(len(values), size)
            for v in values:
                self.assertIsInstance(v, int)
                self.assertTrue(MIN_VALUE <= v <= MAX_VALUE)

    def test_size_is_clamped(self):
        self.assertEqual(len(generate_array(0)), MIN_SIZE)
        self.assertEqual(len(generate_array(-7)), MIN_SIZE)
        self.assertEqual(len(generate_array(500)), MAX_SIZE)
        self.assertEqual(clamp_size(2), 3)
        self.assertEqual(clamp_size(51), 50)
        self.assertEqual(clamp_size(20), 20)

    def test_seed_reproduces_array(self):
        self.assertEqual(generate_array(30, seed=42), generate_array(30, seed=42))

    def test_rng_instance_is_used(self):
        a = generate_array(10, rng=random.Random(7))
        b = generate_array(10, rng=random.Random(7))
        self.assertEqual(a, b)

    def test_fresh_list_every_call(self):
        a = generate_array(5, seed=1)
        b = generate_array(5, seed=1)
        a[0] = -1
        self.assertNotEqual(a, b)


class TestParseArray(unittest.TestCase):

    def test_comma_and_space_separated(self):
        self.assertEqual(parse_array("5, 3, 8, 1"), [5, 3, 8, 1])
        self.assertEqual(parse_array("5 3 8 1"), [5, 3, 8, 1])
        self.assertEqual(parse_array("[2,2,2]"), [2, 2, 2])

    def test_rejects_bad_input(self):
        for text in ["", "   ", "1, two, 3", "0, 5", "5, 101", "1.5, 2"]:
            with self.subTest(text=text):
                with self.assertRaises(InvalidConfiguration):
                    parse_array(text)

    def test_rejects_too_many_values(self):
        with self.assertRaises(InvalidConfiguration):
            parse_array(" ".join(["1"] * (MAX_SIZE + 1)))


if __name__ == "__main__":
    unittest.main()

"""
Tests for the configuration surface.
"""

import unittest

from engine import PlaybackConfig, SPEED_PRESETS, resolve_delay
from errors import InvalidConfiguration


class TestResolveDelay(unittest.TestCase):

    def test_presets(self):
        self.assertEqual(resolve_delay("Fast"), 200)
        self.assertEqual(resolve_delay("medium"), 500)
        self.assertEqual(resolve_delay("SLOW"), 800)
        self.assertEqual(resolve_delay(None), 300)
        self.assertEqual(set(SPEED_PRESETS), {"fast", "medium", "slow"})

    def test_unknown_preset(self):
        with self.assertRaises(InvalidConfiguration):
            resolve_delay("ludicrous")


class TestPlaybackConfig(unittest.TestCase):

    def test_defaults(self):
        cfg = PlaybackConfig.from_options({})
        self.assertEqual(cfg.size, 15)
        self.assertEqual(cfg.delay_ms, 300)
        self.assertEqual(cfg.algorithm, "quick")
        self.assertIsNone(cfg.seed)

    def test_full_options(self):
        cfg = PlaybackConfig.from_options(
            {"size": 50, "delay_preset": "Slow", "algorithm": "Merge", "seed": 3}
        )
        self.assertEqual((cfg.size, cfg.delay_ms, cfg.algorithm, cfg.seed), (50, 800, "merge", 3))

    def test_speed_is_an_alias_for_delay_preset(self):
        self.assertEqual(PlaybackConfig.from_options({"speed": "Fast"}).delay_ms, 200)
        with self.assertRaises(InvalidConfiguration):
            PlaybackConfig.from_options({"speed": "Warp"})

    def test_explicit_delay_wins(self):
        cfg = PlaybackConfig.from_options({"delay_ms": 0, "delay_preset": "Slow"})
        self.assertEqual(cfg.delay_ms, 0)

    def test_rejections(self):
        bad = [
            {"size": 2},
            {"size": 51},
            {"size": "10"},
            {"size": True},
            {"delay_ms": -1},
            {"delay_ms": 1.5},
            {"delay_preset": "Turbo"},
            {"algorithm": "Bubble"},
            {"seed": "abc"},
        ]
        for options in bad:
            with self.subTest(options=options):
                with self.assertRaises(InvalidConfiguration):
                    PlaybackConfig.from_options(options)


if __name__ == "__main__":
    unittest.main()

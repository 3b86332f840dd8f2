"""Unit tests for hypothesis scoring and the acceptance rule."""

import unittest

from pcmsniff.accumulator import AccumulatorBank, Interpretation
from pcmsniff.pcm_types import ALL_TYPES, S16LE, S24BE, S24LE, U16LE, U24BE, PcmResults, PcmType
from pcmsniff.scorer import decide, repair_grid24, score_bank, score_grids

from pcm_synth import sine_pcm

ZERO16 = [[0.0, 0.0], [0.0, 0.0]]
ZERO24 = [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]


class ScoreGridTests(unittest.TestCase):
    def test_16bit_formulas(self):
        v16 = [[2.0, 4.0], [3.0, 8.0]]
        results = score_grids(v16, ZERO24, ZERO24)
        self.assertAlmostEqual(results.s16le, 2.0 / 4.0 * 8.0)
        self.assertAlmostEqual(results.s16be, 4.0 / 2.0 * 3.0)
        self.assertAlmostEqual(results.u16le, 2.0 / 8.0 * 4.0)
        self.assertAlmostEqual(results.u16be, 4.0 / 3.0 * 2.0)

    def test_24bit_formulas(self):
        v24 = [[2.0, 6.0, 3.0], [5.0, 0.0, 4.0]]
        results = score_grids(ZERO16, v24, v24)
        self.assertAlmostEqual(results.s24le, 6.0 / 3.0 * 4.0)
        self.assertAlmostEqual(results.s24be, 6.0 / 2.0 * 5.0)
        self.assertAlmostEqual(results.u24le, 6.0 / 4.0 * 3.0)
        self.assertAlmostEqual(results.u24be, 6.0 / 5.0 * 2.0)

    def test_24bit_score_is_minimum_of_channels(self):
        left = [[2.0, 6.0, 3.0], [5.0, 0.0, 4.0]]
        right = [[2.0, 6.0, 1.0], [5.0, 0.0, 4.0]]
        results = score_grids(ZERO16, left, right)
        self.assertAlmostEqual(results.s24le, min(6.0 / 3.0 * 4.0, 6.0 / 1.0 * 4.0))

    def test_degenerate_divisors_score_zero(self):
        results = score_grids(ZERO16, ZERO24, ZERO24)
        self.assertEqual(results, PcmResults())

    def test_repair_replaces_zero_outer_slots_with_middle(self):
        grid = [[0.0, 7.0, 0.0], [0.0, 0.0, 2.0]]
        repaired = repair_grid24(grid)
        self.assertEqual(repaired[0], [7.0, 7.0, 7.0])
        self.assertEqual(repaired[1], [0.0, 0.0, 2.0])
        # Input is left untouched.
        self.assertEqual(grid[0], [0.0, 7.0, 0.0])

    def test_repair_keeps_positive_slots(self):
        grid = [[1.5, 7.0, 0.5], [1.0, 0.0, 2.0]]
        self.assertEqual(repair_grid24(grid), grid)

    def test_debug_dump_shows_mean_and_diffavg(self):
        bank = AccumulatorBank()
        bank.ingest(sine_pcm(S24LE, frames=480))
        with self.assertLogs("pcmsniff.scorer", level="DEBUG") as logs:
            results = score_bank(bank)
        dump = "\n".join(logs.output)
        self.assertIn("16-bit AS_IS: ", dump)
        self.assertIn("24-bit BIT_TOGGLED RIGHT: ", dump)
        self.assertIn(str(bank.slot16(Interpretation.AS_IS, 1)), dump)
        self.assertGreater(results.s24le, 0.0)


class DecideTests(unittest.TestCase):
    def test_ratio_exactly_at_threshold_is_accepted(self):
        verdict = decide(PcmResults(s16le=4.0, u16le=1.0), threshold=4.0)
        self.assertTrue(verdict.conclusive)
        self.assertEqual(verdict.pcm_type, S16LE)
        self.assertAlmostEqual(verdict.ratio, 4.0)

    def test_ratio_just_below_threshold_is_inconclusive(self):
        verdict = decide(PcmResults(s16le=4.0 - 1e-9, u16le=1.0), threshold=4.0)
        self.assertFalse(verdict.conclusive)
        self.assertIsNone(verdict.pcm_type)
        self.assertEqual(verdict.best.pcm_type, S16LE)
        self.assertEqual(verdict.runner_up.pcm_type, U16LE)
        self.assertAlmostEqual(verdict.runner_up.score, 1.0)

    def test_custom_threshold(self):
        results = PcmResults(s24be=5.0, u24be=1.0)
        self.assertEqual(decide(results, threshold=4.0).pcm_type, S24BE)
        self.assertIsNone(decide(results, threshold=6.0).pcm_type)

    def test_single_nonzero_score_is_accepted(self):
        verdict = decide(PcmResults(u24be=0.25))
        self.assertEqual(verdict.pcm_type, U24BE)
        self.assertEqual(verdict.ratio, float("inf"))

    def test_all_zero_scores_are_inconclusive(self):
        verdict = decide(PcmResults())
        self.assertFalse(verdict.conclusive)
        self.assertEqual(verdict.best.score, 0.0)
        self.assertEqual(verdict.runner_up.score, 0.0)
        self.assertEqual(verdict.ratio, 0.0)

    def test_ranking_is_descending(self):
        results = PcmResults(s16le=1.0, s24le=9.0, u16be=3.0)
        ranked = results.ranked()
        self.assertEqual([pcm_type for pcm_type, _ in ranked[:3]], [S24LE, PcmType.from_label("u16be"), S16LE])


class PcmTypeTests(unittest.TestCase):
    def test_labels_round_trip(self):
        for pcm_type in ALL_TYPES:
            self.assertEqual(PcmType.from_label(pcm_type.label), pcm_type)
        self.assertEqual(len({pcm_type.label for pcm_type in ALL_TYPES}), 8)

    def test_describe(self):
        self.assertEqual(U24BE.describe(), "unsigned 24-bit big-endian")
        self.assertEqual(U24BE.sample_width, 3)

    def test_unknown_label(self):
        with self.assertRaises(ValueError):
            PcmType.from_label("f32le")

    def test_results_reject_negative_or_nan(self):
        with self.assertRaises(ValueError):
            PcmResults(s16le=-1.0)
        with self.assertRaises(ValueError):
            PcmResults(s16le=float("nan"))


if __name__ == "__main__":
    unittest.main()

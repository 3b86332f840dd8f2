"""Turn accumulated difference averages into per-hypothesis scores and a verdict.

A correctly interpreted most-significant byte moves slowly compared to the other
byte slots, and only under the right signedness does it avoid the 255-step jumps
that a sign-bit flip produces at every zero crossing. Each hypothesis score is
large exactly when its (byte order, signedness) pairing shows that signature.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pcmsniff.accumulator import AccumulatorBank, Channel, Interpretation
from pcmsniff.pcm_types import (
    PcmResults,
    PcmType,
    S16BE,
    S16LE,
    S24BE,
    S24LE,
    U16BE,
    U16LE,
    U24BE,
    U24LE,
)

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 4.0

# Reference slot of the 24-bit grid; never repaired.
MIDDLE_SLOT24 = 1

Grid = list[list[float]]


@dataclass(frozen=True)
class Hypothesis:
    """Score = v[AS_IS][reference] / v[interp][msb] * v[opposite interp][msb]."""

    pcm_type: PcmType
    msb_slot: int
    reference_slot: int

    @property
    def interpretation(self) -> Interpretation:
        return Interpretation.AS_IS if self.pcm_type.signed else Interpretation.BIT_TOGGLED

    def score(self, grid: Grid) -> float:
        interp = self.interpretation
        divisor = grid[interp][self.msb_slot]
        if divisor <= 0.0:
            return 0.0
        reference = grid[Interpretation.AS_IS][self.reference_slot]
        cross = grid[interp.opposite][self.msb_slot]
        return reference / divisor * cross


HYPOTHESES16 = (
    Hypothesis(S16LE, msb_slot=1, reference_slot=0),
    Hypothesis(S16BE, msb_slot=0, reference_slot=1),
    Hypothesis(U16LE, msb_slot=1, reference_slot=0),
    Hypothesis(U16BE, msb_slot=0, reference_slot=1),
)

HYPOTHESES24 = (
    Hypothesis(S24LE, msb_slot=2, reference_slot=MIDDLE_SLOT24),
    Hypothesis(S24BE, msb_slot=0, reference_slot=MIDDLE_SLOT24),
    Hypothesis(U24LE, msb_slot=2, reference_slot=MIDDLE_SLOT24),
    Hypothesis(U24BE, msb_slot=0, reference_slot=MIDDLE_SLOT24),
)


@dataclass(frozen=True)
class Candidate:
    pcm_type: PcmType
    score: float


@dataclass(frozen=True)
class Verdict:
    """Outcome of one detection.

    ``pcm_type`` is None when the best hypothesis did not beat the runner-up by the
    threshold; ``best`` and ``runner_up`` are always filled for diagnostics.
    """

    pcm_type: PcmType | None
    best: Candidate
    runner_up: Candidate
    results: PcmResults
    threshold: float

    @property
    def conclusive(self) -> bool:
        return self.pcm_type is not None

    @property
    def ratio(self) -> float:
        """best / runner-up score; inf when only the best has evidence, 0 when none does."""
        return _score_ratio(self.best.score, self.runner_up.score)


def _score_ratio(best: float, second: float) -> float:
    if second > 0.0:
        return best / second
    return float("inf") if best > 0.0 else 0.0


def repair_grid24(grid: Grid) -> Grid:
    """Fill degenerate outer slots of the as-is row with the middle-slot value.

    16-bit content zero-padded into a 24-bit container has a constant low byte, so
    its difference average is 0. Only the as-is row is repaired.
    """
    repaired = [list(row) for row in grid]
    row = repaired[Interpretation.AS_IS]
    middle = row[MIDDLE_SLOT24]
    for slot in (0, 2):
        if row[slot] <= 0.0:
            row[slot] = middle
    return repaired


def score_grids(v16: Grid, v24_left: Grid, v24_right: Grid) -> PcmResults:
    scores: dict[PcmType, float] = {}
    for hypothesis in HYPOTHESES16:
        scores[hypothesis.pcm_type] = hypothesis.score(v16)
    left = repair_grid24(v24_left)
    right = repair_grid24(v24_right)
    for hypothesis in HYPOTHESES24:
        # Both channels must support a 24-bit hypothesis.
        scores[hypothesis.pcm_type] = min(hypothesis.score(left), hypothesis.score(right))
    return PcmResults.from_scores(scores)


def _log_bank(bank: AccumulatorBank):
    # Each cell is "mean / diffavg".
    for interp in Interpretation:
        logger.debug("16-bit %s: %s", interp.name, ", ".join(str(acc) for acc in bank.grid16[interp]))
        for channel in Channel:
            logger.debug(
                "24-bit %s %s: %s",
                interp.name,
                channel.name,
                ", ".join(str(stereo.channel(channel)) for stereo in bank.grid24[interp]),
            )


def score_bank(bank: AccumulatorBank) -> PcmResults:
    """Score all eight hypotheses from the final statistics of ``bank``."""
    v16 = bank.diffavg16()
    v24_left = bank.diffavg24(Channel.LEFT)
    v24_right = bank.diffavg24(Channel.RIGHT)
    if logger.isEnabledFor(logging.DEBUG):
        _log_bank(bank)
    results = score_grids(v16, v24_left, v24_right)
    logger.debug("Scores %s", results.as_dict())
    return results


def decide(results: PcmResults, threshold: float = DEFAULT_THRESHOLD) -> Verdict:
    """Accept the top hypothesis when it scores at least ``threshold`` times the second."""
    ranked = results.ranked()
    best = Candidate(*ranked[0])
    runner_up = Candidate(*ranked[1])
    accepted = best.score > 0.0 and _score_ratio(best.score, runner_up.score) >= threshold
    return Verdict(
        pcm_type=best.pcm_type if accepted else None,
        best=best,
        runner_up=runner_up,
        results=results,
        threshold=threshold,
    )

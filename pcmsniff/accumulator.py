"""Running difference statistics over the byte slots of raw PCM data.

Every analysis block is 12 bytes: three 16-bit stereo frames or two 24-bit stereo
frames. Each byte is read twice, once as a signed 8-bit value and once with bit 7
toggled, so the signed and unsigned hypotheses are evaluated in a single pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

BLOCK_SIZE = 12

FRAME16_SIZE = 4
FRAME24_SIZE = 6
SLOTS16 = 2
SLOTS24 = 3

# Offset of the right channel inside a 24-bit stereo frame.
RIGHT_CHANNEL_OFFSET = 3

# Only channel 0 of each 16-bit frame is sampled.
_FRAME16_OFFSETS = tuple(range(0, BLOCK_SIZE, FRAME16_SIZE))
_FRAME24_OFFSETS = tuple(range(0, BLOCK_SIZE, FRAME24_SIZE))


class Interpretation(IntEnum):
    AS_IS = 0
    BIT_TOGGLED = 1

    @property
    def opposite(self) -> "Interpretation":
        return Interpretation(1 - self)


class Channel(IntEnum):
    LEFT = 0
    RIGHT = 1


# The toggled middle byte of a 24-bit sample is never scored.
SKIPPED_SLOTS24 = {Interpretation.BIT_TOGGLED: frozenset({1})}


def toggle_bit7(data: np.ndarray) -> np.ndarray:
    """Return an int8 copy of ``data`` with the sign bit of every byte flipped."""
    return (data.view(np.uint8) ^ 0x80).view(np.int8)


@dataclass
class DiffAccumulator:
    """Mean absolute difference between consecutive samples of one byte slot."""

    count: int = 0
    diffsum: int = 0
    last: int = 0
    samples: int = 0
    total: int = 0

    def add(self, value: int):
        value = int(value)
        if self.samples:
            self.diffsum += abs(value - self.last)
            self.count += 1
        self.samples += 1
        self.total += value
        self.last = value

    def extend(self, values: np.ndarray):
        """Vectorized ``add`` over an array of int8 samples, in order."""
        if values.size == 0:
            return
        seq = np.asarray(values, dtype=np.int64).ravel()
        if self.samples:
            diffs = np.abs(np.diff(seq, prepend=self.last))
        else:
            diffs = np.abs(np.diff(seq))
        self.diffsum += int(diffs.sum())
        self.count += int(diffs.size)
        self.samples += int(seq.size)
        self.total += int(seq.sum())
        self.last = int(seq[-1])

    def diffavg(self) -> float:
        if self.count == 0:
            return 0.0
        return self.diffsum / self.count

    def mean(self) -> float:
        if self.samples == 0:
            return 0.0
        return self.total / self.samples

    def __str__(self) -> str:
        return f"{self.mean():.3f} / {self.diffavg():.3f}"


@dataclass
class StereoAccumulator:
    l: DiffAccumulator = field(default_factory=DiffAccumulator)
    r: DiffAccumulator = field(default_factory=DiffAccumulator)

    def add(self, left: int, right: int):
        self.l.add(left)
        self.r.add(right)

    def extend(self, left: np.ndarray, right: np.ndarray):
        self.l.extend(left)
        self.r.extend(right)

    def channel(self, channel: Channel) -> DiffAccumulator:
        return self.l if channel is Channel.LEFT else self.r

    def diffavg(self, channel: Channel) -> float:
        return self.channel(channel).diffavg()


def _grid16() -> list[list[DiffAccumulator]]:
    return [[DiffAccumulator() for _ in range(SLOTS16)] for _ in Interpretation]


def _grid24() -> list[list[StereoAccumulator]]:
    return [[StereoAccumulator() for _ in range(SLOTS24)] for _ in Interpretation]


@dataclass
class AccumulatorBank:
    """All per-slot statistics gathered while streaming one file."""

    grid16: list[list[DiffAccumulator]] = field(default_factory=_grid16)
    grid24: list[list[StereoAccumulator]] = field(default_factory=_grid24)
    blocks: int = 0

    def slot16(self, interp: Interpretation, slot: int) -> DiffAccumulator:
        return self.grid16[interp][slot]

    def slot24(self, interp: Interpretation, slot: int) -> StereoAccumulator:
        return self.grid24[interp][slot]

    def ingest_block(self, block: bytes):
        """Feed exactly one 12-byte analysis block."""
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"Analysis block must be {BLOCK_SIZE} bytes, got {len(block)}")
        as_is = np.frombuffer(bytes(block), dtype=np.int8)
        for interp, values in ((Interpretation.AS_IS, as_is), (Interpretation.BIT_TOGGLED, toggle_bit7(as_is))):
            row = values.tolist()
            for offset in _FRAME16_OFFSETS:
                for slot in range(SLOTS16):
                    self.grid16[interp][slot].add(row[offset + slot])
            skipped = SKIPPED_SLOTS24.get(interp, frozenset())
            for offset in _FRAME24_OFFSETS:
                for slot in range(SLOTS24):
                    if slot in skipped:
                        continue
                    self.grid24[interp][slot].add(
                        row[offset + slot],
                        row[offset + slot + RIGHT_CHANNEL_OFFSET],
                    )
        self.blocks += 1

    def ingest(self, data) -> int:
        """Feed every whole block in ``data``; returns the number of blocks consumed.

        Bytes past the last whole block are ignored. The result is identical to
        calling ``ingest_block`` on each block in turn.
        """
        raw = np.frombuffer(data, dtype=np.int8)
        whole = raw.size - raw.size % BLOCK_SIZE
        if whole == 0:
            return 0
        blocks = raw[:whole].reshape(-1, BLOCK_SIZE)
        for interp, values in ((Interpretation.AS_IS, blocks), (Interpretation.BIT_TOGGLED, toggle_bit7(blocks))):
            for slot in range(SLOTS16):
                columns = [offset + slot for offset in _FRAME16_OFFSETS]
                self.grid16[interp][slot].extend(values[:, columns].ravel())
            skipped = SKIPPED_SLOTS24.get(interp, frozenset())
            for slot in range(SLOTS24):
                if slot in skipped:
                    continue
                left = [offset + slot for offset in _FRAME24_OFFSETS]
                right = [column + RIGHT_CHANNEL_OFFSET for column in left]
                self.grid24[interp][slot].extend(values[:, left].ravel(), values[:, right].ravel())
        consumed = blocks.shape[0]
        self.blocks += consumed
        return consumed

    def diffavg16(self) -> list[list[float]]:
        return [[acc.diffavg() for acc in row] for row in self.grid16]

    def diffavg24(self, channel: Channel) -> list[list[float]]:
        return [[pair.diffavg(channel) for pair in row] for row in self.grid24]

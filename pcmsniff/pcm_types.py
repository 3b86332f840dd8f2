"""PCM sample format value types and the per-hypothesis score set."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class PcmType:
    signed: bool
    bits24: bool
    big_endian: bool

    @property
    def bits(self) -> int:
        return 24 if self.bits24 else 16

    @property
    def sample_width(self) -> int:
        return 3 if self.bits24 else 2

    @property
    def label(self) -> str:
        """Short form such as ``s16le`` or ``u24be``."""
        sign = "s" if self.signed else "u"
        order = "be" if self.big_endian else "le"
        return f"{sign}{self.bits}{order}"

    def describe(self) -> str:
        sign = "signed" if self.signed else "unsigned"
        order = "big-endian" if self.big_endian else "little-endian"
        return f"{sign} {self.bits}-bit {order}"

    @classmethod
    def from_label(cls, label: str) -> "PcmType":
        value = (label or "").strip().lower()
        for pcm_type in ALL_TYPES:
            if pcm_type.label == value:
                return pcm_type
        raise ValueError(f"Unknown PCM type label: {label!r}")

    def __str__(self) -> str:
        return self.label


S16LE = PcmType(signed=True, bits24=False, big_endian=False)
S16BE = PcmType(signed=True, bits24=False, big_endian=True)
U16LE = PcmType(signed=False, bits24=False, big_endian=False)
U16BE = PcmType(signed=False, bits24=False, big_endian=True)
S24LE = PcmType(signed=True, bits24=True, big_endian=False)
S24BE = PcmType(signed=True, bits24=True, big_endian=True)
U24LE = PcmType(signed=False, bits24=True, big_endian=False)
U24BE = PcmType(signed=False, bits24=True, big_endian=True)

# Field order of PcmResults follows this tuple.
ALL_TYPES = (S16LE, S16BE, U16LE, U16BE, S24LE, S24BE, U24LE, U24BE)


@dataclass(frozen=True)
class PcmResults:
    """Confidence score per hypothesis; 0.0 means no evidence."""

    s16le: float = 0.0
    s16be: float = 0.0
    u16le: float = 0.0
    u16be: float = 0.0
    s24le: float = 0.0
    s24be: float = 0.0
    u24le: float = 0.0
    u24be: float = 0.0

    def __post_init__(self):
        for field in fields(self):
            value = float(getattr(self, field.name))
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"Score {field.name} must be a finite non-negative number, got {value}")
            object.__setattr__(self, field.name, value)

    @classmethod
    def from_scores(cls, scores: dict[PcmType, float]) -> "PcmResults":
        return cls(**{pcm_type.label: scores.get(pcm_type, 0.0) for pcm_type in ALL_TYPES})

    def score(self, pcm_type: PcmType) -> float:
        return getattr(self, pcm_type.label)

    def items(self) -> list[tuple[PcmType, float]]:
        return [(pcm_type, self.score(pcm_type)) for pcm_type in ALL_TYPES]

    def ranked(self) -> list[tuple[PcmType, float]]:
        """Return (type, score) pairs, best first. Ties keep declaration order."""
        return sorted(self.items(), key=lambda item: item[1], reverse=True)

    def as_dict(self) -> dict[str, float]:
        return {pcm_type.label: score for pcm_type, score in self.items()}

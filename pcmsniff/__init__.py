"""Public pcmsniff APIs for composition roots and external integrations."""

from pcmsniff.accumulator import AccumulatorBank, Channel, DiffAccumulator, Interpretation, StereoAccumulator
from pcmsniff.app_config import DetectorConfig
from pcmsniff.detector import (
    EmptyFileError,
    FileReport,
    NotRegularFileError,
    detect_bytes,
    detect_file,
    detect_many,
    detect_stream,
)
from pcmsniff.pcm_types import ALL_TYPES, PcmResults, PcmType
from pcmsniff.scorer import DEFAULT_THRESHOLD, Candidate, Verdict, decide, score_bank

__all__ = [
    "ALL_TYPES",
    "AccumulatorBank",
    "Candidate",
    "Channel",
    "DEFAULT_THRESHOLD",
    "DetectorConfig",
    "DiffAccumulator",
    "EmptyFileError",
    "FileReport",
    "Interpretation",
    "NotRegularFileError",
    "PcmResults",
    "PcmType",
    "StereoAccumulator",
    "Verdict",
    "decide",
    "detect_bytes",
    "detect_file",
    "detect_many",
    "detect_stream",
    "score_bank",
]

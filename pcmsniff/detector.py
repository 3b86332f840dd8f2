"""Stream raw PCM through the accumulator bank and score it."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable

from pcmsniff.accumulator import BLOCK_SIZE, AccumulatorBank
from pcmsniff.app_config import DetectorConfig
from pcmsniff.audio_format import SNIFF_BYTES, detect_container
from pcmsniff.scorer import Verdict, decide, score_bank

logger = logging.getLogger(__name__)


class NotRegularFileError(OSError):
    """Raised for directories, devices, pipes and other non-regular paths."""


class EmptyFileError(OSError):
    """Raised for zero-length input files."""


@dataclass
class FileReport:
    path: str
    verdict: Verdict | None = None
    error: OSError | ValueError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _fill(stream: BinaryIO, view: memoryview) -> int:
    filled = 0
    while filled < len(view):
        count = stream.readinto(view[filled:])
        if not count:
            break
        filled += count
    return filled


def accumulate_stream(stream: BinaryIO, blocks_per_read: int) -> AccumulatorBank:
    """Feed every whole analysis block of ``stream`` into a fresh bank."""
    bank = AccumulatorBank()
    buffer = bytearray(BLOCK_SIZE * blocks_per_read)
    view = memoryview(buffer)
    while True:
        filled = _fill(stream, view)
        whole = filled - filled % BLOCK_SIZE
        if whole:
            bank.ingest(view[:whole])
        if filled < len(view):
            if filled != whole:
                logger.debug("Ignoring %d trailing bytes", filled - whole)
            break
    return bank


def detect_stream(stream: BinaryIO, config: DetectorConfig | None = None) -> Verdict:
    """Detect the PCM type of a binary stream read to exhaustion."""
    config = config or DetectorConfig()
    bank = accumulate_stream(stream, config.blocks_per_read)
    logger.debug("Analysed %d blocks", bank.blocks)
    return decide(score_bank(bank), config.threshold)


def detect_bytes(data: bytes, config: DetectorConfig | None = None) -> Verdict:
    config = config or DetectorConfig()
    bank = AccumulatorBank()
    bank.ingest(data)
    return decide(score_bank(bank), config.threshold)


def detect_file(path: str | os.PathLike, config: DetectorConfig | None = None) -> Verdict:
    """Detect the PCM type of a raw audio file.

    Raises FileNotFoundError/PermissionError as usual, NotRegularFileError for
    anything but a regular file and EmptyFileError for a zero-length file.
    """
    config = config or DetectorConfig()
    file_path = Path(path)
    mode = file_path.stat().st_mode
    if not stat.S_ISREG(mode):
        raise NotRegularFileError(f"Not a regular file: {file_path}")

    with open(file_path, "rb") as f:
        if os.fstat(f.fileno()).st_size == 0:
            raise EmptyFileError(f"File is empty: {file_path}")
        head = f.read(SNIFF_BYTES)
        container = detect_container(head)
        if container:
            logger.warning("%s looks like a %s container, not raw PCM", file_path, container)
        f.seek(0)
        verdict = detect_stream(f, config)

    if verdict.conclusive:
        logger.info("%s: %s (ratio %.2f)", file_path, verdict.pcm_type, verdict.ratio)
    else:
        logger.info(
            "%s: inconclusive, best %s %.3f, second %s %.3f",
            file_path,
            verdict.best.pcm_type,
            verdict.best.score,
            verdict.runner_up.pcm_type,
            verdict.runner_up.score,
        )
    return verdict


def detect_many(paths: Iterable[str | os.PathLike], config: DetectorConfig | None = None) -> list[FileReport]:
    """Detect each path in turn; I/O errors and unusable paths are recorded per file instead of raised."""
    config = config or DetectorConfig()
    reports: list[FileReport] = []
    for path in paths:
        try:
            verdict = detect_file(path, config)
        except (OSError, ValueError) as e:
            logger.error("Failed to read %s: %s", path, e)
            reports.append(FileReport(path=str(path), error=e))
            continue
        reports.append(FileReport(path=str(path), verdict=verdict))
    return reports

"""Detector configuration as an injectable dataclass."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from pcmsniff.scorer import DEFAULT_THRESHOLD

DEFAULT_BLOCKS_PER_READ = 4096


@dataclass
class DetectorConfig:
    """Detector configuration loaded from environment variables."""

    # Minimum best / runner-up score ratio for a verdict
    threshold: float = DEFAULT_THRESHOLD

    # Read buffer size, in 12-byte analysis blocks
    blocks_per_read: int = DEFAULT_BLOCKS_PER_READ

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    def __post_init__(self):
        self.threshold = float(self.threshold)
        self.blocks_per_read = int(self.blocks_per_read)
        if not self.threshold >= 1.0:
            raise ValueError(f"threshold must be >= 1.0, got {self.threshold}")
        if self.blocks_per_read < 1:
            raise ValueError(f"blocks_per_read must be >= 1, got {self.blocks_per_read}")

    @staticmethod
    def from_env() -> "DetectorConfig":
        """Load config from .env file and environment variables."""
        load_dotenv()
        return DetectorConfig(
            threshold=float(os.getenv("PCMSNIFF_THRESHOLD", str(DEFAULT_THRESHOLD))),
            blocks_per_read=int(os.getenv("PCMSNIFF_BLOCKS_PER_READ", str(DEFAULT_BLOCKS_PER_READ))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE", "").strip(),
        )

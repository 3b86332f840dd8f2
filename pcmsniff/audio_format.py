"""Container signature sniffing, used to warn when an input is not raw PCM."""

from __future__ import annotations

SNIFF_BYTES = 16


def detect_container(head: bytes) -> str | None:
    """Return the container name when ``head`` opens with a known signature."""
    if not head:
        return None

    head = bytes(head[:SNIFF_BYTES])

    # RIFF/WAVE and the 64-bit RF64 variant
    if len(head) >= 12 and head[:4] in (b"RIFF", b"RF64") and head[8:12] == b"WAVE":
        return "wav"
    # AIFF / AIFF-C
    if len(head) >= 12 and head[:4] == b"FORM" and head[8:12] in (b"AIFF", b"AIFC"):
        return "aiff"
    if head.startswith(b"caff"):
        return "caf"
    if head.startswith(b"fLaC"):
        return "flac"
    # Ogg / Opus-in-Ogg / Vorbis-in-Ogg
    if head.startswith(b"OggS"):
        return "ogg"
    if head.startswith(b"ID3"):
        return "mp3"

    return None

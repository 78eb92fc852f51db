"""Transcript post-processing: short-spacing collapse and punctuation stripping."""

from __future__ import annotations

import unicodedata

from edusync.models.transcript import SPACING, Segment
from edusync.utils.progress import log_step


def postprocess_transcript(
    segments: list[Segment],
    *,
    spacing_threshold_ms: float = 400.0,
    strip_punctuation: bool = True,
) -> list[Segment]:
    """Normalize provider segments before segmentation.

    Works in place on ``segments`` and returns the same list. Never raises.
    """
    collapsed = collapse_short_spacing(segments, threshold_ms=spacing_threshold_ms)
    stripped = strip_leading_punctuation(segments) if strip_punctuation else 0

    log_step(
        "PostProcess",
        f"Collapsed {collapsed} short spacing segment(s), "
        f"stripped punctuation from {stripped} word(s)",
    )
    return segments


def collapse_short_spacing(segments: list[Segment], *, threshold_ms: float) -> int:
    """Fold every spacing segment shorter than ``threshold_ms`` into its neighbours.

    Half of the gap goes to the previous segment's end, half to the next
    segment's start. Returns the number of spacing segments removed.
    """
    removed = 0
    i = 0
    while i < len(segments):
        seg = segments[i]
        if seg.type != SPACING or seg.duration_ms >= threshold_ms:
            i += 1
            continue

        half = seg.duration_ms / 2
        if i > 0:
            segments[i - 1].end_ms += half
        if i < len(segments) - 1:
            segments[i + 1].start_ms -= half
        del segments[i]
        removed += 1
        # same index again: the next segment has shifted into it

    return removed


def strip_leading_punctuation(segments: list[Segment]) -> int:
    """Drop leading whitespace/punctuation/symbols from multi-character words."""
    changed = 0
    for seg in segments:
        if not seg.is_word or len(seg.text) <= 1:
            continue
        stripped = _lstrip_punctuation(seg.text)
        if stripped != seg.text:
            seg.text = stripped
            changed += 1
    return changed


def _lstrip_punctuation(text: str) -> str:
    start = 0
    while start < len(text) and _is_punct_or_space(text[start]):
        start += 1
    return text[start:]


def _is_punct_or_space(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch)[0] in ("P", "S")

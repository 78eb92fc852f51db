"""Conversion of speech-to-text provider payloads into Segments."""

from __future__ import annotations

from typing import Any

from edusync.errors import EmptyInputError
from edusync.models.transcript import WORD, Segment


def from_elevenlabs_words(words: list[dict[str, Any]]) -> list[Segment]:
    """Convert an ElevenLabs ``words`` array (times in seconds) to Segments.

    Missing ids become ``seg-<n>`` (1-based), missing types default to
    ``word``. The provider's ``logprob`` is carried as the confidence.
    """
    segments: list[Segment] = []
    for n, word in enumerate(words, start=1):
        segments.append(Segment(
            id=str(word.get("id") or f"seg-{n}"),
            type=word.get("type") or WORD,
            text=word.get("text") or "",
            start_ms=float(word.get("start") or 0.0) * 1000,
            end_ms=float(word.get("end") or 0.0) * 1000,
            speaker_id=word.get("speaker_id") or None,
            confidence=word.get("logprob"),
        ))
    return segments


def load_segments(data: Any) -> list[Segment]:
    """Build Segments from any supported transcript payload.

    Accepts a bare list of segment dicts, an object with ``segments``
    (our own format, times in ms) or an ElevenLabs response with ``words``.
    """
    if isinstance(data, dict):
        if "segments" in data:
            data = data["segments"]
        elif "words" in data:
            return from_elevenlabs_words(data["words"] or [])
        else:
            raise EmptyInputError(
                "Transcript has neither 'segments' nor 'words'", stage="load"
            )

    if not isinstance(data, list):
        raise EmptyInputError("Transcript payload is not a list of segments", stage="load")

    return [Segment(**item) for item in data]

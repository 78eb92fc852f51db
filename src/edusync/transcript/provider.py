"""Base protocol for speech-to-text providers."""

from __future__ import annotations

from typing import Protocol

from edusync.models.transcript import Segment


class TranscriptionProvider(Protocol):
    """Protocol for speech-to-text providers feeding the pipeline.

    Implementations return time-ordered segments in milliseconds.
    """

    name: str

    def transcribe(self, source: str, *, language: str = "en") -> list[Segment]: ...

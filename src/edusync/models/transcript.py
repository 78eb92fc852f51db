"""Transcript data models."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

WORD = "word"
SPACING = "spacing"


class Segment(BaseModel):
    """A time-coded transcript segment (word, spacing or audio event).

    Times are milliseconds from the start of the media. Word segments must
    have ``start_ms < end_ms``.
    """

    id: str
    type: str = WORD
    text: str = ""
    start_ms: float
    end_ms: float
    speaker_id: str | None = None
    confidence: float | None = None

    @model_validator(mode="after")
    def check_word_timing(self) -> Segment:
        if self.type == WORD and self.start_ms >= self.end_ms:
            raise ValueError(
                f"word segment {self.id!r} has start_ms {self.start_ms} "
                f">= end_ms {self.end_ms}"
            )
        return self

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms

    @property
    def is_word(self) -> bool:
        return self.type == WORD


class RealignedSegment(Segment):
    """Output segment: one run of words belonging to a single discourse unit,
    or a passed-through non-word segment (``unit_index`` is None)."""

    unit_index: int | None = None

"""Discourse unit models and the oracle's response schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class DiscourseTag(str, Enum):
    """Rhetorical function of a discourse unit."""

    BACKGROUND = "BG"
    CLAIM = "CL"
    EVIDENCE = "EV"
    EXAMPLE = "EX"
    CONCESSION = "CS"
    REBUTTAL = "RB"
    IMPLICATION = "IM"


_TAG_ALIASES = {tag.name: tag.value for tag in DiscourseTag}


def normalize_tag(raw: object) -> object:
    """Map loose oracle spellings ("ev", "EV[primary]", "Claim") onto a tag code."""
    if not isinstance(raw, str):
        return raw
    head = ""
    for ch in raw.strip():
        if not ch.isalpha():
            break
        head += ch
    head = head.upper()
    return _TAG_ALIASES.get(head, head)


class ParagraphSplitResult(BaseModel):
    """Oracle response for a paragraph split."""

    paragraphs: list[str] = Field(default_factory=list)


class OracleUnit(BaseModel):
    """One unit as proposed by the oracle. Only the first token and tag are trusted."""

    content: str
    tag: DiscourseTag

    @field_validator("tag", mode="before")
    @classmethod
    def normalize_loose_tag(cls, value: object) -> object:
        return normalize_tag(value)


class UnitSplitResult(BaseModel):
    """Oracle response for a unit split."""

    units: list[OracleUnit] = Field(default_factory=list)


class DiscourseUnit(BaseModel):
    """An elementary discourse unit with exact source text.

    ``global_index`` stays None until the article assembler stitches
    all paragraphs together.
    """

    global_index: int | None = None
    content: str
    tag: DiscourseTag


class TimedUnit(BaseModel):
    """A discourse unit with the time span of the words realigned onto it."""

    global_index: int
    tag: DiscourseTag
    content: str
    start_ms: float
    end_ms: float
    segment_ids: list[str] = Field(default_factory=list)

"""Pipeline result model: what a successful run hands to its caller."""

from __future__ import annotations

from pydantic import BaseModel, Field

from edusync.models.discourse import DiscourseUnit, TimedUnit
from edusync.models.transcript import RealignedSegment


class PipelineMetadata(BaseModel):
    """Metadata about one pipeline run."""

    oracle_name: str = ""
    processing_time_ms: float = 0.0
    duration_ms: float = 0.0
    input_segment_count: int = 0
    word_count: int = 0
    collapsed_spacing_count: int = 0
    paragraph_count: int = 0
    unit_count: int = 0
    output_segment_count: int = 0


class PipelineResult(BaseModel):
    """Realigned transcript plus the discourse units it was grouped by."""

    version: str = "1.0"
    segments: list[RealignedSegment] = Field(default_factory=list)
    units: list[DiscourseUnit] = Field(default_factory=list)
    timed_units: list[TimedUnit] = Field(default_factory=list)
    metadata: PipelineMetadata = Field(default_factory=PipelineMetadata)

"""Pydantic data models for edusync."""

from edusync.models.config import PipelineConfig
from edusync.models.discourse import DiscourseTag, DiscourseUnit
from edusync.models.result import PipelineResult
from edusync.models.transcript import RealignedSegment, Segment

__all__ = [
    "PipelineConfig",
    "DiscourseTag",
    "DiscourseUnit",
    "PipelineResult",
    "RealignedSegment",
    "Segment",
]

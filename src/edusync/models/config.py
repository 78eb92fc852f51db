"""Configuration models for each pipeline stage."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from edusync.utils.io import read_yaml


class PostProcessConfig(BaseModel):
    """Configuration for the transcript post-processor."""

    # Spacing segments shorter than this (milliseconds) are folded into their neighbours.
    spacing_collapse_threshold_ms: float = Field(default=400.0, ge=0.0, le=10000.0)
    strip_leading_punctuation: bool = True


class SegmentationConfig(BaseModel):
    """Configuration for paragraph and unit splitting."""

    paragraph_max_attempts: int = Field(default=2, ge=1, le=10)
    unit_max_attempts: int = Field(default=3, ge=1, le=10)
    max_workers: int = Field(default=4, ge=1, le=32)


class OracleConfig(BaseModel):
    """Configuration for the Claude-backed segmentation oracle."""

    model: str = "claude-sonnet-4-6"
    max_tokens: int = Field(default=8192, ge=256, le=64000)
    high_effort_max_tokens: int = Field(default=16000, ge=256, le=64000)
    api_retry_attempts: int = Field(default=3, ge=1, le=10)
    timeout_seconds: float = Field(default=120.0, ge=1.0, le=900.0)


class PipelineConfig(BaseModel):
    """All stage configurations."""

    postprocess: PostProcessConfig = Field(default_factory=PostProcessConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    oracle: OracleConfig = Field(default_factory=OracleConfig)


def load_config(path: Path | str | None) -> PipelineConfig:
    """Load a pipeline config from YAML, or the defaults when no path is given."""
    if path is None:
        return PipelineConfig()
    return PipelineConfig(**read_yaml(path))

"""Pipeline runner: post-process, segment, realign."""

from __future__ import annotations

import time

from edusync.errors import EmptyInputError
from edusync.models.config import PipelineConfig
from edusync.models.result import PipelineMetadata, PipelineResult
from edusync.models.transcript import Segment
from edusync.oracle.base import SegmentationOracle
from edusync.realign.realigner import build_timed_units, realign_segments
from edusync.segmentation.assembler import assemble_article
from edusync.transcript.postprocess import postprocess_transcript
from edusync.transcript.provider import TranscriptionProvider
from edusync.utils.progress import log, log_success


def build_article(segments: list[Segment]) -> str:
    """Concatenate the text of every word segment, without separators."""
    words = [s for s in segments if s.is_word]
    if not words:
        raise EmptyInputError("Transcript has no word segments", stage="article")
    article = "".join(s.text for s in words)
    if not article:
        raise EmptyInputError("Word segments carry no text", stage="article")
    return article


def run_pipeline(
    segments: list[Segment],
    oracle: SegmentationOracle,
    config: PipelineConfig | None = None,
) -> PipelineResult:
    """Turn a word-level transcript into time-coded discourse-unit segments.

    Steps:
    1. Post-process a copy of the segments (spacing collapse, punctuation)
    2. Build the article from the word segments
    3. Split into paragraphs and exact, globally indexed discourse units
    4. Realign the post-processed words onto the units

    Any failure aborts the run; there is no partial result.
    """
    config = config or PipelineConfig()
    start_time = time.time()

    if not segments:
        raise EmptyInputError("No transcript segments provided", stage="pipeline")

    log(f"[bold]edusync[/bold]: {len(segments)} segment(s), oracle {oracle.name}")

    processed = postprocess_transcript(
        [s.model_copy() for s in segments],
        spacing_threshold_ms=config.postprocess.spacing_collapse_threshold_ms,
        strip_punctuation=config.postprocess.strip_leading_punctuation,
    )

    article = build_article(processed)
    segmentation = assemble_article(article, oracle, config.segmentation)

    realigned = realign_segments(processed, segmentation.units)
    timed_units = build_timed_units(segmentation.units, realigned)

    elapsed_ms = (time.time() - start_time) * 1000
    metadata = PipelineMetadata(
        oracle_name=oracle.name,
        processing_time_ms=round(elapsed_ms, 1),
        duration_ms=max((s.end_ms for s in processed), default=0.0),
        input_segment_count=len(segments),
        word_count=sum(1 for s in processed if s.is_word),
        collapsed_spacing_count=len(segments) - len(processed),
        paragraph_count=len(segmentation.paragraphs),
        unit_count=len(segmentation.units),
        output_segment_count=len(realigned),
    )

    log_success(
        f"Segmented {metadata.word_count} words into {metadata.unit_count} "
        f"discourse units ({metadata.output_segment_count} output segments)"
    )
    return PipelineResult(
        segments=realigned,
        units=segmentation.units,
        timed_units=timed_units,
        metadata=metadata,
    )


def transcribe_and_segment(
    provider: TranscriptionProvider,
    source: str,
    oracle: SegmentationOracle,
    config: PipelineConfig | None = None,
    *,
    language: str = "en",
) -> PipelineResult:
    """Fetch a transcript from a speech-to-text provider and run the pipeline on it."""
    log(f"Transcribing {source} with {provider.name}")
    segments = provider.transcribe(source, language=language)
    return run_pipeline(segments, oracle, config)

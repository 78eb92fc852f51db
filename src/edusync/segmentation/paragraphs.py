"""Paragraph splitting with exact-reconstruction verification."""

from __future__ import annotations

from edusync.errors import EmptyInputError, SegmentationDriftError
from edusync.oracle.base import SegmentationOracle
from edusync.segmentation.verify import verified_attempts, verify_reconstruction
from edusync.utils.progress import log_step

STAGE = "paragraphs"


def split_paragraphs(
    article: str,
    oracle: SegmentationOracle,
    *,
    max_attempts: int = 2,
) -> list[str]:
    """Split the article into paragraphs that concatenate back to it exactly.

    Empty paragraphs returned by the oracle are dropped after verification;
    they carry no text.
    """
    if not article:
        raise EmptyInputError("No article text to split", stage=STAGE)

    log_step("Paragraphs", f"Splitting article ({len(article)} chars)")

    try:
        for attempt in verified_attempts(STAGE, max_attempts):
            with attempt:
                result = oracle.split_paragraphs(article)
                verify_reconstruction(STAGE, article, result.paragraphs)
    except SegmentationDriftError as e:
        raise SegmentationDriftError(
            f"Paragraph split failed after {max_attempts} attempt(s): {e.detail}",
            stage=STAGE,
            detail=e.detail,
            expected_length=e.expected_length,
            actual_length=e.actual_length,
        ) from e

    paragraphs = [p for p in result.paragraphs if p]
    log_step("Paragraphs", f"Article split into {len(paragraphs)} paragraph(s)")
    return paragraphs

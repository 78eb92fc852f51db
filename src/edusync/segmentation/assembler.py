"""Article assembly: paragraphs, per-paragraph units, global indexing."""

from __future__ import annotations

import concurrent.futures
import threading
from dataclasses import dataclass, field

from edusync.errors import UnitIndexError
from edusync.models.config import SegmentationConfig
from edusync.models.discourse import DiscourseUnit
from edusync.oracle.base import SegmentationOracle
from edusync.segmentation.paragraphs import split_paragraphs
from edusync.segmentation.units import split_units
from edusync.utils.progress import log_step


@dataclass
class ArticleSegmentation:
    """Paragraphs of an article and its globally indexed discourse units."""

    paragraphs: list[str] = field(default_factory=list)
    units: list[DiscourseUnit] = field(default_factory=list)


def assemble_article(
    article: str,
    oracle: SegmentationOracle,
    config: SegmentationConfig | None = None,
) -> ArticleSegmentation:
    """Segment a whole article into indexed discourse units.

    Paragraphs are split into units concurrently (bounded by
    ``config.max_workers``); indices are assigned afterwards in paragraph order.
    """
    config = config or SegmentationConfig()

    paragraphs = split_paragraphs(
        article, oracle, max_attempts=config.paragraph_max_attempts
    )
    per_paragraph = split_all_paragraphs(
        paragraphs,
        oracle,
        max_attempts=config.unit_max_attempts,
        max_workers=config.max_workers,
    )
    units = stitch_units(per_paragraph)

    log_step(
        "Assemble",
        f"{len(units)} discourse unit(s) across {len(paragraphs)} paragraph(s)",
    )
    return ArticleSegmentation(paragraphs=paragraphs, units=units)


def split_all_paragraphs(
    paragraphs: list[str],
    oracle: SegmentationOracle,
    *,
    max_attempts: int = 3,
    max_workers: int = 4,
) -> list[list[DiscourseUnit]]:
    """Run the unit splitter on every paragraph; results keep paragraph order.

    The first failure, including KeyboardInterrupt, stops the run: paragraphs
    still queued are cancelled or skip their oracle calls, and the failure is
    re-raised without waiting for them.
    """
    results: list[list[DiscourseUnit] | None] = [None] * len(paragraphs)
    stop = threading.Event()

    def split_one(paragraph: str) -> list[DiscourseUnit] | None:
        if stop.is_set():
            return None
        try:
            return split_units(paragraph, oracle, max_attempts=max_attempts)
        except BaseException:
            stop.set()
            raise

    ex = concurrent.futures.ThreadPoolExecutor(max_workers=max(1, max_workers))
    try:
        futures = {
            ex.submit(split_one, paragraph): idx
            for idx, paragraph in enumerate(paragraphs)
        }
        for fut in concurrent.futures.as_completed(futures):
            results[futures[fut]] = fut.result()
    except BaseException:
        stop.set()
        ex.shutdown(wait=False, cancel_futures=True)
        raise
    ex.shutdown(wait=True)

    return [units for units in results if units is not None]


def stitch_units(per_paragraph: list[list[DiscourseUnit]]) -> list[DiscourseUnit]:
    """Assign contiguous global indices, in paragraph order, starting at 0."""
    stitched: list[DiscourseUnit] = []
    for units in per_paragraph:
        for unit in units:
            stitched.append(unit.model_copy(update={"global_index": len(stitched)}))

    verify_indices(stitched)
    return stitched


def verify_indices(units: list[DiscourseUnit]) -> None:
    """Check that global indices are exactly 0..N-1 in order."""
    indices = [u.global_index for u in units]
    if indices != list(range(len(units))):
        raise UnitIndexError(
            f"Discourse unit indices are not contiguous: {indices[:10]}...",
            indices=indices,
        )

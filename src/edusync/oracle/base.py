"""Base protocol for text-segmentation oracles."""

from __future__ import annotations

from typing import Literal, Protocol

from edusync.models.discourse import ParagraphSplitResult, UnitSplitResult

Effort = Literal["medium", "high"]


class SegmentationOracle(Protocol):
    """Protocol for text-segmentation oracles.

    Results are best-effort proposals; callers verify them. Implementations
    raise OracleInvocationError when the call itself fails, and must be safe
    to call from several threads at once.
    """

    name: str

    def split_paragraphs(self, article: str) -> ParagraphSplitResult: ...

    def split_units(self, paragraph: str, *, effort: Effort = "medium") -> UnitSplitResult: ...

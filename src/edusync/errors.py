"""Exception taxonomy for the segmentation and realignment pipeline.

Every error names the stage it was raised in. All of them are fatal for the
run that raised them: callers must treat a failed run as producing nothing.
"""

from __future__ import annotations


class EdusyncError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str, *, stage: str = "pipeline") -> None:
        super().__init__(message)
        self.stage = stage


class EmptyInputError(EdusyncError):
    """No article text or no word segments to work with."""


class OracleInvocationError(EdusyncError):
    """The text-segmentation oracle could not be called or returned garbage.

    ``retryable`` is False for conditions a fresh attempt cannot fix,
    such as a missing or rejected API key.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str = "oracle",
        retryable: bool = True,
    ) -> None:
        super().__init__(message, stage=stage)
        self.retryable = retryable


class SegmentationDriftError(EdusyncError):
    """Exact reconstruction of the source text failed after all attempts."""

    def __init__(
        self,
        message: str,
        *,
        stage: str,
        detail: str = "",
        expected_length: int | None = None,
        actual_length: int | None = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.detail = detail
        self.expected_length = expected_length
        self.actual_length = actual_length


class BoundaryNotFoundError(EdusyncError):
    """An oracle-claimed unit starts with a token absent from the paragraph."""

    def __init__(
        self,
        message: str,
        *,
        token: str,
        cursor: int,
        unit_position: int,
        stage: str = "unit_boundaries",
    ) -> None:
        super().__init__(message, stage=stage)
        self.token = token
        self.cursor = cursor
        self.unit_position = unit_position


class RealignmentMismatchError(EdusyncError):
    """A word segment does not fit the discourse unit it should belong to."""

    def __init__(
        self,
        message: str,
        *,
        unit_index: int,
        word_index: int,
        stage: str = "realign",
    ) -> None:
        super().__init__(message, stage=stage)
        self.unit_index = unit_index
        self.word_index = word_index


class UnitIndexError(EdusyncError):
    """Stitched discourse units do not carry contiguous global indices."""

    def __init__(self, message: str, *, indices: list[int | None], stage: str = "assemble") -> None:
        super().__init__(message, stage=stage)
        self.indices = indices

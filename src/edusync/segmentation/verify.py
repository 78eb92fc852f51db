"""Exact-reconstruction checks and the generate-and-verify attempt loop."""

from __future__ import annotations

from tenacity import Retrying, RetryCallState, retry_if_exception, stop_after_attempt

from edusync.errors import OracleInvocationError, SegmentationDriftError
from edusync.utils.progress import log_warning

CONTEXT_CHARS = 20


def describe_mismatch(expected: str, actual: str) -> str:
    """Human-readable summary of where ``actual`` first departs from ``expected``."""
    limit = min(len(expected), len(actual))
    offset = next((i for i in range(limit) if expected[i] != actual[i]), limit)
    return (
        f"length {len(actual)} vs expected {len(expected)} "
        f"(diff {len(actual) - len(expected):+d}), first difference at {offset}: "
        f"expected {expected[offset:offset + CONTEXT_CHARS]!r}, "
        f"got {actual[offset:offset + CONTEXT_CHARS]!r}"
    )


def verify_reconstruction(stage: str, expected: str, parts: list[str]) -> None:
    """Raise SegmentationDriftError unless ``parts`` concatenate to ``expected`` exactly."""
    rebuilt = "".join(parts)
    if rebuilt == expected:
        return
    raise SegmentationDriftError(
        f"{stage}: reconstruction mismatch",
        stage=stage,
        detail=describe_mismatch(expected, rebuilt),
        expected_length=len(expected),
        actual_length=len(rebuilt),
    )


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, OracleInvocationError):
        return exc.retryable
    return isinstance(exc, SegmentationDriftError)


def _log_failed_attempt(stage: str, max_attempts: int):
    def _log(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        reason = getattr(exc, "detail", "") or str(exc)
        log_warning(
            f"{stage} attempt {retry_state.attempt_number}/{max_attempts} failed: {reason}"
        )

    return _log


def verified_attempts(stage: str, max_attempts: int) -> Retrying:
    """Attempt loop for one oracle call plus its verification.

    Drift and retryable oracle failures consume an attempt; anything else
    propagates at once. On exhaustion the last failure is re-raised.
    """
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_failed_attempt(stage, max_attempts),
        reraise=True,
    )

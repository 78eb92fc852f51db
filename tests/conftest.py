"""Shared test fixtures for the edusync test suite.

The segmentation stages are tested against a scripted oracle: each call pops
the next queued reply (the last one repeats), replies may be exceptions, and
every call is recorded so tests can assert on attempts and effort levels.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

import pytest

from edusync.models.discourse import OracleUnit, ParagraphSplitResult, UnitSplitResult
from edusync.models.transcript import Segment


class ScriptedOracle:
    """Stub oracle replaying canned replies.

    ``paragraphs``: list of replies for split_paragraphs, each a list of
    strings or an exception. Defaults to the whole article as one paragraph.
    ``units``: dict mapping a paragraph to its list of replies, each a list of
    ``(content, tag)`` pairs, an exception, or a callable
    ``(paragraph, effort) -> list[(content, tag)]``. Unscripted paragraphs come
    back as a single CL unit.
    """

    name = "scripted"

    def __init__(
        self,
        paragraphs: list[Any] | None = None,
        units: dict[str, list[Any]] | None = None,
    ) -> None:
        self._paragraph_replies = list(paragraphs or [])
        self._unit_replies = {k: list(v) for k, v in (units or {}).items()}
        self._lock = threading.Lock()
        self.paragraph_calls: list[str] = []
        self.unit_calls: list[tuple[str, str]] = []

    def split_paragraphs(self, article: str) -> ParagraphSplitResult:
        with self._lock:
            self.paragraph_calls.append(article)
            reply = _next(self._paragraph_replies, [article])
        if isinstance(reply, BaseException):
            raise reply
        return ParagraphSplitResult(paragraphs=reply)

    def split_units(self, paragraph: str, *, effort: str = "medium") -> UnitSplitResult:
        with self._lock:
            self.unit_calls.append((paragraph, effort))
            reply = _next(self._unit_replies.get(paragraph, []), [(paragraph, "CL")])
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            reply = reply(paragraph, effort)
        return UnitSplitResult(
            units=[OracleUnit(content=content, tag=tag) for content, tag in reply]
        )

    def efforts_for(self, paragraph: str) -> list[str]:
        return [effort for p, effort in self.unit_calls if p == paragraph]


def _next(queue: list[Any], default: Any) -> Any:
    if not queue:
        return default
    if len(queue) > 1:
        return queue.pop(0)
    return queue[0]


def words(*items: tuple[str, float, float], type: str = "word") -> list[Segment]:
    """Build segments from (text, start_ms, end_ms) triples."""
    return [
        Segment(id=f"w{i}", type=type, text=text, start_ms=start, end_ms=end)
        for i, (text, start, end) in enumerate(items)
    ]


def seg(id: str, type: str, text: str, start: float, end: float, **kwargs) -> Segment:
    return Segment(id=id, type=type, text=text, start_ms=start, end_ms=end, **kwargs)


@pytest.fixture
def make_oracle() -> Callable[..., ScriptedOracle]:
    return ScriptedOracle


@pytest.fixture
def chinese_transcript() -> list[Segment]:
    """Word-level transcript of two short paragraphs with one short and one long pause."""
    return [
        seg("s1", "word", "城市", 0, 300, speaker_id="speaker_0", confidence=-0.1),
        seg("s2", "word", "噪音", 300, 600, speaker_id="speaker_0"),
        seg("s3", "word", "日益严重。", 600, 1200, speaker_id="speaker_0"),
        seg("s4", "spacing", " ", 1200, 1250),
        seg("s5", "word", "我们", 1250, 1500, speaker_id="speaker_0"),
        seg("s6", "word", "应该行动。", 1500, 2000, speaker_id="speaker_0"),
        seg("s7", "spacing", " ", 2000, 3000),
        seg("s8", "word", "例如，", 3000, 3400, speaker_id="speaker_1"),
        seg("s9", "word", "某社区", 3400, 3800, speaker_id="speaker_1"),
    ]


CHINESE_PARAGRAPHS = ["城市噪音日益严重。我们应该行动。", "例如，某社区"]
CHINESE_UNITS = {
    "城市噪音日益严重。我们应该行动。": [[("城市噪音日益严重。", "BG"), ("我们应该行动。", "IM")]],
    "例如，某社区": [[("例如，某社区", "EX")]],
}

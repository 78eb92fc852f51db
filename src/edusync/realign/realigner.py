"""Word realignment: map time-coded words onto discourse units and merge them.

Pass 1 walks the word segments through a small state machine that consumes
each unit's text word by word. Pass 2 merges consecutive words of the same
unit into one segment and passes every other segment through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from edusync.errors import RealignmentMismatchError
from edusync.models.discourse import DiscourseUnit, TimedUnit
from edusync.models.transcript import RealignedSegment, Segment
from edusync.utils.progress import log_step, log_warning

ACCUMULATING = "accumulating"
UNIT_COMPLETE = "unit_complete"
FAILED = "failed"


@dataclass(frozen=True)
class RealignState:
    """Position of the mapping pass inside the unit sequence."""

    unit_index: int = 0
    accumulated: str = ""
    status: str = ACCUMULATING
    assigned_unit: int | None = None
    word_index: int | None = None
    detail: str = ""


def advance(
    state: RealignState,
    word_index: int,
    text: str,
    units: list[DiscourseUnit],
) -> RealignState:
    """Consume one word. Pure: returns the next state, never raises.

    An empty word is a prefix of any unit, so between units it opens the
    next one; after the last unit it fails like any other word.
    """
    if state.unit_index >= len(units):
        return replace(
            state,
            status=FAILED,
            word_index=word_index,
            detail=f"ran out of discourse units at word {text!r}",
        )

    content = units[state.unit_index].content
    candidate = state.accumulated + text

    if content == candidate:
        return RealignState(
            unit_index=state.unit_index + 1,
            status=UNIT_COMPLETE,
            assigned_unit=state.unit_index,
            word_index=word_index,
        )
    if content.startswith(candidate):
        return RealignState(
            unit_index=state.unit_index,
            accumulated=candidate,
            status=ACCUMULATING,
            assigned_unit=state.unit_index,
            word_index=word_index,
        )
    return replace(
        state,
        status=FAILED,
        word_index=word_index,
        detail=(
            f"word {text!r} does not continue unit {state.unit_index}: "
            f"accumulated {state.accumulated!r}, unit content {content!r}"
        ),
    )


def map_words_to_units(
    segments: list[Segment],
    units: list[DiscourseUnit],
) -> tuple[dict[int, int], RealignState]:
    """Map each word segment's position to a unit position.

    Stops at the first failure; the final state tells whether the mapping
    is complete.
    """
    mapping: dict[int, int] = {}
    state = RealignState()
    for i, seg in enumerate(segments):
        if not seg.is_word:
            continue
        state = advance(state, i, seg.text, units)
        if state.status == FAILED:
            break
        mapping[i] = state.assigned_unit
    return mapping, state


def realign_segments(
    segments: list[Segment],
    units: list[DiscourseUnit],
) -> list[RealignedSegment]:
    """Merge word segments into one time-coded segment per unit run.

    Raises RealignmentMismatchError if the words do not spell out the units.
    """
    mapping, state = map_words_to_units(segments, units)

    if state.status == FAILED:
        raise RealignmentMismatchError(
            f"Word stream does not match discourse units: {state.detail}",
            unit_index=state.unit_index,
            word_index=state.word_index if state.word_index is not None else -1,
        )
    if state.accumulated:
        raise RealignmentMismatchError(
            f"Word stream ended inside unit {state.unit_index}: "
            f"only {state.accumulated!r} of {units[state.unit_index].content!r}",
            unit_index=state.unit_index,
            word_index=state.word_index if state.word_index is not None else -1,
        )
    if state.unit_index < len(units):
        log_warning(
            f"{len(units) - state.unit_index} discourse unit(s) received no words"
        )

    realigned = _merge_runs(segments, mapping, units)
    log_step(
        "Realign",
        f"{len(mapping)} word(s) merged into "
        f"{sum(1 for s in realigned if s.unit_index is not None)} unit segment(s)",
    )
    return realigned


def _merge_runs(
    segments: list[Segment],
    mapping: dict[int, int],
    units: list[DiscourseUnit],
) -> list[RealignedSegment]:
    realigned: list[RealignedSegment] = []
    i = 0
    while i < len(segments):
        seg = segments[i]
        seg_id = f"segment-{len(realigned)}"

        if not seg.is_word:
            realigned.append(RealignedSegment(**{**seg.model_dump(), "id": seg_id}))
            i += 1
            continue

        position = mapping[i]
        j = i + 1
        while j < len(segments) and segments[j].is_word and mapping[j] == position:
            j += 1

        run = segments[i:j]
        first, last = run[0], run[-1]
        unit_index = units[position].global_index
        realigned.append(RealignedSegment(
            id=seg_id,
            type=first.type,
            text="".join(w.text for w in run),
            start_ms=first.start_ms,
            end_ms=last.end_ms,
            speaker_id=first.speaker_id,
            confidence=first.confidence,
            unit_index=position if unit_index is None else unit_index,
        ))
        i = j

    return realigned


def build_timed_units(
    units: list[DiscourseUnit],
    realigned: list[RealignedSegment],
) -> list[TimedUnit]:
    """Attach the time span of its realigned segments to every populated unit."""
    by_unit: dict[int, list[RealignedSegment]] = {}
    for seg in realigned:
        if seg.unit_index is not None:
            by_unit.setdefault(seg.unit_index, []).append(seg)

    timed: list[TimedUnit] = []
    for position, unit in enumerate(units):
        index = position if unit.global_index is None else unit.global_index
        segs = by_unit.get(index)
        if not segs:
            continue
        timed.append(TimedUnit(
            global_index=index,
            tag=unit.tag,
            content=unit.content,
            start_ms=min(s.start_ms for s in segs),
            end_ms=max(s.end_ms for s in segs),
            segment_ids=[s.id for s in segs],
        ))
    return timed

"""Tests for realigning time-coded words onto discourse units."""

from collections import Counter

import pytest

from edusync.errors import RealignmentMismatchError
from edusync.models.discourse import DiscourseUnit
from edusync.realign.realigner import (
    ACCUMULATING,
    FAILED,
    UNIT_COMPLETE,
    RealignState,
    advance,
    build_timed_units,
    map_words_to_units,
    realign_segments,
)

from conftest import seg, words


def units_of(*contents, tags=None):
    tags = tags or ["CL"] * len(contents)
    return [
        DiscourseUnit(content=c, tag=t, global_index=i)
        for i, (c, t) in enumerate(zip(contents, tags))
    ]


def collapsed_chinese():
    """The Chinese fixture after its 50 ms pause has been collapsed."""
    return [
        seg("s1", "word", "城市", 0, 300, speaker_id="speaker_0", confidence=-0.1),
        seg("s2", "word", "噪音", 300, 600, speaker_id="speaker_0"),
        seg("s3", "word", "日益严重。", 600, 1225, speaker_id="speaker_0"),
        seg("s5", "word", "我们", 1225, 1500, speaker_id="speaker_0"),
        seg("s6", "word", "应该行动。", 1500, 2000, speaker_id="speaker_0"),
        seg("s7", "spacing", " ", 2000, 3000),
        seg("s8", "word", "例如，", 3000, 3400, speaker_id="speaker_1"),
        seg("s9", "word", "某社区", 3400, 3800, speaker_id="speaker_1"),
    ]


CHINESE = units_of("城市噪音日益严重。", "我们应该行动。", "例如，某社区", tags=["BG", "IM", "EX"])


class TestRealignSegments:

    def test_subword_pieces_merge_into_one_segment(self):
        segments = words(("Hel", 0, 100), ("lo", 100, 200), (" world", 200, 400))
        realigned = realign_segments(segments, units_of("Hello world"))

        assert len(realigned) == 1
        assert (realigned[0].text, realigned[0].start_ms, realigned[0].end_ms) == (
            "Hello world", 0, 400,
        )

    def test_words_merged_per_unit(self):
        realigned = realign_segments(collapsed_chinese(), CHINESE)

        assert [(s.text, s.start_ms, s.end_ms, s.unit_index) for s in realigned] == [
            ("城市噪音日益严重。", 0, 1225, 0),
            ("我们应该行动。", 1225, 2000, 1),
            (" ", 2000, 3000, None),
            ("例如，某社区", 3000, 3800, 2),
        ]
        assert [s.id for s in realigned] == [f"segment-{i}" for i in range(4)]

    def test_metadata_from_first_word(self):
        realigned = realign_segments(collapsed_chinese(), CHINESE)

        assert realigned[0].speaker_id == "speaker_0"
        assert realigned[0].confidence == -0.1
        assert realigned[3].speaker_id == "speaker_1"
        assert realigned[0].type == "word"

    def test_spacing_passes_through(self):
        realigned = realign_segments(collapsed_chinese(), CHINESE)

        spacing = realigned[2]
        assert spacing.type == "spacing"
        assert spacing.text == " "
        assert spacing.unit_index is None

    def test_no_characters_lost_or_added(self):
        segments = collapsed_chinese()
        realigned = realign_segments(segments, CHINESE)

        before = Counter("".join(s.text for s in segments if s.is_word))
        after = Counter("".join(s.text for s in realigned if s.is_word))
        assert before == after

    def test_spacing_inside_unit_splits_the_run(self):
        segments = [
            seg("a", "word", "Hi ", 0, 100),
            seg("b", "spacing", " ", 100, 800),
            seg("c", "word", "there.", 800, 1000),
        ]
        realigned = realign_segments(segments, units_of("Hi there."))

        assert [(s.id, s.text, s.unit_index) for s in realigned] == [
            ("segment-0", "Hi ", 0),
            ("segment-1", " ", None),
            ("segment-2", "there.", 0),
        ]

    def test_empty_word_between_units_opens_next_unit(self):
        segments = words(("Hi. ", 0, 100), ("", 100, 150), ("Go.", 150, 300))
        realigned = realign_segments(segments, units_of("Hi. ", "Go."))

        assert [(s.text, s.start_ms, s.end_ms, s.unit_index) for s in realigned] == [
            ("Hi. ", 0, 100, 0),
            ("Go.", 100, 300, 1),
        ]

    def test_empty_word_after_last_unit_raises(self):
        segments = words(("Hi.", 0, 100), ("", 100, 150))

        with pytest.raises(RealignmentMismatchError) as excinfo:
            realign_segments(segments, units_of("Hi."))
        assert "ran out" in str(excinfo.value)
        assert excinfo.value.word_index == 1

    def test_units_without_global_index_use_position(self):
        units = [DiscourseUnit(content="Hi. ", tag="CL"), DiscourseUnit(content="Go.", tag="EV")]
        realigned = realign_segments(words(("Hi. ", 0, 1), ("Go.", 1, 2)), units)
        assert [s.unit_index for s in realigned] == [0, 1]

    def test_mismatching_word_raises(self):
        segments = words(("Hi ", 0, 100), ("their.", 100, 200))

        with pytest.raises(RealignmentMismatchError) as excinfo:
            realign_segments(segments, units_of("Hi there."))

        assert excinfo.value.unit_index == 0
        assert excinfo.value.word_index == 1
        assert excinfo.value.stage == "realign"

    def test_extra_words_after_last_unit_raise(self):
        segments = words(("Hi.", 0, 100), ("Extra", 100, 200))

        with pytest.raises(RealignmentMismatchError) as excinfo:
            realign_segments(segments, units_of("Hi."))
        assert "ran out" in str(excinfo.value)

    def test_words_ending_mid_unit_raise(self):
        with pytest.raises(RealignmentMismatchError):
            realign_segments(words(("Hi ", 0, 100)), units_of("Hi there."))

    def test_unpopulated_trailing_unit_tolerated(self):
        realigned = realign_segments(words(("Hi.", 0, 100)), units_of("Hi.", "Bye."))
        assert [s.unit_index for s in realigned] == [0]


class TestWordMapping:

    def test_mapping_skips_non_words(self):
        mapping, state = map_words_to_units(collapsed_chinese(), CHINESE)

        assert mapping == {0: 0, 1: 0, 2: 0, 3: 1, 4: 1, 6: 2, 7: 2}
        assert state.status == UNIT_COMPLETE
        assert state.unit_index == 3

    def test_mapping_stops_at_failure(self):
        mapping, state = map_words_to_units(
            words(("Hi ", 0, 1), ("no", 1, 2), ("there.", 2, 3)),
            units_of("Hi there."),
        )
        assert mapping == {0: 0}
        assert state.status == FAILED
        assert state.word_index == 1


class TestAdvance:

    def test_prefix_accumulates(self):
        state = advance(RealignState(), 0, "Hi ", units_of("Hi there."))
        assert state.status == ACCUMULATING
        assert state.accumulated == "Hi "
        assert state.assigned_unit == 0

    def test_exact_match_completes_unit(self):
        state = RealignState(accumulated="Hi ")
        state = advance(state, 1, "there.", units_of("Hi there.", "Go."))
        assert state.status == UNIT_COMPLETE
        assert state.unit_index == 1
        assert state.accumulated == ""
        assert state.assigned_unit == 0

    def test_divergence_fails_without_raising(self):
        state = advance(RealignState(), 0, "Ho", units_of("Hi."))
        assert state.status == FAILED
        assert "does not continue unit 0" in state.detail

    def test_state_is_immutable(self):
        initial = RealignState()
        advance(initial, 0, "Hi ", units_of("Hi there."))
        assert initial.accumulated == ""


class TestTimedUnits:

    def test_spans_and_segment_ids(self):
        realigned = realign_segments(collapsed_chinese(), CHINESE)
        timed = build_timed_units(CHINESE, realigned)

        assert [(t.global_index, t.start_ms, t.end_ms) for t in timed] == [
            (0, 0, 1225), (1, 1225, 2000), (2, 3000, 3800),
        ]
        assert timed[0].segment_ids == ["segment-0"]
        assert timed[2].segment_ids == ["segment-3"]
        assert timed[2].content == "例如，某社区"

    def test_unit_split_by_spacing_spans_both_runs(self):
        segments = [
            seg("a", "word", "Hi ", 0, 100),
            seg("b", "spacing", " ", 100, 800),
            seg("c", "word", "there.", 800, 1000),
        ]
        units = units_of("Hi there.")
        timed = build_timed_units(units, realign_segments(segments, units))

        assert len(timed) == 1
        assert (timed[0].start_ms, timed[0].end_ms) == (0, 1000)
        assert timed[0].segment_ids == ["segment-0", "segment-2"]

    def test_unpopulated_units_skipped(self):
        units = units_of("Hi.", "Bye.")
        timed = build_timed_units(units, realign_segments(words(("Hi.", 0, 100)), units))
        assert [t.global_index for t in timed] == [0]

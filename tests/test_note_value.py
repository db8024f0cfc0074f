"""Tests for note_value — grid classification and note durations."""

from __future__ import annotations

import pytest

from midi_piano_roll.core.note_value import (
    NoteValue,
    duration_for_note_value,
    note_value_tag,
)
from midi_piano_roll.core.position import ZERO, PianoRollPosition

P = PianoRollPosition


class TestNoteValueTag:
    def test_zero_is_whole(self):
        assert note_value_tag(ZERO) is NoteValue.WHOLE

    def test_bar_lines_are_whole(self):
        assert note_value_tag(P(3)) is NoteValue.WHOLE

    def test_half(self):
        assert note_value_tag(P(0, 2)) is NoteValue.HALF
        assert note_value_tag(P(5, 2)) is NoteValue.HALF

    @pytest.mark.parametrize("beat", [1, 3])
    def test_quarter(self, beat):
        assert note_value_tag(P(0, beat)) is NoteValue.QUARTER

    @pytest.mark.parametrize("beat", [0, 1, 2, 3])
    def test_eighth(self, beat):
        assert note_value_tag(P(0, beat, 2)) is NoteValue.EIGHTH

    def test_thirtysecond(self):
        assert note_value_tag(P(0, 1, 3, 120)) is NoteValue.THIRTYSECOND

    def test_sixtyfourth(self):
        assert note_value_tag(P(2, 0, 1, 60)) is NoteValue.SIXTYFOURTH

    def test_no_tag(self):
        assert note_value_tag(P(0, 1, 0, 30)) is None
        assert note_value_tag(P(0, 0, 0, 180)) is None
        assert note_value_tag(P(0, 0, 1, 0)) is None
        assert note_value_tag(P(0, 0, 3, 0)) is None

    def test_never_classifies_sixteenth_or_double_whole(self):
        tags = {
            note_value_tag(P(bar, beat, sub, cent))
            for bar in range(3)
            for beat in range(4)
            for sub in range(4)
            for cent in (0, 60, 120, 180)
        }
        assert NoteValue.SIXTEENTH not in tags
        assert NoteValue.DOUBLE_WHOLE not in tags

    def test_position_property(self):
        assert P(0, 2).note_value is NoteValue.HALF
        assert P(0, 0, 0, 7).note_value is None


class TestDuration:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            (NoteValue.DOUBLE_WHOLE, P(2)),
            (NoteValue.WHOLE, P(1)),
            (NoteValue.HALF, P(0, 2)),
            (NoteValue.QUARTER, P(0, 1)),
            (NoteValue.EIGHTH, P(0, 0, 2)),
            (NoteValue.SIXTEENTH, P(0, 0, 1)),
            (NoteValue.THIRTYSECOND, P(0, 0, 0, 120)),
            (NoteValue.SIXTYFOURTH, P(0, 0, 0, 60)),
        ],
    )
    def test_table(self, tag, expected):
        assert duration_for_note_value(tag) == expected
        assert tag.duration == expected

    def test_halving(self):
        ordered = [
            NoteValue.DOUBLE_WHOLE,
            NoteValue.WHOLE,
            NoteValue.HALF,
            NoteValue.QUARTER,
            NoteValue.EIGHTH,
            NoteValue.SIXTEENTH,
            NoteValue.THIRTYSECOND,
            NoteValue.SIXTYFOURTH,
        ]
        for longer, shorter in zip(ordered, ordered[1:]):
            assert longer.duration.total_cents == 2 * shorter.duration.total_cents

    def test_returns_fresh_value(self):
        d = duration_for_note_value(NoteValue.WHOLE)
        d.flatten()
        d.bar = 9
        assert duration_for_note_value(NoteValue.WHOLE) == P(1)

"""Note value tags and their piano roll durations.

The two directions are deliberately not symmetric: ``note_value_tag`` only
recognizes the exact field patterns used for grid labeling, while
``duration_for_note_value`` covers every tag, including ``DOUBLE_WHOLE`` and
``SIXTEENTH`` which are never produced by classification.
"""

from __future__ import annotations

from enum import Enum

from .position import PianoRollPosition


class NoteValue(Enum):
    """Canonical note lengths, valued by their step label."""

    DOUBLE_WHOLE = "2/1"
    WHOLE = "1/1"
    HALF = "1/2"
    QUARTER = "1/4"
    EIGHTH = "1/8"
    SIXTEENTH = "1/16"
    THIRTYSECOND = "1/32"
    SIXTYFOURTH = "1/64"

    @property
    def duration(self) -> PianoRollPosition:
        return duration_for_note_value(self)


# tag → (bar, beat, subbeat, cent)
_DURATIONS: dict[NoteValue, tuple[int, int, int, int]] = {
    NoteValue.DOUBLE_WHOLE: (2, 0, 0, 0),
    NoteValue.WHOLE: (1, 0, 0, 0),
    NoteValue.HALF: (0, 2, 0, 0),
    NoteValue.QUARTER: (0, 1, 0, 0),
    NoteValue.EIGHTH: (0, 0, 2, 0),
    NoteValue.SIXTEENTH: (0, 0, 1, 0),
    NoteValue.THIRTYSECOND: (0, 0, 0, 120),
    NoteValue.SIXTYFOURTH: (0, 0, 0, 60),
}


def note_value_tag(position: PianoRollPosition) -> NoteValue | None:
    """Classify a grid position by the note value its line represents.

    First match wins; anything off the table has no tag.
    """
    beat, subbeat, cent = position.beat, position.subbeat, position.cent
    if beat == 0 and subbeat == 0 and cent == 0:
        return NoteValue.WHOLE
    if beat == 2 and subbeat == 0 and cent == 0:
        return NoteValue.HALF
    if subbeat == 0 and cent == 0:
        return NoteValue.QUARTER
    if subbeat == 2 and cent == 0:
        return NoteValue.EIGHTH
    if cent == 120:
        return NoteValue.THIRTYSECOND
    if cent == 60:
        return NoteValue.SIXTYFOURTH
    return None


def duration_for_note_value(tag: NoteValue) -> PianoRollPosition:
    """Grid duration of one note of the given value."""
    return PianoRollPosition(*_DURATIONS[tag])

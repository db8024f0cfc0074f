"""Shared test fixtures."""

from __future__ import annotations

import pytest

from midi_piano_roll.core.note import PianoRollNote
from midi_piano_roll.core.note_catalog import NoteCatalog
from midi_piano_roll.core.position import PianoRollPosition
from midi_piano_roll.core.tempo import Tempo


@pytest.fixture
def scale_catalog():
    """C major scale, one quarter note per step, over two bars."""
    pitches = [60, 62, 64, 65, 67, 69, 71, 72]
    return NoteCatalog(
        PianoRollNote(p, position=PianoRollPosition(i // 4, i % 4), duration=PianoRollPosition(0, 1))
        for i, p in enumerate(pitches)
    )


@pytest.fixture
def tempo():
    return Tempo(120.0)

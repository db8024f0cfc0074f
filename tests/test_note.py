"""Tests for note — identity vs value equality, MIDI messages."""

from __future__ import annotations

import pytest

from midi_piano_roll.core.note import PianoRollNote
from midi_piano_roll.core.position import PianoRollPosition

P = PianoRollPosition


class TestPianoRollNote:
    def test_defaults(self):
        n = PianoRollNote(pitch=60)
        assert n.velocity == 100
        assert n.position == P()
        assert n.duration == P(0, 1)
        assert n.uid

    def test_unique_ids(self):
        assert PianoRollNote(60).uid != PianoRollNote(60).uid

    @pytest.mark.parametrize("pitch", [-1, 128])
    def test_invalid_pitch(self, pitch):
        with pytest.raises(ValueError):
            PianoRollNote(pitch=pitch)

    @pytest.mark.parametrize("velocity", [-1, 128])
    def test_invalid_velocity(self, velocity):
        with pytest.raises(ValueError):
            PianoRollNote(pitch=60, velocity=velocity)

    def test_end(self):
        n = PianoRollNote(60, position=P(1, 3, 2), duration=P(0, 0, 3))
        assert n.end == P(2, 0, 1)


class TestEquality:
    def test_identity_equality(self):
        a = PianoRollNote(60, 100, P(1), P(0, 1))
        b = PianoRollNote(60, 100, P(1), P(0, 1))
        assert a != b
        assert a.same_values(b)

    def test_moved_note_is_same_note(self):
        a = PianoRollNote(60, 100, P(1), P(0, 1))
        snapshot = PianoRollNote(a.pitch, a.velocity, a.position, a.duration, uid=a.uid)
        a.position = P(3)
        assert a == snapshot
        assert not a.same_values(snapshot)

    def test_value_equality_fields(self):
        a = PianoRollNote(60, 100, P(1), P(0, 1))
        assert not a.same_values(PianoRollNote(61, 100, P(1), P(0, 1)))
        assert not a.same_values(PianoRollNote(60, 90, P(1), P(0, 1)))
        assert not a.same_values(PianoRollNote(60, 100, P(2), P(0, 1)))
        assert not a.same_values(PianoRollNote(60, 100, P(1), P(0, 2)))

    def test_hashable_by_uid(self):
        a = PianoRollNote(60)
        assert len({a, a, PianoRollNote(60)}) == 2


class TestMessages:
    def test_note_on(self):
        msg = PianoRollNote(64, velocity=90).note_on(channel=2)
        assert msg.type == "note_on"
        assert (msg.note, msg.velocity, msg.channel) == (64, 90, 2)

    def test_note_off(self):
        msg = PianoRollNote(64, velocity=90).note_off()
        assert msg.type == "note_off"
        assert (msg.note, msg.velocity, msg.channel) == (64, 0, 0)

    def test_invalid_channel(self):
        with pytest.raises(ValueError):
            PianoRollNote(60).note_on(channel=16)


class TestDict:
    def test_round_trip(self):
        n = PianoRollNote(72, 80, P(2, 1, 0, 60), P(0, 0, 2))
        back = PianoRollNote.from_dict(n.to_dict())
        assert back == n
        assert back.same_values(n)

    def test_missing_uid_gets_new_one(self):
        data = {"pitch": 60, "position": [0, 0, 0, 0], "duration": [0, 1, 0, 0]}
        n = PianoRollNote.from_dict(data)
        assert n.uid
        assert n.velocity == 100

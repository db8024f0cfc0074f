"""A single note cell on the piano roll grid."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

import mido

from .constants import DEFAULT_VELOCITY, MIDI_CHANNEL_MAX, MIDI_MAX, MIDI_MIN
from .position import PianoRollPosition


def _check_midi(name: str, value: int) -> None:
    if not MIDI_MIN <= value <= MIDI_MAX:
        raise ValueError(f"{name} must be in {MIDI_MIN}-{MIDI_MAX}, got {value}")


def check_channel(channel: int) -> None:
    if not 0 <= channel <= MIDI_CHANNEL_MAX:
        raise ValueError(f"channel must be in 0-{MIDI_CHANNEL_MAX}, got {channel}")


@dataclass(eq=False)
class PianoRollNote:
    """A MIDI note placed on the grid.

    ``==`` is identity equality: two notes are equal when they share a
    ``uid``, so a moved note is still the same note.  Use
    :meth:`same_values` to compare pitch, velocity, position and duration.
    """

    pitch: int
    velocity: int = DEFAULT_VELOCITY
    position: PianoRollPosition = field(default_factory=PianoRollPosition)
    duration: PianoRollPosition = field(
        default_factory=lambda: PianoRollPosition(beat=1),
    )
    uid: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        _check_midi("pitch", self.pitch)
        _check_midi("velocity", self.velocity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PianoRollNote):
            return NotImplemented
        return self.uid == other.uid

    def __hash__(self) -> int:
        return hash(self.uid)

    def same_values(self, other: PianoRollNote) -> bool:
        return (
            self.pitch == other.pitch
            and self.velocity == other.velocity
            and self.position == other.position
            and self.duration == other.duration
        )

    @property
    def end(self) -> PianoRollPosition:
        return self.position + self.duration

    def note_on(self, channel: int = 0) -> mido.Message:
        check_channel(channel)
        return mido.Message(
            "note_on", note=self.pitch, velocity=self.velocity, channel=channel,
        )

    def note_off(self, channel: int = 0) -> mido.Message:
        check_channel(channel)
        return mido.Message("note_off", note=self.pitch, velocity=0, channel=channel)

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "pitch": self.pitch,
            "velocity": self.velocity,
            "position": self.position.to_list(),
            "duration": self.duration.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PianoRollNote:
        kwargs = {}
        if "uid" in data:
            kwargs["uid"] = data["uid"]
        return cls(
            pitch=data["pitch"],
            velocity=data.get("velocity", DEFAULT_VELOCITY),
            position=PianoRollPosition.from_list(data["position"]),
            duration=PianoRollPosition.from_list(data["duration"]),
            **kwargs,
        )

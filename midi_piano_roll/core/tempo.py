"""Tempo and time signature, and the position → seconds mapping used on export.

Only the MIDI export path works in wall-clock time; the editor itself stays on
the integer grid.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import CENTS_PER_SUBBEAT, DEFAULT_TEMPO, SUBBEATS_PER_BEAT
from .position import PianoRollPosition


@dataclass(frozen=True, slots=True)
class TimeSignature:
    """Beats per bar over the note value that gets one beat."""

    beats: int = 4
    note_value: int = 4

    def __post_init__(self) -> None:
        if self.beats <= 0:
            raise ValueError(f"beats must be positive, got {self.beats}")
        if self.note_value <= 0 or self.note_value & (self.note_value - 1):
            raise ValueError(f"note_value must be a power of two, got {self.note_value}")

    def __str__(self) -> str:
        return f"{self.beats}/{self.note_value}"


@dataclass(frozen=True, slots=True)
class Tempo:
    """Tempo in beats per minute under a time signature.

    ``bpm`` counts the signature's note value (quarters in 4/4, eighths in
    6/8).  A bar always lasts one whole note and is split evenly into the
    signature's beats, so the grid's beat field is ``1 / beats`` of a bar.
    """

    bpm: float = DEFAULT_TEMPO
    time_signature: TimeSignature = field(default_factory=TimeSignature)

    def __post_init__(self) -> None:
        if self.bpm <= 0:
            raise ValueError(f"bpm must be positive, got {self.bpm}")

    @property
    def whole_note_seconds(self) -> float:
        return 60.0 / self.bpm * self.time_signature.note_value

    @property
    def bar_seconds(self) -> float:
        return self.whole_note_seconds

    @property
    def beat_seconds(self) -> float:
        return self.whole_note_seconds / self.time_signature.beats

    def seconds(self, position: PianoRollPosition) -> float:
        """Wall-clock offset of ``position`` from the start of the roll."""
        subbeat_seconds = self.beat_seconds / SUBBEATS_PER_BEAT
        cent_seconds = subbeat_seconds / CENTS_PER_SUBBEAT
        return (
            self.bar_seconds * position.bar
            + self.beat_seconds * position.beat
            + subbeat_seconds * position.subbeat
            + cent_seconds * position.cent
        )


def to_seconds(position: PianoRollPosition, bpm: float, beats_per_bar: int) -> float:
    """Seconds from zero to ``position`` at ``bpm`` (quarter-note beats) with
    ``beats_per_bar`` beats in each bar."""
    return Tempo(bpm, TimeSignature(beats=beats_per_bar)).seconds(position)

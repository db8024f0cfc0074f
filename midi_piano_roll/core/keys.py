"""Row keys: which pitches the piano roll shows, top row first."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import MIDI_MAX, MIDI_MIN

_NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Scale interval presets (semitones from the root)
SCALES: dict[str, tuple[int, ...]] = {
    "chromatic": tuple(range(12)),
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),
    "pentatonic": (0, 2, 4, 7, 9),
}


def pitch_name(midi_note: int) -> str:
    """Row header label, e.g. 60 → ``"C4"``."""
    octave = midi_note // 12 - 1
    return f"{_NOTE_NAMES[midi_note % 12]}{octave}"


@dataclass(frozen=True)
class Keys:
    """Pitches rendered as rows, held sorted high → low."""

    pitches: tuple[int, ...]

    def __post_init__(self) -> None:
        for p in self.pitches:
            if not MIDI_MIN <= p <= MIDI_MAX:
                raise ValueError(f"pitch must be in {MIDI_MIN}-{MIDI_MAX}, got {p}")
        object.__setattr__(self, "pitches", tuple(sorted(set(self.pitches), reverse=True)))

    @classmethod
    def ranged(cls, low: int = MIDI_MIN, high: int = MIDI_MAX) -> Keys:
        if low > high:
            raise ValueError(f"low pitch {low} is above high pitch {high}")
        return cls(tuple(range(low, high + 1)))

    @classmethod
    def custom(cls, pitches: list[int]) -> Keys:
        return cls(tuple(pitches))

    @classmethod
    def scale(
        cls, root: int, scale: str = "major", min_octave: int = 3, max_octave: int = 5,
    ) -> Keys:
        """Every pitch of ``scale`` on ``root`` (0 = C) between two octaves."""
        intervals = SCALES[scale]
        pitches = [
            (octave + 1) * 12 + root + step
            for octave in range(min_octave, max_octave + 1)
            for step in intervals
        ]
        return cls(tuple(p for p in pitches if MIDI_MIN <= p <= MIDI_MAX))

    def __len__(self) -> int:
        return len(self.pitches)

    def row_of(self, pitch: int) -> int | None:
        """Row index of ``pitch`` (0 = top), or None when it has no row."""
        try:
            return self.pitches.index(pitch)
        except ValueError:
            return None

    def pitch_at(self, row: int) -> int | None:
        if 0 <= row < len(self.pitches):
            return self.pitches[row]
        return None

    @property
    def labels(self) -> list[str]:
        return [pitch_name(p) for p in self.pitches]

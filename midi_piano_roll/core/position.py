"""Piano roll position model: bar.beat.subbeat.cent.

Pure Python, no GUI dependency.  A position (or a duration, which uses the
same type) is a non-negative time value written in mixed radix:

    bar      unbounded
    beat     0-3    (4 per bar)
    subbeat  0-3    (4 per beat)
    cent     0-239  (240 per subbeat)

All grid arithmetic is integer.  Floats only appear at the pixel and seconds
boundary (see ``grid`` and ``tempo``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import (
    BEATS_PER_BAR,
    CENTS_PER_BAR,
    CENTS_PER_BEAT,
    CENTS_PER_SUBBEAT,
    SUBBEATS_PER_BEAT,
)

if TYPE_CHECKING:
    from .note_value import NoteValue
    from .tempo import Tempo


class PositionError(ValueError):
    """Raised when a position is built from negative field values."""


def _carry(bar: int, beat: int, subbeat: int, cent: int) -> tuple[int, int, int, int]:
    """Renormalize fields into range, carrying (or borrowing) cent → bar.

    Floor division makes negative digits borrow from the next coarser field,
    so only ``bar`` can end up negative.
    """
    carry, cent = divmod(cent, CENTS_PER_SUBBEAT)
    carry, subbeat = divmod(subbeat + carry, SUBBEATS_PER_BEAT)
    carry, beat = divmod(beat + carry, BEATS_PER_BAR)
    return bar + carry, beat, subbeat, cent


@dataclass(order=True, slots=True)
class PianoRollPosition:
    """A position or duration on the piano roll grid.

    Ordering is lexicographic on (bar, beat, subbeat, cent).  Values are
    immutable by convention: arithmetic always returns a new position, and
    :meth:`flatten` is the only method that changes a position in place, which
    is why positions are not hashable; use ``tuple(p.to_list())`` as a key.

    Negative fields raise :class:`PositionError`.  Fields larger than their
    radix are carried on construction, so ``PianoRollPosition(1, 4, 2, 232)``
    is stored as ``2.0.2.232``.
    """

    bar: int = 0
    beat: int = 0
    subbeat: int = 0
    cent: int = 0

    def __post_init__(self) -> None:
        for name in ("bar", "beat", "subbeat", "cent"):
            value = getattr(self, name)
            if value < 0:
                raise PositionError(f"{name} must be >= 0, got {value}")
        self.bar, self.beat, self.subbeat, self.cent = _carry(
            self.bar, self.beat, self.subbeat, self.cent,
        )

    # ── Construction ────────────────────────────────────────

    @classmethod
    def from_cents(cls, cents: int) -> PianoRollPosition:
        """Build a position from a flat cent count (clamped at zero)."""
        if cents <= 0:
            return cls()
        return cls(cent=cents)

    @property
    def total_cents(self) -> int:
        """The position as a single cent count."""
        return (
            self.bar * CENTS_PER_BAR
            + self.beat * CENTS_PER_BEAT
            + self.subbeat * CENTS_PER_SUBBEAT
            + self.cent
        )

    # ── Arithmetic ──────────────────────────────────────────

    def __add__(self, other: PianoRollPosition) -> PianoRollPosition:
        if not isinstance(other, PianoRollPosition):
            return NotImplemented
        # Operands are non-negative, the constructor carries the sums
        return PianoRollPosition(
            self.bar + other.bar,
            self.beat + other.beat,
            self.subbeat + other.subbeat,
            self.cent + other.cent,
        )

    def __sub__(self, other: PianoRollPosition) -> PianoRollPosition:
        """Saturating subtraction: anything below zero becomes zero."""
        if not isinstance(other, PianoRollPosition):
            return NotImplemented
        bar, beat, subbeat, cent = _carry(
            self.bar - other.bar,
            self.beat - other.beat,
            self.subbeat - other.subbeat,
            self.cent - other.cent,
        )
        if bar < 0:
            return PianoRollPosition()
        return PianoRollPosition(bar, beat, subbeat, cent)

    def next(self) -> PianoRollPosition:
        """Position one cent later."""
        return self + _ONE_CENT

    def previous(self) -> PianoRollPosition:
        """Position one cent earlier, floored at zero."""
        return self - _ONE_CENT

    # ── Grid helpers ────────────────────────────────────────

    @property
    def is_bar_position(self) -> bool:
        """True if the position falls exactly on a bar line."""
        return self.beat == 0 and self.subbeat == 0 and self.cent == 0

    def flatten(self) -> None:
        """Snap to the enclosing bar by zeroing beat, subbeat and cent."""
        self.beat = 0
        self.subbeat = 0
        self.cent = 0

    @property
    def note_value(self) -> NoteValue | None:
        """Note value tag of the position, or None (see ``note_value_tag``)."""
        from .note_value import note_value_tag

        return note_value_tag(self)

    def seconds(self, tempo: Tempo) -> float:
        """Wall-clock offset of the position at ``tempo``."""
        return tempo.seconds(self)

    def to_list(self) -> list[int]:
        return [self.bar, self.beat, self.subbeat, self.cent]

    @classmethod
    def from_list(cls, values: list[int]) -> PianoRollPosition:
        bar, beat, subbeat, cent = values
        return cls(bar, beat, subbeat, cent)

    def __str__(self) -> str:
        if self.beat == 0 and self.subbeat == 0 and self.cent == 0:
            return f"{self.bar}"
        if self.subbeat == 0 and self.cent == 0:
            return f"{self.bar}.{self.beat}"
        if self.cent == 0:
            return f"{self.bar}.{self.beat}.{self.subbeat}"
        return f"{self.bar}.{self.beat}.{self.subbeat}.{self.cent}"


_ONE_CENT = PianoRollPosition(cent=1)

# Shared zero value.  Do not flatten or assign to it; use PianoRollPosition()
# when a fresh instance is needed.
ZERO = PianoRollPosition()


def compare(a: PianoRollPosition, b: PianoRollPosition) -> int:
    """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def to_display_string(position: PianoRollPosition) -> str:
    """Shortest dotted form of a position, e.g. ``"3"`` or ``"1.2"``."""
    return str(position)

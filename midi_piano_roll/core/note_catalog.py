"""Ordered note collection behind the piano roll, with selection and edits.

Pure Python, no GUI dependency.  The gesture layer reports finished moves and
resizes as grid values (see ``grid.GridGeometry.position_at``); the catalog
applies them and keeps notes in insertion order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator

from .constants import MIDI_MAX, MIDI_MIN
from .note import PianoRollNote
from .position import ZERO, PianoRollPosition

log = logging.getLogger(__name__)


class NoteCatalog:
    """Mutable, ordered collection of :class:`PianoRollNote`."""

    def __init__(self, notes: Iterable[PianoRollNote] = ()) -> None:
        self._notes: list[PianoRollNote] = []
        self._selected: set[str] = set()
        for note in notes:
            self.add(note)

    # --- Collection ---

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[PianoRollNote]:
        return iter(list(self._notes))

    def __contains__(self, note: object) -> bool:
        return note in self._notes

    @property
    def notes(self) -> list[PianoRollNote]:
        return list(self._notes)

    def get(self, uid: str) -> PianoRollNote:
        for note in self._notes:
            if note.uid == uid:
                return note
        raise KeyError(uid)

    def add(self, note: PianoRollNote) -> None:
        if note in self._notes:
            raise ValueError(f"note {note.uid} is already in the catalog")
        self._notes.append(note)

    def remove(self, uid: str) -> PianoRollNote:
        note = self.get(uid)
        self._notes.remove(note)
        self._selected.discard(uid)
        return note

    def clear(self) -> None:
        self._notes.clear()
        self._selected.clear()

    def sorted_notes(self) -> list[PianoRollNote]:
        """Notes ordered by start position, then pitch."""
        return sorted(self._notes, key=lambda n: (n.position, n.pitch))

    # --- Bars ---

    @property
    def last_bar(self) -> int:
        """Bar in which the latest note ends (0 when empty)."""
        if not self._notes:
            return 0
        return max(n.end for n in self._notes).bar

    def bar_count(
        self,
        fixed: int | None = None,
        bar_width: float = 0.0,
        visible_width: float = 0.0,
    ) -> int:
        """Number of bars to lay out.

        ``fixed`` pins the count.  Otherwise the roll always shows one bar
        past the last note, and at least enough bars of ``bar_width`` to fill
        ``visible_width``.
        """
        if fixed is not None:
            return max(0, fixed)
        last = self.last_bar
        if bar_width > 0 and (last + 1) * bar_width < visible_width:
            last = math.ceil(visible_width / bar_width) + 1
        return last + 1

    # --- Selection ---

    @property
    def selected(self) -> list[PianoRollNote]:
        return [n for n in self._notes if n.uid in self._selected]

    def is_selected(self, uid: str) -> bool:
        return uid in self._selected

    def select(self, uid: str) -> None:
        self.get(uid)
        self._selected.add(uid)

    def deselect(self, uid: str) -> None:
        self._selected.discard(uid)

    def clear_selection(self) -> None:
        self._selected.clear()

    def select_all(self) -> None:
        self._selected = {n.uid for n in self._notes}

    def select_range(
        self,
        start: PianoRollPosition,
        end: PianoRollPosition,
        low_pitch: int = MIDI_MIN,
        high_pitch: int = MIDI_MAX,
    ) -> list[PianoRollNote]:
        """Replace the selection with notes overlapping a marquee.

        A note is picked when its span overlaps ``[start, end)`` and its pitch
        lies in ``[low_pitch, high_pitch]``.  Bounds may be given in any order.
        """
        if end < start:
            start, end = end, start
        if high_pitch < low_pitch:
            low_pitch, high_pitch = high_pitch, low_pitch
        self._selected = {
            n.uid for n in self._notes
            if n.position < end and n.end > start and low_pitch <= n.pitch <= high_pitch
        }
        return self.selected

    # --- Editing ---

    def move(self, uid: str, position: PianoRollPosition, pitch: int | None = None) -> None:
        """Place a note at a new start position and, optionally, pitch."""
        note = self.get(uid)
        if pitch is not None:
            if not MIDI_MIN <= pitch <= MIDI_MAX:
                raise ValueError(f"pitch must be in {MIDI_MIN}-{MIDI_MAX}, got {pitch}")
            note.pitch = pitch
        note.position = position
        log.debug("Moved %s to %s (pitch %d)", uid, position, note.pitch)

    def resize(self, uid: str, duration: PianoRollPosition) -> None:
        """Give a note a new duration (must be longer than zero)."""
        if duration == ZERO:
            raise ValueError("duration must be longer than zero")
        note = self.get(uid)
        note.duration = duration
        log.debug("Resized %s to %s", uid, duration)

    def move_selected(
        self,
        delta: PianoRollPosition = ZERO,
        pitch_delta: int = 0,
        backwards: bool = False,
    ) -> bool:
        """Shift every selected note by ``delta`` and ``pitch_delta``.

        The selection moves as a block: a step that would push the earliest
        note before zero, or any pitch out of the MIDI range, is not applied.
        Returns True if anything moved.
        """
        notes = self.selected
        if not notes:
            return False

        moved = False
        if delta != ZERO:
            earliest = min(n.position for n in notes)
            if not backwards or earliest >= delta:
                for n in notes:
                    n.position = n.position - delta if backwards else n.position + delta
                moved = True

        if pitch_delta:
            pitches = [n.pitch + pitch_delta for n in notes]
            if min(pitches) >= MIDI_MIN and max(pitches) <= MIDI_MAX:
                for n, p in zip(notes, pitches):
                    n.pitch = p
                moved = True
        return moved

    def resize_selected(self, delta: PianoRollPosition, shrink: bool = False) -> bool:
        """Lengthen (or shrink) every selected note by ``delta``.

        A note is never shrunk to zero length; those notes keep their
        duration.  Returns True if any note changed.
        """
        changed = False
        for n in self.selected:
            if shrink:
                new = n.duration - delta
                if new == ZERO:
                    continue
            else:
                new = n.duration + delta
            if new != n.duration:
                n.duration = new
                changed = True
        return changed

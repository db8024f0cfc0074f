"""Pixel ↔ position mapping and horizontal zoom for the piano roll grid.

Pure Python, no GUI dependency.  The host view asks this module where a
position lands on screen and which position a dropped cell represents.

Widths:  ``bar = beat * beats_per_bar``, ``subbeat = beat / 4``,
``cent = subbeat / 240``.

Converting back is a successive truncating reduction (bar, then beat, then
subbeat, then cent), not a real-valued inverse.  Each step adds
``_EPSILON`` to the quotient (offset over unit width, in units) before it
truncates, so a grid-aligned offset never lands one cent short.  Offsets
that are not grid-aligned at non-exact widths may still be off by one cent.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum

from .constants import (
    BEATS_PER_BAR,
    CENTS_PER_SUBBEAT,
    DEFAULT_BEAT_WIDTH,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_ZOOM_SPEED,
    MAX_BEAT_WIDTH,
    MAX_ROW_HEIGHT,
    MIN_BEAT_WIDTH,
    MIN_ROW_HEIGHT,
    SUBBEATS_PER_BEAT,
)
from .note_value import NoteValue
from .position import PianoRollPosition

log = logging.getLogger(__name__)

_EPSILON = 1e-9


def _check_widths(beat_width: float, beats_per_bar: int) -> None:
    if beat_width <= 0:
        raise ValueError(f"beat_width must be positive, got {beat_width}")
    if beats_per_bar <= 0:
        raise ValueError(f"beats_per_bar must be positive, got {beats_per_bar}")


def to_pixel_offset(
    position: PianoRollPosition, beat_width: float, beats_per_bar: int = BEATS_PER_BAR,
) -> float:
    """X offset of ``position`` from the left edge of the grid."""
    _check_widths(beat_width, beats_per_bar)
    bar_width = beat_width * beats_per_bar
    subbeat_width = beat_width / SUBBEATS_PER_BEAT
    cent_width = subbeat_width / CENTS_PER_SUBBEAT
    return (
        position.bar * bar_width
        + position.beat * beat_width
        + position.subbeat * subbeat_width
        + position.cent * cent_width
    )


def from_pixel_offset(
    x: float, beat_width: float, beats_per_bar: int = BEATS_PER_BAR,
) -> PianoRollPosition:
    """Grid position at x offset ``x`` (negative offsets map to zero)."""
    _check_widths(beat_width, beats_per_bar)
    if x <= 0:
        return PianoRollPosition()

    remaining = x
    fields = []
    for width in (
        beat_width * beats_per_bar,
        beat_width,
        beat_width / SUBBEATS_PER_BEAT,
        beat_width / SUBBEATS_PER_BEAT / CENTS_PER_SUBBEAT,
    ):
        count = math.floor(remaining / width + _EPSILON)
        fields.append(count)
        remaining = max(0.0, remaining - count * width)
    return PianoRollPosition(*fields)


# ── Zoom levels ─────────────────────────────────────────────


class ZoomLevel(IntEnum):
    """Smallest note value a grid step shows; value = grid steps per bar."""

    WHOLE_NOTES = 1
    HALF_NOTES = 2
    QUARTER_NOTES = 4
    EIGHTH_NOTES = 8
    SIXTEENTH_NOTES = 16
    THIRTYSECOND_NOTES = 32
    SIXTYFOURTH_NOTES = 64

    @property
    def note_value(self) -> NoteValue:
        return _ZOOM_NOTE_VALUES[self]

    @property
    def zoomed_in(self) -> ZoomLevel | None:
        if self is ZoomLevel.SIXTYFOURTH_NOTES:
            return None
        return ZoomLevel(self.value * 2)

    @property
    def zoomed_out(self) -> ZoomLevel | None:
        if self is ZoomLevel.WHOLE_NOTES:
            return None
        return ZoomLevel(self.value // 2)

    @property
    def measure_text_values(self) -> tuple[NoteValue, ...]:
        """Note values whose grid lines get a label in the measure ruler."""
        return _MEASURE_TEXTS[self]

    def normalized_beat_width(self, beat_width: float) -> float:
        """Beat width in pixels once the grid step width is ``beat_width``."""
        return beat_width * self.value / 4.0


_ZOOM_NOTE_VALUES = {
    ZoomLevel.WHOLE_NOTES: NoteValue.WHOLE,
    ZoomLevel.HALF_NOTES: NoteValue.HALF,
    ZoomLevel.QUARTER_NOTES: NoteValue.QUARTER,
    ZoomLevel.EIGHTH_NOTES: NoteValue.EIGHTH,
    ZoomLevel.SIXTEENTH_NOTES: NoteValue.SIXTEENTH,
    ZoomLevel.THIRTYSECOND_NOTES: NoteValue.THIRTYSECOND,
    ZoomLevel.SIXTYFOURTH_NOTES: NoteValue.SIXTYFOURTH,
}

_MEASURE_TEXTS = {
    ZoomLevel.WHOLE_NOTES: (NoteValue.WHOLE,),
    ZoomLevel.HALF_NOTES: (NoteValue.WHOLE,),
    ZoomLevel.QUARTER_NOTES: (NoteValue.WHOLE,),
    ZoomLevel.EIGHTH_NOTES: (NoteValue.WHOLE, NoteValue.HALF),
    ZoomLevel.SIXTEENTH_NOTES: (NoteValue.WHOLE, NoteValue.HALF, NoteValue.QUARTER),
    ZoomLevel.THIRTYSECOND_NOTES: (
        NoteValue.WHOLE, NoteValue.HALF, NoteValue.QUARTER, NoteValue.EIGHTH,
    ),
    ZoomLevel.SIXTYFOURTH_NOTES: (
        NoteValue.WHOLE, NoteValue.HALF, NoteValue.QUARTER, NoteValue.EIGHTH,
        NoteValue.SIXTEENTH,
    ),
}


# ── Geometry ────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GridGeometry:
    """Pixel geometry of the grid at one zoom state.

    ``step_width`` is the on-screen width of one grid step (one zoom-level
    note value).  Rebuild the geometry whenever zoom or time signature change.
    """

    step_width: float = DEFAULT_BEAT_WIDTH
    beats_per_bar: int = BEATS_PER_BAR
    zoom_level: ZoomLevel = ZoomLevel.QUARTER_NOTES

    def __post_init__(self) -> None:
        _check_widths(self.step_width, self.beats_per_bar)

    @property
    def beat_width(self) -> float:
        return self.zoom_level.normalized_beat_width(self.step_width)

    @property
    def bar_width(self) -> float:
        return self.beat_width * self.beats_per_bar

    def x_for(self, position: PianoRollPosition) -> float:
        return to_pixel_offset(position, self.beat_width, self.beats_per_bar)

    def position_at(self, x: float) -> PianoRollPosition:
        return from_pixel_offset(x, self.beat_width, self.beats_per_bar)

    def width_for(self, duration: PianoRollPosition) -> float:
        return self.x_for(duration)

    def duration_for(self, width: float) -> PianoRollPosition:
        return self.position_at(width)

    def cell_frame(self, note) -> tuple[float, float]:
        """(x, width) of a note cell; width spans position to position + duration."""
        start = self.x_for(note.position)
        end = self.x_for(note.position + note.duration)
        return start, end - start

    def content_width(self, bar_count: int) -> float:
        """Grid width holding ``bar_count`` bars."""
        return bar_count * self.bar_width


# ── Zoom state machine ──────────────────────────────────────


class ZoomState:
    """Pinch-zoom state of the grid.

    Horizontal pinches scale the step width.  When it reaches the maximum the
    grid steps into the next finer zoom level and the width resets to the
    minimum; reaching the minimum steps out and resets to the maximum.  Zoom
    levels never leave ``[min_zoom_level, max_zoom_level]``.
    """

    def __init__(
        self,
        zoom_level: ZoomLevel = ZoomLevel.QUARTER_NOTES,
        step_width: float = DEFAULT_BEAT_WIDTH,
        min_zoom_level: ZoomLevel = ZoomLevel.WHOLE_NOTES,
        max_zoom_level: ZoomLevel = ZoomLevel.SIXTEENTH_NOTES,
        min_step_width: float = MIN_BEAT_WIDTH,
        max_step_width: float = MAX_BEAT_WIDTH,
        row_height: float = DEFAULT_ROW_HEIGHT,
        min_row_height: float = MIN_ROW_HEIGHT,
        max_row_height: float = MAX_ROW_HEIGHT,
        zoom_speed: float = DEFAULT_ZOOM_SPEED,
        beats_per_bar: int = BEATS_PER_BAR,
    ) -> None:
        if min_zoom_level > max_zoom_level:
            raise ValueError("min_zoom_level is above max_zoom_level")
        if not 0 < min_step_width <= max_step_width:
            raise ValueError("step width bounds must satisfy 0 < min <= max")
        if not 0 < min_row_height <= max_row_height:
            raise ValueError("row height bounds must satisfy 0 < min <= max")
        self.min_zoom_level = min_zoom_level
        self.max_zoom_level = max_zoom_level
        self.min_step_width = min_step_width
        self.max_step_width = max_step_width
        self.min_row_height = min_row_height
        self.max_row_height = max_row_height
        self.zoom_speed = zoom_speed
        self._zoom_level = max(min_zoom_level, min(max_zoom_level, zoom_level))
        self._step_width = max(min_step_width, min(max_step_width, step_width))
        self._row_height = max(min_row_height, min(max_row_height, row_height))
        self._beats_per_bar = beats_per_bar

    @property
    def zoom_level(self) -> ZoomLevel:
        return self._zoom_level

    @property
    def step_width(self) -> float:
        return self._step_width

    @property
    def row_height(self) -> float:
        return self._row_height

    @property
    def geometry(self) -> GridGeometry:
        return GridGeometry(self._step_width, self._beats_per_bar, self._zoom_level)

    def set_beats_per_bar(self, beats_per_bar: int) -> None:
        self._beats_per_bar = beats_per_bar

    def _damp(self, scale: float) -> float:
        return (scale - 1.0) * self.zoom_speed + 1.0

    def pinch_horizontal(self, scale: float) -> bool:
        """Apply a horizontal pinch scale; return True if the zoom level changed."""
        width = self._step_width * self._damp(scale)
        self._step_width = max(self.min_step_width, min(self.max_step_width, width))

        if self._step_width >= self.max_step_width:
            finer = self._zoom_level.zoomed_in
            if finer is not None and finer <= self.max_zoom_level:
                log.debug("Zoom in: %s -> %s", self._zoom_level.name, finer.name)
                self._zoom_level = finer
                self._step_width = self.min_step_width
                return True
        elif self._step_width <= self.min_step_width:
            coarser = self._zoom_level.zoomed_out
            if coarser is not None and coarser >= self.min_zoom_level:
                log.debug("Zoom out: %s -> %s", self._zoom_level.name, coarser.name)
                self._zoom_level = coarser
                self._step_width = self.max_step_width
                return True
        return False

    def pinch_vertical(self, scale: float) -> None:
        """Apply a vertical pinch scale to the row height."""
        height = self._row_height * self._damp(scale)
        self._row_height = max(self.min_row_height, min(self.max_row_height, height))

    def set_zoom_level(self, zoom_level: ZoomLevel) -> None:
        self._zoom_level = max(self.min_zoom_level, min(self.max_zoom_level, zoom_level))

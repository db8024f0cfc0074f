"""Measure ruler layout and grid line styling.

Pure Python, no GUI dependency.  The renderer receives a :class:`GridStyle`
explicitly and draws the :class:`MeasureLine` list produced here; nothing in
this module holds global style state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields

from .grid import GridGeometry
from .note_value import NoteValue, note_value_tag
from .position import PianoRollPosition

_HAIRLINE = 0.5


@dataclass(frozen=True, slots=True)
class GridLineStyle:
    """Stroke of one kind of grid line."""

    width: float = _HAIRLINE
    color: str = "#000000"
    dash_pattern: tuple[float, ...] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> GridLineStyle:
        dash = data.get("dash_pattern")
        return cls(
            width=data.get("width", _HAIRLINE),
            color=data.get("color", "#000000"),
            dash_pattern=tuple(dash) if dash else None,
        )


def _gray() -> GridLineStyle:
    return GridLineStyle(color="#808080")


@dataclass
class GridStyle:
    """Every line style the piano roll draws.

    ``measure_text.width`` is the font size of ruler labels.
    """

    default: GridLineStyle = field(default_factory=GridLineStyle)
    row_horizontal: GridLineStyle = field(default_factory=GridLineStyle)
    row_vertical: GridLineStyle = field(default_factory=GridLineStyle)
    measure_bottom: GridLineStyle = field(default_factory=lambda: GridLineStyle(width=1.0))
    measure_text: GridLineStyle = field(default_factory=lambda: GridLineStyle(width=13.0))
    bar: GridLineStyle = field(default_factory=lambda: GridLineStyle(width=1.0))
    half: GridLineStyle = field(default_factory=_gray)
    quarter: GridLineStyle = field(default_factory=_gray)
    eighth: GridLineStyle = field(default_factory=_gray)
    sixteenth: GridLineStyle = field(default_factory=_gray)
    thirtysecond: GridLineStyle = field(default_factory=_gray)
    sixtyfourth: GridLineStyle = field(default_factory=_gray)

    def for_note_value(self, value: NoteValue | None) -> GridLineStyle:
        """Line style for a note value; no tag (or double whole) → default."""
        attr = _STYLE_ATTRS.get(value)
        if attr is None:
            return self.default
        return getattr(self, attr)

    def style_for(self, position: PianoRollPosition) -> GridLineStyle:
        return self.for_note_value(note_value_tag(position))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> GridStyle:
        """Build from a (possibly partial) dict; missing entries keep defaults."""
        kwargs = {
            f.name: GridLineStyle.from_dict(data[f.name])
            for f in fields(cls)
            if isinstance(data.get(f.name), dict)
        }
        return cls(**kwargs)


_STYLE_ATTRS: dict[NoteValue | None, str] = {
    NoteValue.WHOLE: "bar",
    NoteValue.HALF: "half",
    NoteValue.QUARTER: "quarter",
    NoteValue.EIGHTH: "eighth",
    NoteValue.SIXTEENTH: "sixteenth",
    NoteValue.THIRTYSECOND: "thirtysecond",
    NoteValue.SIXTYFOURTH: "sixtyfourth",
}


@dataclass(frozen=True, slots=True)
class MeasureLine:
    """One vertical grid line with its ruler label (if any)."""

    position: PianoRollPosition
    x: float
    style: GridLineStyle
    label: str | None = None


def measure_lines(
    bar_count: int,
    geometry: GridGeometry,
    style: GridStyle | None = None,
) -> list[MeasureLine]:
    """Lay out the ruler: one line per grid step over ``bar_count`` bars.

    Lines step by the zoom level's note value, including the closing line
    after the last bar.  A line is labelled with its position text when its
    note value is one the zoom level labels.
    """
    if style is None:
        style = GridStyle()
    zoom = geometry.zoom_level
    step = zoom.note_value.duration
    labelled = zoom.measure_text_values

    lines: list[MeasureLine] = []
    position = PianoRollPosition()
    for _ in range(bar_count * zoom.value + 1):
        tag = note_value_tag(position)
        lines.append(MeasureLine(
            position=position,
            x=geometry.x_for(position),
            style=style.for_note_value(tag),
            label=str(position) if tag is not None and tag in labelled else None,
        ))
        position = position + step
    return lines

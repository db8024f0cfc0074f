"""Tests for grid — pixel mapping, zoom levels and pinch zoom."""

from __future__ import annotations

import pytest

from midi_piano_roll.core.grid import (
    GridGeometry,
    ZoomLevel,
    ZoomState,
    from_pixel_offset,
    to_pixel_offset,
)
from midi_piano_roll.core.note import PianoRollNote
from midi_piano_roll.core.note_value import NoteValue
from midi_piano_roll.core.position import ZERO, PianoRollPosition

P = PianoRollPosition

# ── Pixel conversion ────────────────────────────────────────


class TestToPixelOffset:
    def test_zero(self):
        assert to_pixel_offset(ZERO, 32.0, 4) == 0.0

    def test_linear_combination(self):
        # bar = 128, beat = 32, subbeat = 8
        assert to_pixel_offset(P(1), 32.0, 4) == 128.0
        assert to_pixel_offset(P(0, 1), 32.0, 4) == 32.0
        assert to_pixel_offset(P(0, 0, 1), 32.0, 4) == 8.0
        assert to_pixel_offset(P(2, 3, 1), 32.0, 4) == 2 * 128 + 3 * 32 + 8

    def test_cent(self):
        assert to_pixel_offset(P(0, 0, 0, 120), 32.0, 4) == pytest.approx(4.0)

    def test_beats_per_bar_scales_bar_width(self):
        assert to_pixel_offset(P(1), 30.0, 3) == 90.0
        assert to_pixel_offset(P(1, 1), 30.0, 3) == 120.0

    @pytest.mark.parametrize(("width", "bpb"), [(0.0, 4), (-1.0, 4), (30.0, 0)])
    def test_invalid_widths(self, width, bpb):
        with pytest.raises(ValueError):
            to_pixel_offset(P(1), width, bpb)


class TestFromPixelOffset:
    def test_zero_and_negative(self):
        assert from_pixel_offset(0.0, 32.0, 4) == ZERO
        assert from_pixel_offset(-50.0, 32.0, 4) == ZERO

    def test_successive_reduction(self):
        assert from_pixel_offset(128.0, 32.0, 4) == P(1)
        assert from_pixel_offset(128.0 + 64.0 + 16.0, 32.0, 4) == P(1, 2, 2)

    def test_truncates(self):
        # 31.9 px is still inside the first beat
        p = from_pixel_offset(31.9, 32.0, 4)
        assert (p.bar, p.beat, p.subbeat) == (0, 0, 3)
        assert 236 <= p.cent <= 237

    @pytest.mark.parametrize(
        "position",
        [P(0), P(1), P(0, 1), P(0, 0, 1), P(3, 2, 1), P(10, 3, 3), P(0, 0, 0, 120), P(2, 1, 2, 60)],
    )
    def test_round_trip_grid_aligned(self, position):
        x = to_pixel_offset(position, 32.0, 4)
        assert from_pixel_offset(x, 32.0, 4) == position

    @pytest.mark.parametrize("width", [30.0, 27.3, 41.7])
    def test_round_trip_tolerance(self, width):
        """Non-exact widths keep bar/beat/subbeat; cents may be one short."""
        for position in (P(1, 2, 3), P(4, 1, 0, 200), P(0, 3, 2, 17)):
            back = from_pixel_offset(to_pixel_offset(position, width, 4), width, 4)
            assert abs(back.total_cents - position.total_cents) <= 1
            if position.cent == 0:
                assert back == position

    def test_digits_always_in_range(self):
        for i in range(0, 2000, 7):
            p = from_pixel_offset(i * 0.37, 27.3, 4)
            assert 0 <= p.beat < 4
            assert 0 <= p.subbeat < 4
            assert 0 <= p.cent < 240


# ── Zoom levels ─────────────────────────────────────────────


class TestZoomLevel:
    def test_note_values(self):
        assert ZoomLevel.WHOLE_NOTES.note_value is NoteValue.WHOLE
        assert ZoomLevel.QUARTER_NOTES.note_value is NoteValue.QUARTER
        assert ZoomLevel.SIXTEENTH_NOTES.note_value is NoteValue.SIXTEENTH
        assert ZoomLevel.SIXTYFOURTH_NOTES.note_value is NoteValue.SIXTYFOURTH

    def test_zoomed_in_out(self):
        assert ZoomLevel.QUARTER_NOTES.zoomed_in is ZoomLevel.EIGHTH_NOTES
        assert ZoomLevel.QUARTER_NOTES.zoomed_out is ZoomLevel.HALF_NOTES
        assert ZoomLevel.SIXTYFOURTH_NOTES.zoomed_in is None
        assert ZoomLevel.WHOLE_NOTES.zoomed_out is None

    def test_steps_per_bar_match_note_value(self):
        for level in ZoomLevel:
            step = level.note_value.duration
            assert step.total_cents * level.value == P(1).total_cents

    def test_measure_texts(self):
        assert ZoomLevel.QUARTER_NOTES.measure_text_values == (NoteValue.WHOLE,)
        assert ZoomLevel.SIXTEENTH_NOTES.measure_text_values == (
            NoteValue.WHOLE, NoteValue.HALF, NoteValue.QUARTER,
        )

    def test_normalized_beat_width(self):
        assert ZoomLevel.QUARTER_NOTES.normalized_beat_width(30.0) == 30.0
        assert ZoomLevel.EIGHTH_NOTES.normalized_beat_width(30.0) == 60.0
        assert ZoomLevel.WHOLE_NOTES.normalized_beat_width(40.0) == 10.0


# ── Geometry ────────────────────────────────────────────────


class TestGridGeometry:
    def test_defaults(self):
        g = GridGeometry()
        assert g.beat_width == 30.0
        assert g.bar_width == 120.0

    def test_zoom_scales_beat_width(self):
        g = GridGeometry(step_width=20.0, zoom_level=ZoomLevel.EIGHTH_NOTES)
        assert g.beat_width == 40.0
        assert g.x_for(P(0, 1)) == 40.0

    def test_position_at(self):
        g = GridGeometry(step_width=32.0)
        assert g.position_at(g.x_for(P(2, 1, 3))) == P(2, 1, 3)

    def test_cell_frame(self):
        g = GridGeometry(step_width=32.0)
        note = PianoRollNote(pitch=60, position=P(1), duration=P(0, 2))
        assert g.cell_frame(note) == (128.0, 64.0)

    def test_duration_for_width(self):
        g = GridGeometry(step_width=32.0)
        assert g.duration_for(64.0) == P(0, 2)
        assert g.width_for(P(0, 2)) == 64.0

    def test_content_width(self):
        assert GridGeometry(step_width=30.0).content_width(3) == 360.0

    def test_invalid(self):
        with pytest.raises(ValueError):
            GridGeometry(step_width=0.0)


# ── Zoom state ──────────────────────────────────────────────


class TestZoomState:
    def test_defaults(self):
        z = ZoomState()
        assert z.zoom_level is ZoomLevel.QUARTER_NOTES
        assert z.step_width == 30.0
        assert z.row_height == 40.0

    def test_pinch_damped(self):
        z = ZoomState(zoom_speed=0.5)
        changed = z.pinch_horizontal(1.2)  # damped to 1.1
        assert not changed
        assert z.step_width == pytest.approx(33.0)

    def test_zoom_in_at_max_width(self):
        z = ZoomState(step_width=38.0)
        assert z.pinch_horizontal(2.0)
        assert z.zoom_level is ZoomLevel.EIGHTH_NOTES
        assert z.step_width == z.min_step_width

    def test_zoom_out_at_min_width(self):
        z = ZoomState(step_width=22.0)
        assert z.pinch_horizontal(0.1)
        assert z.zoom_level is ZoomLevel.HALF_NOTES
        assert z.step_width == z.max_step_width

    def test_stops_at_max_level(self):
        z = ZoomState(zoom_level=ZoomLevel.SIXTEENTH_NOTES, step_width=39.0)
        assert not z.pinch_horizontal(3.0)
        assert z.zoom_level is ZoomLevel.SIXTEENTH_NOTES
        assert z.step_width == z.max_step_width

    def test_stops_at_min_level(self):
        z = ZoomState(zoom_level=ZoomLevel.WHOLE_NOTES, step_width=21.0)
        assert not z.pinch_horizontal(0.01)
        assert z.zoom_level is ZoomLevel.WHOLE_NOTES
        assert z.step_width == z.min_step_width

    def test_custom_bounds(self):
        z = ZoomState(
            zoom_level=ZoomLevel.QUARTER_NOTES,
            min_zoom_level=ZoomLevel.QUARTER_NOTES,
            max_zoom_level=ZoomLevel.EIGHTH_NOTES,
            step_width=20.0,
        )
        assert not z.pinch_horizontal(0.5)
        assert z.zoom_level is ZoomLevel.QUARTER_NOTES

    def test_initial_level_clamped(self):
        z = ZoomState(zoom_level=ZoomLevel.SIXTYFOURTH_NOTES)
        assert z.zoom_level is ZoomLevel.SIXTEENTH_NOTES

    def test_vertical_pinch_clamped(self):
        z = ZoomState()
        z.pinch_vertical(100.0)
        assert z.row_height == pytest.approx(z.max_row_height)
        for _ in range(5):
            z.pinch_vertical(0.0001)
        assert z.row_height == pytest.approx(z.min_row_height)

    def test_geometry_follows_state(self):
        z = ZoomState(step_width=38.0)
        before = z.geometry
        z.pinch_horizontal(2.0)
        after = z.geometry
        assert before.zoom_level is ZoomLevel.QUARTER_NOTES
        assert after.zoom_level is ZoomLevel.EIGHTH_NOTES
        assert after.beat_width == 40.0

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            ZoomState(min_zoom_level=ZoomLevel.EIGHTH_NOTES, max_zoom_level=ZoomLevel.HALF_NOTES)
        with pytest.raises(ValueError):
            ZoomState(min_step_width=50.0, max_step_width=40.0)

    def test_set_zoom_level_clamped(self):
        z = ZoomState()
        z.set_zoom_level(ZoomLevel.EIGHTH_NOTES)
        assert z.zoom_level is ZoomLevel.EIGHTH_NOTES
        z.set_zoom_level(ZoomLevel.SIXTYFOURTH_NOTES)
        assert z.zoom_level is ZoomLevel.SIXTEENTH_NOTES

    def test_set_beats_per_bar(self):
        z = ZoomState()
        z.set_beats_per_bar(3)
        assert z.geometry.bar_width == 90.0


class TestReductionTolerance:
    @pytest.mark.parametrize("beat_width", [32.0, 1e6])
    def test_tolerance_scales_with_width(self, beat_width):
        # the shortfall is far more than 1e-9 px at wide widths, still one bar
        x = beat_width * 4 * (1 - 1e-12)
        assert from_pixel_offset(x, beat_width, 4) == P(1)

"""Export piano roll notes as timed MIDI events and .mid files.

Positions are turned into seconds with ``Tempo.seconds`` and written through
mido, one note_on/note_off pair per note.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import mido

from .constants import EXPORT_TICKS_PER_BEAT
from .note import PianoRollNote, check_channel
from .tempo import Tempo

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NoteEvent:
    """A MIDI message stamped with seconds from the start of the roll."""

    time_seconds: float
    message: mido.Message


def note_events(
    notes: Iterable[PianoRollNote],
    tempo: Tempo,
    channel: int = 0,
) -> list[NoteEvent]:
    """note_on at each note's start, note_off at its end, sorted by time.

    On equal timestamps note_off sorts first so repeated notes retrigger.
    """
    check_channel(channel)
    result: list[NoteEvent] = []
    for note in notes:
        result.append(NoteEvent(tempo.seconds(note.position), note.note_on(channel)))
        result.append(NoteEvent(tempo.seconds(note.end), note.note_off(channel)))
    result.sort(key=lambda e: (e.time_seconds, 0 if e.message.type == "note_off" else 1))
    return result


def build_midi_file(
    notes: Iterable[PianoRollNote],
    tempo: Tempo,
    channel: int = 0,
    track_name: str = "",
) -> mido.MidiFile:
    """Type 0 MIDI file holding the notes at ``tempo``."""
    tpb = EXPORT_TICKS_PER_BEAT
    # set_tempo counts quarter notes whatever the signature's beat unit
    midi_tempo = mido.bpm2tempo(tempo.bpm * 4 / tempo.time_signature.note_value)
    signature = tempo.time_signature

    mid = mido.MidiFile(type=0, ticks_per_beat=tpb)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    if track_name:
        track.append(mido.MetaMessage("track_name", name=track_name, time=0))
    track.append(mido.MetaMessage("set_tempo", tempo=midi_tempo, time=0))
    track.append(mido.MetaMessage(
        "time_signature",
        numerator=signature.beats,
        denominator=signature.note_value,
        time=0,
    ))

    # Convert timestamps to delta ticks
    prev_tick = 0
    for evt in note_events(notes, tempo, channel):
        abs_tick = round(mido.second2tick(evt.time_seconds, tpb, midi_tempo))
        delta = max(0, abs_tick - prev_tick)
        track.append(evt.message.copy(time=delta))
        prev_tick = max(prev_tick, abs_tick)

    track.append(mido.MetaMessage("end_of_track", time=0))
    return mid


def save_midi(
    notes: Iterable[PianoRollNote],
    file_path: str | Path,
    tempo: Tempo,
    channel: int = 0,
    track_name: str = "",
) -> bool:
    """Save notes as a .mid file.  Returns False (writing nothing) if empty."""
    notes = list(notes)
    if not notes:
        log.info("No notes to export, skipping %s", file_path)
        return False

    mid = build_midi_file(notes, tempo, channel, track_name)
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    mid.save(str(path))
    log.info("Exported %d notes to %s", len(notes), path)
    return True

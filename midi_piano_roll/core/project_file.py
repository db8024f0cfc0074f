"""Note-list save/load — .prl format (JSON + gzip)."""

from __future__ import annotations

import gzip
import json
from pathlib import Path

from .note import PianoRollNote
from .note_catalog import NoteCatalog
from .tempo import Tempo, TimeSignature

FORMAT_VERSION = 1


def to_dict(catalog: NoteCatalog, tempo: Tempo) -> dict:
    return {
        "version": FORMAT_VERSION,
        "tempo_bpm": tempo.bpm,
        "time_signature": [tempo.time_signature.beats, tempo.time_signature.note_value],
        "notes": [n.to_dict() for n in catalog],
    }


def from_dict(data: dict) -> tuple[NoteCatalog, Tempo]:
    ts = data.get("time_signature", [4, 4])
    tempo = Tempo(
        bpm=data.get("tempo_bpm", 120.0),
        time_signature=TimeSignature(ts[0], ts[1]),
    )
    catalog = NoteCatalog(PianoRollNote.from_dict(nd) for nd in data.get("notes", []))
    return catalog, tempo


def save(path: str | Path, catalog: NoteCatalog, tempo: Tempo) -> None:
    """Save the note list to a .prl file (gzipped JSON)."""
    raw = json.dumps(to_dict(catalog, tempo), separators=(",", ":")).encode("utf-8")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(path, "wb") as f:
        f.write(raw)


def load(path: str | Path) -> tuple[NoteCatalog, Tempo]:
    """Load a note list and its tempo from a .prl file."""
    with gzip.open(Path(path), "rb") as f:
        raw = f.read()
    return from_dict(json.loads(raw.decode("utf-8")))

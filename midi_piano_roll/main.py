"""Entry point: inspect and export piano roll note lists."""

from __future__ import annotations

import argparse
import logging
import sys

from .core import midi_export, project_file
from .core.config import get_config
from .core.keys import pitch_name
from .core.tempo import Tempo

log = logging.getLogger(__name__)


def _cmd_info(args: argparse.Namespace) -> int:
    catalog, tempo = project_file.load(args.project)
    config = get_config()
    keys = config.keys()
    print(f"Notes:          {len(catalog)}")
    print(f"Tempo:          {tempo.bpm:g} BPM, {tempo.time_signature}")
    print(f"Bars:           {catalog.bar_count(fixed=config.bars())}")
    print(f"Rows:           {len(keys)} ({keys.labels[-1]}-{keys.labels[0]})")
    if len(catalog):
        end = max(n.end for n in catalog)
        print(f"Length:         {end} ({tempo.seconds(end):.2f}s)")
    for note in catalog.sorted_notes():
        hidden = "" if keys.row_of(note.pitch) is not None else "  (no row)"
        print(f"  {str(note.position):>14}  {pitch_name(note.pitch):<4} "
              f"vel={note.velocity:<3} dur={note.duration}{hidden}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    catalog, tempo = project_file.load(args.project)
    config = get_config()
    bpm = args.bpm if args.bpm is not None else tempo.bpm
    channel = args.channel if args.channel is not None else config.get("export.channel", 0)
    tempo = Tempo(bpm, tempo.time_signature)
    if not midi_export.save_midi(catalog, args.output, tempo, channel=channel):
        log.warning("Nothing exported: %s has no notes", args.project)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="midi-piano-roll", description="Piano roll note list tools",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="List the notes of a project file")
    info.add_argument("project", help="Path to a .prl project file")
    info.set_defaults(func=_cmd_info)

    export = sub.add_parser("export", help="Export a project file as .mid")
    export.add_argument("project", help="Path to a .prl project file")
    export.add_argument("output", help="Output .mid path")
    export.add_argument("--bpm", type=float, default=None, help="Override project tempo")
    export.add_argument("--channel", type=int, default=None, help="MIDI channel (0-15)")
    export.set_defaults(func=_cmd_export)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    try:
        exit_code = args.func(args)
    except (OSError, ValueError, KeyError):
        log.exception("Command %s failed", args.command)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

"""Thin CLI entry point — builds a Manifest and calls the engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

from transcut.engine import process
from transcut.manifest import CompileConfig, ExportConfig, Manifest, load_manifest
from transcut.models import Cut
from transcut.preview import generate_preview
from transcut.readers.selection import parse_id_list
from transcut.readers.subtitles import load_subtitles
from transcut.readers.xmeml import load_timeline
from transcut.timecode import format_srt_timestamp, frame_to_time


def _print_table(rows: list[Cut], fps: float) -> None:
    print(f"{'#':>4}  {'ID':>5}  {'TL IN':>12}  {'SRC IN':>7}  {'SRC OUT':>7}  {'DUR':>5}  {'TRK':>3}  TEXT")
    for r in rows:
        src_in = "-" if r.is_gap else str(r.source_in)
        src_out = "-" if r.is_gap else str(r.source_out)
        tl_in = format_srt_timestamp(frame_to_time(r.timeline_in, fps))
        print(
            f"{r.sequence_index:>4}  {r.source_segment_id:>5}  {tl_in:>12}  {src_in:>7}  "
            f"{src_out:>7}  {r.duration_frames:>5}  {r.track_index:>3}  {r.clip_name}: {r.text}"
        )


def _build_manifest(args: argparse.Namespace) -> Manifest:
    if args.manifest:
        return load_manifest(args.manifest)

    if args.timeline is None:
        raise ValueError("provide either a TIMELINE argument or --manifest")
    if args.select is None and args.selection_file is None:
        raise ValueError("provide --select or --selection-file")

    config = CompileConfig(
        head_padding=args.head_padding,
        tail_padding=args.tail_padding,
        merge_tolerance=args.merge_tolerance,
    )
    config.validate()
    return Manifest(
        timeline=args.timeline,
        output=args.output or args.timeline.with_stem(args.timeline.stem + "_cut"),
        subtitles=args.subtitles,
        selection=parse_id_list(args.select) if args.select is not None else None,
        selection_file=args.selection_file,
        compile=config,
        export=ExportConfig(xml=not args.no_xml, srt=not args.no_srt),
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="transcut",
        description="transcut — compile subtitle selections into frame-accurate cut lists.",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    sub = parser.add_subparsers(dest="command")

    prev = sub.add_parser("preview", help="Show the source timeline before any selection")
    prev.add_argument("timeline", type=Path, help="Timeline XML (xmeml) file")
    prev.add_argument("--subtitles", "-s", type=Path, help="SRT file with the transcript")
    prev.add_argument("--json", action="store_true", help="Print rows as JSON")

    comp = sub.add_parser("compile", help="Compile selected segments into a cut list")
    comp.add_argument("timeline", nargs="?", type=Path, help="Timeline XML (xmeml) file")
    comp.add_argument("--subtitles", "-s", type=Path, help="SRT file with the transcript")
    comp.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    comp.add_argument("--select", type=str, help="Segment ids to keep, e.g. 1,4,7-9")
    comp.add_argument("--selection-file", type=Path, help="JSON file with the selector's ids")
    comp.add_argument("--output", "-o", type=Path, help="Output path stem (.xml/.srt are added)")
    comp.add_argument("--head-padding", type=int, default=5, help="Frames added before each segment")
    comp.add_argument("--tail-padding", type=int, default=5, help="Frames added after each segment")
    comp.add_argument("--merge-tolerance", type=int, default=2, help="Largest gap in frames that is still merged")
    comp.add_argument("--no-xml", action="store_true", help="Do not write the timeline XML")
    comp.add_argument("--no-srt", action="store_true", help="Do not write the subtitle file")
    comp.add_argument("--json", action="store_true", help="Print cuts as JSON")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from transcut.web import create_app
        app = create_app()
        print(f"transcut web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        if args.command == "preview":
            timeline = load_timeline(args.timeline)
            segments = load_subtitles(args.subtitles) if args.subtitles else []
            rows = generate_preview(timeline, segments)
            if args.json:
                print(json.dumps([r.to_dict() for r in rows], indent=2))
            else:
                _print_table(rows, timeline.fps)
            return

        m = _build_manifest(args)

        def on_progress(stage: str, frac: float) -> None:
            if not args.json:
                print(f"  [{frac:3.0%}] {stage}")

        result = process(m, on_progress=on_progress)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([c.to_dict() for c in result.cuts], indent=2))
        return

    print()
    print(f"Done! {len(result.cuts)} cuts, {result.duration_frames} frames")
    if result.segments_dropped:
        print(f"  Segments dropped (gaps or empty): {result.segments_dropped}")
    if result.xml_path:
        print(f"  Timeline: {result.xml_path}")
    if result.srt_path:
        print(f"  Subtitles: {result.srt_path}")

"""Orchestrator — compiles selections and runs the pipeline defined by a Manifest."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from transcut.editors.accumulate import accumulate
from transcut.editors.captions import write_srt
from transcut.editors.materialize import materialize_selection, select_segments
from transcut.editors.merge import merge_adjacent
from transcut.editors.xmeml import write_xmeml
from transcut.manifest import CompileConfig, Manifest
from transcut.models import Cut, Timeline, TimedTextSegment
from transcut.preview import generate_preview
from transcut.readers.selection import load_selection
from transcut.readers.subtitles import load_subtitles
from transcut.readers.xmeml import load_timeline
from transcut.timecode import check_timebase

logger = logging.getLogger(__name__)


class EmptySelectionError(ValueError):
    """Raised when a non-empty selection matches none of the segments."""


def compile_cuts(
    timeline: Timeline,
    segments: list[TimedTextSegment],
    selected_ids: list[int],
    config: CompileConfig | None = None,
) -> list[Cut]:
    """Compile selected segment ids into a contiguous, frame-accurate cut list.

    An empty selection yields an empty list. A selection whose ids all miss
    the segment set raises EmptySelectionError, so callers can tell "nothing
    selected" from "nothing matched". Selections that match but land entirely
    in gaps also yield an empty list.
    """
    config = config or CompileConfig()
    config.validate()
    check_timebase(timeline.fps)

    if not selected_ids:
        return []

    chosen = select_segments(selected_ids, segments)
    if not chosen:
        raise EmptySelectionError(
            f"None of the {len(set(selected_ids))} selected ids match a segment"
        )

    raw = materialize_selection(chosen, timeline, config)
    merged = merge_adjacent(raw, config.merge_tolerance)
    cuts = accumulate(merged)
    logger.info(
        "Compiled %d selected segments into %d cuts (%d dropped, %d merged)",
        len(chosen), len(cuts), len(chosen) - len(raw), len(raw) - len(merged),
    )
    return cuts


@dataclass
class EngineResult:
    output_path: Path
    xml_path: Path | None = None
    srt_path: Path | None = None
    cuts: list[Cut] = field(default_factory=list)
    preview: list[Cut] = field(default_factory=list)
    duration_frames: int = 0
    segments_selected: int = 0
    segments_dropped: int = 0

    def duration_seconds(self, fps: float) -> float:
        return self.duration_frames / fps if fps else 0.0


def _resolve_selection(manifest: Manifest) -> list[int]:
    if manifest.selection is not None:
        return list(manifest.selection)
    if manifest.selection_file is not None:
        return load_selection(manifest.selection_file)
    raise ValueError("Manifest needs either 'selection' or 'selection_file'")


def process(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> EngineResult:
    """Execute the full compile pipeline.

    Args:
        manifest: Validated compile manifest.
        on_progress: Optional callback(stage_name, fraction_complete).
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    _progress("Reading timeline", 0.0)
    timeline = load_timeline(manifest.timeline)
    check_timebase(timeline.fps)

    _progress("Reading subtitles", 0.2)
    segments = load_subtitles(manifest.subtitles) if manifest.subtitles else []
    selected_ids = _resolve_selection(manifest)

    _progress("Building source preview", 0.4)
    preview = generate_preview(timeline, segments)

    _progress("Compiling cuts", 0.6)
    cuts = compile_cuts(timeline, segments, selected_ids, manifest.compile)
    matched = len(select_segments(selected_ids, segments))

    xml_path = None
    srt_path = None
    if manifest.export.xml:
        _progress("Writing timeline XML", 0.8)
        xml_path = write_xmeml(
            cuts,
            timeline.fps,
            timeline.width,
            timeline.height,
            manifest.output.with_suffix(".xml"),
            sequence_name=manifest.export.sequence_name,
        )
        logger.info("Wrote timeline to %s", xml_path)
    if manifest.export.srt:
        _progress("Writing subtitles", 0.9)
        srt_path = write_srt(cuts, timeline.fps, manifest.output.with_suffix(".srt"))
        logger.info("Wrote subtitles to %s", srt_path)

    _progress("Done", 1.0)
    return EngineResult(
        output_path=manifest.output,
        xml_path=xml_path,
        srt_path=srt_path,
        cuts=cuts,
        preview=preview,
        duration_frames=sum(c.duration_frames for c in cuts),
        segments_selected=matched,
        segments_dropped=matched - sum(len(c.merged_ids) for c in cuts),
    )

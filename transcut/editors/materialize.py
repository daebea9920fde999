"""Segment materializer — turns selected cues into padded source ranges."""

import logging
from typing import Iterable

from transcut.locator import find_owning_clip
from transcut.manifest import CompileConfig
from transcut.models import RawSegment, Timeline, TimedTextSegment
from transcut.timecode import time_to_frame

logger = logging.getLogger(__name__)


def materialize_segment(
    segment: TimedTextSegment,
    timeline: Timeline,
    config: CompileConfig,
) -> RawSegment | None:
    """Map one cue onto its owning clip's source frames.

    Head and tail padding are added, then the range is clamped so it never
    starts before frame 0 of the file and never ends past the clip's source
    out point. Returns None when the cue is empty, falls in a gap, or has no
    frames left after clamping.
    """
    seg_start = time_to_frame(segment.start_time, timeline.fps)
    seg_end = time_to_frame(segment.end_time, timeline.fps)
    raw_duration = seg_end - seg_start
    if raw_duration <= 0:
        logger.debug("Dropping segment %s: empty at %s fps", segment.id, timeline.fps)
        return None

    clip = find_owning_clip(seg_start, timeline)
    if clip is None:
        logger.debug("Dropping segment %s: frame %d falls in a gap", segment.id, seg_start)
        return None

    mapped_in = clip.source_in + (seg_start - clip.timeline_start)
    source_in = max(mapped_in - config.head_padding, 0)

    desired = raw_duration + config.head_padding + config.tail_padding
    duration = min(desired, clip.source_out - source_in)
    if duration < 1:
        logger.debug("Dropping segment %s: no frames left in clip %s", segment.id, clip.id)
        return None

    return RawSegment(
        segment_id=segment.id,
        text=segment.text,
        file_id=clip.file_id,
        file_path=clip.file_path,
        clip_name=clip.name,
        source_in=source_in,
        source_out=source_in + duration,
        master_clip_id=clip.master_clip_id,
        track_index=clip.track_index,
        merged_ids=(segment.id,),
    )


def select_segments(
    selected_ids: Iterable[int],
    segments: Iterable[TimedTextSegment],
) -> list[TimedTextSegment]:
    """Resolve ids against the cue set, in chronological order.

    Unknown and repeated ids are ignored. The selector's ordering is discarded:
    cues are sorted by start time, then id.
    """
    by_id = {s.id: s for s in segments}
    chosen: dict[int, TimedTextSegment] = {}
    for seg_id in selected_ids:
        seg = by_id.get(seg_id)
        if seg is None:
            logger.warning("Ignoring selected id %s: no such segment", seg_id)
            continue
        chosen[seg_id] = seg
    return sorted(chosen.values(), key=lambda s: (s.start_time, s.id))


def materialize_selection(
    selected: Iterable[TimedTextSegment],
    timeline: Timeline,
    config: CompileConfig,
) -> list[RawSegment]:
    raw: list[RawSegment] = []
    for seg in selected:
        candidate = materialize_segment(seg, timeline, config)
        if candidate is not None:
            raw.append(candidate)
    return raw

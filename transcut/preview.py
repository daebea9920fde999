"""Source preview — the unedited timeline in cut-list shape."""

from transcut.locator import find_owning_clip
from transcut.models import (
    CLIP_ROW_TEXT,
    GAP_CLIP_NAME,
    Cut,
    MediaClip,
    Timeline,
    TimedTextSegment,
)
from transcut.timecode import check_timebase, time_to_frame


def _segment_row(index: int, seg: TimedTextSegment, timeline: Timeline) -> Cut:
    start = time_to_frame(seg.start_time, timeline.fps)
    end = time_to_frame(seg.end_time, timeline.fps)
    duration = end - start

    clip = find_owning_clip(start, timeline)
    if clip is None:
        return Cut(
            sequence_index=index,
            source_segment_id=seg.id,
            clip_name=GAP_CLIP_NAME,
            text=seg.text,
            timeline_in=start,
            timeline_out=end,
            source_in=-1,
            source_out=-1,
            file_id="",
            duration_frames=duration,
            track_index=0,
            kind="gap",
            merged_ids=(seg.id,),
        )

    source_in = clip.source_in + (start - clip.timeline_start)
    return Cut(
        sequence_index=index,
        source_segment_id=seg.id,
        clip_name=clip.name,
        text=seg.text,
        timeline_in=start,
        timeline_out=end,
        source_in=source_in,
        source_out=source_in + duration,
        file_id=clip.file_id,
        file_path=clip.file_path,
        duration_frames=duration,
        master_clip_id=clip.master_clip_id,
        track_index=clip.track_index,
        kind="segment",
        merged_ids=(seg.id,),
    )


def _clip_row(index: int, clip: MediaClip) -> Cut:
    return Cut(
        sequence_index=index,
        source_segment_id=0,
        clip_name=clip.name,
        text=CLIP_ROW_TEXT,
        timeline_in=clip.timeline_start,
        timeline_out=clip.timeline_end,
        source_in=clip.source_in,
        source_out=clip.source_out,
        file_id=clip.file_id,
        file_path=clip.file_path,
        duration_frames=clip.timeline_duration,
        master_clip_id=clip.master_clip_id,
        track_index=clip.track_index,
        kind="clip",
    )


def generate_preview(timeline: Timeline, segments: list[TimedTextSegment]) -> list[Cut]:
    """List what the source timeline contains before any selection.

    With cues, every cue gets a row mapped losslessly onto its clip (no
    padding, no clamping); cues over a gap get a "gap" row instead of being
    dropped. Without cues, every physical clip gets a row.
    """
    check_timebase(timeline.fps)

    if segments:
        return [_segment_row(i, seg, timeline) for i, seg in enumerate(segments, 1)]

    ordered = sorted(timeline.clips, key=lambda c: (c.timeline_start, c.track_index))
    return [_clip_row(i, clip) for i, clip in enumerate(ordered, 1)]

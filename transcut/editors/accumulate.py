"""Timeline accumulator — lays merged segments end to end from frame 0."""

from transcut.models import Cut, RawSegment


def accumulate(segments: list[RawSegment]) -> list[Cut]:
    cuts: list[Cut] = []
    position = 0
    for index, seg in enumerate(segments, 1):
        duration = seg.duration
        cuts.append(
            Cut(
                sequence_index=index,
                source_segment_id=seg.segment_id,
                clip_name=seg.clip_name,
                text=seg.text,
                timeline_in=position,
                timeline_out=position + duration,
                source_in=seg.source_in,
                source_out=seg.source_out,
                file_id=seg.file_id,
                file_path=seg.file_path,
                duration_frames=duration,
                master_clip_id=seg.master_clip_id,
                track_index=seg.track_index,
                kind="cut",
                merged_ids=seg.merged_ids or (seg.segment_id,),
            )
        )
        position += duration
    return cuts

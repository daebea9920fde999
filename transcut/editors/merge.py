"""Adjacency merger — fuses touching or overlapping ranges from one file."""

from dataclasses import replace

from transcut.models import RawSegment


def can_merge(current: RawSegment, nxt: RawSegment, tolerance: int) -> bool:
    """True if ``nxt`` continues ``current`` within ``tolerance`` frames."""
    return current.file_id == nxt.file_id and nxt.source_in <= current.source_out + tolerance


def merge_adjacent(segments: list[RawSegment], tolerance: int = 2) -> list[RawSegment]:
    """Fuse chronologically ordered segments that would stutter on playback.

    Each segment is only compared with the running result before it, so the
    input must already be in chronological order. The input list is not
    modified.

    Fusion looks only at source frames: a later placement that reuses earlier
    frames of the same file within reach of the running out point is absorbed,
    its frames are not replayed and only its text is kept.
    """
    merged: list[RawSegment] = []
    if not segments:
        return merged

    current = segments[0]
    for nxt in segments[1:]:
        if can_merge(current, nxt, tolerance):
            current = replace(
                current,
                source_out=max(current.source_out, nxt.source_out),
                text=f"{current.text} {nxt.text}",
                merged_ids=current.merged_ids + nxt.merged_ids,
            )
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    return merged

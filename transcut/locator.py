"""Clip locator — find the clip that owns a timeline frame."""

from transcut.models import MediaClip, Timeline


def _priority(indexed: tuple[int, MediaClip]) -> tuple[int, int, int]:
    position, clip = indexed
    return (clip.track_index, clip.timeline_start, position)


def clips_at(frame: int, timeline: Timeline) -> list[MediaClip]:
    """All clips covering a frame, highest priority first.

    Lower track indices win, then earlier starts, then input order.
    """
    covering = [
        (pos, c)
        for pos, c in enumerate(timeline.clips)
        if c.timeline_start <= frame < c.timeline_end
    ]
    return [c for _, c in sorted(covering, key=_priority)]


def find_owning_clip(frame: int, timeline: Timeline) -> MediaClip | None:
    """Return the clip that owns ``frame``, or None when it falls in a gap."""
    matches = clips_at(frame, timeline)
    return matches[0] if matches else None

"""Shared data types used across transcut."""

from dataclasses import asdict, dataclass, field

GAP_CLIP_NAME = "[GAP / NO VIDEO]"
CLIP_ROW_TEXT = "[Video Clip]"


@dataclass(frozen=True)
class TimedTextSegment:
    """A subtitle cue: start/end in seconds plus its text."""

    id: int
    start_time: float
    end_time: float
    text: str


@dataclass(frozen=True)
class MediaClip:
    """One placement of source media on the editing timeline.

    Timeline positions and source points are integer frames. ``source_out`` is
    the last frame offset that may be read from the file through this placement.
    """

    id: str
    name: str
    timeline_start: int
    timeline_end: int
    source_in: int
    source_out: int
    file_id: str
    file_path: str = ""
    master_clip_id: str = ""
    track_index: int = 1

    @property
    def timeline_duration(self) -> int:
        return self.timeline_end - self.timeline_start


@dataclass(frozen=True)
class Timeline:
    """A parsed sequence: timebase, resolution and its clips ordered by start."""

    fps: float
    width: int
    height: int
    clips: tuple[MediaClip, ...] = ()

    @property
    def tracks(self) -> list[int]:
        return sorted({c.track_index for c in self.clips})


@dataclass(frozen=True)
class RawSegment:
    """A padded, clamped source range produced for one selected cue."""

    segment_id: int
    text: str
    file_id: str
    file_path: str
    clip_name: str
    source_in: int
    source_out: int
    master_clip_id: str = ""
    track_index: int = 1
    merged_ids: tuple[int, ...] = ()

    @property
    def duration(self) -> int:
        return self.source_out - self.source_in


@dataclass(frozen=True)
class Cut:
    """One row of a preview or compiled cut list.

    ``kind`` tells rows apart: "cut" for compiled edits, "segment" and "clip"
    for preview rows, "gap" for cues that map to no media.
    """

    sequence_index: int
    source_segment_id: int
    clip_name: str
    text: str
    timeline_in: int
    timeline_out: int
    source_in: int
    source_out: int
    file_id: str
    file_path: str = ""
    duration_frames: int = 0
    master_clip_id: str = ""
    track_index: int = 0
    kind: str = "cut"
    merged_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_gap(self) -> bool:
        return self.kind == "gap"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["merged_ids"] = list(self.merged_ids)
        return data

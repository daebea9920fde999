"""Caption editor — writes the compiled cut list as an SRT document."""

import datetime as dt
from pathlib import Path

import srt

from transcut.models import Cut
from transcut.timecode import check_timebase, frame_to_time


def build_srt(cuts: list[Cut], fps: float) -> str:
    """One cue per cut, timed on the edited timeline rather than the source."""
    check_timebase(fps)
    subtitles: list[srt.Subtitle] = []
    for index, cut in enumerate((c for c in cuts if not c.is_gap), 1):
        start = frame_to_time(cut.timeline_in, fps)
        end = frame_to_time(cut.timeline_in + cut.duration_frames, fps)
        subtitles.append(
            srt.Subtitle(
                index=index,
                start=dt.timedelta(seconds=start),
                end=dt.timedelta(seconds=end),
                content=cut.text or cut.clip_name,
            )
        )
    return srt.compose(subtitles, reindex=False)


def write_srt(cuts: list[Cut], fps: float, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_srt(cuts, fps), encoding="utf-8")
    return path

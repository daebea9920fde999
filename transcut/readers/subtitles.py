"""SRT reader producing timed text segments."""

import logging
from pathlib import Path

import srt

from transcut.models import TimedTextSegment

logger = logging.getLogger(__name__)


def _flatten(content: str) -> str:
    return " ".join(line.strip() for line in content.splitlines() if line.strip())


def parse_srt(content: str) -> list[TimedTextSegment]:
    """Parse SRT text into segments with unique ids and positive durations.

    Cue numbers become ids; a cue without one gets its position. Cues that end
    at or before their start, and repeats of an id already seen, are dropped.
    """
    content = content.lstrip("\ufeff")
    segments: list[TimedTextSegment] = []
    seen: set[int] = set()

    for position, sub in enumerate(srt.parse(content, ignore_errors=True), 1):
        seg_id = sub.index if sub.index is not None else position
        start = sub.start.total_seconds()
        end = sub.end.total_seconds()
        if end <= start:
            logger.warning("Dropping cue %s: ends at or before its start", seg_id)
            continue
        if seg_id in seen:
            logger.warning("Dropping cue %s: duplicate id", seg_id)
            continue
        seen.add(seg_id)
        segments.append(
            TimedTextSegment(id=seg_id, start_time=start, end_time=end, text=_flatten(sub.content))
        )

    logger.info("Parsed %d subtitle segments", len(segments))
    return segments


def load_subtitles(path: str | Path) -> list[TimedTextSegment]:
    return parse_srt(Path(path).read_text(encoding="utf-8-sig"))

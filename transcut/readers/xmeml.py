"""Reader for Final Cut Pro 7 / Premiere Pro XML (xmeml) sequences."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from transcut.models import MediaClip, Timeline

logger = logging.getLogger(__name__)

DEFAULT_TIMEBASE = 25
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080


class TimelineParseError(ValueError):
    """Raised when a document is not a readable xmeml sequence."""


def _text(node: ET.Element | None, tag: str) -> str | None:
    if node is None:
        return None
    child = node.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _int(value: str | None, default: int | None = None) -> int | None:
    if value is None:
        return default
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return default


def _index_files(root: ET.Element) -> dict[str, tuple[str, str]]:
    """Map file id -> (pathurl, name) for every fully described <file>."""
    files: dict[str, tuple[str, str]] = {}
    for node in root.iter("file"):
        file_id = node.get("id")
        pathurl = _text(node, "pathurl")
        name = _text(node, "name")
        if file_id and pathurl and name:
            files[file_id] = (pathurl, name)
    return files


def _resolution(root: ET.Element, sequence: ET.Element) -> tuple[int, int]:
    chars = sequence.find("media/video/format/samplecharacteristics")
    if chars is None:
        chars = next(root.iter("samplecharacteristics"), None)
    width = _int(_text(chars, "width"))
    height = _int(_text(chars, "height"))
    if width is None or height is None:
        return DEFAULT_WIDTH, DEFAULT_HEIGHT
    return width, height


def _read_clip(
    node: ET.Element,
    track_index: int,
    position: int,
    files: dict[str, tuple[str, str]],
) -> MediaClip | None:
    clip_id = node.get("id") or f"clipitem-v{track_index}-{position}"
    start = _int(_text(node, "start"))
    end = _int(_text(node, "end"))
    source_in = _int(_text(node, "in"))
    source_out = _int(_text(node, "out"))
    if None in (start, end, source_in, source_out):
        logger.debug("Skipping clip item %s: missing start/end/in/out", clip_id)
        return None
    # -1 marks an edge owned by a transition
    if start == -1 or end == -1:
        logger.debug("Skipping clip item %s: transition edge", clip_id)
        return None
    if end <= start or source_in < 0 or source_out < 0:
        logger.debug("Skipping clip item %s: invalid range", clip_id)
        return None

    file_node = node.find("file")
    file_id = file_node.get("id") if file_node is not None else None
    if not file_id or file_id not in files:
        logger.warning("Skipping clip item %s: unresolved file %r", clip_id, file_id)
        return None

    path, file_name = files[file_id]
    return MediaClip(
        id=clip_id,
        name=file_name,
        timeline_start=start,
        timeline_end=end,
        source_in=source_in,
        source_out=source_out,
        file_id=file_id,
        file_path=path,
        master_clip_id=_text(node, "masterclipid") or "",
        track_index=track_index,
    )


def parse_xmeml(content: str | bytes) -> Timeline:
    """Parse an xmeml document into a Timeline of its video clips."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise TimelineParseError(f"Malformed timeline XML: {e}") from e

    sequence = root if root.tag == "sequence" else next(root.iter("sequence"), None)
    if sequence is None:
        raise TimelineParseError("No <sequence> element found in timeline XML")

    fps = _int(_text(sequence.find("rate"), "timebase"), DEFAULT_TIMEBASE)
    width, height = _resolution(root, sequence)
    files = _index_files(root)

    clips: list[MediaClip] = []
    for track_index, track in enumerate(sequence.findall("media/video/track"), 1):
        for position, node in enumerate(track.findall("clipitem"), 1):
            clip = _read_clip(node, track_index, position, files)
            if clip is not None:
                clips.append(clip)

    clips.sort(key=lambda c: c.timeline_start)
    logger.info(
        "Parsed timeline: %d clips on %d tracks at %s fps (%dx%d)",
        len(clips), len({c.track_index for c in clips}), fps, width, height,
    )
    return Timeline(fps=fps, width=width, height=height, clips=tuple(clips))


def load_timeline(path: str | Path) -> Timeline:
    return parse_xmeml(Path(path).read_bytes())

"""Timeline editor — writes the compiled cut list as an xmeml sequence.

The sequence has one video track and two audio tracks. Every cut becomes a
video clip item and two audio clip items linked to it, placed back to back
from frame 0.
"""

import uuid
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from xml.dom import minidom

from transcut.models import Cut
from transcut.timecode import check_timebase

AUDIO_SAMPLE_RATE = 48000
AUDIO_DEPTH = 16


def _sub(parent: ET.Element, tag: str, text=None, **attrs: str) -> ET.Element:
    el = ET.SubElement(parent, tag, attrs)
    if text is not None:
        el.text = str(text)
    return el


def _rate(parent: ET.Element, timebase: int) -> None:
    rate = _sub(parent, "rate")
    _sub(rate, "timebase", timebase)
    _sub(rate, "ntsc", "FALSE")


def _video_characteristics(parent: ET.Element, timebase: int, width: int, height: int) -> None:
    chars = _sub(parent, "samplecharacteristics")
    _rate(chars, timebase)
    _sub(chars, "width", width)
    _sub(chars, "height", height)
    _sub(chars, "anamorphic", "FALSE")
    _sub(chars, "pixelaspectratio", "square")


def _audio_characteristics(parent: ET.Element) -> None:
    chars = _sub(parent, "samplecharacteristics")
    _sub(chars, "depth", AUDIO_DEPTH)
    _sub(chars, "samplerate", AUDIO_SAMPLE_RATE)


def _links(item: ET.Element, number: int) -> None:
    for ref, mediatype, track in (
        (f"clipitem-video-{number}", "video", 1),
        (f"clipitem-audio1-{number}", "audio", 1),
        (f"clipitem-audio2-{number}", "audio", 2),
    ):
        link = _sub(item, "link")
        _sub(link, "linkclipref", ref)
        _sub(link, "mediatype", mediatype)
        _sub(link, "trackindex", track)
        _sub(link, "clipindex", number)


def _clip_item(
    track: ET.Element,
    item_id: str,
    cut: Cut,
    timebase: int,
    start: int,
) -> ET.Element:
    item = _sub(track, "clipitem", id=item_id)
    _sub(item, "masterclipid", cut.master_clip_id or cut.file_id)
    _sub(item, "name", cut.clip_name)
    _sub(item, "enabled", "TRUE")
    _sub(item, "duration", cut.duration_frames)
    _rate(item, timebase)
    _sub(item, "start", start)
    _sub(item, "end", start + cut.duration_frames)
    _sub(item, "in", cut.source_in)
    _sub(item, "out", cut.source_out)
    return item


def _full_file(item: ET.Element, cut: Cut, timebase: int, width: int, height: int) -> None:
    file_el = _sub(item, "file", id=cut.file_id)
    _sub(file_el, "name", cut.clip_name)
    _sub(file_el, "pathurl", cut.file_path or "")
    _rate(file_el, timebase)
    media = _sub(file_el, "media")
    _video_characteristics(_sub(media, "video"), timebase, width, height)
    audio = _sub(media, "audio")
    _audio_characteristics(audio)
    _sub(audio, "channelcount", 2)


def build_xmeml(
    cuts: list[Cut],
    fps: float,
    width: int,
    height: int,
    sequence_name: str | None = None,
) -> str:
    """Serialize cuts into a pretty-printed xmeml (version 4) document."""
    check_timebase(fps)
    timebase = round(fps)
    name = sequence_name or f"transcut_sequence_{date.today().isoformat()}"

    root = ET.Element("xmeml", version="4")
    sequence = _sub(root, "sequence", id="sequence-transcut")
    _sub(sequence, "uuid", uuid.uuid4())
    _sub(sequence, "name", name)
    _rate(sequence, timebase)

    media = _sub(sequence, "media")
    video = _sub(media, "video")
    _video_characteristics(_sub(video, "format"), timebase, width, height)
    video_track = _sub(video, "track")

    audio = _sub(media, "audio")
    _sub(audio, "numOutputChannels", 2)
    _audio_characteristics(_sub(audio, "format"))
    audio_tracks = [_sub(audio, "track"), _sub(audio, "track")]

    # Files are described once; later items reference them by id.
    described: set[str] = set()
    start = 0
    for number, cut in enumerate((c for c in cuts if not c.is_gap), 1):
        item = _clip_item(video_track, f"clipitem-video-{number}", cut, timebase, start)
        if cut.file_id in described:
            _sub(item, "file", id=cut.file_id)
        else:
            _full_file(item, cut, timebase, width, height)
            described.add(cut.file_id)
        _links(item, number)

        for channel, track in enumerate(audio_tracks, 1):
            a_item = _clip_item(track, f"clipitem-audio{channel}-{number}", cut, timebase, start)
            _sub(a_item, "file", id=cut.file_id)
            source = _sub(a_item, "sourcetrack")
            _sub(source, "mediatype", "audio")
            _sub(source, "trackindex", channel)
            _links(a_item, number)

        start += cut.duration_frames

    raw = ET.tostring(root, encoding="unicode")
    pretty = minidom.parseString(raw).toprettyxml(indent="    ")
    # minidom writes its own declaration; swap it for one with the encoding and doctype
    body = pretty.split("\n", 1)[1]
    return '<?xml version="1.0" encoding="UTF-8"?>\n<!DOCTYPE xmeml>\n' + body


def write_xmeml(
    cuts: list[Cut],
    fps: float,
    width: int,
    height: int,
    path: Path,
    sequence_name: str | None = None,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_xmeml(cuts, fps, width, height, sequence_name), encoding="utf-8")
    return path

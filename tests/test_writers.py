"""Tests for the xmeml and SRT writers."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
import srt

from transcut.editors.captions import build_srt, write_srt
from transcut.editors.xmeml import build_xmeml, write_xmeml
from transcut.models import GAP_CLIP_NAME, Cut
from transcut.readers.xmeml import parse_xmeml
from transcut.timecode import InvalidTimebaseError


def _cut(index: int, timeline_in: int, duration: int, source_in: int, file_id: str = "f1", text: str = "") -> Cut:
    return Cut(
        sequence_index=index,
        source_segment_id=index,
        clip_name=f"{file_id}.mov",
        text=text or f"cut {index}",
        timeline_in=timeline_in,
        timeline_out=timeline_in + duration,
        source_in=source_in,
        source_out=source_in + duration,
        file_id=file_id,
        file_path=f"file:///media/{file_id}.mov",
        duration_frames=duration,
        track_index=1,
    )


CUTS = [_cut(1, 0, 60, 995), _cut(2, 60, 25, 0, file_id="f2"), _cut(3, 85, 50, 1200)]


class TestBuildSrt:
    def test_cues_follow_edited_timeline(self):
        subs = list(srt.parse(build_srt(CUTS, 25)))
        assert [s.index for s in subs] == [1, 2, 3]
        assert [(s.start.total_seconds(), s.end.total_seconds()) for s in subs] == [
            (0.0, 2.4), (2.4, 3.4), (3.4, 5.4),
        ]
        assert subs[0].content == "cut 1"

    def test_skips_gap_rows(self):
        gap = Cut(
            sequence_index=2, source_segment_id=9, clip_name=GAP_CLIP_NAME, text="nothing",
            timeline_in=0, timeline_out=25, source_in=-1, source_out=-1, file_id="",
            duration_frames=25, kind="gap",
        )
        subs = list(srt.parse(build_srt([CUTS[0], gap], 25)))
        assert len(subs) == 1

    def test_empty(self):
        assert build_srt([], 25) == ""

    def test_zero_fps(self):
        with pytest.raises(InvalidTimebaseError):
            build_srt(CUTS, 0)

    def test_write(self, tmp_path: Path):
        path = write_srt(CUTS, 25, tmp_path / "nested" / "cut.srt")
        assert path.exists()
        assert "00:00:02,400" in path.read_text(encoding="utf-8")


class TestBuildXmeml:
    def test_round_trips_through_reader(self):
        tl = parse_xmeml(build_xmeml(CUTS, 25, 1280, 720))
        assert tl.fps == 25
        assert (tl.width, tl.height) == (1280, 720)
        assert [(c.timeline_start, c.timeline_end) for c in tl.clips] == [(0, 60), (60, 85), (85, 135)]
        assert [(c.source_in, c.source_out) for c in tl.clips] == [(995, 1055), (0, 25), (1200, 1250)]
        assert [c.file_id for c in tl.clips] == ["f1", "f2", "f1"]
        assert tl.clips[2].file_path == "file:///media/f1.mov"

    def test_audio_tracks_linked(self):
        root = ET.fromstring(build_xmeml(CUTS, 25, 1920, 1080))
        audio_tracks = root.findall("sequence/media/audio/track")
        assert len(audio_tracks) == 2
        assert all(len(t.findall("clipitem")) == 3 for t in audio_tracks)
        first_video = root.find("sequence/media/video/track/clipitem")
        refs = [link.findtext("linkclipref") for link in first_video.findall("link")]
        assert refs == ["clipitem-video-1", "clipitem-audio1-1", "clipitem-audio2-1"]

    def test_files_described_once(self):
        root = ET.fromstring(build_xmeml(CUTS, 25, 1920, 1080))
        full = [f for f in root.iter("file") if f.find("pathurl") is not None]
        assert sorted(f.get("id") for f in full) == ["f1", "f2"]

    def test_sequence_name(self):
        root = ET.fromstring(build_xmeml(CUTS, 25, 1920, 1080, sequence_name="My cut"))
        assert root.findtext("sequence/name") == "My cut"

    def test_header(self):
        doc = build_xmeml(CUTS, 25, 1920, 1080)
        assert doc.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<!DOCTYPE xmeml>\n<xmeml version="4">')

    def test_write(self, tmp_path: Path):
        path = write_xmeml(CUTS, 25, 1920, 1080, tmp_path / "cut.xml")
        assert parse_xmeml(path.read_bytes()).clips

"""Shared test fixtures."""

from pathlib import Path

import pytest

from transcut.models import MediaClip, Timeline, TimedTextSegment

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def sample_xml_path() -> Path:
    return FIXTURES_DIR / "sample.xml"


@pytest.fixture
def sample_srt_path() -> Path:
    return FIXTURES_DIR / "sample.srt"


@pytest.fixture
def sample_selection_path() -> Path:
    return FIXTURES_DIR / "selection.json"


@pytest.fixture
def clip_a() -> MediaClip:
    """Timeline [0, 500) mapped to source [1000, 1500) of file A."""
    return MediaClip(
        id="clip-a",
        name="A001.mov",
        timeline_start=0,
        timeline_end=500,
        source_in=1000,
        source_out=1500,
        file_id="file-a",
        file_path="file:///media/A001.mov",
        master_clip_id="master-a",
        track_index=1,
    )


@pytest.fixture
def timeline_25(clip_a: MediaClip) -> Timeline:
    return Timeline(fps=25, width=1920, height=1080, clips=(clip_a,))


@pytest.fixture
def two_cues() -> list[TimedTextSegment]:
    return [
        TimedTextSegment(id=1, start_time=0.0, end_time=1.0, text="first"),
        TimedTextSegment(id=2, start_time=1.04, end_time=2.0, text="second"),
    ]

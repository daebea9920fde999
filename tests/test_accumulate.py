"""Tests for the timeline accumulator."""

from transcut.editors.accumulate import accumulate
from transcut.models import RawSegment


def _raw(seg_id: int, source_in: int, source_out: int, file_id: str = "f1") -> RawSegment:
    return RawSegment(
        segment_id=seg_id,
        text=f"t{seg_id}",
        file_id=file_id,
        file_path="",
        clip_name="clip",
        source_in=source_in,
        source_out=source_out,
        track_index=2,
    )


class TestAccumulate:
    def test_empty(self):
        assert accumulate([]) == []

    def test_contiguous_from_zero(self):
        cuts = accumulate([_raw(1, 500, 560), _raw(4, 10, 35), _raw(9, 2000, 2001)])
        assert [(c.timeline_in, c.timeline_out) for c in cuts] == [(0, 60), (60, 85), (85, 86)]

    def test_sequence_index_is_one_based(self):
        cuts = accumulate([_raw(7, 0, 10), _raw(8, 20, 30)])
        assert [c.sequence_index for c in cuts] == [1, 2]
        assert [c.source_segment_id for c in cuts] == [7, 8]

    def test_durations_consistent(self):
        for c in accumulate([_raw(1, 100, 137), _raw(2, 5, 9)]):
            assert c.duration_frames == c.timeline_out - c.timeline_in == c.source_out - c.source_in
            assert c.kind == "cut"
            assert not c.is_gap

    def test_carries_source_fields(self):
        (cut,) = accumulate([_raw(3, 40, 90, file_id="abc")])
        assert (cut.source_in, cut.source_out, cut.file_id, cut.track_index) == (40, 90, "abc", 2)
        assert cut.merged_ids == (3,)

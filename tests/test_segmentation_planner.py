from __future__ import annotations

import logging

import pytest

from bicseg.segmentation.planner import (
    FULL_LABEL,
    TAIL_LABEL,
    build_segments,
    frame_to_seconds,
)
from bicseg.segmentation.search import ChangePoint


def test_frame_to_seconds_uses_hop_and_rate() -> None:
    assert frame_to_seconds(99, hop_size=512, sample_rate=44_100) == pytest.approx(
        99 * 512 / 44_100
    )
    with pytest.raises(ValueError):
        frame_to_seconds(10, hop_size=0, sample_rate=44_100)
    with pytest.raises(ValueError):
        frame_to_seconds(10, hop_size=512, sample_rate=0)


def test_build_segments_spans_whole_matrix() -> None:
    points = [ChangePoint(position=200, value=-1.0), ChangePoint(position=100, value=-3.0)]

    segments = build_segments(points, n_frames=300, hop_size=512, sample_rate=44_100)

    assert [(seg.start_frame, seg.end_frame) for seg in segments] == [
        (0, 100),
        (100, 200),
        (200, 300),
    ]
    assert [seg.label for seg in segments] == ["segment_0", "segment_1", TAIL_LABEL]
    assert segments[0].bic_value == pytest.approx(-3.0)
    assert segments[-1].bic_value is None
    assert segments[0].end_s == pytest.approx(100 * 512 / 44_100)
    assert segments[1].duration() == pytest.approx(100 * 512 / 44_100)


def test_build_segments_without_change_points_spans_whole_duration() -> None:
    segments = build_segments([], n_frames=75, hop_size=100, sample_rate=1_000)
    assert len(segments) == 1
    assert segments[0].label == FULL_LABEL
    assert segments[0].end_s == pytest.approx(7.5)


def test_build_segments_ignores_out_of_range_and_duplicate_points() -> None:
    points = [
        ChangePoint(position=0, value=-1.0),
        ChangePoint(position=40, value=-1.0),
        ChangePoint(position=40, value=-2.0),
        ChangePoint(position=90, value=-1.0),
    ]
    segments = build_segments(points, n_frames=80, hop_size=1, sample_rate=1)
    assert [(seg.start_frame, seg.end_frame) for seg in segments] == [(0, 40), (40, 80)]


def test_build_segments_validates_frame_count() -> None:
    with pytest.raises(ValueError):
        build_segments([], n_frames=0, hop_size=512, sample_rate=44_100)


def test_segment_plan_to_dict_round_trips_fields() -> None:
    segment = build_segments(
        [ChangePoint(position=10, value=-0.5)], n_frames=20, hop_size=1, sample_rate=10
    )[0]
    assert segment.to_dict() == {
        "start_frame": 0,
        "end_frame": 10,
        "start_s": 0.0,
        "end_s": 1.0,
        "label": "segment_0",
        "bic_value": -0.5,
    }


def test_build_segments_logs_points_without_a_segment(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="bicseg.segmentation.planner")
    points = [
        ChangePoint(position=0, value=-1.0),
        ChangePoint(position=30, value=-1.0),
        ChangePoint(position=30, value=-2.0),
    ]

    segments = build_segments(points, n_frames=60, hop_size=1, sample_rate=1)

    assert len(segments) == 2
    assert "frame 0 outside" in caplog.text
    assert "frame 30 duplicates" in caplog.text

from __future__ import annotations

import json
from pathlib import Path

from bicseg.debug.debug_writer import write_bic_debug_bundle
from bicseg.segmentation.planner import build_segments
from bicseg.segmentation.sbic import SBicResult
from bicseg.segmentation.search import ChangePoint


def test_write_bic_debug_bundle(tmp_path: Path) -> None:
    points = [ChangePoint(position=40, value=-12.5), ChangePoint(position=90, value=-3.0)]
    result = SBicResult(change_points=points, bic_values=[1.0, -12.5, 4.0], coarse_count=3)
    segments = build_segments(points, n_frames=120, hop_size=512, sample_rate=44_100)

    bundle = write_bic_debug_bundle(
        tmp_path, "speech", "episode", result, segments, meta={"cpw": 1.5}
    )

    assert bundle == tmp_path / "speech" / "episode"
    index = json.loads((bundle / "index.json").read_text())
    assert index["change_point_count"] == 2
    assert index["coarse_count"] == 3
    assert index["meta"] == {"cpw": 1.5}
    assert json.loads((bundle / "bic_values.json").read_text()) == [1.0, -12.5, 4.0]

    lines = (bundle / "change_points.ndjson").read_text().splitlines()
    assert json.loads(lines[1]) == {"index": 1, "frame": 90, "bic_value": -3.0}

    summary = (bundle / "summary.txt").read_text()
    assert "segment_0" in summary
    assert "tail" in summary
    assert "3 samples" in summary

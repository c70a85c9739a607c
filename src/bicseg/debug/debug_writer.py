from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Sequence

from bicseg.segmentation.planner import SegmentPlan
from bicseg.segmentation.sbic import SBicResult


def write_bic_debug_bundle(
    out_dir: Path,
    config_name: str,
    input_basename: str,
    result: SBicResult,
    segments: Sequence[SegmentPlan],
    meta: dict[str, Any] | None = None,
) -> Path:
    """Write index.json, bic_values.json, change_points.ndjson and summary.txt."""

    bundle_dir = out_dir / config_name / input_basename
    bundle_dir.mkdir(parents=True, exist_ok=True)

    index_payload = {
        "config": config_name,
        "input": input_basename,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "coarse_count": result.coarse_count,
        "change_point_count": len(result.change_points),
        "bic_value_count": len(result.bic_values),
        "meta": meta or {},
    }

    points_ndjson = bundle_dir / "change_points.ndjson"
    with points_ndjson.open("w", encoding="utf-8") as fh:
        for idx, point in enumerate(result.change_points):
            fh.write(
                json.dumps({"index": idx, "frame": point.position, "bic_value": point.value})
                + "\n"
            )

    _write_file(bundle_dir / "bic_values.json", list(result.bic_values))
    (bundle_dir / "summary.txt").write_text(_summary_text(segments, result.bic_values))

    index_payload.update(
        {
            "change_points_file": str(points_ndjson),
            "bic_values_file": str(bundle_dir / "bic_values.json"),
        }
    )
    _write_file(bundle_dir / "index.json", index_payload)
    return bundle_dir


def _summary_text(segments: Sequence[SegmentPlan], bic_values: Sequence[float]) -> str:
    lines: List[str] = []
    for segment in segments:
        value = f"{segment.bic_value:.3f}" if segment.bic_value is not None else "-"
        lines.append(
            f"{segment.label:<12} frames {segment.start_frame:>6}-{segment.end_frame:<6} "
            f"{_format_timestamp(segment.start_s)}  {_format_timestamp(segment.end_s)} "
            f"(dur={segment.duration():.2f}s) dBIC={value}"
        )
    if bic_values:
        lines.append("")
        lines.append(
            f"coarse trace: {len(bic_values)} samples, "
            f"min={min(bic_values):.3f}, max={max(bic_values):.3f}"
        )
    return "\n".join(lines).strip() + "\n"


def _write_file(path: Path, payload: Any) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _format_timestamp(seconds: float) -> str:
    minutes = int(seconds // 60)
    remainder = seconds - minutes * 60
    return f"{minutes:02d}:{remainder:06.3f}"


__all__ = ["write_bic_debug_bundle"]

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from bicseg.segmentation.search import ChangePoint
from bicseg.utils import get_logger

logger = get_logger(__name__)

SEGMENT_LABEL = "segment"
TAIL_LABEL = "tail"
FULL_LABEL = "full_audio"


@dataclass
class SegmentPlan:
    start_frame: int
    end_frame: int
    start_s: float
    end_s: float
    label: str
    bic_value: Optional[float] = None

    def duration(self) -> float:
        return max(0.0, self.end_s - self.start_s)

    def to_dict(self) -> dict[str, object]:
        return {
            "start_frame": self.start_frame,
            "end_frame": self.end_frame,
            "start_s": self.start_s,
            "end_s": self.end_s,
            "label": self.label,
            "bic_value": self.bic_value,
        }


def frame_to_seconds(frame: float, *, hop_size: int, sample_rate: int) -> float:
    if hop_size <= 0:
        raise ValueError("hop_size must be positive")
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive")
    return frame * hop_size / sample_rate


def build_segments(
    change_points: Sequence[ChangePoint],
    *,
    n_frames: int,
    hop_size: int,
    sample_rate: int,
) -> List[SegmentPlan]:
    """Turn change points into contiguous spans covering ``[0, n_frames)``.

    Each span ends at a change point frame, carrying that point's BIC value;
    the final span runs to the end of the matrix.
    """

    if n_frames <= 0:
        raise ValueError("n_frames must be positive")

    def _plan(start: int, end: int, label: str, value: Optional[float]) -> SegmentPlan:
        return SegmentPlan(
            start_frame=start,
            end_frame=end,
            start_s=frame_to_seconds(start, hop_size=hop_size, sample_rate=sample_rate),
            end_s=frame_to_seconds(end, hop_size=hop_size, sample_rate=sample_rate),
            label=label,
            bic_value=value,
        )

    usable: List[ChangePoint] = []
    for point in change_points:
        if 0 < point.position < n_frames:
            usable.append(point)
        else:
            logger.debug(
                "Change point at frame %d outside (0, %d) has no segment", point.position, n_frames
            )
    usable.sort(key=lambda point: point.position)

    segments: List[SegmentPlan] = []
    last_start = 0
    for point in usable:
        if point.position <= last_start:
            logger.debug("Change point at frame %d duplicates a boundary", point.position)
            continue
        label = f"{SEGMENT_LABEL}_{len(segments)}"
        segments.append(_plan(last_start, point.position, label, point.value))
        last_start = point.position

    if not segments:
        return [_plan(0, n_frames, FULL_LABEL, None)]

    segments.append(_plan(last_start, n_frames, TAIL_LABEL, None))
    return segments

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass
class MatchCounts:
    tp: int = 0
    fp: int = 0
    fn: int = 0

    def accumulate(self, other: "MatchCounts") -> "MatchCounts":
        self.tp += other.tp
        self.fp += other.fp
        self.fn += other.fn
        return self


def match_boundaries(
    predictions: Sequence[float],
    references: Sequence[float],
    *,
    tolerance_frames: float,
) -> MatchCounts:
    if tolerance_frames < 0:
        raise ValueError("tolerance_frames must be non-negative")

    ref_matched = [False] * len(references)
    tp = 0

    for pred in sorted(predictions):
        match_index = _find_within_tolerance(pred, references, ref_matched, tolerance_frames)
        if match_index is not None:
            ref_matched[match_index] = True
            tp += 1

    fp = len(predictions) - tp
    fn = len(references) - tp
    return MatchCounts(tp=tp, fp=fp, fn=fn)


def _find_within_tolerance(
    candidate: float,
    references: Sequence[float],
    matched: Sequence[bool],
    tolerance: float,
) -> int | None:
    best_idx: int | None = None
    best_delta = tolerance
    for idx, ref in enumerate(references):
        if matched[idx]:
            continue
        delta = abs(candidate - ref)
        if delta <= best_delta:
            best_idx = idx
            best_delta = delta
    return best_idx

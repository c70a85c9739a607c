from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from bicseg.segmentation.bic import BicContext, delta_bic


@dataclass
class ChangePoint:
    position: int
    value: float


@dataclass
class SearchResult:
    curve: List[float] = field(default_factory=list)
    dmin: float = math.inf
    peak_index: Optional[int] = None
    change: Optional[ChangePoint] = None

    @property
    def found(self) -> bool:
        return self.change is not None


def bic_change_search(
    window: np.ndarray,
    inc: int,
    current: int,
    context: BicContext,
) -> SearchResult:
    """Scan every ``inc``-th position of ``window`` for the best split.

    Candidate positions are the last frame of the first half and leave at
    least ``inc`` frames on each side. ``current`` is the frame index of the
    window start within the full matrix; a found change point is reported in
    absolute frames.
    """

    if inc < 1:
        raise ValueError("inc must be positive")

    n_frames = window.shape[1]
    result = SearchResult()
    best_shift = 0
    shift = inc - 1
    while shift < n_frames - inc:
        value = delta_bic(window, shift + 1, context)
        result.curve.append(value)
        if value < result.dmin:
            result.dmin = value
            result.peak_index = len(result.curve) - 1
            best_shift = shift
        shift += inc

    if result.dmin < 0:
        result.change = ChangePoint(position=current + best_shift, value=result.dmin)
    return result

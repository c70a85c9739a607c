from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Sequence, Tuple

import numpy as np

from bicseg.segmentation.bic import BicContext, delta_bic
from bicseg.segmentation.search import ChangePoint, bic_change_search
from bicseg.utils import get_logger

logger = get_logger(__name__)

DEFAULT_SIZE1 = 300
DEFAULT_INC1 = 60
DEFAULT_SIZE2 = 200
DEFAULT_INC2 = 20
DEFAULT_CPW = 1.5


@dataclass
class SBicParams:
    size1: int = DEFAULT_SIZE1
    inc1: int = DEFAULT_INC1
    size2: int = DEFAULT_SIZE2
    inc2: int = DEFAULT_INC2
    cpw: float = DEFAULT_CPW

    def validate(self) -> None:
        for name in ("size1", "inc1", "size2", "inc2"):
            value = getattr(self, name)
            if not isinstance(value, (int, np.integer)) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not math.isfinite(self.cpw) or self.cpw < 0:
            raise ValueError(f"cpw must be a non-negative finite number, got {self.cpw!r}")


@dataclass
class SBicResult:
    change_points: List[ChangePoint] = field(default_factory=list)
    bic_values: List[float] = field(default_factory=list)
    coarse_count: int = 0

    @property
    def segmentation(self) -> List[float]:
        return [float(point.position) for point in self.change_points]

    @property
    def seg_values(self) -> List[float]:
        return [point.value for point in self.change_points]


class SBicSegmenter:
    """Three-pass BIC segmentation of a features x frames matrix.

    The coarse pass proposes change points with windows of ``size1`` frames
    scanned every ``inc1`` frames, the fine pass re-centres a ``size2`` window
    on each proposal and rescans it every ``inc2`` frames, and the
    validation pass drops interior points whose BIC differential against
    their neighbours is not negative.
    """

    def __init__(self, params: SBicParams | None = None) -> None:
        self.configure(params or SBicParams())

    def configure(self, params: SBicParams) -> None:
        params.validate()
        self.params = params

    def compute(self, features: np.ndarray) -> SBicResult:
        matrix = np.asarray(features, dtype=np.float64)
        if matrix.ndim != 2:
            raise ValueError(f"features must be a 2-D matrix, got {matrix.ndim} dimensions")
        n_features, n_frames = matrix.shape
        if n_frames < 2:
            raise ValueError(
                "features must contain at least 2 frames to be segmented, "
                f"got {n_frames}"
            )

        context = BicContext.for_features(n_features, self.params.cpw)

        coarse, bic_values = coarse_pass(matrix, self.params, context)
        logger.info("Coarse pass found %d change points over %d frames", len(coarse), n_frames)

        refined = fine_pass(matrix, coarse, self.params, context)
        logger.info("Fine pass kept %d change points", len(refined))

        validated = validate_pass(matrix, refined, context)
        logger.info("Validation kept %d change points", len(validated))

        return SBicResult(
            change_points=validated,
            bic_values=bic_values,
            coarse_count=len(coarse),
        )


def coarse_pass(
    features: np.ndarray,
    params: SBicParams,
    context: BicContext,
) -> Tuple[List[ChangePoint], List[float]]:
    n_frames = features.shape[1]
    points: List[ChangePoint] = []
    bic_values: List[float] = []

    start = 0
    end = -1
    while end < n_frames - 1:
        end = min(end + params.size1, n_frames - 1)
        window = features[:, start : end + 1]
        result = bic_change_search(window, params.inc1, start, context)
        logger.debug(
            "Coarse window [%d, %d]: %d candidates, dmin=%s",
            start,
            end,
            len(result.curve),
            result.dmin,
        )

        if result.change is not None:
            logger.debug("Found peak at frame %d", result.change.position)
            points.append(result.change)
            bic_values.extend(result.curve[: result.peak_index + 1])
            start = result.change.position + params.inc1
            end = start - 1
        elif end == n_frames - 1:
            bic_values.extend(result.curve)

    return points, bic_values


def fine_pass(
    features: np.ndarray,
    points: Sequence[ChangePoint],
    params: SBicParams,
    context: BicContext,
) -> List[ChangePoint]:
    n_frames = features.shape[1]
    half_size = params.size2 // 2
    pending: Deque[ChangePoint] = deque(points)
    kept: List[ChangePoint] = []

    while pending:
        point = pending.popleft()
        start = max(0, point.position - half_size)
        end = min(start + params.size2 - 1, n_frames - 1)
        window = features[:, start : end + 1]
        result = bic_change_search(window, params.inc2, start, context)

        if result.change is None:
            kept.append(point)
            continue

        lower = kept[-1].position if kept else 0
        upper = pending[0].position if pending else n_frames - 1
        if lower <= result.change.position <= upper:
            if result.change.position != point.position:
                logger.debug(
                    "Refined change point %d -> %d", point.position, result.change.position
                )
            kept.append(result.change)
        else:
            logger.debug(
                "Dropped change point %d: refined position %d outside [%d, %d]",
                point.position,
                result.change.position,
                lower,
                upper,
            )

    return kept


def validate_pass(
    features: np.ndarray,
    points: Sequence[ChangePoint],
    context: BicContext,
) -> List[ChangePoint]:
    if not points:
        return []

    kept: List[ChangePoint] = [points[0]]
    pending: Deque[ChangePoint] = deque(points[1:])
    start = 0

    # the last point has no right neighbour and is never tested
    while len(pending) > 1:
        point = pending.popleft()
        window = features[:, start : pending[0].position + 1]
        split = point.position - kept[-1].position
        if not 1 <= split <= window.shape[1] - 1:
            logger.debug("Dropped change point %d: degenerate split %d", point.position, split)
            continue
        value = delta_bic(window, split, context)
        if value >= 0:
            logger.debug("Merged across change point %d (delta_bic=%.3f)", point.position, value)
            continue
        kept.append(point)
        start = point.position + 1

    kept.extend(pending)
    return kept

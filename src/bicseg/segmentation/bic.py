from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from bicseg.segmentation.logdet import log_det


@dataclass(frozen=True)
class BicContext:
    """Penalty terms shared by every BIC evaluation of one run."""

    cp: float
    cpw: float

    @classmethod
    def for_features(cls, n_features: int, cpw: float) -> "BicContext":
        return cls(cp=2.0 * n_features, cpw=cpw)

    def penalty(self, n_frames: int) -> float:
        return self.cpw * self.cp * math.log(n_frames)


def delta_bic(window: np.ndarray, split: int, context: BicContext) -> float:
    """BIC differential of splitting ``window`` before frame ``split``.

    Negative values mean two Gaussian models explain the window better than
    one, after the complexity penalty.
    """

    n_frames = window.shape[1]
    if not 1 <= split <= n_frames - 1:
        raise ValueError(f"split must be within [1, {n_frames - 1}], got {split}")

    whole = log_det(window)
    first = log_det(window[:, :split])
    second = log_det(window[:, split:])
    n1 = split
    n2 = n_frames - split
    return 0.5 * (n1 * first + n2 * second - n_frames * whole + context.penalty(n_frames))

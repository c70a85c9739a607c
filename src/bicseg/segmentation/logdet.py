from __future__ import annotations

import numpy as np

COVARIANCE_FLOOR = 1e-5
LOG_FLOOR = -5.0


def log_det(matrix: np.ndarray) -> float:
    """Approximate log-determinant of the covariance of ``matrix``.

    ``matrix`` holds features along the first axis and frames along the
    second. Only the diagonal of the covariance is used, so the result is the
    sum of the per-feature log variances. Variances at or below
    ``COVARIANCE_FLOOR`` contribute ``LOG_FLOOR`` instead of their logarithm;
    constant rows therefore yield ``LOG_FLOOR`` each.
    """

    frames = matrix.shape[1]
    if frames < 1:
        raise ValueError("log_det requires at least one frame")

    total = matrix.sum(axis=1)
    squares = np.square(matrix).sum(axis=1)
    diag_cov = squares / frames - np.square(total / frames)

    # rounding can push the variance of constant rows slightly below zero
    logs = np.log(np.maximum(diag_cov, COVARIANCE_FLOOR))
    return float(np.where(diag_cov > COVARIANCE_FLOOR, logs, LOG_FLOOR).sum())

from __future__ import annotations

import numpy as np
import pytest

from bicseg.segmentation.logdet import LOG_FLOOR, log_det


def test_log_det_constant_rows_hit_floor() -> None:
    matrix = np.full((3, 10), 7.0)
    assert log_det(matrix) == pytest.approx(3 * LOG_FLOOR)
    assert log_det(matrix[:, 2:5]) == pytest.approx(-15.0)


def test_log_det_single_frame_hits_floor() -> None:
    matrix = np.array([[1.0], [2.0], [3.0], [4.0]])
    assert log_det(matrix) == pytest.approx(-20.0)


def test_log_det_matches_diagonal_variances() -> None:
    rng = np.random.default_rng(7)
    matrix = rng.normal(loc=2.0, scale=3.0, size=(4, 50))
    expected = float(np.sum(np.log(np.var(matrix, axis=1))))
    assert log_det(matrix) == pytest.approx(expected, rel=1e-9)


def test_log_det_mixes_floor_and_log_terms() -> None:
    matrix = np.array(
        [
            [0.0, 2.0, 0.0, 2.0],
            [5.0, 5.0, 5.0, 5.0],
            [0.0, 4.0, 0.0, 4.0],
        ]
    )
    assert log_det(matrix) == pytest.approx(0.0 + LOG_FLOOR + np.log(4.0))


def test_log_det_rejects_empty_window() -> None:
    with pytest.raises(ValueError):
        log_det(np.zeros((3, 0)))

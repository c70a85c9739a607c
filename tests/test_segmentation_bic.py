from __future__ import annotations

import math

import numpy as np
import pytest

from bicseg.segmentation.bic import BicContext, delta_bic
from bicseg.segmentation.logdet import log_det


def test_context_penalty_uses_twice_feature_count() -> None:
    context = BicContext.for_features(3, 1.5)
    assert context.cp == pytest.approx(6.0)
    assert context.penalty(100) == pytest.approx(1.5 * 6.0 * math.log(100))


def test_delta_bic_matches_formula() -> None:
    rng = np.random.default_rng(3)
    window = rng.normal(size=(2, 40))
    context = BicContext.for_features(2, 1.0)

    expected = 0.5 * (
        15 * log_det(window[:, :15])
        + 25 * log_det(window[:, 15:])
        - 40 * log_det(window)
        + context.penalty(40)
    )
    assert delta_bic(window, 15, context) == pytest.approx(expected)


def test_delta_bic_negative_for_distinct_halves(two_block_features: np.ndarray) -> None:
    context = BicContext.for_features(3, 1.0)
    assert delta_bic(two_block_features, 50, context) < 0


def test_delta_bic_positive_for_constant_window() -> None:
    context = BicContext.for_features(2, 1.0)
    window = np.ones((2, 30))
    assert delta_bic(window, 10, context) == pytest.approx(0.5 * context.penalty(30))


def test_delta_bic_is_symmetric_under_reversal() -> None:
    rng = np.random.default_rng(11)
    window = np.hstack([rng.normal(0.0, 1.0, (3, 20)), rng.normal(4.0, 2.0, (3, 35))])
    context = BicContext.for_features(3, 1.0)
    forward = delta_bic(window, 20, context)
    backward = delta_bic(window[:, ::-1], 35, context)
    assert forward == pytest.approx(backward)


@pytest.mark.parametrize("split", [0, 10, -1])
def test_delta_bic_rejects_empty_halves(split: int) -> None:
    context = BicContext.for_features(1, 1.0)
    with pytest.raises(ValueError):
        delta_bic(np.zeros((1, 10)), split, context)

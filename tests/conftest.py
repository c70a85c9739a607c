from __future__ import annotations

import numpy as np
import pytest

from bicseg.segmentation.sbic import SBicParams


@pytest.fixture
def two_block_features() -> np.ndarray:
    return np.hstack([np.zeros((3, 50)), np.full((3, 50), 10.0)])


@pytest.fixture
def small_params() -> SBicParams:
    return SBicParams(size1=100, inc1=2, size2=50, inc2=2, cpw=1.0)

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Tuple

import numpy as np

FramesAxis = Literal["columns", "rows"]
SUPPORTED_SUFFIXES = (".npy", ".npz", ".csv")


@dataclass
class FeatureMetadata:
    """Basic details about a loaded feature matrix."""

    source_path: Path
    n_features: int
    n_frames: int


def load_feature_matrix(
    path: Path,
    *,
    frames_axis: FramesAxis = "columns",
    key: Optional[str] = None,
) -> Tuple[FeatureMetadata, np.ndarray]:
    """Load a features x frames matrix from ``.npy``, ``.npz`` or ``.csv``.

    Files storing one frame per row are read with ``frames_axis="rows"`` and
    transposed. For ``.npz`` archives ``key`` selects the array, defaulting to
    the first one stored.
    """

    path = path.expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Feature file not found: {path}")
    if frames_axis not in ("columns", "rows"):
        raise ValueError("frames_axis must be 'columns' or 'rows'")

    suffix = path.suffix.lower()
    if suffix == ".npy":
        matrix = np.load(path)
    elif suffix == ".npz":
        with np.load(path) as archive:
            if not archive.files:
                raise ValueError(f"No arrays stored in {path}")
            matrix = archive[key or archive.files[0]]
    elif suffix == ".csv":
        matrix = np.loadtxt(path, delimiter=",", ndmin=2)
    else:
        raise ValueError(
            f"Unsupported feature file {path.name}; expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )

    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2:
        raise ValueError(f"Feature matrix must be 2-D, got shape {matrix.shape}")
    if frames_axis == "rows":
        matrix = matrix.T

    metadata = FeatureMetadata(
        source_path=path,
        n_features=int(matrix.shape[0]),
        n_frames=int(matrix.shape[1]),
    )
    return metadata, matrix

from __future__ import annotations

from pathlib import Path

import numpy as np

from bicseg.evaluation.runner import EvaluationRunner


def _write_example(tmp_path: Path, features: np.ndarray, reference_frame: int) -> Path:
    np.save(tmp_path / "clip.npy", features)
    (tmp_path / "clip.csv").write_text(f"frame\n{reference_frame}\n")
    manifest = tmp_path / "manifest.csv"
    manifest.write_text("features_path,annotation_path,name\nclip.npy,clip.csv,clip\n")
    return manifest


def test_evaluation_runner_computes_metrics(
    tmp_path: Path, two_block_features: np.ndarray
) -> None:
    manifest = _write_example(tmp_path, two_block_features, 50)

    runner = EvaluationRunner(
        tolerance_frames=3,
        sbic_overrides={"size1": 100, "inc1": 2, "size2": 50, "inc2": 2, "cpw": 1.0},
    )
    metrics = runner.run(manifest)

    assert metrics["tp"] == 1
    assert metrics["fp"] == 0
    assert metrics["fn"] == 0
    assert metrics["f1"] == 1.0


def test_evaluation_runner_counts_missed_boundaries(
    tmp_path: Path, two_block_features: np.ndarray
) -> None:
    manifest = _write_example(tmp_path, two_block_features, 50)

    metrics = EvaluationRunner(tolerance_frames=3).run(manifest)

    assert metrics["tp"] == 0
    assert metrics["fn"] == 1
    assert metrics["recall"] == 0.0

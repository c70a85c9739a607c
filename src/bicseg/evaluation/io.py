from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import List


@dataclass
class EvaluationExample:
    features_path: Path
    annotation_path: Path
    name: str


def load_manifest(manifest_path: Path) -> List[EvaluationExample]:
    rows = _read_csv(manifest_path)
    examples: List[EvaluationExample] = []
    base_dir = manifest_path.parent
    for row in rows:
        if not row.get("features_path") or not row.get("annotation_path"):
            raise ValueError("Manifest rows need features_path and annotation_path columns")
        features = _resolve(base_dir, row["features_path"])
        annotation = _resolve(base_dir, row["annotation_path"])
        examples.append(
            EvaluationExample(
                features_path=features,
                annotation_path=annotation,
                name=row.get("name") or features.stem,
            )
        )
    return examples


def load_reference_boundaries(
    annotation_path: Path,
    *,
    hop_size: int,
    sample_rate: int,
) -> List[float]:
    """Read reference change points as frame indices.

    Rows carry either a ``frame`` column or a ``time_s`` column; times are
    converted with ``hop_size`` and ``sample_rate``.
    """

    rows = _read_csv(annotation_path)
    boundaries: List[float] = []
    for row in rows:
        if row.get("frame"):
            boundaries.append(float(row["frame"]))
        elif row.get("time_s"):
            boundaries.append(float(row["time_s"]) * sample_rate / hop_size)
        else:
            raise ValueError(f"Annotation row without frame or time_s in {annotation_path}")
    return sorted(boundaries)


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def _read_csv(path: Path) -> List[dict[str, str]]:
    with path.open() as handle:
        reader = csv.DictReader(handle)
        return list(reader)

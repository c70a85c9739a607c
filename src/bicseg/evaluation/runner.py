from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from bicseg.evaluation import io
from bicseg.evaluation.io import EvaluationExample
from bicseg.evaluation.matching import MatchCounts, match_boundaries
from bicseg.evaluation.metrics import compute_precision_recall
from bicseg.features.io import load_feature_matrix
from bicseg.pipeline import BicSegmentationPipeline, PipelineConfig
from bicseg.utils import get_logger

logger = get_logger(__name__)


class EvaluationRunner:
    def __init__(
        self,
        config_path: Optional[Path] = None,
        tolerance_frames: float = 10.0,
        sbic_overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.config_path = config_path
        self.tolerance_frames = tolerance_frames
        self.pipeline = BicSegmentationPipeline(
            PipelineConfig(config_path=config_path, sbic_overrides=dict(sbic_overrides or {}))
        )

    def run(self, manifest_path: Path) -> Dict[str, float]:
        examples = io.load_manifest(manifest_path)
        counts = MatchCounts()
        for example in examples:
            example_counts = self._evaluate_example(example)
            logger.debug("Evaluated %s: %s", example.name, example_counts)
            counts.accumulate(example_counts)
        metrics = compute_precision_recall(counts.tp, counts.fp, counts.fn)
        metrics.update({"tp": counts.tp, "fp": counts.fp, "fn": counts.fn})
        return metrics

    def _evaluate_example(self, example: EvaluationExample) -> MatchCounts:
        config = self.pipeline.segmenter_config
        _, features = load_feature_matrix(
            example.features_path, frames_axis=config.frames_axis
        )
        result, _ = self.pipeline.segment_matrix(features)
        references = io.load_reference_boundaries(
            example.annotation_path,
            hop_size=config.hop_size,
            sample_rate=config.sample_rate,
        )
        return match_boundaries(
            result.segmentation,
            references,
            tolerance_frames=self.tolerance_frames,
        )

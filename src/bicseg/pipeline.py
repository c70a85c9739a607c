from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from bicseg.config.segmenter import SegmenterConfig, load_segmenter_config
from bicseg.debug.debug_writer import write_bic_debug_bundle
from bicseg.features.io import load_feature_matrix
from bicseg.segmentation.planner import SegmentPlan, build_segments
from bicseg.segmentation.sbic import SBicResult, SBicSegmenter
from bicseg.utils import get_logger

logger = get_logger(__name__)


@dataclass
class PipelineConfig:
    name: str = "default"
    config_path: Optional[Path] = None
    sample_rate: Optional[int] = None
    hop_size: Optional[int] = None
    sbic_overrides: Dict[str, Any] = field(default_factory=dict)
    debug_dir: Optional[Path] = None

    def resolve_segmenter_config(self) -> SegmenterConfig:
        if self.config_path:
            config = load_segmenter_config(self.config_path)
        else:
            config = SegmenterConfig(name=self.name)
        if self.sample_rate:
            config.sample_rate = self.sample_rate
        if self.hop_size:
            config.hop_size = self.hop_size
        return config


@dataclass
class PipelineResult:
    segmentation: List[float] = field(default_factory=list)
    seg_values: List[float] = field(default_factory=list)
    bic_values: List[float] = field(default_factory=list)
    segments: List[dict[str, Any]] = field(default_factory=list)
    output_dir: Path = Path("out")
    manifest_path: Optional[Path] = None
    debug_path: Optional[Path] = None


class BicSegmentationPipeline:
    def __init__(self, config: PipelineConfig) -> None:
        self.config = config
        self.segmenter_config = config.resolve_segmenter_config()
        self.params = self.segmenter_config.sbic_params(config.sbic_overrides)
        self.segmenter = SBicSegmenter(self.params)
        logger.debug("Initialized pipeline with %s", asdict(self.params))

    def segment_matrix(self, features: np.ndarray) -> Tuple[SBicResult, List[SegmentPlan]]:
        result = self.segmenter.compute(features)
        segments = build_segments(
            result.change_points,
            n_frames=int(np.shape(features)[1]),
            hop_size=self.segmenter_config.hop_size,
            sample_rate=self.segmenter_config.sample_rate,
        )
        return result, segments

    def run(self, features_path: Path, output_dir: Path) -> PipelineResult:
        metadata, features = load_feature_matrix(
            features_path, frames_axis=self.segmenter_config.frames_axis
        )
        logger.info(
            "Loaded %d features x %d frames from %s",
            metadata.n_features,
            metadata.n_frames,
            metadata.source_path,
        )
        result, segments = self.segment_matrix(features)

        output_dir.mkdir(parents=True, exist_ok=True)
        manifest_path = output_dir / "segments.json"
        segment_dicts = [segment.to_dict() for segment in segments]
        payload = {
            "features": str(metadata.source_path),
            "n_features": metadata.n_features,
            "n_frames": metadata.n_frames,
            "sample_rate": self.segmenter_config.sample_rate,
            "hop_size": self.segmenter_config.hop_size,
            "params": asdict(self.params),
            "segmentation": result.segmentation,
            "seg_values": result.seg_values,
            "segments": segment_dicts,
        }
        manifest_path.write_text(json.dumps(payload, indent=2))

        debug_path = None
        if self.config.debug_dir:
            debug_path = write_bic_debug_bundle(
                self.config.debug_dir,
                self.segmenter_config.name,
                metadata.source_path.stem,
                result,
                segments,
                meta={"params": asdict(self.params)},
            )

        logger.info(
            "Wrote %d segments to %s",
            len(segment_dicts),
            manifest_path,
        )
        return PipelineResult(
            segmentation=result.segmentation,
            seg_values=result.seg_values,
            bic_values=result.bic_values,
            segments=segment_dicts,
            output_dir=output_dir,
            manifest_path=manifest_path,
            debug_path=debug_path,
        )

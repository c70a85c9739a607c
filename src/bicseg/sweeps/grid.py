from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from bicseg.evaluation.runner import EvaluationRunner
from bicseg.sweeps.parameters import expand_grid, parse_parameter


@dataclass
class SweepResult:
    params: Dict[str, Any]
    metrics: Dict[str, float]


class SweepRunner:
    def __init__(
        self,
        manifest_path: Path,
        config_path: Optional[Path] = None,
        tolerance_frames: float = 10.0,
    ) -> None:
        self.manifest_path = manifest_path
        self.config_path = config_path
        self.tolerance_frames = tolerance_frames

    def run(self, param_defs: List[str]) -> List[SweepResult]:
        grid = expand_grid([parse_parameter(item) for item in param_defs])
        results: List[SweepResult] = []
        for params in grid:
            runner = EvaluationRunner(
                config_path=self.config_path,
                tolerance_frames=self.tolerance_frames,
                sbic_overrides=params,
            )
            metrics = runner.run(self.manifest_path)
            results.append(SweepResult(params=params, metrics=metrics))
        results.sort(key=lambda item: item.metrics.get("f1", 0.0), reverse=True)
        return results

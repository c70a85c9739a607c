from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from bicseg.segmentation.sbic import SBicParams

DEFAULT_SAMPLE_RATE = 44_100
DEFAULT_HOP_SIZE = 512
_INT_PARAMS = ("size1", "inc1", "size2", "inc2")


@dataclass
class SegmenterConfig:
    name: str
    sample_rate: int = DEFAULT_SAMPLE_RATE
    hop_size: int = DEFAULT_HOP_SIZE
    frames_axis: str = "columns"
    sbic: Dict[str, Any] = field(default_factory=dict)

    def sbic_params(self, overrides: Optional[Dict[str, Any]] = None) -> SBicParams:
        params = SBicParams()
        for key, value in (self.sbic or {}).items():
            try:
                _apply_param(params, key, value)
            except (TypeError, ValueError):
                continue
        # explicit overrides come from sweeps and the CLI and must parse
        for key, value in (overrides or {}).items():
            _apply_param(params, key, value)
        return params


def _apply_param(params: SBicParams, key: str, value: Any) -> None:
    if key in _INT_PARAMS:
        setattr(params, key, _parse_int(key, value))
    elif key == "cpw":
        try:
            params.cpw = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"cpw must be a number, got {value!r}") from exc


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{key} must be an integer, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc


def load_segmenter_config(path: Optional[Path]) -> SegmenterConfig:
    data = yaml.safe_load(path.read_text()) if path and path.exists() else {}
    if data is None:
        data = {}
    name = data.get("name", path.stem if path else "default")
    return SegmenterConfig(
        name=name,
        sample_rate=int(data.get("sample_rate", DEFAULT_SAMPLE_RATE)),
        hop_size=int(data.get("hop_size", DEFAULT_HOP_SIZE)),
        frames_axis=data.get("frames_axis", "columns"),
        sbic=data.get("sbic", {}) or {},
    )

"""BIC segmentation engine."""

from .bic import BicContext, delta_bic
from .logdet import log_det
from .planner import SegmentPlan, build_segments, frame_to_seconds
from .sbic import SBicParams, SBicResult, SBicSegmenter, coarse_pass, fine_pass, validate_pass
from .search import ChangePoint, SearchResult, bic_change_search

__all__ = [
    "log_det",
    "BicContext",
    "delta_bic",
    "ChangePoint",
    "SearchResult",
    "bic_change_search",
    "SBicParams",
    "SBicResult",
    "SBicSegmenter",
    "coarse_pass",
    "fine_pass",
    "validate_pass",
    "SegmentPlan",
    "build_segments",
    "frame_to_seconds",
]

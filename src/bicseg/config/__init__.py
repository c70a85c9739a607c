from .segmenter import SegmenterConfig, load_segmenter_config

__all__ = ["SegmenterConfig", "load_segmenter_config"]

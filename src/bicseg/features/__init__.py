from .io import FeatureMetadata, load_feature_matrix

__all__ = [
    "FeatureMetadata",
    "load_feature_matrix",
]

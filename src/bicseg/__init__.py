"""BIC-based segmentation of audio feature matrices."""

__version__ = "0.1.0"

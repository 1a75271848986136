"""Utility helpers."""
from .io import iter_image_paths, load_gray_image, load_image, save_buffer
from .timing import InferenceStats, time_block

__all__ = [
    "InferenceStats",
    "iter_image_paths",
    "load_gray_image",
    "load_image",
    "save_buffer",
    "time_block",
]

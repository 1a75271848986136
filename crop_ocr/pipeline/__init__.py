"""Crop preprocessing."""
from .preprocess import pre_process, to_gray

__all__ = ["pre_process", "to_gray"]

"""Image representations accepted by the recognizer."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

import numpy as np

from crop_ocr.pipeline.preprocess import to_gray


class CropImage(ABC):
    """Anything that can be turned into a float grayscale buffer."""

    #: Whether a caller may hand this representation over as already preprocessed.
    accepts_preprocessed: bool = True

    @abstractmethod
    def to_float_gray(self) -> np.ndarray:
        """Return a ``float32`` ``(H, W)`` buffer."""


@dataclass(frozen=True)
class ColorImage(CropImage):
    """Decoded ``uint8`` color crop in RGB channel order."""

    pixels: np.ndarray
    accepts_preprocessed = False

    def to_float_gray(self) -> np.ndarray:
        return to_gray(self.pixels)


@dataclass(frozen=True)
class GrayImage(CropImage):
    """Single channel integer crop (``uint8`` or ``uint16``)."""

    pixels: np.ndarray

    def to_float_gray(self) -> np.ndarray:
        scale = float(np.iinfo(self.pixels.dtype).max)
        return self.pixels.astype(np.float32) / scale


@dataclass(frozen=True)
class FloatGrayImage(CropImage):
    """Single channel floating point crop."""

    pixels: np.ndarray

    def to_float_gray(self) -> np.ndarray:
        return np.asarray(self.pixels, dtype=np.float32)


ImageLike = Union[CropImage, np.ndarray]


def as_image(image: ImageLike) -> CropImage:
    """Wrap a raw array into the matching representation by rank and dtype."""

    if isinstance(image, CropImage):
        return image
    array = np.asarray(image)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[..., 0]
    if array.ndim == 3:
        return ColorImage(array)
    if array.ndim != 2:
        raise ValueError(f"Unsupported image shape {array.shape}")
    if np.issubdtype(array.dtype, np.integer):
        return GrayImage(array)
    if np.issubdtype(array.dtype, np.floating):
        return FloatGrayImage(array)
    raise ValueError(f"Unsupported image dtype {array.dtype}")


__all__ = ["CropImage", "ColorImage", "GrayImage", "FloatGrayImage", "ImageLike", "as_image"]

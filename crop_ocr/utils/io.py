"""I/O helpers for crops and model artifacts."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator

import cv2
import numpy as np

from crop_ocr.ocr.images import ColorImage, GrayImage

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp")


def load_image(path: str | Path) -> ColorImage:
    """Load a color crop from disk, converted to RGB order."""

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise FileNotFoundError(f"Unable to load image: {path}")
    return ColorImage(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))


def load_gray_image(path: str | Path) -> GrayImage:
    """Load a crop from disk as a single channel ``uint8`` image."""

    image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise FileNotFoundError(f"Unable to load image: {path}")
    return GrayImage(image)


def save_buffer(path: str | Path, buffer: np.ndarray) -> None:
    """Write a float ``[0, 1]`` buffer to disk as an 8-bit grayscale image."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    image = (np.clip(buffer, 0.0, 1.0) * 255.0).round().astype(np.uint8)
    if not cv2.imwrite(str(out_path), image):
        raise IOError(f"Failed to save image to {out_path}")


def iter_image_paths(directory: str | Path, pattern: str = "*") -> Iterator[Path]:
    """Yield image files in ``directory`` matching ``pattern``, sorted by name."""

    for path in sorted(Path(directory).glob(pattern)):
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES:
            yield path


__all__ = ["IMAGE_SUFFIXES", "load_image", "load_gray_image", "save_buffer", "iter_image_paths"]

"""Crop preprocessing: grayscale conversion, normalization and canonical resize."""
from __future__ import annotations

import cv2
import numpy as np

from crop_ocr.config import PreprocessConfig

# ITU-R BT.601 luma weights, applied to RGB channel order.
LUMA_WEIGHTS = np.array([0.2989, 0.5870, 0.1140], dtype=np.float32)


def to_gray(rgb: np.ndarray) -> np.ndarray:
    """Convert an ``(H, W, 3)`` RGB ``uint8`` image to a float grayscale buffer in ``[0, 1]``."""

    if rgb.ndim != 3 or rgb.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3) color image, got shape {rgb.shape}")
    channels = rgb[..., :3].astype(np.float32) / 255.0
    return np.ascontiguousarray(channels @ LUMA_WEIGHTS, dtype=np.float32)


def blank_buffer(height: int, width: int, pad_value: float = 1.0) -> np.ndarray:
    return np.full((height, width), pad_value, dtype=np.float32)


def normalize(gray: np.ndarray, *, auto_invert: bool, mono_threshold: float = 0.0) -> np.ndarray | None:
    """Stretch ``gray`` to ``[0, 1]``; return ``None`` when it carries no contrast.

    With ``auto_invert`` the bottom-right pixel is taken as background and the
    buffer is inverted when that background is dark, so text always ends up
    dark on light.
    """

    if gray.size == 0:
        return None
    lo = float(gray.min())
    hi = float(gray.max())
    if not hi - lo > mono_threshold:
        return None

    out = (gray.astype(np.float32) - lo) / (hi - lo)
    if auto_invert and out[-1, -1] < 0.5:
        out = 1.0 - out
    return out


def crop_to_ink(gray: np.ndarray, ink_threshold: float) -> np.ndarray:
    """Crop to the bounding box of pixels darker than ``ink_threshold``."""

    rows = np.flatnonzero((gray < ink_threshold).any(axis=1))
    cols = np.flatnonzero((gray < ink_threshold).any(axis=0))
    if rows.size == 0 or cols.size == 0:
        return gray
    return gray[rows[0]:rows[-1] + 1, cols[0]:cols[-1] + 1]


def resize_and_pad(gray: np.ndarray, height: int, width: int, pad_value: float = 1.0) -> np.ndarray:
    """Fit ``gray`` inside ``width x height`` keeping its aspect ratio, padding right/bottom."""

    src_h, src_w = gray.shape[:2]
    if src_w / src_h > width / height:
        new_w = width
        new_h = max(1, min(height, int(src_h * width / src_w)))
    else:
        new_h = height
        new_w = max(1, min(width, int(src_w * height / src_h)))

    resized = cv2.resize(gray.astype(np.float32), (new_w, new_h), interpolation=cv2.INTER_LINEAR)
    canvas = blank_buffer(height, width, pad_value)
    canvas[:new_h, :new_w] = resized
    return canvas


def pre_process(
    gray: np.ndarray,
    height: int = 32,
    width: int = 384,
    config: PreprocessConfig | None = None,
) -> tuple[np.ndarray, bool]:
    """Produce the canonical ``(height, width)`` buffer and the non-mono flag.

    Blank or uniform crops come back as a padded canvas with ``False`` so the
    caller can skip inference.
    """

    cfg = config or PreprocessConfig()
    if gray.ndim != 2:
        raise ValueError(f"Expected a single channel buffer, got shape {gray.shape}")

    normalized = normalize(gray, auto_invert=cfg.auto_invert, mono_threshold=cfg.mono_threshold)
    if normalized is None:
        return blank_buffer(height, width, cfg.pad_value), False

    cropped = crop_to_ink(normalized, cfg.ink_threshold)
    # The crop always holds the darkest pixel; re-stretch whatever contrast is left.
    renormalized = normalize(cropped, auto_invert=False)
    if renormalized is not None:
        cropped = renormalized
    return resize_and_pad(cropped, height, width, cfg.pad_value), True


__all__ = ["LUMA_WEIGHTS", "to_gray", "blank_buffer", "normalize", "crop_to_ink", "resize_and_pad", "pre_process"]

"""Greedy decoding of per-timestep class scores."""
from __future__ import annotations

from typing import List, Sequence

import numpy as np

from crop_ocr.errors import ClassIndexOutOfRange, InferenceError
from crop_ocr.ocr.base import OcrResult

BLANK_LABEL = "-"


def _best_path(scores: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    scores = np.asarray(scores)
    if scores.ndim != 3 or scores.shape[1] != 1:
        raise InferenceError(f"Expected a [T, 1, C] score tensor, got shape {list(scores.shape)}")
    frames = scores[:, 0, :]
    if frames.shape[1] == 0:
        raise InferenceError("Score tensor has no classes")
    # NaN never wins; argmax keeps the lowest index on ties, so an all-NaN row resolves to 0.
    frames = np.where(np.isnan(frames), -np.inf, frames)
    indices = np.argmax(frames, axis=1)
    best = frames[np.arange(frames.shape[0]), indices]
    return indices, best


def _collapse(indices: np.ndarray, alphabet: Sequence[str], blank: str) -> List[tuple[int, str]]:
    """Return ``(timestep, label)`` pairs that survive repeat collapse and blank removal."""

    emitted: List[tuple[int, str]] = []
    last = None
    for t, index in enumerate(indices.tolist()):
        if index >= len(alphabet):
            raise ClassIndexOutOfRange(index, len(alphabet), t)
        label = alphabet[index]
        if label != last and label != blank:
            emitted.append((t, label))
        last = label
    return emitted


def greedy_decode(scores: np.ndarray, alphabet: Sequence[str], blank: str = BLANK_LABEL) -> str:
    """Decode a ``[T, 1, C]`` tensor into text.

    Each timestep picks its highest scoring class. A label is kept only when it
    differs from the previous timestep's label and is not ``blank``; blank
    still counts as the previous label, so ``a - a`` yields ``aa``.
    """

    indices, _ = _best_path(scores)
    return "".join(label for _, label in _collapse(indices, alphabet, blank))


class GreedyDecoder:
    """Greedy decoder bound to an alphabet and blank label."""

    def __init__(self, alphabet: Sequence[str], blank: str = BLANK_LABEL) -> None:
        self.alphabet = alphabet
        self.blank = blank

    def __call__(self, scores: np.ndarray) -> str:
        return self.decode(scores)

    def decode(self, scores: np.ndarray) -> str:
        return greedy_decode(scores, self.alphabet, self.blank)

    def decode_with_confidence(self, scores: np.ndarray) -> OcrResult:
        """Decode and attach the mean winning score of the emitted timesteps."""

        indices, best = _best_path(scores)
        emitted = _collapse(indices, self.alphabet, self.blank)
        if not emitted:
            return OcrResult(text="", confidence=0.0)
        confidence = float(np.mean([best[t] for t, _ in emitted]))
        return OcrResult(text="".join(label for _, label in emitted), confidence=confidence)


__all__ = ["BLANK_LABEL", "GreedyDecoder", "greedy_decode"]

from __future__ import annotations

import json
from typing import Callable, List, Sequence

import numpy as np
import pytest

from crop_ocr.engines.base import InferenceEngine, InputShape
from crop_ocr.errors import InferenceError

LABELS = {"0": "-", "1": "a", "2": "b", "3": "x"}


def one_hot(indices: Sequence[int], num_classes: int) -> np.ndarray:
    """Build a ``[T, 1, C]`` score tensor whose argmax follows ``indices``."""

    scores = np.full((len(indices), 1, num_classes), 0.01, dtype=np.float32)
    for t, index in enumerate(indices):
        scores[t, 0, index] = 0.9
    return scores


class FakeEngine(InferenceEngine):
    """Returns canned scores and remembers every tensor it was fed."""

    def __init__(self, input_shape: InputShape, scores: np.ndarray | Callable[[np.ndarray], np.ndarray]) -> None:
        self._input_shape = tuple(input_shape)
        self._scores = scores
        self.calls: List[np.ndarray] = []

    @property
    def input_shape(self) -> InputShape:
        return self._input_shape

    def run(self, tensor: np.ndarray) -> np.ndarray:
        if tuple(tensor.shape) != self._input_shape:
            raise InferenceError(f"bad input shape {tensor.shape}")
        self.calls.append(tensor)
        if callable(self._scores):
            return self._scores(tensor)
        return self._scores


@pytest.fixture
def alphabet_text() -> str:
    return json.dumps(LABELS)


@pytest.fixture
def fake_factory():
    """Factory returning a FakeEngine with ``a a - b b a`` scores; the engine is exposed as ``.engine``."""

    def factory(model_bytes: bytes, input_shape: InputShape) -> FakeEngine:
        engine = FakeEngine(input_shape, one_hot([1, 1, 0, 2, 2, 1], len(LABELS)))
        factory.engine = engine
        return engine

    factory.engine = None
    return factory


@pytest.fixture
def text_crop() -> np.ndarray:
    """White ``uint8`` crop with a dark block of text-like ink."""

    crop = np.full((20, 100), 255, dtype=np.uint8)
    crop[5:15, 10:90] = 0
    return crop

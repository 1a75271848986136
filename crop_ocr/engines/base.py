"""Inference engine interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

InputShape = tuple[int, int, int, int]


class InferenceEngine(ABC):
    """Runs a compiled sequence model on a ``[1, 1, H, W]`` tensor."""

    @property
    @abstractmethod
    def input_shape(self) -> InputShape:
        """Shape the model was bound to."""

    @abstractmethod
    def run(self, tensor: np.ndarray) -> np.ndarray:
        """Return the raw ``[T, 1, C]`` class-score tensor for ``tensor``."""

    def warmup(self, *, iterations: int = 1) -> None:
        """Run the model on a blank input to trigger lazy allocations."""

        dummy = np.ones(self.input_shape, dtype=np.float32)
        for _ in range(iterations):
            self.run(dummy)


#: Given serialized model bytes and the expected input shape, build an engine
#: or raise :class:`~crop_ocr.errors.ModelLoadError`.
EngineFactory = Callable[[bytes, InputShape], InferenceEngine]


__all__ = ["InferenceEngine", "EngineFactory", "InputShape"]

"""ONNX Runtime backend for sequence recognition models."""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from crop_ocr.engines.base import InferenceEngine, InputShape
from crop_ocr.errors import InferenceError, ModelLoadError

LOGGER = logging.getLogger(__name__)


def _resolve_providers(device: str) -> list[str]:
    import onnxruntime as ort

    requested = (device or "cpu").lower()
    if requested.startswith("cuda"):
        if "CUDAExecutionProvider" in ort.get_available_providers():
            return ["CUDAExecutionProvider", "CPUExecutionProvider"]
        warnings.warn(
            "CUDA device requested but not available. Falling back to CPU.",
            RuntimeWarning,
        )
    return ["CPUExecutionProvider"]


def _check_input_binding(dims: Sequence[object], expected: InputShape) -> None:
    if len(dims) != len(expected):
        raise ModelLoadError(f"Model input has rank {len(dims)}, expected shape {list(expected)}")
    for axis, (dim, want) in enumerate(zip(dims, expected)):
        # Symbolic or unknown dims bind to whatever we feed.
        if isinstance(dim, int) and dim > 0 and dim != want:
            raise ModelLoadError(
                f"Model input dimension {axis} is {dim}, expected {want} (shape {list(expected)})"
            )


@dataclass
class OnnxEngine(InferenceEngine):
    """Optimized ONNX Runtime session bound to a fixed ``[1, 1, H, W]`` input."""

    model_bytes: bytes
    expected_shape: InputShape
    device: str = "cpu"

    def __post_init__(self) -> None:
        self._session = None
        self._input_name = ""
        self._output_name = ""

    @classmethod
    def from_bytes(cls, model_bytes: bytes, input_shape: InputShape, *, device: str = "cpu") -> "OnnxEngine":
        engine = cls(model_bytes=model_bytes, expected_shape=tuple(input_shape), device=device)
        engine.load()
        return engine

    @property
    def input_shape(self) -> InputShape:
        return self.expected_shape

    def load(self) -> None:
        import onnxruntime as ort

        options = ort.SessionOptions()
        options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
        try:
            session = ort.InferenceSession(
                self.model_bytes,
                sess_options=options,
                providers=_resolve_providers(self.device),
            )
        except Exception as exc:
            raise ModelLoadError(f"Unable to load ONNX model: {exc}") from exc

        inputs = session.get_inputs()
        outputs = session.get_outputs()
        if len(inputs) != 1 or not outputs:
            raise ModelLoadError(
                f"Expected a model with one input and at least one output, got {len(inputs)} and {len(outputs)}"
            )
        if inputs[0].type != "tensor(float)":
            raise ModelLoadError(f"Model input must be tensor(float), got {inputs[0].type}")
        _check_input_binding(inputs[0].shape, self.expected_shape)

        self._session = session
        self._input_name = inputs[0].name
        self._output_name = outputs[0].name
        LOGGER.info(
            "Loaded ONNX model (%d bytes) with input '%s' %s on %s",
            len(self.model_bytes),
            self._input_name,
            list(self.expected_shape),
            session.get_providers()[0],
        )

    def run(self, tensor: np.ndarray) -> np.ndarray:
        if self._session is None:
            raise InferenceError("Engine has not been loaded. Call load() first.")
        if tuple(tensor.shape) != tuple(self.expected_shape):
            raise InferenceError(f"Input tensor has shape {list(tensor.shape)}, expected {list(self.expected_shape)}")
        feed = {self._input_name: np.ascontiguousarray(tensor, dtype=np.float32)}
        try:
            outputs = self._session.run([self._output_name], feed)
        except Exception as exc:
            raise InferenceError(f"ONNX Runtime inference failed: {exc}") from exc
        return np.asarray(outputs[0], dtype=np.float32)


__all__ = ["OnnxEngine"]

"""Inference engine backends."""
from .base import EngineFactory, InferenceEngine, InputShape
from .onnx_engine import OnnxEngine

__all__ = ["EngineFactory", "InferenceEngine", "InputShape", "OnnxEngine"]

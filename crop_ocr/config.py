"""Configuration utilities for the crop recognizer."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class ModelConfig:
    """Model and alphabet artifacts plus the input binding."""

    model_path: str = "models/ocr.onnx"
    alphabet_path: str = "models/index_2_word.json"
    input_height: int = 32
    input_width: int = 384
    device: str = "cpu"
    warmup_iterations: int = 0

    @property
    def input_shape(self) -> tuple[int, int, int, int]:
        return (1, 1, self.input_height, self.input_width)


@dataclass
class PreprocessConfig:
    """Options for turning a crop into the canonical buffer."""

    mono_threshold: float = 0.0
    ink_threshold: float = 0.6
    auto_invert: bool = True
    pad_value: float = 1.0


@dataclass
class DecoderConfig:
    """Greedy decoder options."""

    blank_label: str = "-"


@dataclass
class RecognizerConfig:
    """High level recognizer configuration."""

    model: ModelConfig = field(default_factory=ModelConfig)
    preprocess: PreprocessConfig = field(default_factory=PreprocessConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    log_level: str = "INFO"


def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = _deep_update(dict(target[key]), value)
        else:
            target[key] = value
    return target


def load_config(path: str | Path | None = None, overrides: Optional[Dict[str, Any]] = None) -> RecognizerConfig:
    """Load configuration from a YAML file and optional overrides."""

    data: Dict[str, Any] = {}
    if path:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    if overrides:
        data = _deep_update(data, overrides)

    return RecognizerConfig(
        model=ModelConfig(**data.get("model", {})),
        preprocess=PreprocessConfig(**data.get("preprocess", {})),
        decoder=DecoderConfig(**data.get("decoder", {})),
        log_level=data.get("log_level", "INFO"),
    )


__all__ = [
    "DecoderConfig",
    "ModelConfig",
    "PreprocessConfig",
    "RecognizerConfig",
    "load_config",
]

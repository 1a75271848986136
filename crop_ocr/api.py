"""Public API for the crop recognizer."""
from __future__ import annotations

import logging
from pathlib import Path

from crop_ocr.config import RecognizerConfig, load_config
from crop_ocr.engines.base import EngineFactory
from crop_ocr.ocr.recognizer import TextRecognizer
from crop_ocr.utils.io import load_image


LOGGER = logging.getLogger(__name__)


def create_recognizer(
    config_path: str | Path | None = None,
    overrides: dict | None = None,
    *,
    engine_factory: EngineFactory | None = None,
) -> TextRecognizer:
    """Instantiate a recognizer from a YAML config and optional overrides."""

    config = load_config(config_path, overrides)
    LOGGER.info(
        "Loading model '%s' with alphabet '%s'",
        config.model.model_path,
        config.model.alphabet_path,
    )
    return TextRecognizer.from_config(config, engine_factory=engine_factory)


def recognize_image(path: str | Path, config: RecognizerConfig | None = None) -> str:
    """Recognize the text in a single crop file."""

    recognizer = TextRecognizer.from_config(config or load_config())
    return recognizer.recognize(load_image(path), is_preprocessed=False)


__all__ = ["create_recognizer", "recognize_image", "TextRecognizer"]

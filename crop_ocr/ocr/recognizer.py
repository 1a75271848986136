"""Text recognizer: preprocess, run the sequence model, greedy decode."""
from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from crop_ocr.config import RecognizerConfig
from crop_ocr.engines.base import EngineFactory, InferenceEngine
from crop_ocr.engines.onnx_engine import OnnxEngine
from crop_ocr.errors import AlphabetParseError, ModelLoadError
from crop_ocr.ocr.alphabet import LabelAlphabet, load_alphabet
from crop_ocr.ocr.base import ImageToText, OcrResult
from crop_ocr.ocr.decoder import GreedyDecoder
from crop_ocr.ocr.images import ImageLike, as_image
from crop_ocr.pipeline.preprocess import pre_process
from crop_ocr.utils.timing import InferenceStats, time_block

LOGGER = logging.getLogger(__name__)


class TextRecognizer(ImageToText):
    """Recognizes short printed strings in small image crops.

    The recognizer owns the engine and alphabet for its whole lifetime and
    keeps running inference statistics. Statistics are updated under a lock,
    so a single instance can be shared across threads.
    """

    def __init__(
        self,
        model_bytes: bytes,
        alphabet_text: str | bytes,
        *,
        config: RecognizerConfig | None = None,
        engine_factory: EngineFactory | None = None,
    ) -> None:
        self.config = config or RecognizerConfig()
        self.alphabet: LabelAlphabet = load_alphabet(alphabet_text)
        self._engine = self._build_engine(model_bytes, engine_factory)
        self._decoder = GreedyDecoder(self.alphabet, self.config.decoder.blank_label)
        self._stats = InferenceStats()
        LOGGER.info(
            "Recognizer ready: %d labels | input %s | engine=%s",
            len(self.alphabet),
            list(self.input_shape),
            type(self._engine).__name__,
        )
        if self.config.model.warmup_iterations > 0:
            self.warmup(iterations=self.config.model.warmup_iterations)

    def _build_engine(self, model_bytes: bytes, engine_factory: EngineFactory | None) -> InferenceEngine:
        shape = self.config.model.input_shape
        factory = engine_factory
        if factory is None:
            device = self.config.model.device

            def factory(data: bytes, input_shape):
                return OnnxEngine.from_bytes(data, input_shape, device=device)

        try:
            return factory(model_bytes, shape)
        except ModelLoadError:
            raise
        except Exception as exc:
            raise ModelLoadError(f"Engine construction failed: {exc}") from exc

    @classmethod
    def from_files(
        cls,
        model_path: str | Path,
        alphabet_path: str | Path,
        *,
        config: RecognizerConfig | None = None,
        engine_factory: EngineFactory | None = None,
    ) -> "TextRecognizer":
        try:
            model_bytes = Path(model_path).read_bytes()
        except OSError as exc:
            raise ModelLoadError(f"Unable to read model file {model_path}: {exc}") from exc
        try:
            alphabet_text = Path(alphabet_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise AlphabetParseError(f"Unable to read alphabet file {alphabet_path}: {exc}") from exc
        return cls(model_bytes, alphabet_text, config=config, engine_factory=engine_factory)

    @classmethod
    def from_config(cls, config: RecognizerConfig, *, engine_factory: EngineFactory | None = None) -> "TextRecognizer":
        return cls.from_files(
            config.model.model_path,
            config.model.alphabet_path,
            config=config,
            engine_factory=engine_factory,
        )

    @property
    def input_shape(self) -> tuple[int, int, int, int]:
        return self.config.model.input_shape

    @property
    def invoke_count(self) -> int:
        return self._stats.count

    @property
    def total_inference_time(self) -> float:
        return self._stats.total

    def average_inference_time(self) -> float:
        """Mean seconds per inference; ``nan`` before the first inference."""

        return self._stats.average

    def warmup(self, *, iterations: int = 1) -> None:
        LOGGER.debug("Warming up engine for %d iteration(s)", iterations)
        self._engine.warmup(iterations=iterations)

    def prepare(self, image: ImageLike, is_preprocessed: bool = False) -> tuple[np.ndarray, bool]:
        """Return the model-ready buffer and whether it is worth running inference on."""

        crop = as_image(image)
        if is_preprocessed:
            assert crop.accepts_preprocessed, f"{type(crop).__name__} is never accepted as preprocessed"
            return crop.to_float_gray(), True
        _, _, height, width = self.input_shape
        return pre_process(crop.to_float_gray(), height, width, self.config.preprocess)

    def _infer(self, buffer: np.ndarray) -> np.ndarray:
        tensor = np.asarray(buffer, dtype=np.float32)[np.newaxis, np.newaxis]
        return self._engine.run(tensor)

    def recognize_result(self, image: ImageLike, is_preprocessed: bool = False) -> OcrResult:
        buffer, non_mono = self.prepare(image, is_preprocessed)
        if not non_mono:
            LOGGER.debug("Skipping inference for mono crop")
            return OcrResult(text="", confidence=0.0)

        with time_block(self._stats):
            scores = self._infer(buffer)
            result = self._decoder.decode_with_confidence(scores)
        LOGGER.debug("Recognized %r in %d timestep(s)", result.text, scores.shape[0])
        return result

    def recognize(self, image: ImageLike, is_preprocessed: bool = False) -> str:
        return self.recognize_result(image, is_preprocessed).text


__all__ = ["TextRecognizer"]

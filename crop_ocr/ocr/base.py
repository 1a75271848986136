"""Image-to-text interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from crop_ocr.ocr.images import ImageLike


@dataclass
class OcrResult:
    """Container for OCR output."""

    text: str
    confidence: float = 1.0


class ImageToText(ABC):
    """Abstract recognizer interface."""

    @abstractmethod
    def recognize(self, image: ImageLike, is_preprocessed: bool = False) -> str:
        """Return the text found in ``image``."""

    def recognize_result(self, image: ImageLike, is_preprocessed: bool = False) -> OcrResult:
        return OcrResult(text=self.recognize(image, is_preprocessed))

    def recognize_crops(self, crops: Sequence[ImageLike]) -> List[OcrResult]:
        """Recognize every crop independently, one inference call each."""

        return [self.recognize_result(crop) for crop in crops]

    def warmup(self, *, iterations: int = 1) -> None:
        _ = iterations


__all__ = ["ImageToText", "OcrResult"]

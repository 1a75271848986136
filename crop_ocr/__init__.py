"""Short-text recognition for small image crops."""
from crop_ocr.errors import (
    AlphabetParseError,
    ClassIndexOutOfRange,
    CropOcrError,
    InferenceError,
    ModelLoadError,
)
from crop_ocr.ocr.images import ColorImage, FloatGrayImage, GrayImage
from crop_ocr.ocr.recognizer import TextRecognizer

__version__ = "0.1.0"

__all__ = [
    "AlphabetParseError",
    "ClassIndexOutOfRange",
    "ColorImage",
    "CropOcrError",
    "FloatGrayImage",
    "GrayImage",
    "InferenceError",
    "ModelLoadError",
    "TextRecognizer",
]

"""Recognition components."""
from .alphabet import LabelAlphabet, load_alphabet, parse_alphabet
from .base import ImageToText, OcrResult
from .decoder import BLANK_LABEL, GreedyDecoder, greedy_decode
from .images import ColorImage, CropImage, FloatGrayImage, GrayImage, as_image
from .recognizer import TextRecognizer

__all__ = [
    "BLANK_LABEL",
    "ColorImage",
    "CropImage",
    "FloatGrayImage",
    "GrayImage",
    "GreedyDecoder",
    "ImageToText",
    "LabelAlphabet",
    "OcrResult",
    "TextRecognizer",
    "as_image",
    "greedy_decode",
    "load_alphabet",
    "parse_alphabet",
]

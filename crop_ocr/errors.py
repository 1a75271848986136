"""Error types raised by the recognizer."""
from __future__ import annotations


class CropOcrError(Exception):
    """Base class for all recoverable recognizer failures."""


class ModelLoadError(CropOcrError):
    """The serialized model could not be parsed, bound or compiled."""


class AlphabetParseError(CropOcrError, ValueError):
    """The label mapping contains a malformed key or value."""


class InferenceError(CropOcrError):
    """The inference call failed or returned a malformed tensor."""


class ClassIndexOutOfRange(CropOcrError, IndexError):
    """A decoded class index has no label in the alphabet."""

    def __init__(self, index: int, alphabet_size: int, timestep: int) -> None:
        super().__init__(
            f"Class index {index} at timestep {timestep} is outside the alphabet "
            f"(size {alphabet_size}); the alphabet does not match the model."
        )
        self.index = index
        self.alphabet_size = alphabet_size
        self.timestep = timestep


__all__ = [
    "CropOcrError",
    "ModelLoadError",
    "AlphabetParseError",
    "InferenceError",
    "ClassIndexOutOfRange",
]

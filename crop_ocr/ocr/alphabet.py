"""Label alphabet built from a sparse ``{"<class id>": label}`` mapping."""
from __future__ import annotations

import json
import re
from typing import Iterator, Mapping, Sequence

from crop_ocr.errors import AlphabetParseError

_KEY_PATTERN = re.compile(r"\+?[0-9]+")


class LabelAlphabet(Sequence[str]):
    """Immutable, index-addressable list of class labels."""

    def __init__(self, labels: Sequence[str]) -> None:
        self._labels: tuple[str, ...] = tuple(labels)

    def __getitem__(self, index):  # type: ignore[override]
        return self._labels[index]

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LabelAlphabet):
            return self._labels == other._labels
        if isinstance(other, (list, tuple)):
            return self._labels == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._labels)

    def __repr__(self) -> str:
        return f"LabelAlphabet(size={len(self._labels)})"

    def index_of(self, label: str) -> int:
        """Return the first class id carrying ``label``."""

        try:
            return self._labels.index(label)
        except ValueError:
            raise KeyError(label) from None


def parse_alphabet(mapping: Mapping[str, object]) -> LabelAlphabet:
    """Sort ``mapping`` by integer key and keep the labels in that order.

    Keys must be decimal strings of non-negative integers (an optional leading
    ``+`` is allowed) and values plain strings. Gaps between keys are accepted;
    the labels are packed so the i-th smallest key becomes class ``i``.
    """

    entries: list[tuple[int, str]] = []
    for key, value in mapping.items():
        if not isinstance(key, str) or not _KEY_PATTERN.fullmatch(key):
            raise AlphabetParseError(f"Alphabet key {key!r} is not a non-negative integer")
        if not isinstance(value, str):
            raise AlphabetParseError(f"Alphabet value for key {key!r} is not a string: {value!r}")
        entries.append((int(key), value))

    entries.sort(key=lambda item: item[0])
    return LabelAlphabet([label for _, label in entries])


def load_alphabet(text: str | bytes) -> LabelAlphabet:
    """Parse a JSON object payload into a :class:`LabelAlphabet`."""

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise AlphabetParseError(f"Alphabet payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise AlphabetParseError(f"Alphabet payload must be a JSON object, got {type(data).__name__}")
    return parse_alphabet(data)


__all__ = ["LabelAlphabet", "parse_alphabet", "load_alphabet"]

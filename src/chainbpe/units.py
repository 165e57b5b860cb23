"""Atomic units used for the initial tokenization of raw text."""

from enum import Enum
from typing import Iterator, Literal

import regex as re

from .errors import ConfigError

UnitName = Literal["char", "grapheme"]

# extended grapheme cluster, e.g. "e" + combining acute stays one unit
_GRAPHEME_RE = re.compile(r"\X")


class TextUnit(str, Enum):
    """
    How raw text is cut into the units of initial tokenization.

    ``CHAR`` yields one unit per Unicode code point. ``GRAPHEME`` yields one
    unit per extended grapheme cluster, so combining marks and emoji
    sequences start out as a single token.
    """

    CHAR = "char"
    GRAPHEME = "grapheme"

    @classmethod
    def get(cls, name: "str | TextUnit") -> "TextUnit":
        """Get text unit by name (case-insensitive)."""
        if isinstance(name, TextUnit):
            return name
        try:
            return cls[name.upper()]
        except KeyError:
            raise ConfigError(
                "unknown text unit",
                invalid_name=name,
                available=list_units(),
            )

    def split(self, text: str) -> Iterator[str]:
        """Yield the units of ``text`` in input order."""
        match self:
            case TextUnit.CHAR:
                yield from text
            case TextUnit.GRAPHEME:
                for m in _GRAPHEME_RE.finditer(text):
                    yield m.group()


def list_units() -> list[str]:
    """Return available text unit names."""
    return [unit.value for unit in TextUnit]


__all__ = ["UnitName", "TextUnit", "list_units"]

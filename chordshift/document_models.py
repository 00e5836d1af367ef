"""Data models shared by the line transposer and document processor."""

from dataclasses import dataclass
from enum import Enum


class LineKind(str, Enum):
    """How a document line is treated during transposition."""

    KEY_MARKER = "key"
    CHORD = "chord"
    TEXT = "text"


@dataclass(frozen=True)
class ChordSpan:
    """A maximal run of whitespace or non-whitespace characters in a line."""

    text: str
    is_whitespace: bool


@dataclass(frozen=True)
class TransposedDocument:
    """
    Result of transposing a whole document.

    Attributes:
        source_key: Key detected from the input document.
        target_key: Key the chords were rewritten into.
        lines:      Output lines, one-to-one and in order with the input.
        kinds:      Classification of each input line.
    """

    source_key: str
    target_key: str
    lines: list[str]
    kinds: list[LineKind]

    @property
    def chord_line_count(self) -> int:
        """Number of lines that went through the line transposer."""
        return sum(1 for kind in self.kinds if kind is LineKind.CHORD)

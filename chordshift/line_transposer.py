"""LineTransposer: rewrites the chords of a single line into another key."""

from __future__ import annotations

import re
from typing import Final

from chordshift.chord_classifier import is_valid_chord, split_slash
from chordshift.document_models import ChordSpan
from chordshift.errors import InvalidChord
from chordshift.key_table import DEFAULT_KEY_TABLE, KeyTable

_SPAN_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\s+)|(\S+)", re.ASCII)


def split_spans(line: str) -> list[ChordSpan]:
    """Split *line* into alternating maximal whitespace/non-whitespace spans."""
    return [
        ChordSpan(text=match.group(), is_whitespace=match.group(1) is not None)
        for match in _SPAN_PATTERN.finditer(line)
    ]


class LineTransposer:
    """
    Transposes chords by scale degree between two keys of a KeyTable.

    A chord is looked up by exact name in the source key's scale and replaced
    by the chord at the same degree in the target key. Slash chords transpose
    each side independently. Whitespace is copied through untouched, which
    keeps chord charts aligned with the lyric lines around them.
    """

    def __init__(self, key_table: KeyTable = DEFAULT_KEY_TABLE) -> None:
        self.key_table = key_table

    def transpose_chord(self, chord: str, from_key: str, to_key: str) -> str:
        """
        Transpose a single chord name from *from_key* to *to_key*.

        Raises:
            UnsupportedKey: If either key is not in the table.
            InvalidChord:   If the chord (or one side of a slash chord) is not
                            in the source key's scale.
        """
        self.key_table.scale_of(from_key)  # rejects an unknown source key
        to_scale = self.key_table.scale_of(to_key)

        upper, bass = split_slash(chord)
        if bass is not None:
            return (
                f"{self.transpose_chord(upper, from_key, to_key)}"
                f"/{self.transpose_chord(bass, from_key, to_key)}"
            )

        degree = self.key_table.degree_index_of(from_key, chord)
        if degree is None:
            raise InvalidChord(chord)
        return to_scale[degree]

    def transpose_line(self, line: str, from_key: str, to_key: str) -> str:
        """
        Transpose every space-delimited chord token in *line*.

        Tokens that fail the chord grammar, such as words or chords glued to
        punctuation, are copied through verbatim.
        """
        parts: list[str] = []
        for span in split_spans(line):
            if not span.is_whitespace and is_valid_chord(span.text):
                parts.append(self.transpose_chord(span.text, from_key, to_key))
            else:
                parts.append(span.text)
        return "".join(parts)

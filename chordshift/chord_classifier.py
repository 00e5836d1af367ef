"""Chord Classifier: token-level and line-level chord detection.

Two predicates with different jobs:

- ``is_valid_chord`` is a strict grammar check deciding whether one
  whitespace-delimited token gets transposed.
- ``is_chord_line`` is a cheap heuristic deciding whether a line is tokenized
  at all. It misfires on purpose in a few known ways: a dense all-caps lyric
  line with spaces and a letter A-G counts as a chord line, and a single chord
  with five or fewer whitespace characters and no ``/`` or ``#`` does not.
"""

import re
from typing import Final

_CHORD_BODY: Final[str] = r"[A-G][#b]?(?:m|maj|dim)?[0-9]?"

CHORD_PATTERN: Final[re.Pattern[str]] = re.compile(rf"{_CHORD_BODY}(?:/{_CHORD_BODY})?")

#: A line needs more than this many whitespace characters to qualify on spacing alone.
MIN_CHORD_LINE_WHITESPACE: Final[int] = 5

_CHORD_LETTERS: Final[frozenset[str]] = frozenset("ABCDEFG")

# ASCII whitespace only; a no-break space counts as text.
WHITESPACE: Final[str] = " \t\n\r\x0b\x0c"


def is_valid_chord(token: str) -> bool:
    """Return True if *token* is exactly one chord, optionally a slash chord."""
    if not token or not token.strip(WHITESPACE):
        return False
    return CHORD_PATTERN.fullmatch(token) is not None


def is_chord_line(line: str) -> bool:
    """Heuristically decide whether *line* holds chord symbols."""
    if not line or not line.strip(WHITESPACE):
        return False
    if "/" in line or "#" in line:
        return True
    whitespace_count = sum(1 for ch in line if ch in WHITESPACE)
    return whitespace_count > MIN_CHORD_LINE_WHITESPACE and any(
        ch in _CHORD_LETTERS for ch in line
    )


def split_slash(chord: str) -> tuple[str, str | None]:
    """Split a chord on its first ``/`` into (upper, bass); bass is None if absent."""
    upper, sep, bass = chord.partition("/")
    return upper, (bass if sep else None)

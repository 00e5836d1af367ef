"""Errors raised while transposing a chord document.

Every error is terminal for the document being processed. Tokens that do not
look like chords at all are never errors; they are copied through as text.
"""


class TranspositionError(ValueError):
    """Base class for failures that abort a whole document."""


class UnsupportedKey(TranspositionError):
    """A source or target key is not one of the supported major keys."""

    def __init__(self, key: str, supported: tuple[str, ...] = ()) -> None:
        self.key = key
        if supported:
            message = f"Invalid key '{key}'. Please use {', '.join(supported)}."
        else:
            message = f"Invalid key '{key}'."
        super().__init__(message)


class KeyNotDetected(TranspositionError):
    """No line of the document carries a recognisable key marker."""

    def __init__(self) -> None:
        super().__init__("No key specified in content")


class InvalidChord(TranspositionError):
    """A well-formed chord token is not part of the source key's scale."""

    def __init__(self, chord: str) -> None:
        self.chord = chord
        super().__init__(f"Invalid chord: {chord}")

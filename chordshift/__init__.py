"""chordshift: transpose chord charts between major keys."""

__version__ = "0.1.0"

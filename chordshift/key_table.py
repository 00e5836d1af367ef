"""KeyTable: the diatonic triads of each supported major key."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from chordshift.errors import UnsupportedKey

DEGREES_PER_KEY: Final[int] = 7

#: Roman numeral labels for the seven scale degrees, index-aligned with scales.
DEGREE_LABELS: Final[tuple[str, ...]] = ("I", "ii", "iii", "IV", "V", "vi", "vii°")

# Lookup is by exact spelling, so "A#" is not "Bb" and "Gb" is not "F#".
_MAJOR_SCALES: Final[dict[str, tuple[str, ...]]] = {
    "C": ("C", "Dm", "Em", "F", "G", "Am", "Bdim"),
    "D": ("D", "Em", "F#m", "G", "A", "Bm", "C#dim"),
    "E": ("E", "F#m", "G#m", "A", "B", "C#m", "D#dim"),
    "F": ("F", "Gm", "Am", "Bb", "C", "Dm", "Edim"),
    "G": ("G", "Am", "Bm", "C", "D", "Em", "F#dim"),
    "A": ("A", "Bm", "C#m", "D", "E", "F#m", "G#dim"),
    "B": ("B", "C#m", "D#m", "E", "F#", "G#m", "A#dim"),
}


@dataclass(frozen=True)
class KeyTable:
    """
    Immutable mapping of key symbol to its seven degree chords.

    Degree index is what ties two keys together: the chord at degree *i* in
    one key transposes to the chord at degree *i* in another.

    Attributes:
        scales: Key symbol -> ordered chords for degrees I..vii°.
    """

    scales: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: _MAJOR_SCALES)

    def __post_init__(self) -> None:
        frozen = {key: tuple(scale) for key, scale in self.scales.items()}
        object.__setattr__(self, "scales", MappingProxyType(frozen))
        for key, scale in self.scales.items():
            if len(scale) != DEGREES_PER_KEY:
                raise ValueError(
                    f"Scale for key '{key}' has {len(scale)} chords, expected {DEGREES_PER_KEY}."
                )

    @property
    def keys(self) -> tuple[str, ...]:
        """Supported key symbols in table order."""
        return tuple(self.scales)

    def normalize_key(self, key: str) -> str:
        """
        Return *key* stripped and upper-cased if it names a supported key.

        Raises:
            UnsupportedKey: If the normalized symbol is not in the table.
        """
        normalized = key.strip().upper()
        if normalized not in self.scales:
            raise UnsupportedKey(key, self.keys)
        return normalized

    def scale_of(self, key: str) -> tuple[str, ...]:
        """Return the seven degree chords of *key* (exact symbol, no normalisation)."""
        try:
            return self.scales[key]
        except KeyError:
            raise UnsupportedKey(key, self.keys) from None

    def degree_index_of(self, key: str, chord: str) -> int | None:
        """Return the degree index of *chord* in *key*, or None if absent."""
        scale = self.scale_of(key)
        if chord in scale:
            return scale.index(chord)
        return None


DEFAULT_KEY_TABLE: Final[KeyTable] = KeyTable()

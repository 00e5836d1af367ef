"""DocumentProcessor: detects a document's key and transposes it line by line."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Final

from chordshift.chord_classifier import is_chord_line
from chordshift.document_models import LineKind, TransposedDocument
from chordshift.errors import KeyNotDetected
from chordshift.key_table import DEFAULT_KEY_TABLE, KeyTable
from chordshift.line_transposer import LineTransposer

KEY_MARKER_WORD: Final[str] = "key"


def is_key_marker(line: str) -> bool:
    """True if *line* mentions the word "key" in any letter case."""
    return KEY_MARKER_WORD in line.lower()


class DocumentProcessor:
    """
    Transposes a whole chord document into a target key.

    Processing has two phases:

    1. **Key detection** – the first key-marker line that contains one of the
       table's key letters fixes the source key. Letters are tested in table
       order (C, D, E, F, G, A, B) by plain substring containment, so
       ``"Key of G"`` yields G but ``"Capo 2, key G"`` yields C.

    2. **Per-line transposition** – each line is classified and transformed on
       its own: key markers become ``"<target> key"``, chord lines go through
       the LineTransposer, everything else is copied unchanged.

    Lines share no state, so phase 2 may run on a thread pool. Output order
    always matches input order, and any failure aborts the whole document.
    """

    def __init__(
        self,
        key_table: KeyTable = DEFAULT_KEY_TABLE,
        max_workers: int = 1,
    ) -> None:
        """
        Args:
            key_table:   Scales used for key detection and chord lookup.
            max_workers: Threads used for per-line work. 1 or less processes
                         lines sequentially.
        """
        self.key_table = key_table
        self.max_workers = max_workers
        self.transposer = LineTransposer(key_table)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _classify(self, line: str) -> LineKind:
        if is_key_marker(line):
            return LineKind.KEY_MARKER
        if is_chord_line(line):
            return LineKind.CHORD
        return LineKind.TEXT

    def _process_line(
        self, line: str, source_key: str, target_key: str
    ) -> tuple[str, LineKind]:
        kind = self._classify(line)
        if kind is LineKind.KEY_MARKER:
            return f"{target_key} {KEY_MARKER_WORD}", kind
        if kind is LineKind.CHORD:
            return self.transposer.transpose_line(line, source_key, target_key), kind
        return line, kind

    def _map_lines(
        self, lines: Sequence[str], source_key: str, target_key: str
    ) -> list[tuple[str, LineKind]]:
        if self.max_workers <= 1 or len(lines) < 2:
            return [self._process_line(line, source_key, target_key) for line in lines]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # Executor.map yields in submission order and re-raises the first error.
            return list(
                pool.map(
                    self._process_line,
                    lines,
                    [source_key] * len(lines),
                    [target_key] * len(lines),
                )
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def detect_key_in_line(self, line: str) -> str | None:
        """Return the key named by a key-marker *line*, or None."""
        if not is_key_marker(line):
            return None
        return next((key for key in self.key_table.keys if key in line), None)

    def detect_key(self, lines: Iterable[str]) -> str:
        """
        Return the source key of a document.

        Raises:
            KeyNotDetected: If no line yields a key.
        """
        for line in lines:
            key = self.detect_key_in_line(line)
            if key is not None:
                return key
        raise KeyNotDetected()

    def process(self, lines: Sequence[str], target_key: str) -> TransposedDocument:
        """
        Transpose *lines* into *target_key*.

        The target key is normalized case-insensitively and the source key is
        resolved before any line is touched.

        Raises:
            UnsupportedKey: If *target_key* is not a supported key.
            KeyNotDetected: If the document has no usable key marker.
            InvalidChord:   If a chord token is not in the source key's scale.
        """
        target = self.key_table.normalize_key(target_key)
        source = self.detect_key(lines)

        results = self._map_lines(lines, source, target)
        return TransposedDocument(
            source_key=source,
            target_key=target,
            lines=[text for text, _ in results],
            kinds=[kind for _, kind in results],
        )


def process_document(
    lines: Sequence[str],
    target_key: str,
    key_table: KeyTable = DEFAULT_KEY_TABLE,
) -> list[str]:
    """Transpose *lines* into *target_key* and return only the output lines."""
    return DocumentProcessor(key_table).process(lines, target_key).lines

"""Unit tests for DocumentProcessor (no files involved)."""

import pytest

from chordshift.document_models import LineKind
from chordshift.document_processor import DocumentProcessor, is_key_marker, process_document
from chordshift.errors import InvalidChord, KeyNotDetected, UnsupportedKey

SONG: list[str] = [
    "Key: C",
    "",
    "C        G        Am       F",
    "Here comes the sun, little darling",
    "F/C      Am/Em      C",
    "It's been a long cold lonely winter",
]


def test_process_document_replaces_key_marker_and_keeps_lyrics() -> None:
    result = process_document(["key: C", "This is a lyric line"], "D")
    assert result == ["D key", "This is a lyric line"]


def test_process_transposes_chord_lines() -> None:
    document = DocumentProcessor().process(SONG, "D")
    assert document.lines == [
        "D key",
        "",
        "D        A        Bm       G",
        "Here comes the sun, little darling",
        "G/D      Bm/F#m      D",
        "It's been a long cold lonely winter",
    ]


def test_process_reports_keys_and_kinds() -> None:
    document = DocumentProcessor().process(SONG, "g")
    assert document.source_key == "C"
    assert document.target_key == "G"
    assert document.kinds == [
        LineKind.KEY_MARKER,
        LineKind.TEXT,
        LineKind.CHORD,
        LineKind.TEXT,
        LineKind.CHORD,
        LineKind.TEXT,
    ]
    assert document.chord_line_count == 2


def test_output_has_same_length_as_input() -> None:
    document = DocumentProcessor().process(SONG, "A")
    assert len(document.lines) == len(SONG)


def test_target_key_is_case_insensitive() -> None:
    assert process_document(["Key: C"], " e ") == ["E key"]


def test_unsupported_target_key() -> None:
    with pytest.raises(UnsupportedKey):
        process_document(SONG, "H")


def test_missing_key_fails_before_transposing() -> None:
    # The out-of-scale chord line would raise InvalidChord if it were reached.
    with pytest.raises(KeyNotDetected, match="No key specified in content"):
        process_document(["C#m      Bb      F#", "no marker here"], "D")


def test_invalid_chord_aborts_document() -> None:
    with pytest.raises(InvalidChord, match="Invalid chord: Bb"):
        process_document(["Key: C", "C      Bb      F"], "D")


def test_detect_key_skips_marker_lines_without_key_letter() -> None:
    processor = DocumentProcessor()
    assert processor.detect_key(["Key signature unknown", "key of G"]) == "G"


def test_detect_key_first_marker_with_key_wins() -> None:
    assert DocumentProcessor().detect_key(["Key: G", "key: C"]) == "G"


def test_detect_key_uses_letter_order_not_position() -> None:
    # C is tested before G, and "Capo" contains a C.
    assert DocumentProcessor().detect_key(["Capo 2, key G"]) == "C"


def test_detect_key_in_line_requires_marker() -> None:
    assert DocumentProcessor().detect_key_in_line("G D Em C") is None


def test_every_key_marker_line_is_rewritten() -> None:
    lines = ["Key: F", "Monkey see, monkey do"]
    assert process_document(lines, "C") == ["C key", "C key"]


def test_is_key_marker_ignores_case() -> None:
    assert is_key_marker("KEY OF A")
    assert not is_key_marker("Capo 3")


def test_threaded_processing_preserves_order() -> None:
    lines = ["Key: G"] + [
        f"G      C      D      Em     {i}" if i % 2 else f"verse line {i}" for i in range(200)
    ]
    sequential = DocumentProcessor(max_workers=1).process(lines, "E")
    threaded = DocumentProcessor(max_workers=8).process(lines, "E")
    assert threaded == sequential
    assert threaded.lines[2] == "E      A      B      C#m     1"


def test_threaded_processing_propagates_errors() -> None:
    lines = ["Key: C"] + ["C      G      F"] * 20 + ["C      Bb      F"]
    with pytest.raises(InvalidChord):
        DocumentProcessor(max_workers=4).process(lines, "D")

"""chordshift CLI entry point."""

import sys
from pathlib import Path

import click

from chordshift import __version__
from chordshift.document_processor import DocumentProcessor
from chordshift.errors import TranspositionError
from chordshift.key_table import DEFAULT_KEY_TABLE, DEGREE_LABELS

MAX_WORKERS = 32


def _default_output_path(input_path: Path, target_key: str) -> Path:
    """Derive ``<stem>_transposed_<KEY><suffix>`` next to the input file."""
    return input_path.with_name(f"{input_path.stem}_transposed_{target_key}{input_path.suffix}")


def _read_lines(path: Path, encoding: str) -> list[str]:
    """Read *path* split on \\n, \\r and \\r\\n only; other control characters stay in the line."""
    lines = path.read_text(encoding=encoding).split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _write_lines(path: Path, lines: list[str], encoding: str) -> None:
    with open(path, "w", encoding=encoding, newline="\n") as fh:
        fh.write("\n".join(lines))
        fh.write("\n")


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordshift")
def main() -> None:
    """chordshift — transpose chord charts between major keys."""


# ── transpose subcommand ───────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--key",
    "-k",
    "target_key",
    type=click.Choice(list(DEFAULT_KEY_TABLE.keys), case_sensitive=False),
    prompt="Enter target key (e.g., D)",
    help="Target major key to transpose into.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file path. Defaults to <name>_transposed_<KEY>.<ext>.",
)
@click.option(
    "--workers",
    type=click.IntRange(1, MAX_WORKERS),
    default=1,
    show_default=True,
    help="Threads used to transpose lines. 1 processes lines sequentially.",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    help="Text encoding of the input and output files.",
)
def transpose(
    input_file: str,
    target_key: str,
    output: str | None,
    workers: int,
    encoding: str,
) -> None:
    """
    Transpose every chord in a chord chart into another key.

    INPUT_FILE is a text file with a key marker line (e.g. "Key: C"), chord
    lines and lyric lines. Only space-delimited chords are rewritten; all other
    text and spacing is kept as-is.

    \b
    Examples:
      chordshift transpose song.txt --key D
      chordshift transpose song.txt -k g -o song_in_G.txt
      chordshift transpose songbook.txt -k A --workers 4
    """
    input_path = Path(input_file)
    normalized_key = target_key.upper()
    output_path = (
        Path(output) if output is not None else _default_output_path(input_path, normalized_key)
    )

    click.echo(f"chordshift v{__version__}")
    click.echo(f"  Input  : {input_path}")
    click.echo(f"  Key    : {normalized_key}  |  Workers: {workers}")
    click.echo(f"  Output : {output_path}")
    click.echo()

    # ── Step 1: Read ────────────────────────────────────────────────────
    click.echo("[1/3] Reading chord chart...")
    try:
        lines = _read_lines(input_path, encoding)
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        click.echo(f"  ERROR: Could not read input file — {exc}", err=True)
        sys.exit(1)
    click.echo(f"      {len(lines)} line(s)")

    # ── Step 2: Transpose ───────────────────────────────────────────────
    click.echo("[2/3] Transposing chords...")
    processor = DocumentProcessor(max_workers=workers)
    try:
        document = processor.process(lines, normalized_key)
    except TranspositionError as exc:
        click.echo(f"  ERROR: Error during transposition — {exc}", err=True)
        sys.exit(1)
    click.echo(
        f"      {document.source_key} → {document.target_key}  "
        f"({document.chord_line_count} chord line(s))"
    )

    # ── Step 3: Write ───────────────────────────────────────────────────
    click.echo(f"[3/3] Writing output → '{output_path}'...")
    try:
        _write_lines(output_path, document.lines, encoding)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Transposition completed! Output saved to: {output_path}")


# ── detect subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--encoding", default="utf-8", show_default=True, help="Text encoding of the input file.")
def detect(input_file: str, encoding: str) -> None:
    """Print the key detected in INPUT_FILE."""
    try:
        lines = _read_lines(Path(input_file), encoding)
        key = DocumentProcessor().detect_key(lines)
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        click.echo(f"  ERROR: Could not read input file — {exc}", err=True)
        sys.exit(1)
    except TranspositionError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)
    click.echo(key)


# ── scales subcommand ──────────────────────────────────────────────────────────

@main.command()
def scales() -> None:
    """Print the diatonic chords of every supported key."""
    header = "    ".join(f"{label:<6}" for label in DEGREE_LABELS)
    click.echo(f"Key  {header}".rstrip())
    for key in DEFAULT_KEY_TABLE.keys:
        row = "    ".join(f"{chord:<6}" for chord in DEFAULT_KEY_TABLE.scale_of(key))
        click.echo(f"{key:<4} {row}".rstrip())

"""Command line helpers for MIDI Generator.

This module implements the console entry point. :func:`run_cli` parses the
arguments, hands the request to :func:`midi_generator.generator.generate_file`
and reports the outcome, while :func:`main` configures logging first so
fallback warnings and the final "Wrote" message reach the console.

Example
-------
Running ``python -m midi_generator chord Fs m7`` writes ``Fsm7.mid`` to the
current directory (or ``$MIDI_GENERATOR_OUTPUT_DIR`` when set).

Roots are written with a trailing ``s`` for sharps (``Cs`` is C sharp); ``#``
and flat spellings are accepted too. When the mapping is omitted or not
recognised the major scale or major triad is produced.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .chords import quality_tokens
from .generator import OUTPUT_DIR_ENV, SHAPE_TOKENS, generate_file
from .pitch import ROOT_TOKENS
from .scales import mode_tokens

__all__ = ["build_parser", "run_cli", "main"]


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser used by :func:`run_cli`."""

    parser = argparse.ArgumentParser(
        prog="midi-generator",
        description="Write a MIDI file containing a scale or chord for use in a DAW.",
        epilog=(
            f"Output defaults to ${OUTPUT_DIR_ENV} or the current directory. "
            "Denote sharps by adding an s to the key (C sharp is Cs)."
        ),
    )
    parser.add_argument("shape", choices=list(SHAPE_TOKENS), help="Generate a scale (s) or a chord (c).")
    parser.add_argument("root", help="Root note, e.g. C, Fs or Bb.")
    parser.add_argument(
        "mapping",
        nargs="?",
        help="Scale mode or chord quality (default: major / maj).",
    )
    parser.add_argument("--list-roots", action="store_true", help="List all supported roots and exit")
    parser.add_argument("--list-modes", action="store_true", help="List all supported scale modes and exit")
    parser.add_argument("--list-chords", action="store_true", help="List all supported chord qualities and exit")
    parser.add_argument("--output-dir", type=str, help="Directory to write the MIDI file into.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _list_option(argv: List[str]) -> Optional[List[str]]:
    # Listing options work without the positional arguments.
    if "--list-roots" in argv:
        return list(ROOT_TOKENS)
    if "--list-modes" in argv:
        return mode_tokens()
    if "--list-chords" in argv:
        return quality_tokens()
    return None


def run_cli(argv: Optional[List[str]] = None) -> None:
    """Parse ``argv`` (default ``sys.argv[1:]``) and write the MIDI file.

    ``OSError`` while creating or writing the file is logged and turned into
    exit status ``1``.
    """

    argv = sys.argv[1:] if argv is None else argv
    listing = _list_option(argv)
    if listing is not None:
        print("\n".join(listing))
        return

    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        result = generate_file(args.shape, args.root, args.mapping, args.output_dir)
    except OSError as exc:
        logging.error("Could not write MIDI file: %s", exc)
        sys.exit(1)
    logging.debug("Notes written: %s", result.notes)


def main() -> None:
    """Console script entry point."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_cli()

"""Request dispatch from a ``(shape, root, mapping)`` triple to a MIDI file.

:func:`generate` runs the full pipeline against an already open binary sink::

    transpose(TEMPLATE_SCALE, root)
        -> map_scale(...) or map_chord(...)
        -> write_header(sink); write_*_track(sink, notes)

:func:`generate_file` adds the file handling of the command line tool: it
derives ``<root><mapping>.mid`` inside the output directory, creates the
directory when needed and writes the result there.

Unrecognised roots, modes and qualities never abort a request. They fall back
to C, the major scale and the major triad respectively and the warnings are
carried on the returned :class:`GenerationResult`. ``OSError`` raised by the
sink is propagated to the caller untouched.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .chords import ChordQuality, map_chord
from .degrees import MappingResult
from .midi_io import Shape, write_chord_track, write_header, write_scale_track
from .pitch import TEMPLATE_SCALE, PitchClass, transpose
from .scales import ScaleMode, map_scale

__all__ = [
    "GenerationResult",
    "OUTPUT_DIR_ENV",
    "SHAPE_TOKENS",
    "parse_shape",
    "default_mapping",
    "default_output_dir",
    "map_notes",
    "output_filename",
    "generate",
    "generate_file",
]

# Environment variable overriding the directory files are written to.
OUTPUT_DIR_ENV = "MIDI_GENERATOR_OUTPUT_DIR"

SHAPE_TOKENS = {
    "s": Shape.SCALE,
    "scale": Shape.SCALE,
    "c": Shape.CHORD,
    "chord": Shape.CHORD,
}

Mapping = Union[ScaleMode, ChordQuality, str, None]


@dataclass
class GenerationResult:
    """Outcome of a single request."""

    shape: Shape
    notes: List[int]
    warnings: List[str] = field(default_factory=list)
    bytes_written: int = 0
    path: Optional[Path] = None


def parse_shape(token: Union[Shape, str]) -> Shape:
    """Return the :class:`Shape` for ``token`` (``s``/``scale``/``c``/``chord``).

    Raises
    ------
    ValueError
        If ``token`` names neither shape.
    """

    if isinstance(token, Shape):
        return token
    shape = SHAPE_TOKENS.get(token.strip().lower())
    if shape is None:
        raise ValueError(f"Unknown shape: {token}")
    return shape


def default_mapping(shape: Shape) -> str:
    """Return the mapping used when a request does not name one."""

    return ScaleMode.MAJOR.value if shape is Shape.SCALE else ChordQuality.MAJOR.value


def default_output_dir() -> Path:
    """Return the configured output directory, falling back to the CWD."""

    env_path = os.environ.get(OUTPUT_DIR_ENV)
    return Path(env_path).expanduser() if env_path else Path.cwd()


def _token(value) -> str:
    if isinstance(value, PitchClass):
        return value.name
    if isinstance(value, (ScaleMode, ChordQuality)):
        return value.value
    return str(value)


def output_filename(root: Union[PitchClass, str], mapping: Mapping) -> str:
    """Return ``<root><mapping>.mid`` as a single path component.

    ``/`` is replaced by ``_`` so ``C`` + ``6/9`` becomes ``C6_9.mid``.

    >>> output_filename("Cs", "m7")
    'Csm7.mid'
    """

    name = f"{_token(root)}{_token(mapping)}.mid"
    return name.replace("/", "_").replace(os.sep, "_")


def map_notes(shape: Shape, root: Union[PitchClass, str, None], mapping: Mapping) -> MappingResult:
    """Transpose the template to ``root`` and apply ``mapping`` for ``shape``."""

    transposed = transpose(TEMPLATE_SCALE, root)
    if mapping is None:
        mapping = default_mapping(shape)
    if shape is Shape.SCALE:
        mapped = map_scale(transposed.notes, mapping)
    else:
        mapped = map_chord(transposed.notes, mapping)
    return MappingResult(mapped.notes, transposed.warnings + mapped.warnings)


def generate(
    shape: Union[Shape, str],
    root: Union[PitchClass, str, None],
    mapping: Mapping,
    sink: BinaryIO,
) -> GenerationResult:
    """Write the MIDI file for one request to the binary ``sink``.

    Returns
    -------
    GenerationResult
        Final notes, fallback warnings and the number of bytes written.

    Raises
    ------
    ValueError
        If ``shape`` is not recognised.
    OSError
        If writing to ``sink`` fails. Bytes already written are left as is.
    """

    shape = parse_shape(shape)
    mapped = map_notes(shape, root, mapping)
    written = write_header(sink)
    if shape is Shape.SCALE:
        written += write_scale_track(sink, mapped.notes)
    else:
        written += write_chord_track(sink, mapped.notes)
    return GenerationResult(shape, mapped.notes, mapped.warnings, written)


def generate_file(
    shape: Union[Shape, str],
    root: Union[PitchClass, str],
    mapping: Mapping = None,
    output_dir: Union[str, Path, None] = None,
) -> GenerationResult:
    """Generate one request into ``output_dir`` and return the result.

    When ``mapping`` is omitted the major scale or major triad is used and
    the file is named accordingly (``Cmajor.mid`` / ``Cmaj.mid``). The
    directory defaults to :func:`default_output_dir` and is created when
    missing.
    """

    shape = parse_shape(shape)
    if mapping is None:
        mapping = default_mapping(shape)
    directory = Path(output_dir).expanduser() if output_dir else default_output_dir()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / output_filename(root, mapping)

    with open(path, "wb") as fh:
        result = generate(shape, root, mapping, fh)
    result.path = path
    logging.info("Wrote %s", path)
    return result

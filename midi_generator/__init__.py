"""MIDI Generator library.

Creates MIDI files containing a single scale or chord so they can be dropped
into a DAW to drive a software instrument. A request names a root (``C``,
``Fs``, ``Bb`` ...), a shape (scale or chord) and a scale mode or chord
quality; :func:`generate_file` writes ``<root><mapping>.mid``.

Underlying Algorithm
--------------------
Every request starts from the same eight-degree C major template::

    template = [36, 38, 40, 41, 43, 45, 47, 48]
    transposed = transpose(template, root)       # add root offset
    notes = map_scale(transposed, mode)          # or map_chord(...)
    write_header(sink)
    write_scale_track(sink, notes)               # or write_chord_track(...)

Modes and chords are expressed as semitone edits on template degrees plus
the list of degrees to keep, so there is a single code path for all of them.

Features include:
- Eleven scale modes including harmonic/melodic minor and pentatonics.
- Thirty chord qualities from triads through altered and 13th chords.
- Byte-exact Standard MIDI File output (format 0, 96 ticks per quarter).
- Fallback to C / major / major triad with warnings instead of errors.
"""

__version__ = "0.1.0"

from .pitch import PitchClass, TEMPLATE_SCALE, parse_root, transpose  # noqa: F401
from .degrees import DegreeMap, MappingResult  # noqa: F401
from .scales import ScaleMode, parse_mode, map_scale  # noqa: F401
from .chords import ChordQuality, parse_quality, map_chord  # noqa: F401
from .midi_io import (  # noqa: F401
    Shape,
    build_midi_file,
    encode_variable_int,
    write_chord_track,
    write_header,
    write_scale_track,
)
from .generator import GenerationResult, generate, generate_file  # noqa: F401
from .cli import main, run_cli  # noqa: F401

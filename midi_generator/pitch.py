"""Pitch-class lookup and template transposition.

Every request starts from the same C major template, eight absolute note
numbers from C at ``36`` up to the octave at ``48``. :func:`transpose` shifts
that template to the requested root by adding the root's semitone offset to
every degree.

Root tokens follow the command line convention of the original tool where a
trailing ``s`` marks a sharp (``Cs`` is C sharp). ``#`` spellings and flat
enharmonics are accepted as well so ``C#``, ``Cs`` and ``Db`` resolve to the
same pitch class.

Example
-------
>>> from midi_generator.pitch import transpose, TEMPLATE_SCALE
>>> transpose(TEMPLATE_SCALE, "D").notes
[38, 40, 42, 43, 45, 47, 49, 50]
"""

from __future__ import annotations

import re
from enum import IntEnum
from functools import lru_cache
from typing import Optional, Sequence, Union

from .degrees import MappingResult

__all__ = [
    "PitchClass",
    "TEMPLATE_SCALE",
    "ROOT_TOKENS",
    "parse_root",
    "transpose",
]


class PitchClass(IntEnum):
    """Semitone offset of each of the twelve pitch classes."""

    C = 0
    Cs = 1
    D = 2
    Ds = 3
    E = 4
    F = 5
    Fs = 6
    G = 7
    Gs = 8
    A = 9
    As = 10
    B = 11


# C major starting at C two octaves below middle C. Index 7 is the octave.
TEMPLATE_SCALE = (36, 38, 40, 41, 43, 45, 47, 48)

# Canonical spellings in pitch order, used for ``--list-roots``.
ROOT_TOKENS = tuple(pc.name for pc in PitchClass)

# Flat names map onto the sharp member sharing the same pitch. ``Fb``/``Cb``
# and friends are deliberately absent as they never appear as chord roots in
# the supported vocabulary.
_FLAT_ALIASES = {
    "Db": PitchClass.Cs,
    "Eb": PitchClass.Ds,
    "Gb": PitchClass.Fs,
    "Ab": PitchClass.Gs,
    "Bb": PitchClass.As,
}


@lru_cache(maxsize=None)
def parse_root(token: str) -> Optional[PitchClass]:
    """Resolve ``token`` to a :class:`PitchClass` or ``None`` when unknown.

    The letter is case-insensitive; the accidental is one of ``s``/``#`` for
    sharps or ``b`` for flats.
    """

    match = re.fullmatch(r"([A-Ga-g])(s|#|b)?", token.strip())
    if not match:
        return None
    letter, accidental = match.groups()
    letter = letter.upper()
    if accidental == "b":
        return _FLAT_ALIASES.get(letter + "b")
    if accidental in ("s", "#"):
        return PitchClass.__members__.get(letter + "s")
    return PitchClass[letter]


def transpose(
    template: Sequence[int], root: Union[PitchClass, str, None]
) -> MappingResult:
    """Shift every degree of ``template`` up by the offset of ``root``.

    Parameters
    ----------
    template:
        Eight-degree scale, normally :data:`TEMPLATE_SCALE`.
    root:
        A :class:`PitchClass`, a root token to be parsed with
        :func:`parse_root`, or ``None`` for an unparseable value.

    Returns
    -------
    MappingResult
        The transposed degrees. When ``root`` cannot be resolved the template
        is returned unchanged (a C scale) and a warning is recorded.
    """

    pitch = root if isinstance(root, PitchClass) else parse_root(root or "")
    if pitch is None:
        result = MappingResult(list(template))
        result.warn('"%s" root not recognized, providing C scale', root)
        return result
    # Length and order are preserved; values above the playable range are
    # left for the MIDI layer to reject.
    return MappingResult([note + pitch for note in template])

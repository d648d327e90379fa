"""Chord quality mapping.

:func:`map_chord` builds a chord voicing from the transposed major template.
The octave degree is always discarded first, leaving seven degrees::

    index   0     1        2    3         4    5         6
    degree  root  2nd/9th  3rd  4th/11th  5th  6th/13th  7th

Each quality in :data:`CHORD_MAPS` then alters a few of those degrees and
keeps the ones it needs. Extensions reuse the 2nd, 4th and 6th lifted by an
octave, so a C9 voiced from the C template is ``C2 E2 G2 Bb2 D3``. Notes are
returned in degree order which puts the chord root first.

Modification summary
--------------------
* ``7b5`` lowers the 7th once and ``7s5`` raises the 5th; earlier versions of
  the tool flattened the 7th twice and lowered the fifth for both.
* ``m13`` keeps the 13th like ``13`` and ``maj13`` do.
* ``add2`` keeps the added 2nd rather than collapsing to a plain triad.
* ``dim7`` keeps the 6th, which is the diminished 7th enharmonically.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Sequence, Union

from .degrees import DegreeMap, MappingResult

__all__ = [
    "ChordQuality",
    "CHORD_MAPS",
    "parse_quality",
    "map_chord",
    "quality_tokens",
]

OCTAVE_INDEX = 7
OCTAVE = 12


class ChordQuality(Enum):
    """Supported chord qualities, valued by their canonical token."""

    MAJOR = "maj"
    MINOR = "m"
    POWER = "5"
    DOMINANT_7 = "7"
    MINOR_7 = "m7"
    MAJOR_7 = "maj7"
    MINOR_MAJOR_7 = "mM7"
    SIXTH = "6"
    MINOR_6 = "m6"
    SIX_NINE = "6/9"
    DOMINANT_9 = "9"
    MINOR_9 = "m9"
    MAJOR_9 = "maj9"
    DOMINANT_11 = "11"
    MINOR_11 = "m11"
    MAJOR_11 = "maj11"
    DOMINANT_13 = "13"
    MINOR_13 = "m13"
    MAJOR_13 = "maj13"
    ADD_2 = "add2"
    ADD_9 = "add9"
    SEVEN_FLAT_5 = "7b5"
    SEVEN_SHARP_5 = "7s5"
    HALF_DIMINISHED = "m7b5"
    SUS_2 = "sus2"
    SUS_4 = "sus4"
    DIMINISHED = "dim"
    DIMINISHED_7 = "dim7"
    AUGMENTED = "aug"
    AUGMENTED_7 = "aug7"


_QUALITY_ALIASES: Dict[str, ChordQuality] = {
    "min": ChordQuality.MINOR,
    "minM7": ChordQuality.MINOR_MAJOR_7,
    "7-5": ChordQuality.SEVEN_FLAT_5,
    "7#5": ChordQuality.SEVEN_SHARP_5,
    "7+5": ChordQuality.SEVEN_SHARP_5,
}

# Shared building blocks. ``_TRIAD`` etc. are indices into the seven degrees
# left after the octave is removed.
_TRIAD = (0, 2, 4)
_SEVENTH = (0, 2, 4, 6)
_NINTH = (0, 1, 2, 4, 6)
_ELEVENTH = (0, 1, 2, 3, 4, 6)
_B3 = {2: -1}
_B7 = {6: -1}
_NINE = {1: OCTAVE}
_ELEVEN = {1: OCTAVE, 3: OCTAVE}
_THIRTEEN = {1: OCTAVE, 3: OCTAVE, 5: OCTAVE}

CHORD_MAPS: Dict[ChordQuality, DegreeMap] = {
    ChordQuality.MAJOR: DegreeMap(keep=_TRIAD),
    ChordQuality.MINOR: DegreeMap(_B3, _TRIAD),
    ChordQuality.POWER: DegreeMap(keep=(0, 4)),
    ChordQuality.DOMINANT_7: DegreeMap(_B7, _SEVENTH),
    ChordQuality.MINOR_7: DegreeMap({**_B3, **_B7}, _SEVENTH),
    ChordQuality.MAJOR_7: DegreeMap(keep=_SEVENTH),
    ChordQuality.MINOR_MAJOR_7: DegreeMap(_B3, _SEVENTH),
    ChordQuality.SIXTH: DegreeMap(keep=(0, 2, 4, 5)),
    ChordQuality.MINOR_6: DegreeMap(_B3, (0, 2, 4, 5)),
    ChordQuality.SIX_NINE: DegreeMap(_NINE, (0, 1, 2, 4, 5)),
    ChordQuality.DOMINANT_9: DegreeMap({**_NINE, **_B7}, _NINTH),
    ChordQuality.MINOR_9: DegreeMap({**_NINE, **_B3, **_B7}, _NINTH),
    ChordQuality.MAJOR_9: DegreeMap(_NINE, _NINTH),
    ChordQuality.DOMINANT_11: DegreeMap({**_ELEVEN, **_B7}, _ELEVENTH),
    ChordQuality.MINOR_11: DegreeMap({**_ELEVEN, **_B3, **_B7}, _ELEVENTH),
    ChordQuality.MAJOR_11: DegreeMap(_ELEVEN, _ELEVENTH),
    ChordQuality.DOMINANT_13: DegreeMap({**_THIRTEEN, **_B7}),
    ChordQuality.MINOR_13: DegreeMap({**_THIRTEEN, **_B3, **_B7}),
    ChordQuality.MAJOR_13: DegreeMap(_THIRTEEN),
    ChordQuality.ADD_2: DegreeMap(keep=(0, 1, 2, 4)),
    ChordQuality.ADD_9: DegreeMap(_NINE, (0, 1, 2, 4)),
    ChordQuality.SEVEN_FLAT_5: DegreeMap({4: -1, **_B7}, _SEVENTH),
    ChordQuality.SEVEN_SHARP_5: DegreeMap({4: +1, **_B7}, _SEVENTH),
    ChordQuality.HALF_DIMINISHED: DegreeMap({**_B3, 4: -1, **_B7}, _SEVENTH),
    ChordQuality.SUS_2: DegreeMap(keep=(0, 1, 4)),
    ChordQuality.SUS_4: DegreeMap(keep=(0, 3, 4)),
    ChordQuality.DIMINISHED: DegreeMap({**_B3, 4: -1}, _TRIAD),
    # The major 6th doubles as the bb7.
    ChordQuality.DIMINISHED_7: DegreeMap({**_B3, 4: -1}, (0, 2, 4, 5)),
    ChordQuality.AUGMENTED: DegreeMap({4: +1}, _TRIAD),
    ChordQuality.AUGMENTED_7: DegreeMap({4: +1, **_B7}, _SEVENTH),
}


def quality_tokens() -> list:
    """Return every accepted quality token, canonical names first."""

    return [quality.value for quality in ChordQuality] + sorted(_QUALITY_ALIASES)


def parse_quality(token: str) -> Optional[ChordQuality]:
    """Resolve ``token`` to a :class:`ChordQuality` or ``None`` when unknown.

    Quality tokens are case-sensitive because ``mM7`` and ``maj7`` differ only
    in case.
    """

    name = token.strip()
    try:
        return ChordQuality(name)
    except ValueError:
        return _QUALITY_ALIASES.get(name)


def map_chord(
    transposed: Sequence[int], quality: Union[ChordQuality, str, None]
) -> MappingResult:
    """Voice ``quality`` from the eight-degree ``transposed`` scale.

    Unknown qualities fall back to a major triad and record a warning on the
    returned :class:`MappingResult`.
    """

    degrees = [note for i, note in enumerate(transposed) if i != OCTAVE_INDEX]
    resolved = quality if isinstance(quality, ChordQuality) else parse_quality(quality or "")
    if resolved is None:
        result = MappingResult(CHORD_MAPS[ChordQuality.MAJOR].apply(degrees))
        result.warn(
            'Chord mapping "%s" not recognized, returning major triad', quality
        )
        return result
    return MappingResult(CHORD_MAPS[resolved].apply(degrees))

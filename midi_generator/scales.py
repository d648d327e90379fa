"""Scale mode mapping.

:func:`map_scale` turns a transposed major template into one of the supported
modes. Heptatonic modes lower or raise individual degrees by a semitone and
always keep all eight notes including the octave. Both pentatonic forms drop
the 3rd and 7th (indices ``2`` and ``6``) and keep six notes; the minor form
then raises the surviving 2nd and 6th.

Indices in :data:`MODE_MAPS` always refer to the original eight-degree
template, where ``0`` is the root and ``7`` the octave.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Sequence, Union

from .degrees import DegreeMap, MappingResult

__all__ = ["ScaleMode", "MODE_MAPS", "parse_mode", "map_scale", "mode_tokens"]


class ScaleMode(Enum):
    """Supported scale modes, valued by their canonical token."""

    MAJOR = "major"
    MINOR = "minor"
    HARMONIC_MINOR = "harmonic_minor"
    MELODIC_MINOR = "melodic_minor"
    DORIAN = "dorian"
    PHRYGIAN = "phrygian"
    LYDIAN = "lydian"
    MIXOLYDIAN = "mixolydian"
    LOCRIAN = "locrian"
    PENTATONIC = "pentatonic"
    MINOR_PENTATONIC = "minor_pentatonic"


# Alternative names accepted on the command line.
_MODE_ALIASES: Dict[str, ScaleMode] = {
    "ionian": ScaleMode.MAJOR,
    "natural_minor": ScaleMode.MINOR,
    "aeolian": ScaleMode.MINOR,
    "major_pentatonic": ScaleMode.PENTATONIC,
}

MODE_MAPS: Dict[ScaleMode, DegreeMap] = {
    ScaleMode.MAJOR: DegreeMap(),
    ScaleMode.MINOR: DegreeMap({2: -1, 5: -1, 6: -1}),
    ScaleMode.HARMONIC_MINOR: DegreeMap({2: -1, 5: -1}),
    ScaleMode.MELODIC_MINOR: DegreeMap({2: -1}),
    ScaleMode.DORIAN: DegreeMap({2: -1, 6: -1}),
    ScaleMode.PHRYGIAN: DegreeMap({1: -1, 2: -1, 5: -1, 6: -1}),
    ScaleMode.LYDIAN: DegreeMap({3: +1}),
    ScaleMode.MIXOLYDIAN: DegreeMap({6: -1}),
    ScaleMode.LOCRIAN: DegreeMap({1: -1, 2: -1, 4: -1, 5: -1, 6: -1}),
    ScaleMode.PENTATONIC: DegreeMap(keep=(0, 1, 3, 4, 5, 7)),
    # Once the 3rd and 7th are gone the 2nd and 6th are raised, giving the
    # b3 and b7 of the minor pentatonic.
    ScaleMode.MINOR_PENTATONIC: DegreeMap({1: +1, 5: +1}, keep=(0, 1, 3, 4, 5, 7)),
}


def mode_tokens() -> list:
    """Return every accepted mode token, canonical names first."""

    return [mode.value for mode in ScaleMode] + sorted(_MODE_ALIASES)


def parse_mode(token: str) -> Optional[ScaleMode]:
    """Resolve ``token`` to a :class:`ScaleMode` or ``None`` when unknown."""

    name = token.strip().lower()
    try:
        return ScaleMode(name)
    except ValueError:
        return _MODE_ALIASES.get(name)


def map_scale(
    transposed: Sequence[int], mode: Union[ScaleMode, str, None]
) -> MappingResult:
    """Apply ``mode`` to the eight-degree ``transposed`` scale.

    Unknown modes fall back to the unmodified major scale and record a
    warning on the returned :class:`MappingResult`.
    """

    resolved = mode if isinstance(mode, ScaleMode) else parse_mode(mode or "")
    if resolved is None:
        result = MappingResult(list(transposed))
        result.warn(
            'Scale mapping "%s" not recognized, providing default major scale', mode
        )
        return result
    return MappingResult(MODE_MAPS[resolved].apply(transposed))

"""Degree-array primitives shared by the scale and chord mappers.

Scales and chords are both described as alterations of the transposed major
template: a few degrees move by a semitone or an octave and the unused degrees
are dropped. :class:`DegreeMap` captures one such description. Applying it
rebuilds the output from the kept indices instead of deleting entries in
place, so the order in which degrees are dropped can never shift the index of
a degree that is still to be altered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

__all__ = ["DegreeMap", "MappingResult"]


@dataclass(frozen=True)
class DegreeMap:
    """Semitone edits and surviving degrees for a scale mode or chord.

    ``edits`` maps a zero-based degree index to the semitone delta applied to
    it. ``keep`` lists the indices that survive, in ascending order; ``None``
    keeps every degree.
    """

    edits: Dict[int, int] = field(default_factory=dict)
    keep: Optional[Tuple[int, ...]] = None

    def apply(self, degrees: Sequence[int]) -> List[int]:
        """Return a new note list with the edits and removals applied."""

        altered = [note + self.edits.get(i, 0) for i, note in enumerate(degrees)]
        if self.keep is None:
            return altered
        return [altered[i] for i in self.keep]


@dataclass
class MappingResult:
    """Notes produced by a mapping step plus any fallback warnings."""

    notes: List[int]
    warnings: List[str] = field(default_factory=list)

    def warn(self, msg: str, *args) -> None:
        """Record ``msg`` on the result and emit it through ``logging``."""

        text = msg % args if args else msg
        logging.warning(text)
        self.warnings.append(text)

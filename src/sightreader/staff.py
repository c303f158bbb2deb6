"""Staff geometry: which note sits where for a given clef and difficulty."""

from __future__ import annotations

import random

from sightreader.models import NOTE_ORDER, ClefType, Difficulty, NoteName

# Index into NOTE_ORDER of the note on the middle line (position 0)
_CLEF_BASE_INDEX = {
    ClefType.TREBLE: 6,  # Si (B4)
    ClefType.BASS: 1,  # Re (D3)
    ClefType.RANDOM: 6,  # unresolved Random reads as treble
}

# Outermost staff lines sit at +/-4; anything beyond needs ledger lines
_STAFF_EDGE = 4

_PITCH_CLASS_TO_NOTE = {
    0: NoteName.DO, 2: NoteName.RE, 4: NoteName.MI, 5: NoteName.FA,
    7: NoteName.SOL, 9: NoteName.LA, 11: NoteName.SI,
}


def note_name_for_position(position: int, clef: ClefType) -> NoteName:
    """Map a staff position to its note name. Defined for every integer."""
    base = _CLEF_BASE_INDEX[clef]
    idx = ((base + position) % 7 + 7) % 7
    return NOTE_ORDER[idx]


def note_range(difficulty: Difficulty) -> range:
    """Closed interval of staff positions reachable at this difficulty."""
    k = difficulty.half_range
    return range(-k, k + 1)


def ledger_lines(position: int) -> list[int]:
    """Positions of the ledger lines a note at ``position`` needs.

    Ledger lines fall on even positions beyond the staff, from the first one
    outside the staff out to the note itself.
    """
    if position > _STAFF_EDGE:
        return list(range(_STAFF_EDGE + 2, position + 1, 2))
    if position < -_STAFF_EDGE:
        return list(range(-_STAFF_EDGE - 2, position - 1, -2))
    return []


def note_name_for_pitch(pitch: int) -> NoteName | None:
    """White keys map to their scale degree in any octave; black keys to None."""
    return _PITCH_CLASS_TO_NOTE.get(pitch % 12)


def resolve_clef(clef: ClefType, rng: random.Random | None = None) -> ClefType:
    """Materialize RANDOM into TREBLE or BASS; other clefs pass through."""
    if clef != ClefType.RANDOM:
        return clef
    rng = rng or random
    return rng.choice((ClefType.TREBLE, ClefType.BASS))

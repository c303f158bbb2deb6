"""Random note generation for a round."""

from __future__ import annotations

import random
from collections.abc import Collection

from sightreader.models import ClefType, Difficulty, MusicNote, NoteName
from sightreader.staff import note_name_for_position, note_range


def generate_note(
    difficulty: Difficulty,
    clef: ClefType,
    allowed_notes: Collection[NoteName] | None = None,
    rng: random.Random | None = None,
) -> MusicNote:
    """Draw one note within the difficulty range.

    With a non-empty ``allowed_notes`` filter, only positions whose name is
    allowed are eligible. If none of them is reachable at this difficulty and
    clef, the filter is ignored and any position in range may be drawn.
    """
    rng = rng or random
    positions = note_range(difficulty)

    if allowed_notes:
        valid = [p for p in positions if note_name_for_position(p, clef) in allowed_notes]
        if valid:
            position = rng.choice(valid)
            return MusicNote(position=position, note_name=note_name_for_position(position, clef))

    position = rng.choice(positions)
    return MusicNote(position=position, note_name=note_name_for_position(position, clef))


def generate_notes(
    count: int,
    difficulty: Difficulty,
    clef: ClefType,
    allowed_notes: Collection[NoteName] | None = None,
    rng: random.Random | None = None,
) -> list[MusicNote]:
    """Draw ``count`` independent notes. Repeats are allowed."""
    return [generate_note(difficulty, clef, allowed_notes, rng) for _ in range(count)]

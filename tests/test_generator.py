"""Tests for round note generation."""

import random

from sightreader.generator import generate_note, generate_notes
from sightreader.models import ClefType, Difficulty, NoteName
from sightreader.staff import note_name_for_position, note_range


def test_notes_stay_in_range_and_are_named_for_the_clef():
    rng = random.Random(0)
    for difficulty in Difficulty:
        for clef in (ClefType.TREBLE, ClefType.BASS):
            for _ in range(30):
                note = generate_note(difficulty, clef, rng=rng)
                assert note.position in note_range(difficulty)
                assert note.note_name == note_name_for_position(note.position, clef)


def test_allowed_notes_are_respected():
    rng = random.Random(1)
    allowed = {NoteName.DO, NoteName.SOL}
    for clef in (ClefType.TREBLE, ClefType.BASS):
        for _ in range(100):
            note = generate_note(Difficulty.MEDIUM, clef, allowed, rng=rng)
            assert note.note_name in allowed


def test_unmatched_filter_falls_back_to_full_range():
    # Every range spans at least seven positions, so any real note name is
    # reachable; a name outside NoteName is the only way to match nothing.
    rng = random.Random(2)
    positions = set()
    for _ in range(200):
        note = generate_note(Difficulty.BEGINNER, ClefType.TREBLE, {"Ut"}, rng=rng)
        assert note.position in note_range(Difficulty.BEGINNER)
        positions.add(note.position)
    assert positions == set(note_range(Difficulty.BEGINNER))


def test_empty_filter_means_no_filter():
    rng = random.Random(4)
    names = {generate_note(Difficulty.EASY, ClefType.TREBLE, set(), rng=rng).note_name for _ in range(200)}
    assert names == set(NoteName)


def test_generate_notes_count_and_independence():
    rng = random.Random(5)
    notes = generate_notes(12, Difficulty.EXPERT, ClefType.BASS, rng=rng)
    assert len(notes) == 12
    assert len({n.id for n in notes}) == 12
    assert generate_notes(0, Difficulty.EASY, ClefType.TREBLE, rng=rng) == []

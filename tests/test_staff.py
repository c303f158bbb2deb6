"""Tests for staff position and note-name mapping."""

import random

from sightreader.models import ClefType, Difficulty, NoteName
from sightreader.staff import (
    ledger_lines,
    note_name_for_pitch,
    note_name_for_position,
    note_range,
    resolve_clef,
)


def test_middle_line_notes():
    assert note_name_for_position(0, ClefType.TREBLE) == NoteName.SI
    assert note_name_for_position(0, ClefType.BASS) == NoteName.RE
    assert note_name_for_position(-6, ClefType.TREBLE) == NoteName.DO  # middle C


def test_negative_positions_wrap():
    assert note_name_for_position(-1, ClefType.TREBLE) == NoteName.LA
    assert note_name_for_position(-2, ClefType.BASS) == NoteName.SI
    assert note_name_for_position(-700, ClefType.TREBLE) == NoteName.SI


def test_mapping_has_period_seven():
    for clef in (ClefType.TREBLE, ClefType.BASS):
        for p in range(-20, 20):
            assert note_name_for_position(p, clef) == note_name_for_position(p + 7, clef)
            assert note_name_for_position(p, clef) == note_name_for_position(p - 14, clef)


def test_bass_is_treble_shifted_by_five():
    # Bass base index 1, treble base index 6: bass at p reads as treble at p - 5
    for p in range(-15, 15):
        assert note_name_for_position(p, ClefType.BASS) == note_name_for_position(p - 5, ClefType.TREBLE)
        assert note_name_for_position(p + 5, ClefType.BASS) == note_name_for_position(p, ClefType.TREBLE)


def test_unresolved_random_reads_as_treble():
    for p in range(-11, 12):
        assert note_name_for_position(p, ClefType.RANDOM) == note_name_for_position(p, ClefType.TREBLE)


def test_ranges_are_symmetric_and_nested():
    levels = list(Difficulty)
    for d in levels:
        r = note_range(d)
        assert r[0] == -r[-1]
    for lo, hi in zip(levels, levels[1:]):
        assert set(note_range(lo)) <= set(note_range(hi))
    assert note_range(Difficulty.BEGINNER) == range(-4, 5)
    assert note_range(Difficulty.EXPERT) == range(-11, 12)


def test_ledger_lines():
    assert ledger_lines(4) == []
    assert ledger_lines(-5) == []
    assert ledger_lines(6) == [6]
    assert ledger_lines(7) == [6]
    assert ledger_lines(11) == [6, 8, 10]
    assert ledger_lines(-6) == [-6]
    assert ledger_lines(-9) == [-6, -8]


def test_note_name_for_pitch():
    assert note_name_for_pitch(60) == NoteName.DO
    assert note_name_for_pitch(71) == NoteName.SI
    assert note_name_for_pitch(45) == NoteName.LA
    assert note_name_for_pitch(61) is None


def test_resolve_clef():
    rng = random.Random(3)
    assert resolve_clef(ClefType.BASS, rng) == ClefType.BASS
    resolved = {resolve_clef(ClefType.RANDOM, rng) for _ in range(50)}
    assert resolved == {ClefType.TREBLE, ClefType.BASS}

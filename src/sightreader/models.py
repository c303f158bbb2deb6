"""Core data models shared across the engine."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum, auto


class NoteNotation(Enum):
    SOLFEGE = "Do Re Mi"
    LETTER = "C D E"
    PIANO = "Piano"

    @property
    def display_name(self) -> str:
        return self.value


class NoteName(Enum):
    """The seven diatonic scale degrees, in cyclic order."""

    DO = "Do"
    RE = "Re"
    MI = "Mi"
    FA = "Fa"
    SOL = "Sol"
    LA = "La"
    SI = "Si"

    @property
    def letter_name(self) -> str:
        return _LETTER_NAMES[self]

    @property
    def midi_pitch(self) -> int:
        """Octave-4 pitch used for playback (Do = middle C)."""
        return _MIDI_PITCHES[self]

    def display_name(self, notation: NoteNotation) -> str:
        if notation == NoteNotation.SOLFEGE:
            return self.value
        return self.letter_name


_LETTER_NAMES = {
    NoteName.DO: "C",
    NoteName.RE: "D",
    NoteName.MI: "E",
    NoteName.FA: "F",
    NoteName.SOL: "G",
    NoteName.LA: "A",
    NoteName.SI: "B",
}

_MIDI_PITCHES = {
    NoteName.DO: 60,
    NoteName.RE: 62,
    NoteName.MI: 64,
    NoteName.FA: 65,
    NoteName.SOL: 67,
    NoteName.LA: 69,
    NoteName.SI: 71,
}

NOTE_ORDER: tuple[NoteName, ...] = tuple(NoteName)


class ClefType(Enum):
    TREBLE = "Treble (Sol)"
    BASS = "Bass (Fa)"
    RANDOM = "Random"

    @property
    def display_name(self) -> str:
        return self.value


class Difficulty(Enum):
    BEGINNER = 1
    EASY = 2
    MEDIUM = 3
    HARD = 4
    EXPERT = 5

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def description(self) -> str:
        return _DIFFICULTY_DESCRIPTIONS[self]

    @property
    def half_range(self) -> int:
        """Furthest staff position reachable from the middle line, either way."""
        return _DIFFICULTY_HALF_RANGE[self]


_DIFFICULTY_DESCRIPTIONS = {
    Difficulty.BEGINNER: "Notes on staff lines only",
    Difficulty.EASY: "Notes on lines and spaces",
    Difficulty.MEDIUM: "Includes 1 ledger line",
    Difficulty.HARD: "Includes 2 ledger lines",
    Difficulty.EXPERT: "Full range with 3 ledger lines",
}

_DIFFICULTY_HALF_RANGE = {
    Difficulty.BEGINNER: 4,
    Difficulty.EASY: 5,
    Difficulty.MEDIUM: 7,
    Difficulty.HARD: 9,
    Difficulty.EXPERT: 11,
}


class RoundLength(Enum):
    SHORT = 4
    MEDIUM = 8
    LONG = 12

    @property
    def display_name(self) -> str:
        return f"{self.value} notes"


class MetronomeSpeed(Enum):
    SLOW = 60
    MODERATE = 90
    MEDIUM = 120
    FAST = 150

    @property
    def display_name(self) -> str:
        return f"{self.value} BPM"

    @property
    def interval(self) -> float:
        return 60.0 / self.value


class GameMode(Enum):
    PRACTICE = "Practice"
    TIMED_CHALLENGE = "Timed"
    STREAK = "Streak"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _MODE_DESCRIPTIONS[self]


_MODE_DESCRIPTIONS = {
    GameMode.PRACTICE: "Practice at your own pace",
    GameMode.TIMED_CHALLENGE: "How many in 60 seconds?",
    GameMode.STREAK: "Don't miss a single note!",
}


class AnswerResult(Enum):
    PENDING = auto()
    CORRECT = auto()
    INCORRECT = auto()


class Phase(Enum):
    ROUND_IN_PROGRESS = auto()
    ANSWER_FEEDBACK = auto()
    ROUND_TRANSITION = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, eq=False)
class MusicNote:
    """A note drawn on the staff. Two notes are equal only if they are the same draw."""

    position: int  # half-line steps from the middle line, positive = up
    note_name: NoteName
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MusicNote):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True)
class GameConfig:
    """Everything the engine needs to start a session."""

    game_mode: GameMode = GameMode.PRACTICE
    difficulty: Difficulty = Difficulty.EASY
    clef: ClefType = ClefType.TREBLE
    round_length: RoundLength = RoundLength.SHORT
    allowed_notes: frozenset[NoteName] | None = None
    metronome_enabled: bool = False
    metronome_speed: MetronomeSpeed = MetronomeSpeed.MODERATE

    @property
    def notes_per_round(self) -> int:
        if self.game_mode == GameMode.TIMED_CHALLENGE:
            return 1
        return self.round_length.value


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session, published after every mutation."""

    notes: tuple[MusicNote, ...] = ()
    current_index: int = 0
    current_clef: ClefType = ClefType.TREBLE
    last_answer: AnswerResult = AnswerResult.PENDING
    showing_feedback: bool = False
    correct_count: int = 0
    total_attempts: int = 0
    current_streak: int = 0
    best_streak: int = 0
    time_remaining: int = 0
    is_game_over: bool = False
    metronome_beat: bool = False
    phase: Phase = Phase.ROUND_IN_PROGRESS

    @property
    def current_note(self) -> MusicNote | None:
        if self.current_index < len(self.notes):
            return self.notes[self.current_index]
        return None

    @property
    def is_round_complete(self) -> bool:
        return self.current_index >= len(self.notes)

    @property
    def accuracy(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.correct_count / self.total_attempts * 100.0


@dataclass
class DailyStats:
    date: str  # YYYY-MM-DD, local time
    total_notes: int = 0
    correct_notes: int = 0
    practice_time_seconds: int = 0

    @property
    def accuracy(self) -> float:
        if self.total_notes == 0:
            return 0.0
        return self.correct_notes / self.total_notes * 100.0


@dataclass
class NoteStats:
    note_name: str
    total_attempts: int = 0
    correct_attempts: int = 0

    @property
    def accuracy(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.correct_attempts / self.total_attempts * 100.0

"""Round and scoring engine: the state machine behind one game session."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Callable, Protocol, runtime_checkable

from sightreader.config import (
    COUNTDOWN_TICK_S,
    FEEDBACK_DELAY_S,
    GAME_OVER_FEEDBACK_S,
    PRACTICE_ROUND_DELAY_S,
    STREAK_ROUND_DELAY_S,
    TIMED_CHALLENGE_SECONDS,
)
from sightreader.generator import generate_notes
from sightreader.metronome import AudioSink, Metronome
from sightreader.models import (
    AnswerResult,
    ClefType,
    GameConfig,
    GameMode,
    GameSnapshot,
    MusicNote,
    NoteName,
    Phase,
)
from sightreader.scheduler import Scheduler, Token
from sightreader.staff import resolve_clef

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[GameSnapshot], None]


@runtime_checkable
class AnswerRecorder(Protocol):
    def record_answer(self, note: NoteName, correct: bool) -> None: ...


class GameEngine:
    """Drives one session: generation, answer checking, timers, game over.

    Every delayed step (feedback clearing, the gap before a new round, the
    countdown) is a scheduler token held by the engine, so
    ``stop_all_timers`` can cancel all of them on teardown.
    """

    def __init__(
        self,
        config: GameConfig,
        scheduler: Scheduler,
        audio: AudioSink | None = None,
        stats: AnswerRecorder | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if config.allowed_notes is not None and not config.allowed_notes:
            config = replace(config, allowed_notes=None)
        self.config = config
        self._scheduler = scheduler
        self._audio = audio
        self._stats = stats
        self._rng = rng or random.Random()
        self._subscribers: list[SnapshotCallback] = []

        self._metronome = Metronome(scheduler, audio, config.metronome_speed, on_change=self._notify)
        self._countdown_token: Token | None = None
        self._pending_token: Token | None = None

        self._notes: list[MusicNote] = []
        self._index = 0
        self._clef = ClefType.TREBLE
        self._last_answer = AnswerResult.PENDING
        self._showing_feedback = False
        self._phase = Phase.ROUND_IN_PROGRESS
        self._correct = 0
        self._attempts = 0
        self._streak = 0
        self._best_streak = 0
        self._time_remaining = 0
        self._game_over = False

    # -- observation ---------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            notes=tuple(self._notes),
            current_index=self._index,
            current_clef=self._clef,
            last_answer=self._last_answer,
            showing_feedback=self._showing_feedback,
            correct_count=self._correct,
            total_attempts=self._attempts,
            current_streak=self._streak,
            best_streak=self._best_streak,
            time_remaining=self._time_remaining,
            is_game_over=self._game_over,
            metronome_beat=self._metronome.beat,
            phase=self._phase,
        )

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Call ``callback`` with a fresh snapshot after every mutation."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        if not self._subscribers:
            return
        snap = self.snapshot()
        for callback in list(self._subscribers):
            callback(snap)

    @property
    def current_note(self) -> MusicNote | None:
        if self._index < len(self._notes):
            return self._notes[self._index]
        return None

    @property
    def metronome(self) -> Metronome:
        return self._metronome

    # -- lifecycle -----------------------------------------------------

    def start_session(self) -> None:
        """Reset counters, generate the first round and arm mode timers."""
        self._cancel_pending()
        self._cancel_countdown()

        self._correct = 0
        self._attempts = 0
        self._streak = 0
        self._best_streak = 0
        self._game_over = False
        self._showing_feedback = False
        self._time_remaining = 0

        if self.config.game_mode == GameMode.TIMED_CHALLENGE:
            self._time_remaining = TIMED_CHALLENGE_SECONDS
            self._countdown_token = self._scheduler.schedule_repeating(
                COUNTDOWN_TICK_S, self._countdown_tick
            )

        self._generate_round()

        if self.config.metronome_enabled:
            self._metronome.start()
        self._notify()

    def reset_game(self) -> None:
        self.start_session()

    def stop_all_timers(self) -> None:
        """Cancel the countdown, metronome and any queued continuation."""
        self._cancel_countdown()
        self._cancel_pending()
        self._metronome.stop()

    def start_metronome(self) -> None:
        if self.config.metronome_enabled and not self._game_over:
            self._metronome.start()

    def stop_metronome(self) -> None:
        self._metronome.stop()

    # -- answers -------------------------------------------------------

    def submit_answer(self, note: NoteName) -> None:
        current = self.current_note
        if current is None or self._game_over:
            return
        if self._pending_token is not None and self._last_answer != AnswerResult.INCORRECT:
            # Only a retry of a missed note may interrupt feedback
            return

        if self._audio is not None:
            self._audio.play_note(note)

        self._attempts += 1
        correct = current.note_name == note
        if self._stats is not None:
            self._stats.record_answer(current.note_name, correct)

        mode = self.config.game_mode
        if correct:
            self._correct += 1
            self._last_answer = AnswerResult.CORRECT
            if mode == GameMode.PRACTICE:
                self._show_feedback(lambda: self._advance(PRACTICE_ROUND_DELAY_S))
            elif mode == GameMode.TIMED_CHALLENGE:
                self._show_feedback(self._generate_round)
            else:
                self._streak += 1
                self._best_streak = max(self._best_streak, self._streak)
                self._show_feedback(lambda: self._advance(STREAK_ROUND_DELAY_S))
        else:
            self._last_answer = AnswerResult.INCORRECT
            if mode == GameMode.STREAK:
                self._end_game()
                self._show_feedback(None, delay=GAME_OVER_FEEDBACK_S)
            else:
                # The same note stays up until it is named correctly
                self._show_feedback(None)
        self._notify()

    # -- internals -----------------------------------------------------

    def _generate_round(self) -> None:
        self._clef = resolve_clef(self.config.clef, self._rng)
        self._notes = generate_notes(
            self.config.notes_per_round,
            self.config.difficulty,
            self._clef,
            self.config.allowed_notes,
            self._rng,
        )
        self._index = 0
        self._last_answer = AnswerResult.PENDING
        if not self._game_over:
            self._phase = Phase.ROUND_IN_PROGRESS
        logger.debug(
            "New round: %s on %s",
            [n.note_name.value for n in self._notes],
            self._clef.name,
        )

    def _show_feedback(self, then: Callable[[], None] | None, delay: float = FEEDBACK_DELAY_S) -> None:
        self._showing_feedback = True
        if not self._game_over:
            self._phase = Phase.ANSWER_FEEDBACK

        def clear() -> None:
            self._pending_token = None
            self._showing_feedback = False
            if not self._game_over:
                self._last_answer = AnswerResult.PENDING
                self._phase = Phase.ROUND_IN_PROGRESS
            if then is not None and not self._game_over:
                then()
            self._notify()

        self._cancel_pending()
        self._pending_token = self._scheduler.schedule_once(delay, clear)

    def _advance(self, round_delay: float) -> None:
        self._index += 1
        if self._index < len(self._notes):
            return
        if not self._game_over:
            self._phase = Phase.ROUND_TRANSITION

        def next_round() -> None:
            self._pending_token = None
            if self._game_over:
                return
            self._generate_round()
            self._notify()

        self._pending_token = self._scheduler.schedule_once(round_delay, next_round)

    def _countdown_tick(self) -> None:
        if self._game_over:
            self._cancel_countdown()
            return
        self._time_remaining = max(0, self._time_remaining - 1)
        if self._time_remaining == 0:
            self._end_game()
        self._notify()

    def _end_game(self) -> None:
        self._game_over = True
        self._phase = Phase.GAME_OVER
        self._cancel_countdown()
        self._metronome.stop()
        logger.debug(
            "Game over (%s): %d/%d correct, best streak %d",
            self.config.game_mode.name,
            self._correct,
            self._attempts,
            self._best_streak,
        )

    def _cancel_countdown(self) -> None:
        self._scheduler.cancel(self._countdown_token)
        self._countdown_token = None

    def _cancel_pending(self) -> None:
        self._scheduler.cancel(self._pending_token)
        self._pending_token = None

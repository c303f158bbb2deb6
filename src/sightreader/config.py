"""Global constants and default settings."""

from pathlib import Path

WINDOW_WIDTH = 1024
WINDOW_HEIGHT = 640
FPS = 60
WINDOW_TITLE = "SightReader"

DATA_DIR = Path.home() / ".sightreader"

# Feedback timing (seconds)
FEEDBACK_DELAY_S = 0.4
GAME_OVER_FEEDBACK_S = 1.0
PRACTICE_ROUND_DELAY_S = 0.5
STREAK_ROUND_DELAY_S = 0.3

# Timed challenge
TIMED_CHALLENGE_SECONDS = 60
COUNTDOWN_TICK_S = 1.0

# Metronome
METRONOME_PULSE_S = 0.1
METRONOME_CHANNEL = 9  # General MIDI percussion
METRONOME_CLICK_NOTE = 76  # hi woodblock
METRONOME_CLICK_VELOCITY = 100

# Note playback
NOTE_DURATION_S = 0.6
NOTE_VELOCITY = 90

# Statistics
MIN_ATTEMPTS_FOR_RANKING = 5
RANKED_NOTES_SHOWN = 3

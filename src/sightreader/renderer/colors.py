"""Color palette."""

# RGB tuples
BG = (24, 24, 48)
STAFF_LINE = (200, 200, 220)
NOTE_HEAD = (240, 240, 240)
NOTE_CURRENT = (255, 200, 60)
NOTE_DONE = (110, 110, 140)
CORRECT = (80, 220, 100)
INCORRECT = (220, 60, 60)
HUD_TEXT = (220, 220, 220)
HIGHLIGHT = (255, 160, 40)
METRONOME_PULSE = (255, 140, 0)

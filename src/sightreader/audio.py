"""Note and metronome playback via FluidSynth + SoundFonts."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

import fluidsynth

from sightreader.config import (
    METRONOME_CHANNEL,
    METRONOME_CLICK_NOTE,
    METRONOME_CLICK_VELOCITY,
    NOTE_DURATION_S,
    NOTE_VELOCITY,
)
from sightreader.models import NoteName

logger = logging.getLogger(__name__)


def _detect_audio_driver() -> str:
    """Auto-detect the appropriate FluidSynth audio driver for the platform."""
    if sys.platform == "linux":
        return "pulseaudio"
    elif sys.platform == "darwin":
        return "coreaudio"
    elif sys.platform == "win32":
        return "dsound"
    return "alsa"


class AudioEngine:
    """Plays answered notes and metronome clicks. Silent until a SoundFont loads."""

    def __init__(self, soundfont_path: str | Path | None = None) -> None:
        self.fs = fluidsynth.Synth(gain=0.8)
        self.fs.start(driver=_detect_audio_driver())
        self.muted = False
        self._sfid: int | None = None
        self._pending_offs: list[tuple[float, int, int]] = []  # (off_time, pitch, channel)
        if soundfont_path:
            self.load_soundfont(soundfont_path)
        else:
            logger.warning("No SoundFont given; playing without sound")

    def load_soundfont(self, path: str | Path) -> None:
        sfid = self.fs.sfload(str(path))
        if sfid == -1:
            logger.warning("Failed to load SoundFont %s", path)
            return
        self._sfid = sfid
        self.fs.program_select(0, self._sfid, 0, 0)
        self.fs.program_select(METRONOME_CHANNEL, self._sfid, 128, 0)

    @property
    def ready(self) -> bool:
        return self._sfid is not None

    def play_note(self, note: NoteName) -> None:
        self._play(0, note.midi_pitch, NOTE_VELOCITY)

    def play_metronome_tick(self) -> None:
        self._play(METRONOME_CHANNEL, METRONOME_CLICK_NOTE, METRONOME_CLICK_VELOCITY)

    def _play(self, channel: int, pitch: int, velocity: int) -> None:
        if self.muted or not self.ready:
            return
        self.fs.noteon(channel, pitch, velocity)
        self._pending_offs.append((time.time() + NOTE_DURATION_S, pitch, channel))

    def flush_pending_offs(self) -> None:
        """Call each frame to release notes whose duration has elapsed."""
        now = time.time()
        remaining: list[tuple[float, int, int]] = []
        for off_time, pitch, channel in self._pending_offs:
            if now >= off_time:
                self.fs.noteoff(channel, pitch)
            else:
                remaining.append((off_time, pitch, channel))
        self._pending_offs = remaining

    def all_notes_off(self) -> None:
        for _, pitch, channel in self._pending_offs:
            self.fs.noteoff(channel, pitch)
        self._pending_offs.clear()

    def shutdown(self) -> None:
        self.all_notes_off()
        self.fs.delete()

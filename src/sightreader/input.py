"""Answer input: computer keyboard and optional MIDI keyboard."""

from __future__ import annotations

import pygame

from sightreader.models import NoteName
from sightreader.staff import note_name_for_pitch

try:
    import rtmidi
    _HAS_RTMIDI = True
except ImportError:
    _HAS_RTMIDI = False


class MidiDeviceError(Exception):
    """Raised when no MIDI device is found or connection fails."""


# Letter names and the 1-7 row both name the scale degrees
_KEY_TO_NOTE: dict[int, NoteName] = {
    pygame.K_c: NoteName.DO, pygame.K_d: NoteName.RE, pygame.K_e: NoteName.MI,
    pygame.K_f: NoteName.FA, pygame.K_g: NoteName.SOL, pygame.K_a: NoteName.LA,
    pygame.K_b: NoteName.SI,
    pygame.K_1: NoteName.DO, pygame.K_2: NoteName.RE, pygame.K_3: NoteName.MI,
    pygame.K_4: NoteName.FA, pygame.K_5: NoteName.SOL, pygame.K_6: NoteName.LA,
    pygame.K_7: NoteName.SI,
}


class KeyboardInput:
    """Answers typed on the computer keyboard."""

    def __init__(self) -> None:
        self._events: list[NoteName] = []

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN and event.key in _KEY_TO_NOTE:
            self._events.append(_KEY_TO_NOTE[event.key])

    def poll(self) -> NoteName | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()


class MidiInput:
    """Answers played on a MIDI keyboard; only note-on for white keys counts."""

    def __init__(self, port_index: int | None = None) -> None:
        if not _HAS_RTMIDI:
            raise MidiDeviceError("python-rtmidi is not installed")
        self.midi_in = rtmidi.MidiIn()
        self._port_index = port_index
        self._open = False

    def open(self) -> None:
        ports = self.midi_in.get_ports()
        if not ports:
            raise MidiDeviceError("No MIDI input devices found")
        idx = self._port_index if self._port_index is not None else 0
        self.midi_in.open_port(idx)
        self._open = True

    def poll(self) -> NoteName | None:
        """Non-blocking poll for the next answered note. Returns None if none."""
        if not self._open:
            return None
        msg = self.midi_in.get_message()
        if msg is None:
            return None
        data, _delta = msg
        if len(data) == 3 and data[0] & 0xF0 == 0x90 and data[2] > 0:
            return note_name_for_pitch(data[1])
        return None

    def close(self) -> None:
        if self._open:
            self.midi_in.close_port()
            self._open = False

"""User game settings persisted between runs."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import TypeVar

from sightreader.config import DATA_DIR
from sightreader.models import (
    ClefType,
    Difficulty,
    GameConfig,
    GameMode,
    MetronomeSpeed,
    NoteName,
    NoteNotation,
    RoundLength,
)

logger = logging.getLogger(__name__)

SETTINGS_PATH = DATA_DIR / "settings.json"

E = TypeVar("E", bound=Enum)


def _enum_by_name(enum_cls: type[E], name: str, default: E) -> E:
    try:
        return enum_cls[name]
    except KeyError:
        return default


@dataclass
class GameSettings:
    """Menu selections. Enum fields are stored by member name."""

    game_mode: str = "PRACTICE"
    difficulty: str = "EASY"
    clef: str = "TREBLE"
    notation: str = "SOLFEGE"
    round_length: str = "SHORT"
    selected_notes: list[str] = field(default_factory=lambda: [n.name for n in NoteName])
    metronome_enabled: bool = False
    metronome_speed: str = "MODERATE"
    muted: bool = False

    def get_game_mode(self) -> GameMode:
        return _enum_by_name(GameMode, self.game_mode, GameMode.PRACTICE)

    def get_difficulty(self) -> Difficulty:
        return _enum_by_name(Difficulty, self.difficulty, Difficulty.EASY)

    def get_clef(self) -> ClefType:
        return _enum_by_name(ClefType, self.clef, ClefType.TREBLE)

    def get_notation(self) -> NoteNotation:
        return _enum_by_name(NoteNotation, self.notation, NoteNotation.SOLFEGE)

    def get_round_length(self) -> RoundLength:
        return _enum_by_name(RoundLength, self.round_length, RoundLength.SHORT)

    def get_metronome_speed(self) -> MetronomeSpeed:
        return _enum_by_name(MetronomeSpeed, self.metronome_speed, MetronomeSpeed.MODERATE)

    def get_selected_notes(self) -> frozenset[NoteName]:
        return frozenset(n for n in NoteName if n.name in self.selected_notes)

    def toggle_note(self, note: NoteName) -> None:
        if note.name in self.selected_notes:
            self.selected_notes.remove(note.name)
        else:
            self.selected_notes.append(note.name)

    def to_config(self) -> GameConfig:
        """Build an engine config. All or no notes selected means no filter."""
        selected = self.get_selected_notes()
        allowed = selected if selected and len(selected) < len(NoteName) else None
        return GameConfig(
            game_mode=self.get_game_mode(),
            difficulty=self.get_difficulty(),
            clef=self.get_clef(),
            round_length=self.get_round_length(),
            allowed_notes=allowed,
            metronome_enabled=self.metronome_enabled,
            metronome_speed=self.get_metronome_speed(),
        )


def load_settings(path: Path = SETTINGS_PATH) -> GameSettings:
    """Load game settings from disk, returning defaults if absent or unreadable."""
    if not path.exists():
        return GameSettings()
    try:
        data = json.loads(path.read_text())
        game = data.get("game", {})
        return GameSettings(**{
            k: v for k, v in game.items()
            if k in GameSettings.__dataclass_fields__
        })
    except (OSError, json.JSONDecodeError, AttributeError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return GameSettings()


def save_settings(settings: GameSettings, path: Path = SETTINGS_PATH) -> None:
    """Persist game settings to disk, keeping any other sections in the file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict = {}
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError):
            data = {}
    if not isinstance(data, dict):
        data = {}
    data["game"] = asdict(settings)
    path.write_text(json.dumps(data, indent=2))

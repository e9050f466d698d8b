"""Interfaces the game session talks to, plus quiet default implementations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence

from ..data import State
from ..state.models import BadgeTier, GameMode, HistoryEntry

logger = logging.getLogger(__name__)


class SoundEvent(str, Enum):
    LAUNCH = "launch"
    TAP = "tap"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True, slots=True)
class TapOutcome:
    """Result of tapping a card, as shown to the player."""

    card: Optional[str]
    correct: bool
    feedback: str
    points: int = 0
    round_complete: bool = False
    badge: Optional[BadgeTier] = None
    ignored: bool = False


@dataclass(frozen=True, slots=True)
class BadgeAward:
    tier: BadgeTier
    mode: GameMode


class Presenter(Protocol):
    """Receives everything the player should see."""

    def show_round(self, description: str, hand: Sequence[State]) -> None: ...

    def show_outcome(self, outcome: TapOutcome) -> None: ...

    def show_badge(self, award: BadgeAward) -> None: ...

    def show_hint(self, text: str) -> None: ...

    def show_timer(self, seconds_left: int) -> None: ...

    def show_game_over(self, score: int, entry: Optional[HistoryEntry]) -> None: ...


class AudioSink(Protocol):
    """Side-effect sink for speech and sound effects."""

    def speak(self, text: str) -> None: ...

    def stop_speaking(self) -> None: ...

    def play(self, event: SoundEvent) -> None: ...


class NullPresenter:
    """Presenter that only logs; used when nothing renders the game."""

    def show_round(self, description: str, hand: Sequence[State]) -> None:
        logger.debug("Round: %s | %s", description, ", ".join(card.name for card in hand))

    def show_outcome(self, outcome: TapOutcome) -> None:
        logger.debug("Tap on %s: correct=%s points=%d", outcome.card, outcome.correct, outcome.points)

    def show_badge(self, award: BadgeAward) -> None:
        logger.debug("Badge %s earned in %s", award.tier.label, award.mode.title)

    def show_hint(self, text: str) -> None:
        logger.debug("Hint: %s", text)

    def show_timer(self, seconds_left: int) -> None:
        pass

    def show_game_over(self, score: int, entry: Optional[HistoryEntry]) -> None:
        logger.debug("Game over with %d points", score)


class LoggingAudioSink:
    """Audio sink for environments without sound: records what would play."""

    def speak(self, text: str) -> None:
        logger.debug("Speak: %s", text)

    def stop_speaking(self) -> None:
        logger.debug("Stop speaking")

    def play(self, event: SoundEvent) -> None:
        logger.debug("Sound: %s", event.value)


__all__ = [
    "AudioSink",
    "BadgeAward",
    "LoggingAudioSink",
    "NullPresenter",
    "Presenter",
    "SoundEvent",
    "TapOutcome",
]

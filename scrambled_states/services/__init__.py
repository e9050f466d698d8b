"""Service layer for the Scrambled States game."""

from .collaborators import (
    AudioSink,
    BadgeAward,
    LoggingAudioSink,
    NullPresenter,
    Presenter,
    SoundEvent,
    TapOutcome,
)
from .session import GameSession
from .stats import collect_profile_stats, format_game_over_message, format_profile_message

__all__ = [
    "AudioSink",
    "BadgeAward",
    "GameSession",
    "LoggingAudioSink",
    "NullPresenter",
    "Presenter",
    "SoundEvent",
    "TapOutcome",
    "collect_profile_stats",
    "format_game_over_message",
    "format_profile_message",
]

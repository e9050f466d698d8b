"""State management primitives for the Scrambled States game."""

from .models import BadgeTier, GameMode, GameSessionState, HistoryEntry, Profile

__all__ = ["BadgeTier", "GameMode", "GameSessionState", "HistoryEntry", "Profile"]

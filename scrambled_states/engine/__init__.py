"""Challenge generation and evaluation."""

from .challenges import (
    Challenge,
    ChallengeFamily,
    ChallengeKind,
    describe,
    matches_in_hand,
    matches_single,
    matching_cards,
)
from .geometry import great_circle_distance
from .text import count_syllables, has_double_letters

__all__ = [
    "Challenge",
    "ChallengeFamily",
    "ChallengeKind",
    "describe",
    "great_circle_distance",
    "matches_in_hand",
    "matches_single",
    "matching_cards",
    "count_syllables",
    "has_double_letters",
]

"""Dataclasses describing player profiles and the running game session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Set

from ..data import State
from ..engine.challenges import Challenge


class GameMode(str, Enum):
    """Available game modes. Titles are for display only."""

    EDUCATIONAL = "educational"
    SPEED = "speed"
    MATCH_A_STATE = "match_a_state"
    GO_THE_DISTANCE = "go_the_distance"

    @property
    def title(self) -> str:
        return _MODE_TITLES[self]

    @property
    def blurb(self) -> str:
        return _MODE_BLURBS[self]

    @property
    def is_timed(self) -> bool:
        return self is GameMode.SPEED


_MODE_TITLES = {
    GameMode.EDUCATIONAL: "Educational Mode",
    GameMode.SPEED: "Speed Challenge",
    GameMode.MATCH_A_STATE: "Match a State",
    GameMode.GO_THE_DISTANCE: "Go the Distance",
}

_MODE_BLURBS = {
    GameMode.EDUCATIONAL: "Practice state facts at your own pace",
    GameMode.SPEED: "Race against time to find matches",
    GameMode.MATCH_A_STATE: "Match state capitals and nicknames",
    GameMode.GO_THE_DISTANCE: "Find the geographically closest state",
}


class BadgeTier(IntEnum):
    """Streak badges, ordered from lowest to highest."""

    NONE = 0
    BRONZE = 1
    SILVER = 2
    GOLD = 3
    PLATINUM = 4

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def icon(self) -> str:
        return _BADGE_ICONS[self]


_BADGE_ICONS = {
    BadgeTier.NONE: "",
    BadgeTier.BRONZE: "🥉",
    BadgeTier.SILVER: "🥈",
    BadgeTier.GOLD: "🥇",
    BadgeTier.PLATINUM: "💎",
}


@dataclass(slots=True)
class HistoryEntry:
    """Summary of one finished game."""

    mode: GameMode
    score: int
    streak: int
    date: datetime = field(default_factory=datetime.utcnow)


@dataclass(slots=True)
class Profile:
    """A player with lifetime statistics and per-mode badges."""

    profile_id: str
    username: str
    avatar: str = "😊"
    total_score: int = 0
    games_played: int = 0
    highest_score: int = 0
    last_played: datetime = field(default_factory=datetime.utcnow)
    history: List[HistoryEntry] = field(default_factory=list)
    badges: Dict[GameMode, BadgeTier] = field(default_factory=dict)

    def badge_for(self, mode: GameMode) -> BadgeTier:
        return self.badges.get(mode, BadgeTier.NONE)


@dataclass(slots=True)
class GameSessionState:
    """Everything that changes while a single game is being played."""

    mode: GameMode
    challenge: Optional[Challenge] = None
    hand: List[State] = field(default_factory=list)
    confirmed_cards: Set[str] = field(default_factory=set)
    score: int = 0
    session_score: int = 0
    streak: int = 0
    best_streak: int = 0
    round_number: int = 0
    round_resolved: bool = False
    time_remaining: Optional[int] = None
    hint_available: bool = True
    hint_text: str = ""
    can_scramble: bool = True
    earned_badge: Optional[BadgeTier] = None
    is_active: bool = False
    started_at: datetime = field(default_factory=datetime.utcnow)

    def find_card(self, name: str) -> Optional[State]:
        """Return the card in the current hand with the given name."""

        lowered = name.strip().lower()
        for card in self.hand:
            if card.name.lower() == lowered:
                return card
        return None

    def is_disabled(self, card: State) -> bool:
        return card.name in self.confirmed_cards

    def reset_round(self) -> None:
        """Forget per-round bookkeeping before a new hand is shown."""

        self.confirmed_cards.clear()
        self.round_resolved = False
        self.earned_badge = None

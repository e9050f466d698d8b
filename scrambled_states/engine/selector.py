"""Random challenge generation for each game mode."""

from __future__ import annotations

import random
import string
from typing import Callable, Dict, List, Optional, Sequence

from ..data import Region, State, all_states
from ..state.models import GameMode
from .challenges import Challenge

COMMON_STATES = (
    "Texas",
    "California",
    "New York",
    "Florida",
    "Illinois",
    "Pennsylvania",
    "Ohio",
    "Georgia",
    "Michigan",
    "Virginia",
    "Tennessee",
    "Missouri",
    "Wisconsin",
    "Washington",
    "Colorado",
)

DIRECTION_STATES = (
    "Kansas",
    "Mississippi",
    "Ohio",
    "Illinois",
    "Missouri",
    "Tennessee",
    "Virginia",
    "Iowa",
    "Colorado",
    "Texas",
    "Georgia",
    "Michigan",
    "Wisconsin",
    "Indiana",
    "Kentucky",
)

# Speed mode references sit near the middle of the map.
SPEED_REFERENCE_STATES = (
    "Kansas",
    "Nevada",
    "Tennessee",
    "Virginia",
    "Colorado",
    "Missouri",
    "Iowa",
    "Georgia",
    "Michigan",
)

DISTANCE_REFERENCE_STATES = (
    "California",
    "Texas",
    "Florida",
    "New York",
    "Maine",
    "Alaska",
    "Hawaii",
    "Washington",
    "Montana",
    "Louisiana",
)

DISTANCE_DIRECTION_STATES = (
    "Kansas",
    "Ohio",
    "Tennessee",
    "Virginia",
    "Illinois",
    "Missouri",
    "Iowa",
    "Colorado",
    "Georgia",
    "Michigan",
)

SYLLABLE_RANGE = (2, 5)
CAPITAL_SYLLABLE_RANGE = (1, 4)
LETTERS = string.ascii_uppercase
ENDING_LETTERS = "AEIOU"

Factory = Callable[[], Challenge]


class ChallengeSelector:
    """Draw challenges uniformly from the pool that belongs to a game mode."""

    def __init__(self, states: Optional[Sequence[State]] = None, rng: Optional[random.Random] = None) -> None:
        self._states = list(states) if states is not None else list(all_states())
        self._by_name = {state.name: state for state in self._states}
        self._rng = rng or random.Random()
        self._strategies: Dict[GameMode, Callable[[], Challenge]] = {
            GameMode.EDUCATIONAL: self.educational,
            GameMode.SPEED: self.speed,
            GameMode.MATCH_A_STATE: self.match_a_state,
            GameMode.GO_THE_DISTANCE: self.go_the_distance,
        }

    def for_mode(self, mode: GameMode) -> Challenge:
        return self._strategies[mode]()

    # Strategies ---------------------------------------------------------
    def educational(self) -> Challenge:
        """Attribute challenges only: no capital matching, nothing relative."""

        return self._draw(self._attribute_factories())

    def speed(self) -> Challenge:
        factories = self._attribute_factories() + self._relative_factories(
            SPEED_REFERENCE_STATES, DIRECTION_STATES
        )
        return self._draw(factories)

    def match_a_state(self) -> Challenge:
        state = self._rng.choice(self._states)
        factories: List[Factory] = [
            lambda: Challenge.matches_capital(state.capital),
            lambda: Challenge.matches_nickname(state.nickname),
        ]
        return self._draw(factories)

    def go_the_distance(self) -> Challenge:
        return self._draw(self._relative_factories(DISTANCE_REFERENCE_STATES, DISTANCE_DIRECTION_STATES))

    # Pools --------------------------------------------------------------
    def _draw(self, factories: Sequence[Factory]) -> Challenge:
        return self._rng.choice(factories)()

    def _pick(self, options: Sequence[str]) -> str:
        return self._rng.choice(options)

    def _nickname_word(self) -> str:
        state = self._rng.choice(self._states)
        return state.nickname.split()[0]

    def _attribute_factories(self) -> List[Factory]:
        rng = self._rng
        return [
            lambda: Challenge.syllable_count(rng.randint(*SYLLABLE_RANGE)),
            lambda: Challenge.starts_with_letter(self._pick(LETTERS)),
            Challenge.is_coastal,
            Challenge.not_coastal,
            lambda: Challenge.in_region(rng.choice(list(Region))),
            lambda: Challenge.has_nickname(self._nickname_word()),
            lambda: Challenge.ends_with_letter(self._pick(ENDING_LETTERS)),
            lambda: Challenge.borders(self._pick(COMMON_STATES)),
            Challenge.has_double_letters,
            lambda: Challenge.has_capital_syllables(rng.randint(*CAPITAL_SYLLABLE_RANGE)),
            Challenge.capital_has_person_name,
            Challenge.nickname_has_nature,
            lambda: Challenge.west_of(self._pick(DIRECTION_STATES)),
        ]

    def _relative_factories(self, references: Sequence[str], directions: Sequence[str]) -> List[Factory]:
        factories: List[Factory] = [
            lambda: Challenge.north_of(self._pick(directions)),
            lambda: Challenge.south_of(self._pick(directions)),
            lambda: Challenge.east_of(self._pick(directions)),
            lambda: Challenge.all_east_of(self._pick(directions)),
            Challenge.most_northern,
            Challenge.most_southern,
            Challenge.most_eastern,
            Challenge.most_western,
        ]
        candidates = [self._by_name[name] for name in references if name in self._by_name]
        if candidates:
            reference = self._rng.choice(candidates)
            factories.append(lambda: Challenge.closest_to(reference))
            factories.append(lambda: Challenge.farthest_from(reference))
        return factories


__all__ = ["ChallengeSelector"]

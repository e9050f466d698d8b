"""Challenge prompts: what a round asks for and how a card is judged."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Union

from ..data import Region, State, latitude_of, longitude_of, westward_longitude_of
from . import geometry
from .text import capital_has_person_name, count_syllables, has_double_letters, nickname_has_nature


class ChallengeFamily(Enum):
    """How much context a challenge needs to be evaluated."""

    ATTRIBUTE = "attribute"
    EXACT_MATCH = "exact_match"
    RELATIVE = "relative"


class ChallengeKind(str, Enum):
    BORDERS = "borders"
    SYLLABLE_COUNT = "syllable_count"
    STARTS_WITH_LETTER = "starts_with_letter"
    IS_COASTAL = "is_coastal"
    NOT_COASTAL = "not_coastal"
    IN_REGION = "in_region"
    HAS_NICKNAME = "has_nickname"
    ENDS_WITH_LETTER = "ends_with_letter"
    HAS_DOUBLE_LETTERS = "has_double_letters"
    HAS_CAPITAL_SYLLABLES = "has_capital_syllables"
    CAPITAL_HAS_PERSON_NAME = "capital_has_person_name"
    NICKNAME_HAS_NATURE = "nickname_has_nature"
    WEST_OF = "west_of"
    MATCHES_CAPITAL = "matches_capital"
    MATCHES_NICKNAME = "matches_nickname"
    CLOSEST_TO = "closest_to"
    FARTHEST_FROM = "farthest_from"
    NORTH_OF = "north_of"
    SOUTH_OF = "south_of"
    EAST_OF = "east_of"
    ALL_EAST_OF = "all_east_of"
    MOST_NORTHERN = "most_northern"
    MOST_SOUTHERN = "most_southern"
    MOST_EASTERN = "most_eastern"
    MOST_WESTERN = "most_western"

    @property
    def family(self) -> ChallengeFamily:
        if self in _EXACT_MATCH_KINDS:
            return ChallengeFamily.EXACT_MATCH
        if self in _RELATIVE_KINDS:
            return ChallengeFamily.RELATIVE
        return ChallengeFamily.ATTRIBUTE


_EXACT_MATCH_KINDS = frozenset({ChallengeKind.MATCHES_CAPITAL, ChallengeKind.MATCHES_NICKNAME})
_RELATIVE_KINDS = frozenset(
    {
        ChallengeKind.CLOSEST_TO,
        ChallengeKind.FARTHEST_FROM,
        ChallengeKind.NORTH_OF,
        ChallengeKind.SOUTH_OF,
        ChallengeKind.EAST_OF,
        ChallengeKind.ALL_EAST_OF,
        ChallengeKind.MOST_NORTHERN,
        ChallengeKind.MOST_SOUTHERN,
        ChallengeKind.MOST_EASTERN,
        ChallengeKind.MOST_WESTERN,
    }
)
_REFERENCE_KINDS = frozenset({ChallengeKind.CLOSEST_TO, ChallengeKind.FARTHEST_FROM})
# Any non-empty hand contains an answer for these.
_HAND_RELATIVE_KINDS = _REFERENCE_KINDS | {
    ChallengeKind.MOST_NORTHERN,
    ChallengeKind.MOST_SOUTHERN,
    ChallengeKind.MOST_EASTERN,
    ChallengeKind.MOST_WESTERN,
}

Parameter = Union[str, int, None]


@dataclass(frozen=True, slots=True)
class Challenge:
    """One round's objective.

    ``parameter`` carries the value interpolated into the prompt (a state
    name, letter, region, count...). Distance challenges keep the full
    reference card in ``reference``.
    """

    kind: ChallengeKind
    parameter: Parameter = None
    reference: Optional[State] = None

    # Constructors -----------------------------------------------------
    @classmethod
    def borders(cls, name: str) -> "Challenge":
        return cls(ChallengeKind.BORDERS, name)

    @classmethod
    def syllable_count(cls, count: int) -> "Challenge":
        return cls(ChallengeKind.SYLLABLE_COUNT, count)

    @classmethod
    def starts_with_letter(cls, letter: str) -> "Challenge":
        return cls(ChallengeKind.STARTS_WITH_LETTER, letter)

    @classmethod
    def is_coastal(cls) -> "Challenge":
        return cls(ChallengeKind.IS_COASTAL)

    @classmethod
    def not_coastal(cls) -> "Challenge":
        return cls(ChallengeKind.NOT_COASTAL)

    @classmethod
    def in_region(cls, region: Union[Region, str]) -> "Challenge":
        return cls(ChallengeKind.IN_REGION, Region(region).value)

    @classmethod
    def has_nickname(cls, word: str) -> "Challenge":
        return cls(ChallengeKind.HAS_NICKNAME, word)

    @classmethod
    def ends_with_letter(cls, letter: str) -> "Challenge":
        return cls(ChallengeKind.ENDS_WITH_LETTER, letter)

    @classmethod
    def has_double_letters(cls) -> "Challenge":
        return cls(ChallengeKind.HAS_DOUBLE_LETTERS)

    @classmethod
    def has_capital_syllables(cls, count: int) -> "Challenge":
        return cls(ChallengeKind.HAS_CAPITAL_SYLLABLES, count)

    @classmethod
    def capital_has_person_name(cls) -> "Challenge":
        return cls(ChallengeKind.CAPITAL_HAS_PERSON_NAME)

    @classmethod
    def nickname_has_nature(cls) -> "Challenge":
        return cls(ChallengeKind.NICKNAME_HAS_NATURE)

    @classmethod
    def west_of(cls, name: str) -> "Challenge":
        return cls(ChallengeKind.WEST_OF, name)

    @classmethod
    def matches_capital(cls, capital: str) -> "Challenge":
        return cls(ChallengeKind.MATCHES_CAPITAL, capital)

    @classmethod
    def matches_nickname(cls, nickname: str) -> "Challenge":
        return cls(ChallengeKind.MATCHES_NICKNAME, nickname)

    @classmethod
    def closest_to(cls, reference: State) -> "Challenge":
        return cls(ChallengeKind.CLOSEST_TO, reference.name, reference)

    @classmethod
    def farthest_from(cls, reference: State) -> "Challenge":
        return cls(ChallengeKind.FARTHEST_FROM, reference.name, reference)

    @classmethod
    def north_of(cls, name: str) -> "Challenge":
        return cls(ChallengeKind.NORTH_OF, name)

    @classmethod
    def south_of(cls, name: str) -> "Challenge":
        return cls(ChallengeKind.SOUTH_OF, name)

    @classmethod
    def east_of(cls, name: str) -> "Challenge":
        return cls(ChallengeKind.EAST_OF, name)

    @classmethod
    def all_east_of(cls, name: str) -> "Challenge":
        return cls(ChallengeKind.ALL_EAST_OF, name)

    @classmethod
    def most_northern(cls) -> "Challenge":
        return cls(ChallengeKind.MOST_NORTHERN)

    @classmethod
    def most_southern(cls) -> "Challenge":
        return cls(ChallengeKind.MOST_SOUTHERN)

    @classmethod
    def most_eastern(cls) -> "Challenge":
        return cls(ChallengeKind.MOST_EASTERN)

    @classmethod
    def most_western(cls) -> "Challenge":
        return cls(ChallengeKind.MOST_WESTERN)

    # Classification ---------------------------------------------------
    @property
    def family(self) -> ChallengeFamily:
        return self.kind.family

    @property
    def is_relative(self) -> bool:
        return self.kind.family is ChallengeFamily.RELATIVE

    @property
    def is_multi_answer(self) -> bool:
        return self.kind is ChallengeKind.ALL_EAST_OF

    @property
    def uses_reference(self) -> bool:
        """Closest/farthest challenges exclude their reference from the hand."""

        return self.kind in _REFERENCE_KINDS

    @property
    def is_hand_relative(self) -> bool:
        return self.kind in _HAND_RELATIVE_KINDS

    @property
    def description(self) -> str:
        return describe(self)


_TEMPLATES: Dict[ChallengeKind, str] = {
    ChallengeKind.BORDERS: "Find a state that borders {value}",
    ChallengeKind.STARTS_WITH_LETTER: "Find a state starting with '{value}'",
    ChallengeKind.IS_COASTAL: "Find a coastal state",
    ChallengeKind.NOT_COASTAL: "Find a state that does not touch an ocean",
    ChallengeKind.IN_REGION: "Find a state in the {value}",
    ChallengeKind.HAS_NICKNAME: "Find the '{value}' state",
    ChallengeKind.ENDS_WITH_LETTER: "Find a state ending with '{value}'",
    ChallengeKind.HAS_DOUBLE_LETTERS: "Find a state with two of the same letters in a row",
    ChallengeKind.HAS_CAPITAL_SYLLABLES: "Find a state with a {value}-syllable capital",
    ChallengeKind.CAPITAL_HAS_PERSON_NAME: "Find a capital with a person's first name in it",
    ChallengeKind.NICKNAME_HAS_NATURE: "Find a state with a plant or animal in its nickname",
    ChallengeKind.WEST_OF: "Find a state west of {value}",
    ChallengeKind.MATCHES_CAPITAL: "Find the state whose capital is {value}",
    ChallengeKind.MATCHES_NICKNAME: "Find '{value}'",
    ChallengeKind.CLOSEST_TO: "Find the state closest to {value}",
    ChallengeKind.FARTHEST_FROM: "Find the state farthest from {value}",
    ChallengeKind.NORTH_OF: "Find a state north of {value}",
    ChallengeKind.SOUTH_OF: "Find a state south of {value}",
    ChallengeKind.EAST_OF: "Find a state east of {value}",
    ChallengeKind.ALL_EAST_OF: "Find all states that are east of {value}",
    ChallengeKind.MOST_NORTHERN: "Find the northernmost state",
    ChallengeKind.MOST_SOUTHERN: "Find the southernmost state",
    ChallengeKind.MOST_EASTERN: "Find the easternmost state",
    ChallengeKind.MOST_WESTERN: "Find the westernmost state",
}


def describe(challenge: Challenge) -> str:
    """Render the prompt shown (and read aloud) for a challenge."""

    if challenge.kind is ChallengeKind.SYLLABLE_COUNT:
        count = challenge.parameter
        suffix = "s" if isinstance(count, int) and count > 1 else ""
        return f"Find a state with {count} syllable{suffix}"
    return _TEMPLATES[challenge.kind].format(value=challenge.parameter)


# Context-free predicates ------------------------------------------------
def _text(value: Parameter) -> str:
    return str(value).lower() if value is not None else ""


def _compare(lookup: Callable[[str], Optional[float]], state: State, other: Parameter) -> Optional[float]:
    """Return ``lookup(state) - lookup(other)`` or ``None`` when either is missing."""

    if other is None:
        return None
    own = lookup(state.name)
    theirs = lookup(str(other))
    if own is None or theirs is None:
        return None
    return own - theirs


def _is_north_of(state: State, other: Parameter) -> bool:
    delta = _compare(latitude_of, state, other)
    return delta is not None and delta > 0


def _is_south_of(state: State, other: Parameter) -> bool:
    delta = _compare(latitude_of, state, other)
    return delta is not None and delta < 0


def _is_east_of(state: State, other: Parameter) -> bool:
    delta = _compare(longitude_of, state, other)
    return delta is not None and delta > 0


def _is_west_of(state: State, other: Parameter) -> bool:
    delta = _compare(westward_longitude_of, state, other)
    return delta is not None and delta < 0


def _against_reference(check, challenge: Challenge, state: State, hand: list) -> bool:
    if challenge.reference is None:
        return False
    return check(state, challenge.reference, hand)


SinglePredicate = Callable[[Challenge, State], bool]

_SINGLE_PREDICATES: Dict[ChallengeKind, SinglePredicate] = {
    ChallengeKind.BORDERS: lambda c, s: s.borders(str(c.parameter)),
    ChallengeKind.SYLLABLE_COUNT: lambda c, s: s.syllables == c.parameter,
    ChallengeKind.STARTS_WITH_LETTER: lambda c, s: s.name.lower().startswith(_text(c.parameter)),
    ChallengeKind.IS_COASTAL: lambda c, s: s.coastal,
    ChallengeKind.NOT_COASTAL: lambda c, s: not s.coastal,
    ChallengeKind.IN_REGION: lambda c, s: s.region == c.parameter,
    ChallengeKind.HAS_NICKNAME: lambda c, s: _text(c.parameter) in s.nickname.lower(),
    ChallengeKind.ENDS_WITH_LETTER: lambda c, s: s.name.lower().endswith(_text(c.parameter)),
    ChallengeKind.HAS_DOUBLE_LETTERS: lambda c, s: has_double_letters(s.name),
    ChallengeKind.HAS_CAPITAL_SYLLABLES: lambda c, s: count_syllables(s.capital) == c.parameter,
    ChallengeKind.CAPITAL_HAS_PERSON_NAME: lambda c, s: capital_has_person_name(s.capital),
    ChallengeKind.NICKNAME_HAS_NATURE: lambda c, s: nickname_has_nature(s.nickname),
    ChallengeKind.WEST_OF: lambda c, s: _is_west_of(s, c.parameter),
    ChallengeKind.MATCHES_CAPITAL: lambda c, s: s.capital.lower() == _text(c.parameter),
    ChallengeKind.MATCHES_NICKNAME: lambda c, s: s.nickname.lower() == _text(c.parameter),
}

HandPredicate = Callable[[Challenge, State, list], bool]

_HAND_PREDICATES: Dict[ChallengeKind, HandPredicate] = {
    ChallengeKind.CLOSEST_TO: lambda c, s, hand: _against_reference(geometry.is_closest, c, s, hand),
    ChallengeKind.FARTHEST_FROM: lambda c, s, hand: _against_reference(geometry.is_farthest, c, s, hand),
    ChallengeKind.NORTH_OF: lambda c, s, hand: _is_north_of(s, c.parameter),
    ChallengeKind.SOUTH_OF: lambda c, s, hand: _is_south_of(s, c.parameter),
    ChallengeKind.EAST_OF: lambda c, s, hand: _is_east_of(s, c.parameter),
    ChallengeKind.ALL_EAST_OF: lambda c, s, hand: _is_east_of(s, c.parameter),
    ChallengeKind.MOST_NORTHERN: lambda c, s, hand: geometry.is_most_northern(s, hand),
    ChallengeKind.MOST_SOUTHERN: lambda c, s, hand: geometry.is_most_southern(s, hand),
    ChallengeKind.MOST_EASTERN: lambda c, s, hand: geometry.is_most_eastern(s, hand),
    ChallengeKind.MOST_WESTERN: lambda c, s, hand: geometry.is_most_western(s, hand),
}


def matches_single(challenge: Challenge, state: State) -> bool:
    """Judge a card on its own.

    Relative challenges cannot be decided without the rest of the hand and
    always return ``False`` here; use :func:`matches_in_hand` for those.
    """

    predicate = _SINGLE_PREDICATES.get(challenge.kind)
    if predicate is None:
        return False
    return bool(predicate(challenge, state))


def matches_in_hand(challenge: Challenge, state: State, hand: Iterable[State]) -> bool:
    """Judge a card against the whole hand it was dealt in."""

    if not challenge.is_relative:
        return matches_single(challenge, state)
    predicate = _HAND_PREDICATES[challenge.kind]
    return bool(predicate(challenge, state, list(hand)))


def matching_cards(challenge: Challenge, hand: Iterable[State]) -> list[State]:
    """Return every card in ``hand`` that satisfies the challenge."""

    cards = list(hand)
    return [card for card in cards if matches_in_hand(challenge, card, cards)]


__all__ = [
    "Challenge",
    "ChallengeFamily",
    "ChallengeKind",
    "describe",
    "matches_single",
    "matches_in_hand",
    "matching_cards",
]

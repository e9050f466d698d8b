"""Hints offered in Educational mode."""

from __future__ import annotations

from typing import Optional, Sequence

from ..data import State
from .challenges import Challenge, ChallengeKind, matches_in_hand

_DIRECTION_WORDS = ("east", "west", "north", "south")


def _answer(challenge: Challenge, hand: Sequence[State]) -> Optional[State]:
    for card in hand:
        if matches_in_hand(challenge, card, hand):
            return card
    return None


def build_hint(challenge: Challenge, hand: Sequence[State]) -> Optional[str]:
    """Return a hint pointing towards the first correct card, if there is one."""

    card = _answer(challenge, hand)
    if card is None:
        return None
    region = card.region.value
    kind = challenge.kind
    value = challenge.parameter

    if kind is ChallengeKind.STARTS_WITH_LETTER:
        return f"💡 Look for a state starting with '{value}'!\nThe answer is in the {region} region."
    if kind is ChallengeKind.ENDS_WITH_LETTER:
        return f"💡 Find a state ending with '{value}'!\nHint: It's in the {region} region."
    if kind is ChallengeKind.SYLLABLE_COUNT:
        plural = "" if value == 1 else "s"
        return f"💡 Find a state with {value} syllable{plural}!\nIt's in the {region} region."
    if kind is ChallengeKind.IN_REGION:
        return f"💡 Find a {value} state!\nHint: It starts with '{card.name[:1]}'."
    if kind is ChallengeKind.IS_COASTAL:
        return f"💡 Find a coastal state!\nHint: {card.name} touches the ocean."
    if kind is ChallengeKind.NOT_COASTAL:
        return f"💡 Find a landlocked state!\nHint: {card.name} is inland."
    if kind is ChallengeKind.HAS_NICKNAME:
        return f"💡 Look for the '{value}' state!\nHint: The state is {card.name}."
    if kind is ChallengeKind.BORDERS:
        return f"💡 Find a state bordering {value}!\nHint: It's in the {region} region."
    if kind is ChallengeKind.HAS_DOUBLE_LETTERS:
        return f"💡 Look for repeated letters in the name!\nHint: {card.name} has double letters."
    if kind in (ChallengeKind.NICKNAME_HAS_NATURE, ChallengeKind.MATCHES_NICKNAME):
        return f"💡 Think about the state's nickname!\nHint: {card.nickname} for {card.name}."
    if kind in (ChallengeKind.HAS_CAPITAL_SYLLABLES, ChallengeKind.CAPITAL_HAS_PERSON_NAME):
        return f"💡 Say the capital out loud!\nHint: {card.name}'s capital is {card.capital}."

    prompt = challenge.description.lower()
    for word in _DIRECTION_WORDS:
        if word in prompt:
            return f"💡 Look for a state to the {word.upper()}!\nHint: {card.name} is in the {region}."
    return f"💡 Think about the question carefully!\nHint: The answer is {card.name}."


__all__ = ["build_hint"]

"""Text heuristics behind the name, capital and nickname challenges."""

from __future__ import annotations

VOWELS = frozenset("aeiouy")

PERSON_NAMES = (
    "frank",
    "jefferson",
    "james",
    "charles",
    "jackson",
    "lincoln",
    "madison",
    "john",
    "thomas",
    "george",
    "pierre",
    "austin",
    "santa",
)

NATURE_WORDS = (
    "peach",
    "beaver",
    "bear",
    "mountain",
    "pine",
    "magnolia",
    "sunshine",
    "golden",
    "granite",
    "garden",
    "palm",
    "cotton",
    "lone star",
    "evergreen",
    "badger",
    "buckeye",
    "pelican",
    "sunflower",
    "beehive",
    "hawkeye",
    "ocean",
    "prairie",
)


def count_syllables(word: str) -> int:
    """Estimate syllables by counting vowel groups.

    ``y`` counts as a vowel, a trailing silent ``e`` is dropped when more than
    one group was found, and the result is never below one.
    """

    lowered = word.lower()
    count = 0
    previous_was_vowel = False
    for char in lowered:
        is_vowel = char in VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel
    if lowered.endswith("e") and count > 1:
        count -= 1
    return max(count, 1)


def has_double_letters(text: str) -> bool:
    lowered = text.lower()
    return any(first.isalpha() and first == second for first, second in zip(lowered, lowered[1:]))


def capital_has_person_name(capital: str) -> bool:
    lowered = capital.lower()
    return any(name in lowered for name in PERSON_NAMES)


def nickname_has_nature(nickname: str) -> bool:
    lowered = nickname.lower()
    return any(word in lowered for word in NATURE_WORDS)


__all__ = [
    "NATURE_WORDS",
    "PERSON_NAMES",
    "count_syllables",
    "has_double_letters",
    "capital_has_person_name",
    "nickname_has_nature",
]

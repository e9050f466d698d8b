"""Tests for challenge selection, hand dealing and scoring rules."""

from __future__ import annotations

import random
from types import SimpleNamespace

import pytest

from scrambled_states.data import get_state
from scrambled_states.engine.challenges import (
    Challenge,
    ChallengeFamily,
    ChallengeKind,
    matches_in_hand,
    matching_cards,
)
from scrambled_states.engine.dealer import HandDealer
from scrambled_states.engine.scoring import badge_upgrade, points_for_answer
from scrambled_states.engine.selector import ChallengeSelector
from scrambled_states.state import BadgeTier, GameMode


@pytest.mark.parametrize("mode", list(GameMode))
def test_every_dealt_hand_has_an_answer(mode: GameMode) -> None:
    dealer = HandDealer(rng=random.Random(1234))
    for _ in range(200):
        dealt = dealer.deal(mode)
        hand = dealt.hand
        assert len(hand) == 5
        assert len({card.name for card in hand}) == 5
        assert any(matches_in_hand(dealt.challenge, card, hand) for card in hand)
        if dealt.challenge.uses_reference:
            assert dealt.challenge.reference not in hand


def test_selector_pools_per_mode() -> None:
    selector = ChallengeSelector(rng=random.Random(7))
    educational = {selector.educational().family for _ in range(300)}
    assert educational == {ChallengeFamily.ATTRIBUTE}
    matching = {selector.match_a_state().kind for _ in range(100)}
    assert matching == {ChallengeKind.MATCHES_CAPITAL, ChallengeKind.MATCHES_NICKNAME}
    distance = {selector.go_the_distance().family for _ in range(100)}
    assert distance == {ChallengeFamily.RELATIVE}
    speed = {selector.speed().family for _ in range(500)}
    assert speed == {ChallengeFamily.ATTRIBUTE, ChallengeFamily.RELATIVE}


def test_match_a_state_prompt_names_a_real_state() -> None:
    selector = ChallengeSelector(rng=random.Random(3))
    dealer = HandDealer(rng=random.Random(3), selector=selector)
    dealt = dealer.deal(GameMode.MATCH_A_STATE)
    answers = [card for card in dealt.hand if matches_in_hand(dealt.challenge, card, dealt.hand)]
    assert len(answers) == 1


def test_fallback_after_unsatisfiable_draws() -> None:
    impossible = SimpleNamespace(for_mode=lambda mode: Challenge.starts_with_letter("Q"))
    dealer = HandDealer(rng=random.Random(5), selector=impossible, max_attempts=20)
    dealt = dealer.deal(GameMode.EDUCATIONAL)
    assert dealt.fallback
    assert dealt.attempts == 20
    assert dealt.challenge.kind is ChallengeKind.STARTS_WITH_LETTER
    assert dealt.challenge.parameter == dealt.hand[0].name[0]
    assert len(dealt.hand) == 5


def test_distance_reference_is_never_dealt() -> None:
    texas = get_state("Texas")
    selector = SimpleNamespace(for_mode=lambda mode: Challenge.closest_to(texas))
    dealer = HandDealer(rng=random.Random(9), selector=selector)
    assert texas not in dealer.candidate_pool(Challenge.closest_to(texas))
    for _ in range(50):
        dealt = dealer.deal(GameMode.GO_THE_DISTANCE)
        assert texas not in dealt.hand
        assert dealt.attempts == 1


@pytest.mark.parametrize("mode", [GameMode.SPEED, GameMode.GO_THE_DISTANCE])
def test_superlative_answers_depend_on_the_hand(mode: GameMode) -> None:
    selector = SimpleNamespace(for_mode=lambda mode: Challenge.most_northern())
    dealer = HandDealer(rng=random.Random(2), selector=selector)
    answers = set()
    for _ in range(50):
        dealt = dealer.deal(mode)
        answers.update(card.name for card in matching_cards(dealt.challenge, dealt.hand))
    assert len(answers) > 1
    assert answers != {"Alaska"}


def test_speed_superlatives_vary_between_deals() -> None:
    dealer = HandDealer(rng=random.Random(2))
    answers = {}
    for _ in range(1500):
        dealt = dealer.deal(GameMode.SPEED)
        if dealt.challenge.is_hand_relative:
            found = answers.setdefault(dealt.challenge.kind, set())
            found.update(card.name for card in matching_cards(dealt.challenge, dealt.hand))
    assert answers
    assert all(len(names) > 1 for names in answers.values())


def test_closest_to_is_judged_within_the_dealt_hand() -> None:
    texas = get_state("Texas")
    selector = SimpleNamespace(for_mode=lambda mode: Challenge.closest_to(texas))
    dealer = HandDealer(rng=random.Random(5), selector=selector)
    answers = set()
    for _ in range(50):
        dealt = dealer.deal(GameMode.SPEED)
        assert texas not in dealt.hand
        answers.update(card.name for card in matching_cards(dealt.challenge, dealt.hand))
    assert len(answers) > 1


def test_seeded_hand_contains_the_only_answer() -> None:
    selector = SimpleNamespace(for_mode=lambda mode: Challenge.matches_capital("Austin"))
    dealer = HandDealer(rng=random.Random(11), selector=selector)
    for _ in range(20):
        dealt = dealer.deal(GameMode.MATCH_A_STATE)
        assert get_state("Texas") in dealt.hand


def test_points_formula() -> None:
    assert points_for_answer(0) == 10
    assert points_for_answer(1) == 15
    assert points_for_answer(3) == 25


@pytest.mark.parametrize(
    ("current", "streak", "expected"),
    [
        (BadgeTier.NONE, 10, BadgeTier.BRONZE),
        (BadgeTier.NONE, 11, None),
        (BadgeTier.BRONZE, 10, None),
        (BadgeTier.BRONZE, 15, BadgeTier.SILVER),
        (BadgeTier.GOLD, 10, None),
        (BadgeTier.GOLD, 15, None),
        (BadgeTier.GOLD, 20, None),
        (BadgeTier.GOLD, 25, BadgeTier.PLATINUM),
        (BadgeTier.PLATINUM, 25, None),
    ],
)
def test_badges_only_upgrade(current: BadgeTier, streak: int, expected) -> None:
    assert badge_upgrade(current, streak) is expected

"""Scenario tests for the game session state machine."""

from __future__ import annotations

import random
from unittest.mock import call

import pytest

from scrambled_states.config import GameSettings
from scrambled_states.data import get_state
from scrambled_states.engine.challenges import Challenge
from scrambled_states.services import BadgeAward, GameSession, SoundEvent
from scrambled_states.services.session import ENCOURAGEMENTS
from scrambled_states.state import BadgeTier, GameMode

SETTINGS = GameSettings()
COASTAL_HAND = ("Texas", "Kansas", "Nebraska", "Iowa", "Missouri")
EASTERN_HAND = ("New York", "Kansas", "Maine", "Texas", "Virginia")


@pytest.fixture
def build_session(scheduler, presenter, audio, scripted_dealer):
    def _build(mode: GameMode, *rounds, profile=None, profiles=None) -> GameSession:
        return GameSession(
            mode,
            profile=profile,
            profiles=profiles,
            dealer=scripted_dealer(*rounds),
            presenter=presenter,
            audio=audio,
            scheduler=scheduler,
            settings=SETTINGS,
            rng=random.Random(0),
        )

    return _build


def _advances(scheduler, delay: float):
    return [handle for handle in scheduler.pending() if handle.delay == delay]


def test_coastal_scenario_scores_and_resets_streak(build_session, scheduler, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt)
    session.start()

    outcome = session.slap_card("Texas")
    assert outcome.correct
    assert outcome.points == 10
    assert outcome.round_complete
    assert session.state.streak == 1
    assert session.state.score == 10
    assert session.state.is_disabled(get_state("Texas"))

    [advance] = _advances(scheduler, SETTINGS.round_delay)
    advance.fire()
    assert session.state.round_number == 2

    miss = session.slap_card("Kansas")
    assert not miss.correct
    assert miss.feedback in ENCOURAGEMENTS
    assert session.state.streak == 0
    assert session.state.score == 10
    assert not session.state.round_resolved
    assert [card.name for card in session.state.hand] == list(COASTAL_HAND)


def test_streak_bonus_grows_with_each_hit(build_session, scheduler, round_factory) -> None:
    dealt = round_factory(Challenge.matches_capital("Austin"), *COASTAL_HAND)
    session = build_session(GameMode.MATCH_A_STATE, dealt)
    session.start()
    points = []
    for _ in range(3):
        points.append(session.slap_card("Texas").points)
        scheduler.run_pending()
    assert points == [10, 15, 20]
    assert session.state.session_score == 45


def test_taps_after_resolution_are_ignored(build_session, scheduler, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt)
    session.start()
    session.slap_card("Texas")
    assert session.slap_card("Kansas").ignored
    assert session.slap_card("Texas").ignored
    assert session.slap_card("Atlantis").ignored
    assert session.state.streak == 1
    assert len(_advances(scheduler, SETTINGS.round_delay)) == 1


def test_bronze_badge_at_ten_resets_streak(build_session, scheduler, presenter, round_factory, profiles) -> None:
    profile = profiles.login("ada")
    dealt = round_factory(Challenge.matches_capital("Austin"), *COASTAL_HAND)
    session = build_session(GameMode.MATCH_A_STATE, dealt, profile=profile, profiles=profiles)
    session.start()

    for _ in range(9):
        assert session.slap_card("Texas").badge is None
        scheduler.run_pending()
    outcome = session.slap_card("Texas")

    assert outcome.badge is BadgeTier.BRONZE
    assert session.state.streak == 0
    assert session.state.best_streak == 10
    assert profile.badge_for(GameMode.MATCH_A_STATE) is BadgeTier.BRONZE
    presenter.show_badge.assert_called_once_with(BadgeAward(tier=BadgeTier.BRONZE, mode=GameMode.MATCH_A_STATE))
    assert len(_advances(scheduler, SETTINGS.badge_round_delay)) == 1
    assert session.state.score == sum(10 + 5 * streak for streak in range(10))


def test_badges_never_downgrade(build_session, scheduler, round_factory, profiles) -> None:
    profile = profiles.login("grace")
    profiles.upgrade_badge(profile, GameMode.EDUCATIONAL, BadgeTier.GOLD)
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt, profile=profile, profiles=profiles)
    session.start()
    for _ in range(15):
        assert session.slap_card("Texas").badge is None
        scheduler.run_pending()
    assert session.state.streak == 15
    assert profile.badge_for(GameMode.EDUCATIONAL) is BadgeTier.GOLD


def test_all_east_of_needs_every_answer(build_session, scheduler, audio, round_factory) -> None:
    dealt = round_factory(Challenge.all_east_of("Ohio"), *EASTERN_HAND)
    session = build_session(GameMode.GO_THE_DISTANCE, dealt)
    session.start()

    first = session.slap_card("New York")
    assert first.correct and first.points == 5 and not first.round_complete
    assert session.slap_card("Kansas").correct is False
    assert session.state.streak == 0
    assert session.state.confirmed_cards == {"New York"}
    assert session.slap_card("New York").ignored

    assert not session.slap_card("Virginia").round_complete
    assert not _advances(scheduler, SETTINGS.round_delay)
    last = session.slap_card("Maine")
    assert last.round_complete
    assert session.state.round_resolved
    assert session.state.session_score == 15
    assert len(_advances(scheduler, SETTINGS.round_delay)) == 1
    assert audio.play.call_args_list.count(call(SoundEvent.INCORRECT)) == 1


def test_start_seeds_score_and_announces_round(build_session, presenter, audio, round_factory, profiles) -> None:
    profile = profiles.login("lin")
    profiles.record_game(profile, GameMode.EDUCATIONAL, score=40, streak=2)
    profiles.record_game(profile, GameMode.SPEED, score=99, streak=1)
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt, profile=profile, profiles=profiles)
    session.start()

    assert session.state.score == 40
    assert session.state.session_score == 0
    assert session.state.is_active
    audio.play.assert_any_call(SoundEvent.LAUNCH)
    audio.speak.assert_called_once_with("Find a coastal state")
    presenter.show_round.assert_called_once()
    description, hand = presenter.show_round.call_args.args
    assert description == "Find a coastal state"
    assert [card.name for card in hand] == list(COASTAL_HAND)


def test_speed_countdown_ends_the_game(build_session, scheduler, presenter, round_factory, profiles) -> None:
    profile = profiles.login("sam")
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.SPEED, dealt, profile=profile, profiles=profiles)
    session.start()
    [countdown] = scheduler.countdowns
    assert countdown.remaining == SETTINGS.speed_timer_seconds
    session.slap_card("Texas")

    countdown.tick(1)
    assert session.state.time_remaining == SETTINGS.speed_timer_seconds - 1
    presenter.show_timer.assert_called_with(SETTINGS.speed_timer_seconds - 1)

    countdown.tick(SETTINGS.speed_timer_seconds)
    assert not session.state.is_active
    assert session.state.time_remaining == 0
    assert not scheduler.pending()
    assert profile.history[0].score == 10
    presenter.show_game_over.assert_called_once()


def test_end_game_records_history_and_cancels_timers(
    build_session, scheduler, presenter, audio, round_factory, profiles
) -> None:
    profile = profiles.login("kim")
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.SPEED, dealt, profile=profile, profiles=profiles)
    session.start()
    session.slap_card("Texas")
    [countdown] = scheduler.countdowns
    [advance] = _advances(scheduler, SETTINGS.round_delay)

    entry = session.end_game()

    assert entry is not None
    assert entry.mode is GameMode.SPEED
    assert entry.score == 10
    assert entry.streak == 1
    assert countdown.cancelled
    assert advance.cancelled
    assert session.state.session_score == 0
    assert session.state.score == 10
    assert profile.games_played == 1
    assert profile.highest_score == 10
    audio.stop_speaking.assert_called_once()
    presenter.show_game_over.assert_called_once_with(10, entry)
    assert session.end_game() is None
    assert session.slap_card("Texas").ignored


def test_guest_game_keeps_no_history(build_session, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt)
    session.start()
    session.slap_card("Texas")
    assert session.end_game() is None


def test_hint_cooldown(build_session, scheduler, presenter, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt)
    session.start()

    text = session.show_hint()
    assert text is not None and text.startswith("💡")
    assert "Texas" in text
    assert session.state.hint_text == text
    assert session.show_hint() is None
    presenter.show_hint.assert_called_once_with(text)

    [cooldown] = _advances(scheduler, SETTINGS.hint_cooldown)
    cooldown.fire()
    assert session.state.hint_available
    assert session.state.hint_text == ""


def test_hints_only_in_educational_mode(build_session, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.SPEED, dealt)
    session.start()
    assert session.show_hint() is None


def test_scramble_and_replay(build_session, scheduler, audio, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt)
    session.start()

    assert session.scramble_cards()
    assert sorted(card.name for card in session.state.hand) == sorted(COASTAL_HAND)
    assert not session.scramble_cards()
    [cooldown] = _advances(scheduler, SETTINGS.scramble_cooldown)
    cooldown.fire()
    assert session.state.can_scramble

    assert session.replay_challenge() == "Find a coastal state"
    assert audio.speak.call_count == 2


def test_capital_challenges_mention_the_capital(build_session, round_factory) -> None:
    dealt = round_factory(Challenge.has_capital_syllables(2), *COASTAL_HAND)
    session = build_session(GameMode.EDUCATIONAL, dealt)
    session.start()
    outcome = session.slap_card("Texas")
    assert outcome.correct
    assert outcome.feedback.endswith("Texas: Austin")


def test_default_scheduler_plays_without_an_event_loop(scripted_dealer, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = GameSession(GameMode.EDUCATIONAL, dealer=scripted_dealer(dealt), rng=random.Random(1))
    session.start()

    assert session.show_hint() is not None
    assert session.slap_card("Texas").correct
    assert session.scramble_cards()
    assert len(session.scheduler.pending()) == 3

    assert session.scheduler.run_pending() == 3
    assert session.state.hint_available
    assert session.state.can_scramble
    assert session.state.round_number == 2
    assert session.end_game() is None


def test_default_scheduler_runs_the_speed_clock_without_an_event_loop(scripted_dealer, round_factory) -> None:
    dealt = round_factory(Challenge.is_coastal(), *COASTAL_HAND)
    session = GameSession(GameMode.SPEED, dealer=scripted_dealer(dealt), rng=random.Random(1))
    session.start()
    [countdown] = session.scheduler.deferred
    countdown.tick(SETTINGS.speed_timer_seconds)
    assert session.state.time_remaining == 0
    assert not session.state.is_active

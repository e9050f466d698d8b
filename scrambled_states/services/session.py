"""Runtime round handling: dealing, taps, scoring, badges and timers."""

from __future__ import annotations

import logging
import random
from typing import Optional, Union

from shared.countdown import AsyncioScheduler, Cancellable, Scheduler

from ..config import SETTINGS, GameSettings
from ..data import State
from ..engine.challenges import ChallengeKind, matches_in_hand, matching_cards
from ..engine.dealer import DealtRound, HandDealer
from ..engine.hints import build_hint
from ..engine.scoring import MULTI_ANSWER_POINTS, badge_upgrade, points_for_answer
from ..state.manager import ProfileManager
from ..state.models import BadgeTier, GameMode, GameSessionState, HistoryEntry, Profile
from .collaborators import (
    AudioSink,
    BadgeAward,
    LoggingAudioSink,
    NullPresenter,
    Presenter,
    SoundEvent,
    TapOutcome,
)

logger = logging.getLogger(__name__)

CHEERS = ("Amazing!", "Fantastic!", "Brilliant!", "Super!", "Excellent!")
MULTI_CHEERS = ("Yay!", "Nice!", "Great!", "Awesome!", "Perfect!")
ENCOURAGEMENTS = (
    "Almost there! Keep trying!",
    "Good effort! Try again!",
    "Nice try! You can do it!",
    "So close! Give it another go!",
    "Keep going! You're learning!",
)
_CAPITAL_KINDS = (ChallengeKind.HAS_CAPITAL_SYLLABLES, ChallengeKind.CAPITAL_HAS_PERSON_NAME)


class GameSession:
    """One player's game from the first deal until :meth:`end_game`.

    All mutation happens on the caller's thread/event loop; timers only
    call back into the session through the injected scheduler, and at most
    one round advance is pending at any time.
    """

    def __init__(
        self,
        mode: GameMode,
        *,
        profile: Optional[Profile] = None,
        profiles: Optional[ProfileManager] = None,
        dealer: Optional[HandDealer] = None,
        presenter: Optional[Presenter] = None,
        audio: Optional[AudioSink] = None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or SETTINGS
        self._rng = rng or random.Random()
        self.dealer = dealer or HandDealer(
            rng=self._rng,
            hand_size=self.settings.hand_size,
            max_attempts=self.settings.max_attempts,
        )
        self.profile = profile
        self.profiles = profiles
        self.presenter: Presenter = presenter or NullPresenter()
        self.audio: AudioSink = audio or LoggingAudioSink()
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self.state = GameSessionState(mode=mode)
        self._advance_handle: Optional[Cancellable] = None
        self._countdown: Optional[Cancellable] = None
        self._hint_handle: Optional[Cancellable] = None
        self._scramble_handle: Optional[Cancellable] = None

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    # Game flow --------------------------------------------------------
    def start(self) -> DealtRound:
        """Reset the counters, start the countdown if needed and deal."""

        state = self.state
        state.is_active = True
        state.score = self._mode_total_score()
        state.session_score = 0
        state.streak = 0
        state.best_streak = 0
        state.round_number = 0
        self.audio.play(SoundEvent.LAUNCH)
        if self.mode.is_timed:
            state.time_remaining = self.settings.speed_timer_seconds
            self._countdown = self.scheduler.countdown(
                self.settings.speed_timer_seconds,
                on_tick=self._on_tick,
                on_expire=self._on_timer_expired,
            )
        logger.info("Started %s game for %s", self.mode.title, self._player_name())
        return self.deal_cards()

    def deal_cards(self) -> DealtRound:
        """Deal a new hand and challenge, replacing the current round."""

        self._cancel_advance()
        state = self.state
        dealt = self.dealer.deal(state.mode)
        state.challenge = dealt.challenge
        state.hand = list(dealt.hand)
        state.reset_round()
        state.round_number += 1
        if state.mode is GameMode.EDUCATIONAL:
            self._cancel(self._hint_handle)
            self._hint_handle = None
            state.hint_available = True
            state.hint_text = ""
        description = dealt.challenge.description
        self.presenter.show_round(description, state.hand)
        self.audio.speak(description)
        return dealt

    def end_game(self) -> Optional[HistoryEntry]:
        """Stop every timer and save the session to the player's history."""

        state = self.state
        if not state.is_active:
            return None
        state.is_active = False
        self._cancel_timers()
        self.audio.stop_speaking()
        final_score = state.session_score
        entry: Optional[HistoryEntry] = None
        if self.profile is not None and self.profiles is not None:
            entry = self.profiles.record_game(
                self.profile,
                state.mode,
                score=final_score,
                streak=state.best_streak,
            )
        self.presenter.show_game_over(final_score, entry)
        logger.info("Finished %s game for %s with %d points", self.mode.title, self._player_name(), final_score)
        state.session_score = 0
        return entry

    # Player actions ---------------------------------------------------
    def slap_card(self, card: Union[State, str]) -> TapOutcome:
        """Judge a tap on ``card`` and update score, streak and badges."""

        state = self.state
        name = card.name if isinstance(card, State) else str(card)
        if not state.is_active or state.challenge is None or state.round_resolved:
            return TapOutcome(card=name, correct=False, feedback="", ignored=True)
        target = state.find_card(name)
        if target is None or state.is_disabled(target):
            return TapOutcome(card=name, correct=False, feedback="", ignored=True)

        self.audio.play(SoundEvent.TAP)
        challenge = state.challenge
        if not matches_in_hand(challenge, target, state.hand):
            outcome = self._handle_miss(target)
        elif challenge.is_multi_answer:
            outcome = self._handle_multi_hit(target)
        else:
            outcome = self._handle_hit(target)

        self.presenter.show_outcome(outcome)
        if outcome.badge is not None:
            self.presenter.show_badge(BadgeAward(tier=outcome.badge, mode=state.mode))
        return outcome

    def show_hint(self) -> Optional[str]:
        """Reveal a hint in Educational mode, then lock hints for a while."""

        state = self.state
        if state.mode is not GameMode.EDUCATIONAL or not state.is_active or not state.hint_available:
            return None
        if state.challenge is None:
            return None
        text = build_hint(state.challenge, state.hand)
        if text is None:
            return None
        state.hint_text = text
        state.hint_available = False
        self.presenter.show_hint(text)
        self._hint_handle = self.scheduler.call_later(self.settings.hint_cooldown, self._restore_hint)
        return text

    def scramble_cards(self) -> bool:
        state = self.state
        if not state.is_active or not state.can_scramble or not state.hand:
            return False
        self._rng.shuffle(state.hand)
        state.can_scramble = False
        if state.challenge is not None:
            self.presenter.show_round(state.challenge.description, state.hand)
        self._scramble_handle = self.scheduler.call_later(self.settings.scramble_cooldown, self._restore_scramble)
        return True

    def replay_challenge(self) -> Optional[str]:
        if self.state.challenge is None:
            return None
        description = self.state.challenge.description
        self.audio.speak(description)
        return description

    # Tap outcomes -----------------------------------------------------
    def _handle_hit(self, card: State) -> TapOutcome:
        state = self.state
        points = points_for_answer(state.streak)
        self._award(points)
        state.confirmed_cards.add(card.name)
        self.audio.play(SoundEvent.CORRECT)
        badge = self._check_badge()
        state.round_resolved = True
        feedback = f"{self._rng.choice(CHEERS)} +{points} points"
        if state.challenge is not None and state.challenge.kind in _CAPITAL_KINDS:
            feedback = f"{feedback}\n{card.name}: {card.capital}"
        self._schedule_next_round()
        return TapOutcome(
            card=card.name,
            correct=True,
            feedback=feedback,
            points=points,
            round_complete=True,
            badge=badge,
        )

    def _handle_multi_hit(self, card: State) -> TapOutcome:
        state = self.state
        self._award(MULTI_ANSWER_POINTS)
        state.confirmed_cards.add(card.name)
        self.audio.play(SoundEvent.CORRECT)
        badge = self._check_badge()
        feedback = f"{self._rng.choice(MULTI_CHEERS)} {len(state.confirmed_cards)} found! 🎯"
        answers = matching_cards(state.challenge, state.hand) if state.challenge else []
        complete = all(answer.name in state.confirmed_cards for answer in answers)
        if complete:
            state.round_resolved = True
            self._schedule_next_round()
        return TapOutcome(
            card=card.name,
            correct=True,
            feedback=feedback,
            points=MULTI_ANSWER_POINTS,
            round_complete=complete,
            badge=badge,
        )

    def _handle_miss(self, card: State) -> TapOutcome:
        self.state.streak = 0
        self.audio.play(SoundEvent.INCORRECT)
        return TapOutcome(card=card.name, correct=False, feedback=self._rng.choice(ENCOURAGEMENTS))

    def _award(self, points: int) -> None:
        state = self.state
        state.score += points
        state.session_score += points
        state.streak += 1
        state.best_streak = max(state.best_streak, state.streak)

    def _check_badge(self) -> Optional[BadgeTier]:
        """Upgrade the mode badge if the streak just hit a new threshold."""

        state = self.state
        if self.profile is None:
            return None
        tier = badge_upgrade(self.profile.badge_for(state.mode), state.streak)
        if tier is None:
            return None
        if self.profiles is not None:
            self.profiles.upgrade_badge(self.profile, state.mode, tier)
        else:
            self.profile.badges[state.mode] = tier
        logger.info("%s earned %s in %s", self._player_name(), tier.label, state.mode.title)
        state.streak = 0
        state.earned_badge = tier
        return tier

    # Timers -----------------------------------------------------------
    def _schedule_next_round(self) -> None:
        badge_pending = self.state.earned_badge is not None
        delay = self.settings.badge_round_delay if badge_pending else self.settings.round_delay
        self._cancel_advance()
        self._advance_handle = self.scheduler.call_later(delay, self._advance_round)

    def _advance_round(self) -> None:
        self._advance_handle = None
        if self.state.is_active:
            self.deal_cards()

    def _on_tick(self, seconds_left: int) -> None:
        self.state.time_remaining = seconds_left
        self.presenter.show_timer(seconds_left)

    def _on_timer_expired(self) -> None:
        self._countdown = None
        self.state.time_remaining = 0
        self.end_game()

    def _restore_hint(self) -> None:
        self._hint_handle = None
        self.state.hint_available = True
        self.state.hint_text = ""

    def _restore_scramble(self) -> None:
        self._scramble_handle = None
        self.state.can_scramble = True

    def _cancel_advance(self) -> None:
        self._cancel(self._advance_handle)
        self._advance_handle = None

    def _cancel_timers(self) -> None:
        for handle in (self._countdown, self._advance_handle, self._hint_handle, self._scramble_handle):
            self._cancel(handle)
        self._countdown = None
        self._advance_handle = None
        self._hint_handle = None
        self._scramble_handle = None

    @staticmethod
    def _cancel(handle: Optional[Cancellable]) -> None:
        if handle is not None:
            handle.cancel()

    # Helpers ------------------------------------------------------------
    def _mode_total_score(self) -> int:
        if self.profile is None or self.profiles is None:
            return 0
        return self.profiles.mode_total_score(self.profile, self.mode)

    def _player_name(self) -> str:
        return self.profile.username if self.profile else "guest"


__all__ = ["GameSession", "CHEERS", "ENCOURAGEMENTS", "MULTI_CHEERS"]

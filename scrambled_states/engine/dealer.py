"""Deal a playable hand for the challenge of the next round."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..data import State, all_states
from ..state.models import GameMode
from .challenges import Challenge, matches_in_hand
from .selector import ChallengeSelector

logger = logging.getLogger(__name__)

HAND_SIZE = 5
MAX_ATTEMPTS = 20


@dataclass(frozen=True, slots=True)
class DealtRound:
    """A challenge together with the hand it was dealt with."""

    challenge: Challenge
    hand: Tuple[State, ...]
    attempts: int
    fallback: bool = False


class HandDealer:
    """Pick a satisfiable challenge and deal cards that contain an answer.

    Dealing never fails: after ``max_attempts`` unsatisfiable draws the
    dealer falls back to random cards and a "starts with" challenge built
    from the first card.
    """

    def __init__(
        self,
        states: Optional[Sequence[State]] = None,
        *,
        selector: Optional[ChallengeSelector] = None,
        rng: Optional[random.Random] = None,
        hand_size: int = HAND_SIZE,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self._states = list(states) if states is not None else list(all_states())
        self._rng = rng or random.Random()
        self._selector = selector or ChallengeSelector(self._states, self._rng)
        self._hand_size = hand_size
        self._max_attempts = max(max_attempts, 1)

    @property
    def states(self) -> Sequence[State]:
        return self._states

    def deal(self, mode: GameMode) -> DealtRound:
        for attempt in range(1, self._max_attempts + 1):
            challenge = self._selector.for_mode(mode)
            pool = self.candidate_pool(challenge)
            satisfying = [state for state in pool if matches_in_hand(challenge, state, pool)]
            if satisfying:
                logger.debug("Dealt %s after %d attempt(s)", challenge.kind.value, attempt)
                hand = self._assemble(challenge, pool, satisfying)
                return DealtRound(challenge=challenge, hand=hand, attempts=attempt)
            logger.debug("Challenge %s has no answer in the catalog, retrying", challenge)
        return self._fallback()

    def candidate_pool(self, challenge: Challenge) -> List[State]:
        """Cards allowed in the hand: everything except a distance reference."""

        if challenge.uses_reference and challenge.reference is not None:
            return [state for state in self._states if state.name != challenge.reference.name]
        return list(self._states)

    def _assemble(
        self,
        challenge: Challenge,
        pool: List[State],
        satisfying: List[State],
    ) -> Tuple[State, ...]:
        size = min(self._hand_size, len(pool))
        # Superlatives are judged within the hand, so any hand has an answer.
        if challenge.is_hand_relative:
            return tuple(self._rng.sample(pool, size))
        seed = self._rng.choice(satisfying)
        fillers = [state for state in pool if state.name != seed.name]
        hand = [seed] + self._rng.sample(fillers, max(size - 1, 0))
        self._rng.shuffle(hand)
        return tuple(hand)

    def _fallback(self) -> DealtRound:
        logger.warning(
            "No satisfiable challenge after %d attempts, dealing a fallback round", self._max_attempts
        )
        hand = tuple(self._rng.sample(self._states, min(self._hand_size, len(self._states))))
        letter = hand[0].name[:1] if hand else ""
        return DealtRound(
            challenge=Challenge.starts_with_letter(letter),
            hand=hand,
            attempts=self._max_attempts,
            fallback=True,
        )


__all__ = ["DealtRound", "HandDealer", "HAND_SIZE", "MAX_ATTEMPTS"]

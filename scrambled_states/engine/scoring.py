"""Points and badge thresholds for correct answers."""

from __future__ import annotations

from typing import Dict, Optional

from ..state.models import BadgeTier

BASE_POINTS = 10
STREAK_BONUS = 5
MULTI_ANSWER_POINTS = 5

BADGE_THRESHOLDS: Dict[int, BadgeTier] = {
    10: BadgeTier.BRONZE,
    15: BadgeTier.SILVER,
    20: BadgeTier.GOLD,
    25: BadgeTier.PLATINUM,
}


def points_for_answer(streak_before: int) -> int:
    """Points for a single-answer hit, given the streak before it counted."""

    return BASE_POINTS + streak_before * STREAK_BONUS


def badge_for_streak(streak: int) -> Optional[BadgeTier]:
    return BADGE_THRESHOLDS.get(streak)


def badge_upgrade(current: BadgeTier, streak: int) -> Optional[BadgeTier]:
    """Return the tier to award for ``streak``, or ``None`` if it is no upgrade."""

    candidate = badge_for_streak(streak)
    if candidate is None or candidate <= current:
        return None
    return candidate


__all__ = [
    "BADGE_THRESHOLDS",
    "BASE_POINTS",
    "MULTI_ANSWER_POINTS",
    "STREAK_BONUS",
    "badge_for_streak",
    "badge_upgrade",
    "points_for_answer",
]

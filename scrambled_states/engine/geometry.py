"""Great-circle distance and the superlative comparisons built on it."""

from __future__ import annotations

import math
from typing import Callable, Iterable, List

from ..data import State


def great_circle_distance(a: State, b: State) -> float:
    """Return the haversine central angle between two states, in radians.

    Only the ordering of distances matters to the game, so the angle is never
    scaled to kilometres.
    """

    lat1 = math.radians(a.coordinates.latitude)
    lat2 = math.radians(b.coordinates.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.coordinates.longitude - a.coordinates.longitude)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _comparison_pool(reference: State, candidates: Iterable[State]) -> List[State]:
    return [candidate for candidate in candidates if candidate.name != reference.name]


def is_closest(state: State, reference: State, candidates: Iterable[State]) -> bool:
    """Check whether ``state`` ties for the minimum distance to ``reference``."""

    pool = _comparison_pool(reference, candidates)
    if not pool:
        return False
    nearest = min(great_circle_distance(reference, candidate) for candidate in pool)
    return great_circle_distance(reference, state) == nearest


def is_farthest(state: State, reference: State, candidates: Iterable[State]) -> bool:
    """Check whether ``state`` ties for the maximum distance from ``reference``."""

    pool = _comparison_pool(reference, candidates)
    if not pool:
        return False
    farthest = max(great_circle_distance(reference, candidate) for candidate in pool)
    return great_circle_distance(reference, state) == farthest


def _latitude(state: State) -> float:
    return state.coordinates.latitude


def _longitude(state: State) -> float:
    return state.coordinates.longitude


def _is_extreme(
    state: State,
    hand: Iterable[State],
    axis: Callable[[State], float],
    pick: Callable[[Iterable[float]], float],
) -> bool:
    values = [axis(card) for card in hand]
    if not values:
        return False
    return axis(state) == pick(values)


def is_most_northern(state: State, hand: Iterable[State]) -> bool:
    return _is_extreme(state, hand, _latitude, max)


def is_most_southern(state: State, hand: Iterable[State]) -> bool:
    return _is_extreme(state, hand, _latitude, min)


def is_most_eastern(state: State, hand: Iterable[State]) -> bool:
    return _is_extreme(state, hand, _longitude, max)


def is_most_western(state: State, hand: Iterable[State]) -> bool:
    return _is_extreme(state, hand, _longitude, min)


__all__ = [
    "great_circle_distance",
    "is_closest",
    "is_farthest",
    "is_most_northern",
    "is_most_southern",
    "is_most_eastern",
    "is_most_western",
]

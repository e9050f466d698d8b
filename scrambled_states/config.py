"""Game tuning values, overridable through ``STATES_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "STATES_"


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s%s=%r, using %s", ENV_PREFIX, name, raw, default)
        return default


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    return int(_read_float(env, name, default))


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Timings and limits used by the dealer and the game session."""

    hand_size: int = 5
    max_attempts: int = 20
    round_delay: float = 2.5
    badge_round_delay: float = 7.0
    speed_timer_seconds: int = 30
    hint_cooldown: float = 5.0
    scramble_cooldown: float = 3.0
    history_limit: int = 50
    profile_path: Optional[Path] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GameSettings":
        env = os.environ if env is None else env
        defaults = cls()
        profile_raw = env.get(f"{ENV_PREFIX}PROFILE_PATH")
        return cls(
            hand_size=_read_int(env, "HAND_SIZE", defaults.hand_size),
            max_attempts=_read_int(env, "MAX_ATTEMPTS", defaults.max_attempts),
            round_delay=_read_float(env, "ROUND_DELAY", defaults.round_delay),
            badge_round_delay=_read_float(env, "BADGE_ROUND_DELAY", defaults.badge_round_delay),
            speed_timer_seconds=_read_int(env, "SPEED_TIMER_SECONDS", defaults.speed_timer_seconds),
            hint_cooldown=_read_float(env, "HINT_COOLDOWN", defaults.hint_cooldown),
            scramble_cooldown=_read_float(env, "SCRAMBLE_COOLDOWN", defaults.scramble_cooldown),
            history_limit=_read_int(env, "HISTORY_LIMIT", defaults.history_limit),
            profile_path=Path(profile_raw) if profile_raw else None,
        )


SETTINGS = GameSettings.from_env()

__all__ = ["GameSettings", "SETTINGS"]

"""Utilities for serializing player profiles to a local JSON file."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from .models import BadgeTier, GameMode, HistoryEntry, Profile

LOGGER = logging.getLogger(__name__)
DEFAULT_PROFILE_PATH = Path(__file__).resolve().parent / ".profiles.json"


def _serialize_entry(entry: HistoryEntry) -> Dict[str, object]:
    return {
        "mode": entry.mode.value,
        "score": entry.score,
        "streak": entry.streak,
        "date": entry.date.isoformat(),
    }


def _serialize_profile(profile: Profile) -> Dict[str, object]:
    return {
        "profile_id": profile.profile_id,
        "username": profile.username,
        "avatar": profile.avatar,
        "total_score": profile.total_score,
        "games_played": profile.games_played,
        "highest_score": profile.highest_score,
        "last_played": profile.last_played.isoformat(),
        "history": [_serialize_entry(entry) for entry in profile.history],
        "badges": {mode.value: tier.name.lower() for mode, tier in profile.badges.items()},
    }


def _parse_datetime(value: object) -> datetime:
    if not isinstance(value, str) or not value:
        return datetime.utcnow()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        LOGGER.warning("Invalid datetime value %s in stored profiles", value)
        return datetime.utcnow()


def _parse_badges(payload: object) -> Dict[GameMode, BadgeTier]:
    badges: Dict[GameMode, BadgeTier] = {}
    if not isinstance(payload, dict):
        return badges
    for mode_raw, tier_raw in payload.items():
        try:
            badges[GameMode(mode_raw)] = BadgeTier[str(tier_raw).upper()]
        except (KeyError, ValueError):
            LOGGER.warning("Skipping unknown badge %s=%s", mode_raw, tier_raw)
    return badges


def _deserialize_entry(payload: Dict[str, object]) -> HistoryEntry:
    return HistoryEntry(
        mode=GameMode(payload["mode"]),
        score=int(payload.get("score", 0)),
        streak=int(payload.get("streak", 0)),
        date=_parse_datetime(payload.get("date")),
    )


def _deserialize_profile(payload: Dict[str, object]) -> Profile:
    history: List[HistoryEntry] = []
    for entry in payload.get("history", []):
        try:
            history.append(_deserialize_entry(entry))
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Dropping malformed history entry %s: %s", entry, exc)
    return Profile(
        profile_id=str(payload["profile_id"]),
        username=str(payload["username"]),
        avatar=str(payload.get("avatar", "😊")),
        total_score=int(payload.get("total_score", 0)),
        games_played=int(payload.get("games_played", 0)),
        highest_score=int(payload.get("highest_score", 0)),
        last_played=_parse_datetime(payload.get("last_played")),
        history=history,
        badges=_parse_badges(payload.get("badges")),
    )


class ProfileStorage:
    """Read and write profile snapshots to a JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[Profile]:
        """Load the stored profiles, or an empty list if there are none."""

        if not self._path.exists():
            return []
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.error("Failed to read profiles from %s: %s", self._path, exc)
            return []
        profiles: List[Profile] = []
        for data in payload.get("profiles", []):
            try:
                profiles.append(_deserialize_profile(data))
            except (KeyError, TypeError, ValueError) as exc:
                LOGGER.error("Failed to deserialize profile %s: %s", data, exc)
        return profiles

    def dump(self, profiles: List[Profile]) -> None:
        """Write the profiles to disk."""

        payload = {"profiles": [_serialize_profile(profile) for profile in profiles]}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            LOGGER.error("Failed to persist profiles to %s: %s", self._path, exc)

    def clear(self) -> None:
        """Remove the stored profile file entirely."""

        try:
            if self._path.exists():
                self._path.unlink()
        except OSError as exc:
            LOGGER.error("Failed to delete profile file %s: %s", self._path, exc)


__all__ = ["ProfileStorage", "DEFAULT_PROFILE_PATH"]

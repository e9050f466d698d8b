"""Persistence-aware CRUD manager for player profiles."""

from __future__ import annotations

import logging
from datetime import datetime
from secrets import token_urlsafe
from typing import List, Optional

from ..config import SETTINGS
from .models import BadgeTier, GameMode, HistoryEntry, Profile
from .storage import DEFAULT_PROFILE_PATH, ProfileStorage


class ProfileManager:
    """Utility that stores, looks up and updates player profiles."""

    def __init__(self, storage: Optional[ProfileStorage] = None, *, history_limit: Optional[int] = None) -> None:
        self._logger = logging.getLogger(__name__)
        self._storage = storage or ProfileStorage(SETTINGS.profile_path or DEFAULT_PROFILE_PATH)
        self._history_limit = history_limit if history_limit is not None else SETTINGS.history_limit
        self._profiles: List[Profile] = []
        self.load_profiles()

    @property
    def profiles(self) -> List[Profile]:
        return list(self._profiles)

    # Persistence --------------------------------------------------------
    def load_profiles(self) -> List[Profile]:
        """Restore profiles from storage, keeping the current ones on failure."""

        try:
            self._profiles = self._storage.load()
        except Exception as exc:  # pragma: no cover - defensive logging
            self._logger.exception("Failed to load profiles: %s", exc)
        return self.profiles

    def save_profiles(self) -> None:
        try:
            self._storage.dump(self._profiles)
        except Exception as exc:  # pragma: no cover - defensive logging
            self._logger.exception("Failed to persist profiles: %s", exc)

    # Lookup helpers -----------------------------------------------------
    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        for profile in self._profiles:
            if profile.profile_id == profile_id:
                return profile
        return None

    def find_by_username(self, username: str) -> Optional[Profile]:
        for profile in self._profiles:
            if profile.username == username:
                return profile
        return None

    # Mutation helpers ---------------------------------------------------
    def login(self, username: str, avatar: str = "😊") -> Profile:
        """Return the profile with ``username``, creating it on first login."""

        existing = self.find_by_username(username)
        if existing:
            return existing
        profile = Profile(profile_id=token_urlsafe(8), username=username, avatar=avatar)
        self.add_profile(profile)
        self._logger.info("Created profile %s for %s", profile.profile_id, username)
        return profile

    def add_profile(self, profile: Profile) -> Profile:
        self._profiles.append(profile)
        self.save_profiles()
        return profile

    def update_profile(self, profile: Profile) -> Profile:
        """Replace the stored copy of ``profile`` and persist it."""

        for index, stored in enumerate(self._profiles):
            if stored.profile_id == profile.profile_id:
                self._profiles[index] = profile
                self.save_profiles()
                break
        return profile

    def delete_profile(self, profile: Profile) -> None:
        self._profiles = [stored for stored in self._profiles if stored.profile_id != profile.profile_id]
        self.save_profiles()

    def update_info(self, profile: Profile, *, username: str, avatar: str) -> Profile:
        profile.username = username
        profile.avatar = avatar
        return self.update_profile(profile)

    # Game bookkeeping ---------------------------------------------------
    def badge_for(self, profile: Profile, mode: GameMode) -> BadgeTier:
        return profile.badge_for(mode)

    def upgrade_badge(self, profile: Profile, mode: GameMode, tier: BadgeTier) -> bool:
        """Store ``tier`` for ``mode`` only if it beats the current badge."""

        if tier <= profile.badge_for(mode):
            return False
        profile.badges[mode] = tier
        self.update_profile(profile)
        return True

    def mode_total_score(self, profile: Profile, mode: GameMode) -> int:
        return sum(entry.score for entry in profile.history if entry.mode is mode)

    def record_game(
        self,
        profile: Profile,
        mode: GameMode,
        *,
        score: int,
        streak: int,
        played_at: Optional[datetime] = None,
    ) -> HistoryEntry:
        """Append a finished game to the history and update the totals."""

        moment = played_at or datetime.utcnow()
        entry = HistoryEntry(mode=mode, score=score, streak=streak, date=moment)
        profile.history.insert(0, entry)
        del profile.history[self._history_limit :]
        profile.total_score += score
        profile.games_played += 1
        profile.last_played = moment
        profile.highest_score = max(profile.highest_score, score)
        self.update_profile(profile)
        return entry

    def reset(self) -> None:
        """Clear all stored data (used in tests)."""

        self._profiles.clear()
        self._storage.clear()


PROFILE_MANAGER = ProfileManager()

__all__ = ["PROFILE_MANAGER", "ProfileManager"]

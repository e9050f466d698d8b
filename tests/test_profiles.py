"""Tests for profile persistence, bookkeeping and the summary messages."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

from scrambled_states.services import collect_profile_stats, format_game_over_message, format_profile_message
from scrambled_states.state import BadgeTier, GameMode, GameSessionState
from scrambled_states.state.manager import ProfileManager
from scrambled_states.state.storage import ProfileStorage


def test_login_creates_once_and_persists(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    manager = ProfileManager(ProfileStorage(path))
    first = manager.login("ada", avatar="🦊")
    assert manager.login("ada") is first
    assert len(manager.profiles) == 1

    reloaded = ProfileManager(ProfileStorage(path))
    restored = reloaded.find_by_username("ada")
    assert restored is not None
    assert restored.profile_id == first.profile_id
    assert restored.avatar == "🦊"


def test_record_game_updates_totals_and_round_trips(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    manager = ProfileManager(ProfileStorage(path))
    profile = manager.login("ada")
    played = datetime(2024, 5, 1, 12, 0, 0)
    manager.record_game(profile, GameMode.SPEED, score=30, streak=4, played_at=played)
    manager.record_game(profile, GameMode.SPEED, score=10, streak=1, played_at=played + timedelta(days=1))
    manager.upgrade_badge(profile, GameMode.SPEED, BadgeTier.SILVER)

    assert profile.total_score == 40
    assert profile.games_played == 2
    assert profile.highest_score == 30
    assert profile.history[0].score == 10
    assert manager.mode_total_score(profile, GameMode.SPEED) == 40
    assert manager.mode_total_score(profile, GameMode.EDUCATIONAL) == 0

    restored = ProfileManager(ProfileStorage(path)).get_by_id(profile.profile_id)
    assert restored is not None
    assert restored.history[1].date == played
    assert restored.history[1].mode is GameMode.SPEED
    assert restored.badge_for(GameMode.SPEED) is BadgeTier.SILVER
    assert restored.badge_for(GameMode.EDUCATIONAL) is BadgeTier.NONE

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["profiles"][0]["badges"] == {"speed": "silver"}


def test_history_is_capped_most_recent_first(profiles) -> None:
    profile = profiles.login("ada")
    for score in range(60):
        profiles.record_game(profile, GameMode.EDUCATIONAL, score=score, streak=0)
    assert len(profile.history) == 50
    assert profile.history[0].score == 59
    assert profile.history[-1].score == 10
    assert profile.games_played == 60


def test_upgrade_badge_refuses_downgrades(profiles) -> None:
    profile = profiles.login("ada")
    assert profiles.upgrade_badge(profile, GameMode.EDUCATIONAL, BadgeTier.GOLD)
    assert not profiles.upgrade_badge(profile, GameMode.EDUCATIONAL, BadgeTier.BRONZE)
    assert not profiles.upgrade_badge(profile, GameMode.EDUCATIONAL, BadgeTier.GOLD)
    assert profile.badge_for(GameMode.EDUCATIONAL) is BadgeTier.GOLD


def test_update_info_and_delete(profiles) -> None:
    profile = profiles.login("ada")
    profiles.update_info(profile, username="ada2", avatar="🐢")
    assert profiles.find_by_username("ada2") is profile
    profiles.delete_profile(profile)
    assert profiles.profiles == []


def test_corrupt_file_loads_as_empty(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    path.write_text("{not json", encoding="utf-8")
    assert ProfileStorage(path).load() == []


def test_malformed_entries_are_skipped(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    payload = {
        "profiles": [
            {
                "profile_id": "p1",
                "username": "ada",
                "history": [{"mode": "unknown", "score": 1}, {"mode": "speed", "score": 5, "streak": 2}],
                "badges": {"speed": "gold", "nope": "bronze"},
            },
            {"username": "missing id"},
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    [profile] = ProfileStorage(path).load()
    assert [entry.score for entry in profile.history] == [5]
    assert profile.badges == {GameMode.SPEED: BadgeTier.GOLD}


def test_profile_message_lists_modes_and_recent_games(profiles) -> None:
    profile = profiles.login("<ada>")
    profiles.record_game(profile, GameMode.SPEED, score=25, streak=3, played_at=datetime(2024, 1, 2))
    profiles.upgrade_badge(profile, GameMode.SPEED, BadgeTier.BRONZE)

    stats = collect_profile_stats(profile)
    assert stats.mode_scores[GameMode.SPEED] == 25
    assert stats.mode_scores[GameMode.EDUCATIONAL] == 0

    text = format_profile_message(stats)
    assert "&lt;ada&gt;" in text
    assert "Speed Challenge: 25 pts, badge 🥉 Bronze" in text
    assert "Educational Mode: 0 pts, badge none yet" in text
    assert "2024-01-02 Speed Challenge: 25 pts, streak 3" in text


def test_game_over_message() -> None:
    start = datetime(2024, 1, 1, 10, 0, 0)
    state = GameSessionState(mode=GameMode.EDUCATIONAL, round_number=4, best_streak=3, started_at=start)
    text = format_game_over_message(state, 35, None, now=start + timedelta(seconds=75))
    assert "Educational Mode finished!" in text
    assert "Score this game: 35" in text
    assert "Best streak: 3" in text
    assert "Duration: 1m15s" in text
    assert "Play with a profile" in text

"""Utility helpers that summarize profiles and finished games."""

from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from ..state.models import BadgeTier, GameMode, GameSessionState, HistoryEntry, Profile

RECENT_GAMES = 5


@dataclass(slots=True)
class ProfileStats:
    """Snapshot of a profile used by /profile and the game-over message."""

    username: str
    avatar: str
    total_score: int
    games_played: int
    highest_score: int
    mode_scores: Dict[GameMode, int]
    badges: Dict[GameMode, BadgeTier]
    recent: List[HistoryEntry]


def _format_duration(seconds: int) -> str:
    seconds = max(seconds, 0)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    parts: list[str] = []
    if hours:
        parts.append(f"{hours}h")
    if minutes or hours:
        parts.append(f"{minutes:02d}m" if hours else f"{minutes}m")
    parts.append(f"{seconds:02d}s" if minutes or hours else f"{seconds}s")
    return "".join(parts)


def collect_profile_stats(profile: Profile, *, recent: int = RECENT_GAMES) -> ProfileStats:
    """Aggregate per-mode totals and the latest games of ``profile``."""

    mode_scores = {mode: 0 for mode in GameMode}
    for entry in profile.history:
        mode_scores[entry.mode] += entry.score
    return ProfileStats(
        username=profile.username,
        avatar=profile.avatar,
        total_score=profile.total_score,
        games_played=profile.games_played,
        highest_score=profile.highest_score,
        mode_scores=mode_scores,
        badges={mode: profile.badge_for(mode) for mode in GameMode},
        recent=list(profile.history[:recent]),
    )


def _format_badge(tier: BadgeTier) -> str:
    if tier is BadgeTier.NONE:
        return "none yet"
    return f"{tier.icon} {tier.label}"


def format_profile_message(stats: ProfileStats) -> str:
    """Render the HTML profile card."""

    lines = [
        f"{html.escape(stats.avatar)} <b>{html.escape(stats.username)}</b>",
        f"🏆 Total score: {stats.total_score}",
        f"🎮 Games played: {stats.games_played}",
        f"⭐ Best game: {stats.highest_score}",
        "",
        "<b>Modes</b>",
    ]
    for mode in GameMode:
        lines.append(
            f"• {mode.title}: {stats.mode_scores[mode]} pts, badge {_format_badge(stats.badges[mode])}"
        )
    if stats.recent:
        lines.append("")
        lines.append("<b>Recent games</b>")
        for entry in stats.recent:
            stamp = entry.date.strftime("%Y-%m-%d")
            lines.append(f"• {stamp} {entry.mode.title}: {entry.score} pts, streak {entry.streak}")
    return "\n".join(lines)


def format_game_over_message(
    state: GameSessionState,
    score: int,
    entry: Optional[HistoryEntry] = None,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Render the summary shown when a game ends."""

    moment = now or datetime.utcnow()
    duration = int(max((moment - state.started_at).total_seconds(), 0))
    lines = [
        f"🏁 <b>{state.mode.title} finished!</b>",
        f"Score this game: {score}",
        f"Rounds played: {state.round_number}",
        f"Best streak: {state.best_streak}",
        f"🕐 Duration: {_format_duration(duration)}",
    ]
    if entry is None:
        lines.append("Play with a profile to keep your history.")
    return "\n".join(lines)


__all__ = [
    "ProfileStats",
    "collect_profile_stats",
    "format_game_over_message",
    "format_profile_message",
]

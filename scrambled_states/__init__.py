"""Scrambled States: a US geography card-matching game."""

from .handlers import SESSIONS, get_session, quit_cmd, register_handlers, reset_for_chat, start_cmd
from .services import GameSession
from .state import BadgeTier, GameMode, Profile
from .state.manager import PROFILE_MANAGER

__all__ = [
    "BadgeTier",
    "GameMode",
    "GameSession",
    "PROFILE_MANAGER",
    "SESSIONS",
    "Profile",
    "get_session",
    "quit_cmd",
    "register_handlers",
    "reset_for_chat",
    "start_cmd",
]

"""Telegram handlers for the Scrambled States game."""

from .gameplay import SESSIONS, get_session, start_session, stop_session
from .lobby import help_cmd, mode_choice_callback, profile_cmd, quit_cmd, start_cmd
from .router import register_handlers, reset_for_chat

__all__ = [
    "SESSIONS",
    "get_session",
    "help_cmd",
    "mode_choice_callback",
    "profile_cmd",
    "quit_cmd",
    "register_handlers",
    "reset_for_chat",
    "start_cmd",
    "start_session",
    "stop_session",
]

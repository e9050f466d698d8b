"""Registration helpers for Scrambled States handlers."""

from __future__ import annotations

from typing import Optional

from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from .gameplay import (
    CALLBACK_PREFIX,
    hint_callback,
    repeat_callback,
    scramble_callback,
    stop_session,
    tap_callback,
)
from .lobby import help_cmd, mode_choice_callback, profile_cmd, quit_cmd, start_cmd


async def reset_for_chat(chat_id: int, user_id: int, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Finish any running game in the provided chat."""

    stop_session(chat_id)


def register_handlers(application: Optional[Application]) -> None:
    """Attach the game's command and button handlers to the application."""

    if not application:
        return

    application.add_handler(CommandHandler(["start", "states"], start_cmd))
    application.add_handler(CommandHandler("help", help_cmd, block=False))
    application.add_handler(CommandHandler("profile", profile_cmd, block=False))
    application.add_handler(CommandHandler("quit", quit_cmd))
    application.add_handler(CallbackQueryHandler(mode_choice_callback, pattern=f"^{CALLBACK_PREFIX}:mode:"))
    application.add_handler(CallbackQueryHandler(tap_callback, pattern=f"^{CALLBACK_PREFIX}:tap:"))
    application.add_handler(CallbackQueryHandler(hint_callback, pattern=f"^{CALLBACK_PREFIX}:hint$"))
    application.add_handler(CallbackQueryHandler(scramble_callback, pattern=f"^{CALLBACK_PREFIX}:scramble$"))
    application.add_handler(CallbackQueryHandler(repeat_callback, pattern=f"^{CALLBACK_PREFIX}:repeat$"))

"""Commands for choosing a mode, viewing a profile and leaving a game."""

from __future__ import annotations

import logging
from typing import Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update, User
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..services import collect_profile_stats, format_profile_message
from ..state import GameMode, Profile
from ..state.manager import PROFILE_MANAGER
from .gameplay import CALLBACK_PREFIX, get_session, start_session, stop_session

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "<b>Scrambled States: how to play</b>\n"
    "1. Pick a mode with /states.\n"
    "2. Each round shows a challenge and five state cards.\n"
    "3. Tap the card that matches. Some challenges have several answers, find them all!\n"
    "4. Every correct answer earns 10 points plus 5 for each answer already in your streak.\n"
    "5. Streaks of 10, 15, 20 and 25 earn Bronze, Silver, Gold and Platinum badges.\n"
    "\nModes:\n"
    + "\n".join(f"• <b>{mode.title}</b>: {mode.blurb}" for mode in GameMode)
    + "\n\nCommands:\n"
    "• /states: choose a mode and start playing.\n"
    "• /profile: your scores, badges and recent games.\n"
    "• /quit: finish the current game and save it.\n"
    "• /help: show these rules."
)


def _profile_for(user: Optional[User]) -> Optional[Profile]:
    if user is None:
        return None
    return PROFILE_MANAGER.login(user.username or str(user.id))


def mode_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(mode.title, callback_data=f"{CALLBACK_PREFIX}:mode:{mode.value}")]
            for mode in GameMode
        ]
    )


async def start_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show the mode picker."""

    message = update.effective_message
    if not message:
        return
    chat = update.effective_chat
    if chat and get_session(chat.id):
        await message.reply_text("A game is already running in this chat. Finish it with /quit first.")
        return
    await message.reply_text(
        "🗺 <b>Scrambled States</b>\nChoose a game mode:",
        parse_mode="HTML",
        reply_markup=mode_keyboard(),
    )


async def mode_choice_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    _, _, raw_mode = (query.data or "").partition(":mode:")
    try:
        mode = GameMode(raw_mode)
    except ValueError:
        await query.answer("Unknown mode.", show_alert=True)
        return
    chat_id = query.message.chat_id if query.message else (query.from_user.id if query.from_user else None)
    if chat_id is None:
        await query.answer()
        return
    if get_session(chat_id):
        await query.answer("A game is already running. Use /quit first.", show_alert=True)
        return
    await query.answer()
    try:
        await query.edit_message_text(f"Starting {mode.title}: {mode.blurb}")
    except TelegramError:
        pass
    profile = _profile_for(query.from_user)
    logger.info("Chat %s starts %s", chat_id, mode.value)
    start_session(chat_id, mode, profile, context)


async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    if message:
        await message.reply_text(HELP_TEXT, parse_mode="HTML", disable_web_page_preview=True)


async def profile_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    profile = _profile_for(update.effective_user)
    if not message or profile is None:
        return
    stats = collect_profile_stats(profile)
    await message.reply_text(format_profile_message(stats), parse_mode="HTML")


async def quit_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    chat = update.effective_chat
    if not message or not chat:
        return
    if get_session(chat.id) is None:
        await message.reply_text("No game is running. Use /states to start one.")
        return
    stop_session(chat.id)
    await message.reply_text("Game saved. Thanks for playing!")


__all__ = [
    "HELP_TEXT",
    "help_cmd",
    "mode_choice_callback",
    "mode_keyboard",
    "profile_cmd",
    "quit_cmd",
    "start_cmd",
]

"""Runtime round handling for the Telegram front end."""

from __future__ import annotations

import asyncio
import html
import logging
from typing import Awaitable, Dict, List, Optional, Sequence

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import TelegramError
from telegram.ext import Application, ContextTypes

from ..data import State
from ..services import (
    BadgeAward,
    GameSession,
    LoggingAudioSink,
    TapOutcome,
    format_game_over_message,
)
from ..state import GameMode, HistoryEntry, Profile
from ..state.manager import PROFILE_MANAGER

logger = logging.getLogger(__name__)

SESSIONS: Dict[int, GameSession] = {}
CALLBACK_PREFIX = "states"
TIMER_REFRESH_EVERY = 5


def get_session(chat_id: int) -> Optional[GameSession]:
    return SESSIONS.get(chat_id)


def _tap_data(round_number: int, name: str) -> str:
    return f"{CALLBACK_PREFIX}:tap:{round_number}:{name}"


class TelegramPresenter:
    """Render a :class:`GameSession` as one editable message per round.

    Session callbacks are synchronous, so every Telegram call is spawned as
    a task; a lock keeps the sends in the order the session issued them.
    """

    def __init__(self, chat_id: int, context: ContextTypes.DEFAULT_TYPE) -> None:
        self.chat_id = chat_id
        self.bot = context.bot
        self.application: Optional[Application] = context.application
        self.session: Optional[GameSession] = None
        self.message_id: Optional[int] = None
        self.rendered_round = 0
        self.feedback = ""
        self._lock = asyncio.Lock()

    # Presenter protocol -----------------------------------------------
    def show_round(self, description: str, hand: Sequence[State]) -> None:
        session = self.session
        round_number = session.state.round_number if session else 0
        if round_number != self.rendered_round:
            self.rendered_round = round_number
            self.feedback = ""
            self._spawn(self._send_new_round())
        else:
            self._spawn(self._refresh())

    def show_outcome(self, outcome: TapOutcome) -> None:
        if outcome.ignored:
            return
        self.feedback = outcome.feedback
        self._spawn(self._refresh())

    def show_badge(self, award: BadgeAward) -> None:
        text = (
            f"🏅 <b>New badge!</b> {award.tier.icon} {award.tier.label} in {html.escape(award.mode.title)}\n"
            "Your streak starts over, keep it up!"
        )
        self._spawn(self._send(text))

    def show_hint(self, text: str) -> None:
        self._spawn(self._refresh())

    def show_timer(self, seconds_left: int) -> None:
        if seconds_left % TIMER_REFRESH_EVERY == 0:
            self._spawn(self._refresh())

    def show_game_over(self, score: int, entry: Optional[HistoryEntry]) -> None:
        session = self.session
        if session is not None and SESSIONS.get(self.chat_id) is session:
            SESSIONS.pop(self.chat_id, None)
        if session is None:
            return
        summary = format_game_over_message(session.state, score, entry)
        self._spawn(self._finish(summary))

    # Rendering ----------------------------------------------------------
    def render_text(self) -> str:
        session = self.session
        if session is None:
            return ""
        state = session.state
        lines = [f"<b>{html.escape(state.mode.title)}</b> · Round {state.round_number}"]
        if state.challenge is not None:
            lines.append(f"🎯 {html.escape(state.challenge.description)}")
        lines.append(f"🏆 Score: {state.score} · 🔥 Streak: {state.streak}")
        if state.mode.is_timed and state.time_remaining is not None:
            lines.append(f"⏱ {state.time_remaining}s left")
        if state.hint_text:
            lines.append(html.escape(state.hint_text))
        if self.feedback:
            lines.append("")
            lines.append(html.escape(self.feedback))
        return "\n".join(lines)

    def render_keyboard(self) -> Optional[InlineKeyboardMarkup]:
        session = self.session
        if session is None or not session.state.is_active:
            return None
        state = session.state
        rows: List[List[InlineKeyboardButton]] = []
        row: List[InlineKeyboardButton] = []
        for card in state.hand:
            label = f"✅ {card.name}" if state.is_disabled(card) else card.name
            row.append(InlineKeyboardButton(label, callback_data=_tap_data(state.round_number, card.name)))
            if len(row) == 2:
                rows.append(row)
                row = []
        if row:
            rows.append(row)
        controls = [
            InlineKeyboardButton("🔀 Scramble", callback_data=f"{CALLBACK_PREFIX}:scramble"),
            InlineKeyboardButton("🔁 Repeat", callback_data=f"{CALLBACK_PREFIX}:repeat"),
        ]
        if state.mode is GameMode.EDUCATIONAL:
            controls.insert(0, InlineKeyboardButton("💡 Hint", callback_data=f"{CALLBACK_PREFIX}:hint"))
        rows.append(controls)
        return InlineKeyboardMarkup(rows)

    # Telegram calls -----------------------------------------------------
    def _spawn(self, coroutine: Awaitable[None]) -> None:
        if self.application:
            self.application.create_task(coroutine)
        else:
            asyncio.create_task(coroutine)

    async def _send(self, text: str) -> None:
        async with self._lock:
            try:
                await self.bot.send_message(self.chat_id, text, parse_mode="HTML")
            except TelegramError as exc:
                logger.warning("Failed to send message to chat %s: %s", self.chat_id, exc)

    async def _send_new_round(self) -> None:
        async with self._lock:
            await self._drop_keyboard()
            try:
                sent = await self.bot.send_message(
                    self.chat_id,
                    self.render_text(),
                    parse_mode="HTML",
                    reply_markup=self.render_keyboard(),
                )
            except TelegramError as exc:
                logger.warning("Failed to send round to chat %s: %s", self.chat_id, exc)
                self.message_id = None
                return
            self.message_id = sent.message_id

    async def _refresh(self) -> None:
        async with self._lock:
            if self.message_id is None:
                return
            try:
                await self.bot.edit_message_text(
                    chat_id=self.chat_id,
                    message_id=self.message_id,
                    text=self.render_text(),
                    parse_mode="HTML",
                    reply_markup=self.render_keyboard(),
                )
            except TelegramError as exc:
                # Telegram rejects edits that change nothing; those are harmless.
                logger.debug("Round message %s not updated: %s", self.message_id, exc)

    async def _finish(self, summary: str) -> None:
        async with self._lock:
            await self._drop_keyboard()
            try:
                await self.bot.send_message(self.chat_id, summary, parse_mode="HTML")
            except TelegramError as exc:
                logger.warning("Failed to send game summary to chat %s: %s", self.chat_id, exc)

    async def _drop_keyboard(self) -> None:
        if self.message_id is None:
            return
        try:
            await self.bot.edit_message_reply_markup(
                chat_id=self.chat_id,
                message_id=self.message_id,
                reply_markup=None,
            )
        except TelegramError:
            pass
        self.message_id = None


def start_session(
    chat_id: int,
    mode: GameMode,
    profile: Optional[Profile],
    context: ContextTypes.DEFAULT_TYPE,
) -> GameSession:
    """Create, register and start a game for ``chat_id``."""

    presenter = TelegramPresenter(chat_id, context)
    session = GameSession(
        mode,
        profile=profile,
        profiles=PROFILE_MANAGER if profile is not None else None,
        presenter=presenter,
        audio=LoggingAudioSink(),
    )
    presenter.session = session
    SESSIONS[chat_id] = session
    session.start()
    return session


def stop_session(chat_id: int) -> Optional[HistoryEntry]:
    """End the game in ``chat_id``, if any, and save it."""

    session = SESSIONS.pop(chat_id, None)
    if session is None:
        return None
    return session.end_game()


def _session_for_query(update: Update) -> Optional[GameSession]:
    query = update.callback_query
    if not query or not query.message:
        return None
    return SESSIONS.get(query.message.chat_id)


async def tap_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle a tap on one of the card buttons."""

    query = update.callback_query
    if not query:
        return
    session = _session_for_query(update)
    if session is None:
        await query.answer("No game is running. Use /states to start one.", show_alert=True)
        return
    # Buttons name their card so a tap survives a shuffle of the hand.
    parts = (query.data or "").split(":", 3)
    try:
        round_number, name = int(parts[2]), parts[3]
    except (IndexError, ValueError):
        await query.answer()
        return
    state = session.state
    card = state.find_card(name)
    if round_number != state.round_number or card is None:
        await query.answer("That round is over.")
        return
    outcome = session.slap_card(card)
    if outcome.ignored:
        await query.answer()
    elif outcome.correct:
        await query.answer(f"✅ +{outcome.points}")
    else:
        await query.answer(outcome.feedback)


async def hint_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    session = _session_for_query(update)
    if session is None:
        await query.answer()
        return
    if session.show_hint() is None:
        await query.answer("Hints are resting, try again in a moment.")
        return
    await query.answer()


async def scramble_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    session = _session_for_query(update)
    if session is None or not session.scramble_cards():
        await query.answer("Cards were just shuffled.")
        return
    await query.answer("🔀 Shuffled!")


async def repeat_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    session = _session_for_query(update)
    description = session.replay_challenge() if session else None
    if description is None:
        await query.answer()
        return
    await query.answer(description, show_alert=True)


__all__ = [
    "SESSIONS",
    "TelegramPresenter",
    "get_session",
    "hint_callback",
    "repeat_callback",
    "scramble_callback",
    "start_session",
    "stop_session",
    "tap_callback",
]

import logging
import os
import socket
from typing import Optional
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application

import scrambled_states

from shared.logging_utils import configure_logging


TOKEN = os.environ.get("TELEGRAM_BOT_TOKEN")
PUBLIC_URL = os.environ.get("PUBLIC_URL")
WEBHOOK_SECRET = os.environ.get("WEBHOOK_SECRET", "")
WEBHOOK_PATH = os.environ.get("WEBHOOK_PATH", "/webhook")
ALLOWED_UPDATES = ["message", "callback_query"]

configure_logging(extra_values=[TOKEN, WEBHOOK_SECRET])
logger = logging.getLogger(__name__)

app = FastAPI()

APPLICATION: Optional[Application] = None


def _webhook_url() -> str:
    if not PUBLIC_URL:
        raise HTTPException(status_code=400, detail="PUBLIC_URL is not configured")
    return f"{PUBLIC_URL.rstrip('/')}{WEBHOOK_PATH}"


def _can_resolve_webhook_host(webhook_url: str) -> bool:
    parsed = urlparse(webhook_url)
    host = parsed.hostname
    if not host:
        logger.error("Webhook URL %s does not contain a hostname", webhook_url)
        return False
    try:
        socket.getaddrinfo(host, None)
    except socket.gaierror as exc:
        logger.warning(
            "Skipping webhook registration for %s: failed to resolve host %s (%s)",
            webhook_url,
            host,
            exc,
        )
        return False
    return True


@app.on_event("startup")
async def on_startup() -> None:
    global APPLICATION
    APPLICATION = Application.builder().token(TOKEN).build()
    scrambled_states.register_handlers(APPLICATION)
    await APPLICATION.initialize()
    await APPLICATION.start()
    if not PUBLIC_URL:
        return
    webhook_url = f"{PUBLIC_URL.rstrip('/')}{WEBHOOK_PATH}"
    if not _can_resolve_webhook_host(webhook_url):
        logger.warning("Telegram webhook will not be configured without a resolvable host")
        return
    try:
        info = await APPLICATION.bot.get_webhook_info()
        webhook_is_different = info.url != webhook_url
    except TelegramError as exc:
        logger.warning("Failed to fetch current webhook info: %s", exc)
        webhook_is_different = True
    if webhook_is_different:
        try:
            await APPLICATION.bot.set_webhook(
                url=webhook_url,
                secret_token=WEBHOOK_SECRET,
                allowed_updates=ALLOWED_UPDATES,
            )
        except TelegramError as exc:
            logger.error("Failed to set webhook to %s: %s", webhook_url, exc)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    for chat_id in list(scrambled_states.SESSIONS):
        await scrambled_states.reset_for_chat(chat_id, 0, None)
    if APPLICATION is None:
        return
    await APPLICATION.stop()
    await APPLICATION.shutdown()


@app.post(WEBHOOK_PATH)
async def telegram_webhook(request: Request) -> JSONResponse:
    if request.headers.get("X-Telegram-Bot-Api-Secret-Token") != WEBHOOK_SECRET:
        raise HTTPException(status_code=403, detail="Invalid secret")
    if APPLICATION is None:
        raise HTTPException(status_code=503, detail="Bot is not running")
    update = Update.de_json(await request.json(), APPLICATION.bot)
    await APPLICATION.process_update(update)
    return JSONResponse({"ok": True})


@app.get("/set_webhook")
async def set_webhook() -> JSONResponse:
    webhook_url = _webhook_url()
    if not _can_resolve_webhook_host(webhook_url):
        raise HTTPException(status_code=503, detail="Webhook host cannot be resolved")
    try:
        await APPLICATION.bot.set_webhook(
            url=webhook_url,
            secret_token=WEBHOOK_SECRET,
            allowed_updates=ALLOWED_UPDATES,
        )
    except TelegramError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to set webhook: {exc}") from exc
    return JSONResponse({"url": webhook_url})


@app.get("/reset_webhook")
async def reset_webhook() -> JSONResponse:
    webhook_url = _webhook_url()
    if not _can_resolve_webhook_host(webhook_url):
        raise HTTPException(status_code=503, detail="Webhook host cannot be resolved")
    try:
        await APPLICATION.bot.delete_webhook(drop_pending_updates=False)
        await APPLICATION.bot.set_webhook(
            url=webhook_url,
            secret_token=WEBHOOK_SECRET,
            allowed_updates=ALLOWED_UPDATES,
        )
    except TelegramError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to reset webhook: {exc}") from exc
    return JSONResponse({"reset_to": webhook_url})


@app.get("/")
async def root() -> JSONResponse:
    return JSONResponse({"message": "Scrambled States service. See /healthz for status."})


@app.get("/healthz")
async def healthz_get():
    return {"status": "ok", "active_games": len(scrambled_states.SESSIONS)}


@app.head("/healthz", include_in_schema=False)
async def healthz_head():
    return Response(status_code=200)

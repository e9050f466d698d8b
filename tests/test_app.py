from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

import app as root_app
from scrambled_states.engine.challenges import Challenge
from scrambled_states.handlers import gameplay
from scrambled_states.services import GameSession
from scrambled_states.state import GameMode


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def _request(secret: str, payload: dict) -> SimpleNamespace:
    return SimpleNamespace(
        headers={"X-Telegram-Bot-Api-Secret-Token": secret},
        json=AsyncMock(return_value=payload),
    )


@pytest.mark.anyio
async def test_webhook_rejects_wrong_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(root_app, "WEBHOOK_SECRET", "expected")
    with pytest.raises(HTTPException) as excinfo:
        await root_app.telegram_webhook(_request("wrong", {"update_id": 1}))
    assert excinfo.value.status_code == 403


@pytest.mark.anyio
async def test_webhook_requires_running_application(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(root_app, "WEBHOOK_SECRET", "expected")
    monkeypatch.setattr(root_app, "APPLICATION", None)
    with pytest.raises(HTTPException) as excinfo:
        await root_app.telegram_webhook(_request("expected", {"update_id": 1}))
    assert excinfo.value.status_code == 503


@pytest.mark.anyio
async def test_webhook_forwards_update(monkeypatch: pytest.MonkeyPatch) -> None:
    application = SimpleNamespace(bot=None, process_update=AsyncMock())
    monkeypatch.setattr(root_app, "WEBHOOK_SECRET", "expected")
    monkeypatch.setattr(root_app, "APPLICATION", application)
    response = await root_app.telegram_webhook(_request("expected", {"update_id": 42}))
    assert response.status_code == 200
    update = application.process_update.await_args.args[0]
    assert update.update_id == 42


def test_webhook_url_requires_public_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(root_app, "PUBLIC_URL", None)
    with pytest.raises(HTTPException) as excinfo:
        root_app._webhook_url()
    assert excinfo.value.status_code == 400

    monkeypatch.setattr(root_app, "PUBLIC_URL", "https://example.org/")
    assert root_app._webhook_url() == f"https://example.org{root_app.WEBHOOK_PATH}"


def test_webhook_host_without_hostname_is_rejected() -> None:
    assert not root_app._can_resolve_webhook_host("not a url")


@pytest.mark.anyio
async def test_healthz_reports_active_games() -> None:
    gameplay.SESSIONS.clear()
    assert await root_app.healthz_get() == {"status": "ok", "active_games": 0}


@pytest.mark.anyio
async def test_shutdown_finishes_running_games(
    monkeypatch: pytest.MonkeyPatch, scheduler, scripted_dealer, round_factory
) -> None:
    monkeypatch.setattr(root_app, "APPLICATION", None)
    dealt = round_factory(Challenge.is_coastal(), "Texas", "Kansas", "Nebraska", "Iowa", "Missouri")
    session = GameSession(
        GameMode.SPEED,
        dealer=scripted_dealer(dealt),
        presenter=MagicMock(),
        audio=MagicMock(),
        scheduler=scheduler,
    )
    session.start()
    gameplay.SESSIONS.clear()
    gameplay.SESSIONS[7] = session
    try:
        assert (await root_app.healthz_get())["active_games"] == 1
        await root_app.on_shutdown()
        assert not session.state.is_active
        assert gameplay.SESSIONS == {}
        assert all(handle.cancelled for handle in scheduler.countdowns)
    finally:
        gameplay.SESSIONS.clear()

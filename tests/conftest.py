"""Shared fixtures: fake timers, recording collaborators and a temp profile store."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, List
from unittest.mock import MagicMock

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

# Keep the module-level profile manager away from the real profile file.
os.environ.setdefault(
    "STATES_PROFILE_PATH",
    str(Path(tempfile.mkdtemp(prefix="states-tests-")) / "profiles.json"),
)

from scrambled_states.data import get_state  # noqa: E402
from scrambled_states.engine.challenges import Challenge  # noqa: E402
from scrambled_states.engine.dealer import DealtRound  # noqa: E402
from scrambled_states.state.manager import PROFILE_MANAGER, ProfileManager  # noqa: E402
from scrambled_states.state.storage import ProfileStorage  # noqa: E402


class FakeHandle:
    """A pending callback that only runs when the test says so."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.cancelled or self.fired:
            return
        self.fired = True
        self.callback()


class FakeCountdown:
    def __init__(self, seconds: int, on_tick: Callable[[int], None], on_expire: Callable[[], None]) -> None:
        self.remaining = seconds
        self.on_tick = on_tick
        self.on_expire = on_expire
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            if self.cancelled or self.remaining <= 0:
                return
            self.remaining -= 1
            self.on_tick(self.remaining)
            if self.remaining == 0:
                self.cancelled = True
                self.on_expire()


class FakeScheduler:
    """Scheduler double that records every timer instead of sleeping."""

    def __init__(self) -> None:
        self.calls: List[FakeHandle] = []
        self.countdowns: List[FakeCountdown] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(delay, callback)
        self.calls.append(handle)
        return handle

    def countdown(self, seconds: int, *, on_tick, on_expire) -> FakeCountdown:
        countdown = FakeCountdown(seconds, on_tick, on_expire)
        self.countdowns.append(countdown)
        return countdown

    def pending(self) -> List[FakeHandle]:
        return [handle for handle in self.calls if not handle.cancelled and not handle.fired]

    def run_pending(self) -> None:
        for handle in self.pending():
            handle.fire()


class ScriptedDealer:
    """Deal pre-built rounds in order, repeating the last one when exhausted."""

    def __init__(self, rounds: List[DealtRound]) -> None:
        self.rounds = list(rounds)
        self.dealt = 0

    def deal(self, mode) -> DealtRound:
        index = min(self.dealt, len(self.rounds) - 1)
        self.dealt += 1
        return self.rounds[index]


def make_round(challenge: Challenge, *names: str) -> DealtRound:
    hand = tuple(get_state(name) for name in names)
    return DealtRound(challenge=challenge, hand=hand, attempts=1)


@pytest.fixture(autouse=True)
def _reset_profile_manager() -> None:
    """Ensure the singleton profile manager is clean between tests."""

    PROFILE_MANAGER.reset()
    yield
    PROFILE_MANAGER.reset()


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio only (timers and Telegram use asyncio)."""

    return "asyncio"


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def presenter() -> MagicMock:
    return MagicMock()


@pytest.fixture
def audio() -> MagicMock:
    return MagicMock()


@pytest.fixture
def profiles(tmp_path: Path) -> ProfileManager:
    return ProfileManager(ProfileStorage(tmp_path / "profiles.json"), history_limit=50)


@pytest.fixture
def scripted_dealer() -> Callable[..., ScriptedDealer]:
    def _build(*rounds: DealtRound) -> ScriptedDealer:
        return ScriptedDealer(list(rounds))

    return _build


@pytest.fixture
def round_factory() -> Callable[..., DealtRound]:
    return make_round



"""Shared pytest fixtures and test doubles for greetctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import anyio
import anyio.lowlevel
import pytest
from click.testing import CliRunner

from greetctl.concurrency import CancelToken, guarded
from greetctl.config.settings import GreetSettings
from greetctl.events.channel import EventChannel
from greetctl.services.base import CommandDeps


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory with no GREETCTL_* variables."""
    for name in [n for n in os.environ if n.startswith("GREETCTL_")]:
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects from CLI tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("greetctl")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> GreetSettings:
    """Default settings with no config file."""
    return GreetSettings.from_cli(start_dir=tmp_path)


@pytest.fixture
def token() -> CancelToken:
    return CancelToken()


# ---------------------------------------------------------------------------
# Console test doubles
# ---------------------------------------------------------------------------


class ScriptedConsole:
    """In-memory ConsolePort: reads come from *lines*, writes are recorded.

    Running out of lines behaves like end-of-input.
    """

    def __init__(self, lines: list[str] | None = None) -> None:
        self._lines = list(lines or [])
        self.output: list[str] = []
        self.reads = 0

    @property
    def text(self) -> str:
        return "".join(self.output)

    async def write_text(self, text: str, cancel: CancelToken | None = None) -> None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        self.output.append(text)
        await anyio.lowlevel.checkpoint()

    async def write_line(self, text: str, cancel: CancelToken | None = None) -> None:
        await self.write_text(text + "\n", cancel)

    async def read_line(self, cancel: CancelToken | None = None) -> str | None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        self.reads += 1
        await anyio.lowlevel.checkpoint()
        if not self._lines:
            return None
        return self._lines.pop(0)


class BlockingConsole(ScriptedConsole):
    """Console whose reads never complete on their own.

    ``waiting`` is set once a read is pending, so tests can fire
    cancellation at a known suspension point.
    """

    def __init__(self) -> None:
        super().__init__()
        self.waiting = anyio.Event()

    async def read_line(self, cancel: CancelToken | None = None) -> str | None:
        self.reads += 1
        self.waiting.set()
        await guarded(cancel, anyio.sleep_forever)
        return None


class FaultyConsole(ScriptedConsole):
    """Console whose line writes fail like a closed terminal."""

    async def write_line(self, text: str, cancel: CancelToken | None = None) -> None:
        raise OSError("stdout is closed")


@pytest.fixture
def console() -> ScriptedConsole:
    return ScriptedConsole(["Ada", ""])


@pytest.fixture
def channel() -> Generator[EventChannel]:
    ch = EventChannel()
    try:
        yield ch
    finally:
        ch.dispose()


@pytest.fixture
def deps(console: ScriptedConsole, channel: EventChannel, settings: GreetSettings) -> CommandDeps:
    return CommandDeps(console=console, events=channel, settings=settings)

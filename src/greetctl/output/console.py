"""Console port and its Rich-backed standard implementation.

Commands depend only on :class:`ConsolePort`; :class:`StandardConsole`
binds it to a Rich ``Console`` for output and a text stream for input.
Port writes go straight to the console's file, so user-entered text
is echoed verbatim; Rich rendering is reserved for tables and styled output.
"""

from __future__ import annotations

import sys
import threading
from concurrent.futures import Future
from io import StringIO
from typing import IO, Protocol, runtime_checkable

import anyio
import anyio.lowlevel
from rich.console import Console
from rich.theme import Theme

from greetctl.concurrency import CancelToken, guarded

GREET_THEME = Theme(
    {
        "greet.name": "bold cyan",
        "greet.primary": "bold yellow",
        "greet.key": "dim",
    }
)

# How often a pending stdin read checks for completion or cancellation.
READ_POLL_INTERVAL = 0.02


@runtime_checkable
class ConsolePort(Protocol):
    """Line-oriented text I/O used by commands and the runner."""

    async def write_text(self, text: str, cancel: CancelToken | None = None) -> None:
        """Write *text* without a trailing newline."""

    async def write_line(self, text: str, cancel: CancelToken | None = None) -> None:
        """Write *text* followed by a newline."""

    async def read_line(self, cancel: CancelToken | None = None) -> str | None:
        """Read one line without its newline; None at end-of-input."""


def create_console(
    file: IO[str] | None = None,
    *,
    no_color: bool = False,
    width: int | None = None,
) -> Console:
    """Create a themed Rich Console.

    Args:
        file: Output stream. Defaults to a StringIO buffer, which keeps
            rendering testable; pass ``sys.stdout`` for the terminal.
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=file if file is not None else StringIO(),
        theme=GREET_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def _strip_newline(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


class StandardConsole:
    """:class:`ConsolePort` over a Rich console and a readable text stream.

    Reads happen on a daemon thread per call, so a read abandoned after an
    interrupt never blocks interpreter shutdown.
    """

    def __init__(self, console: Console, stdin: IO[str] | None = None) -> None:
        self._console = console
        self._stdin = stdin

    @property
    def console(self) -> Console:
        return self._console

    async def write_text(self, text: str, cancel: CancelToken | None = None) -> None:
        self._write(text, end="", cancel=cancel)
        await anyio.lowlevel.checkpoint()

    async def write_line(self, text: str, cancel: CancelToken | None = None) -> None:
        self._write(text, end="\n", cancel=cancel)
        await anyio.lowlevel.checkpoint()

    async def read_line(self, cancel: CancelToken | None = None) -> str | None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        stream = self._stdin if self._stdin is not None else sys.stdin
        future: Future[str] = Future()

        def _reader() -> None:
            try:
                future.set_result(stream.readline())
            except BaseException as exc:  # handed back to the awaiting task
                future.set_exception(exc)

        threading.Thread(target=_reader, name="greetctl-stdin", daemon=True).start()
        line = await guarded(cancel, self._wait_for, future)
        if line == "":
            return None
        return _strip_newline(line)

    def _write(self, text: str, *, end: str, cancel: CancelToken | None) -> None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        # Unrendered: tabs and control characters pass through.
        stream = self._console.file
        stream.write(text + end)
        stream.flush()

    @staticmethod
    async def _wait_for(future: Future[str]) -> str:
        while not future.done():
            await anyio.sleep(READ_POLL_INTERVAL)
        return future.result()

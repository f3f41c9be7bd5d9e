"""CONSOLEHUB FILE PURPOSE
Purpose: console-compatible default sink and process-wide console replacement.
Hot path: yes (every emitted call ends here).
Feature flags: HUB (replacement at import, see consolehub.registry).
Failure mode: sink errors propagate unchanged.
"""

from __future__ import annotations

import sys
import traceback
from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from consolehub.logging import diag


class Sink(Protocol):
    def debug(self, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def warn(self, *args: Any) -> None: ...
    def error(self, *args: Any) -> None: ...
    def log(self, *args: Any) -> None: ...
    def trace(self, *args: Any) -> None: ...


class Console:
    """print()-backed sink: debug/info/log to stdout, warn/error/trace to stderr."""

    def _write(self, stream_name: str, args: tuple[Any, ...]) -> None:
        # resolved per call so redirected/captured streams are honoured
        print(*args, file=getattr(sys, stream_name))

    def debug(self, *args: Any) -> None:
        self._write("stdout", args)

    def info(self, *args: Any) -> None:
        self._write("stdout", args)

    def log(self, *args: Any) -> None:
        self._write("stdout", args)

    def warn(self, *args: Any) -> None:
        self._write("stderr", args)

    def error(self, *args: Any) -> None:
        self._write("stderr", args)

    def trace(self, *args: Any) -> None:
        head = " ".join(str(a) for a in args)
        stack = "".join(traceback.format_stack()[:-1])
        self._write("stderr", (f"Trace: {head}\n{stack}".rstrip(),))


# pristine sink; loggers write here unless given another console option
CONSOLE = Console()

_current: Sink = CONSOLE


def get_console() -> Sink:
    return _current


def set_console(console: Sink | None) -> Sink:
    """Swap the process-wide console; returns the previous one."""

    global _current
    previous, _current = _current, (CONSOLE if console is None else console)
    diag("CONSOLE_REPLACED", new=type(_current).__name__, previous=type(previous).__name__)
    return previous


@contextmanager
def replaced_console(console: Sink) -> Iterator[Sink]:
    previous = set_console(console)
    try:
        yield console
    finally:
        set_console(previous)
